"""Utilities package."""

from skillbook.utils.def_loader import (
    DefExistsError,
    DefNotFoundError,
    FrontmatterError,
    InvalidDefError,
    parse_definition,
    parse_frontmatter,
    read_definition_file,
    split_frontmatter,
    write_definition,
)
from skillbook.utils.logging import setup_logging

__all__ = [
    "DefExistsError",
    "DefNotFoundError",
    "FrontmatterError",
    "InvalidDefError",
    "parse_definition",
    "parse_frontmatter",
    "read_definition_file",
    "split_frontmatter",
    "write_definition",
    "setup_logging",
]
