"""Shared utilities for loading definition files (skills, commands)."""

import logging
import re
from pathlib import Path
from typing import Any, Callable, TypeVar

import yaml

logger = logging.getLogger(__name__)

DELIMITER = "---"
KEBAB_CASE_RE = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")

T = TypeVar("T")


class DefNotFoundError(Exception):
    """Definition folder or file doesn't exist."""

    def __init__(self, kind: str, def_id: str):
        super().__init__(f"{kind.capitalize()} not found: {def_id}")
        self.kind = kind
        self.def_id = def_id


class InvalidDefError(Exception):
    """Definition file is malformed."""

    def __init__(self, kind: str, def_id: str, reason: str):
        super().__init__(f"Invalid {kind} '{def_id}': {reason}")
        self.kind = kind
        self.def_id = def_id
        self.reason = reason


class DefExistsError(Exception):
    """Definition already exists and would be overwritten."""

    def __init__(self, kind: str, def_id: str):
        super().__init__(f"{kind.capitalize()} already exists: {def_id}")
        self.kind = kind
        self.def_id = def_id


class FrontmatterError(Exception):
    """Frontmatter block is present but not a valid YAML mapping."""

    def __init__(self, reason: str, line: int | None = None):
        super().__init__(reason)
        self.reason = reason
        self.line = line


def read_definition_file(path: Path) -> str:
    """
    Read a definition file as UTF-8.

    Raises:
        FrontmatterError: If the file is not valid UTF-8, with the line of the
            first undecodable byte
    """
    data = path.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        line = data[: e.start].count(b"\n") + 1
        raise FrontmatterError(f"file is not valid UTF-8: {e.reason}", line=line) from e


def split_frontmatter(content: str) -> tuple[str | None, str]:
    """
    Split raw file content into frontmatter text and markdown body.

    Args:
        content: Raw file content

    Returns:
        Tuple of (frontmatter text or None when absent, body)
    """
    content = content.replace("\r\n", "\n")
    lines = content.split("\n")

    if not lines or lines[0].rstrip() != DELIMITER:
        return None, content

    for idx in range(1, len(lines)):
        if lines[idx].rstrip() == DELIMITER:
            frontmatter_text = "\n".join(lines[1:idx])
            body = "\n".join(lines[idx + 1 :])
            return frontmatter_text, body

    # Opening delimiter without a closing one
    return None, content


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """
    Parse YAML frontmatter + markdown body.

    Args:
        content: Raw file content

    Returns:
        Tuple of (frontmatter dict, body). The dict is empty when the
        document has no frontmatter block.

    Raises:
        FrontmatterError: If the block does not parse or is not a mapping
    """
    frontmatter_text, body = split_frontmatter(content)
    if frontmatter_text is None:
        return {}, body

    try:
        data = yaml.safe_load(frontmatter_text)
    except yaml.YAMLError as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            # +2: opening delimiter line and 1-based numbering
            line = mark.line + 2
        raise FrontmatterError(f"invalid YAML: {e}", line=line) from e

    if data is None:
        return {}, body
    if not isinstance(data, dict):
        raise FrontmatterError(
            f"frontmatter must be a mapping, got {type(data).__name__}", line=2
        )
    return data, body


def parse_definition(
    content: str,
    def_id: str,
    parse_fn: Callable[[str, dict[str, Any], str], T],
) -> T:
    """
    Parse YAML frontmatter + markdown body with type conversion.

    Args:
        content: Raw file content
        def_id: Definition ID (passed to parse_fn for context)
        parse_fn: Callback(def_id, frontmatter, body) -> typed object

    Returns:
        The typed object returned by parse_fn

    Raises:
        FrontmatterError: If the frontmatter block is malformed
        Whatever parse_fn raises (e.g., InvalidDefError)
    """
    frontmatter, body = parse_frontmatter(content)
    return parse_fn(def_id, frontmatter, body)


def write_definition(
    path: Path,
    frontmatter: dict[str, Any],
    body: str,
) -> Path:
    """
    Write a definition file with YAML frontmatter and markdown body.

    Args:
        path: File to write (e.g., skills/testing/unit-tests/SKILL.md)
        frontmatter: Dict of YAML frontmatter fields, written in order
        body: Markdown body content

    Returns:
        Path to the written file
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    yaml_content = yaml.dump(
        frontmatter, default_flow_style=False, sort_keys=False, allow_unicode=True
    )
    content = f"{DELIMITER}\n{yaml_content}{DELIMITER}\n\n{body.strip()}\n"

    path.write_text(content)
    logger.debug(f"Wrote definition {path}")

    return path
