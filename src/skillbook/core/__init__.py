"""Core corpus functionality."""

from .command_loader import CommandLoader
from .context import SharedContext
from .corpus import Corpus, Document
from .skill_def import CommandDef, SkillDef
from .skill_loader import SkillLoader
from .tool_patterns import ToolPattern, ToolPatternError, parse_allowed_tools

__all__ = [
    "CommandDef",
    "CommandLoader",
    "Corpus",
    "Document",
    "SharedContext",
    "SkillDef",
    "SkillLoader",
    "ToolPattern",
    "ToolPatternError",
    "parse_allowed_tools",
]
