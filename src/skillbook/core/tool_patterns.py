"""Parsing and matching of slash command `allowed-tools` declarations."""

import re
from fnmatch import fnmatchcase
from typing import Any

from pydantic import BaseModel, ConfigDict

TOOL_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_.:-]*$")
PREFIX_SUFFIX = ":*"


class ToolPatternError(ValueError):
    """An allowed-tools entry is malformed."""

    def __init__(self, entry: str, reason: str):
        super().__init__(f"Invalid allowed-tools entry '{entry}': {reason}")
        self.entry = entry
        self.reason = reason


class ToolPattern(BaseModel):
    """A single permitted tool invocation, e.g. ``Bash(git status:*)``."""

    model_config = ConfigDict(frozen=True)

    tool: str
    pattern: str | None = None

    def __str__(self) -> str:
        if self.pattern is None:
            return self.tool
        return f"{self.tool}({self.pattern})"

    def matches(self, tool: str, argument: str | None = None) -> bool:
        """
        Check whether an invocation is covered by this pattern.

        Args:
            tool: Tool name being invoked
            argument: Argument string (e.g. the shell command for Bash)

        Returns:
            True if the invocation is permitted
        """
        if tool != self.tool:
            return False
        if self.pattern is None:
            return True
        if argument is None:
            return False

        if self.pattern.endswith(PREFIX_SUFFIX):
            prefix = self.pattern[: -len(PREFIX_SUFFIX)]
            return argument == prefix or argument.startswith(prefix)

        return fnmatchcase(argument, self.pattern)


def split_entries(value: str) -> list[str]:
    """
    Split a comma-separated declaration, ignoring commas inside parentheses.

    Raises:
        ToolPatternError: If parentheses are unbalanced
    """
    entries: list[str] = []
    depth = 0
    current: list[str] = []

    for char in value:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise ToolPatternError(value, "unbalanced ')'")
        if char == "," and depth == 0:
            entries.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    if depth != 0:
        raise ToolPatternError(value, "unbalanced '('")

    entries.append("".join(current).strip())
    return entries


def parse_tool_pattern(entry: str) -> ToolPattern:
    """
    Parse a single ``Tool`` or ``Tool(pattern)`` entry.

    Raises:
        ToolPatternError: If the entry is malformed
    """
    entry = entry.strip()
    if not entry:
        raise ToolPatternError(entry, "empty entry")

    paren = entry.find("(")
    if paren == -1:
        if ")" in entry:
            raise ToolPatternError(entry, "unbalanced ')'")
        tool, pattern = entry, None
    else:
        if not entry.endswith(")"):
            raise ToolPatternError(entry, "text after closing ')'")
        tool = entry[:paren].strip()
        pattern = entry[paren + 1 : -1].strip()
        if not pattern:
            raise ToolPatternError(entry, "empty argument pattern")

    if not TOOL_NAME_RE.match(tool):
        raise ToolPatternError(entry, f"invalid tool name '{tool}'")

    return ToolPattern(tool=tool, pattern=pattern)


def parse_allowed_tools(value: Any) -> list[ToolPattern]:
    """
    Parse an ``allowed-tools`` frontmatter value.

    Args:
        value: A comma-separated string, a list of strings, or None. A blank
            string or None declares no tools.

    Returns:
        Parsed patterns, in declaration order

    Raises:
        ToolPatternError: If the value or any entry is malformed
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return []
    if isinstance(value, str):
        raw_entries = split_entries(value)
    elif isinstance(value, list):
        raw_entries = []
        for item in value:
            if not isinstance(item, str):
                raise ToolPatternError(str(item), "entries must be strings")
            raw_entries.extend(split_entries(item))
    else:
        raise ToolPatternError(
            str(value), f"expected a string or list, got {type(value).__name__}"
        )

    return [parse_tool_pattern(entry) for entry in raw_entries]
