"""Tests for allowed-tools parsing and matching."""

import pytest

from skillbook.core.tool_patterns import (
    ToolPattern,
    ToolPatternError,
    parse_allowed_tools,
    parse_tool_pattern,
    split_entries,
)


class TestSplitEntries:
    """Tests for splitting comma-separated declarations."""

    def test_ignores_commas_inside_parentheses(self):
        """Commas inside a Tool(...) argument don't split the entry."""
        entries = split_entries("Bash(git add:*, git commit:*), Read")

        assert entries == ["Bash(git add:*, git commit:*)", "Read"]

    @pytest.mark.parametrize("value", ["Bash(git", "Bash)git(", "Read, Bash(ls"])
    def test_unbalanced_parentheses(self, value):
        """Unbalanced parentheses raise ToolPatternError."""
        with pytest.raises(ToolPatternError):
            split_entries(value)


class TestParseToolPattern:
    """Tests for parsing a single entry."""

    @pytest.mark.parametrize(
        "entry,tool,pattern",
        [
            ("Read", "Read", None),
            ("  Edit ", "Edit", None),
            ("Bash(git status:*)", "Bash", "git status:*"),
            ("Bash(npm run test)", "Bash", "npm run test"),
            ("mcp__github__create_issue", "mcp__github__create_issue", None),
            ("WebFetch(domain:docs.python.org)", "WebFetch", "domain:docs.python.org"),
        ],
    )
    def test_valid_entries(self, entry, tool, pattern):
        """Bare tool names and Tool(pattern) entries parse into their parts."""
        result = parse_tool_pattern(entry)

        assert result.tool == tool
        assert result.pattern == pattern

    @pytest.mark.parametrize(
        "entry,reason",
        [
            ("", "empty entry"),
            ("Bash()", "empty argument pattern"),
            ("Bash(ls) extra", "text after closing ')'"),
            ("1Tool", "invalid tool name"),
            ("Read Edit", "invalid tool name"),
        ],
    )
    def test_invalid_entries(self, entry, reason):
        """Malformed entries raise with a specific reason."""
        with pytest.raises(ToolPatternError) as exc:
            parse_tool_pattern(entry)

        assert reason in exc.value.reason


class TestParseAllowedTools:
    """Tests for parsing a whole allowed-tools value."""

    def test_comma_separated_string(self):
        """A comma-separated string parses in declaration order."""
        patterns = parse_allowed_tools("Bash(git add:*), Bash(git status:*), Read")

        assert [str(p) for p in patterns] == [
            "Bash(git add:*)",
            "Bash(git status:*)",
            "Read",
        ]

    def test_yaml_list(self):
        """A YAML list of entries parses like the string form."""
        patterns = parse_allowed_tools(["Read", "Bash(pytest:*)"])

        assert patterns == [
            ToolPattern(tool="Read"),
            ToolPattern(tool="Bash", pattern="pytest:*"),
        ]

    @pytest.mark.parametrize("value", [[], "", "   ", None])
    def test_no_tools_declared(self, value):
        """An empty list, blank string or null value declares no tools."""
        assert parse_allowed_tools(value) == []

    def test_trailing_comma_is_an_error(self):
        """A trailing comma leaves an empty entry, which is an error."""
        with pytest.raises(ToolPatternError):
            parse_allowed_tools("Read, Edit,")

    @pytest.mark.parametrize("value", [3, {"Bash": "ls"}, ["Read", 1]])
    def test_wrong_types(self, value):
        """Values that are not strings or lists of strings are rejected."""
        with pytest.raises(ToolPatternError):
            parse_allowed_tools(value)


class TestToolPatternMatching:
    """Tests for ToolPattern.matches."""

    @pytest.mark.parametrize(
        "pattern,tool,argument,expected",
        [
            (ToolPattern(tool="Read"), "Read", None, True),
            (ToolPattern(tool="Read"), "Read", "/etc/passwd", True),
            (ToolPattern(tool="Read"), "Edit", None, False),
            (ToolPattern(tool="Bash", pattern="git status:*"), "Bash", "git status", True),
            (ToolPattern(tool="Bash", pattern="git status:*"), "Bash", "git status -s", True),
            (ToolPattern(tool="Bash", pattern="git status:*"), "Bash", "git push", False),
            (ToolPattern(tool="Bash", pattern="git status:*"), "Bash", None, False),
            (ToolPattern(tool="Bash", pattern="npm run *"), "Bash", "npm run build", True),
            (ToolPattern(tool="Bash", pattern="npm test"), "Bash", "npm test --watch", False),
        ],
    )
    def test_matches(self, pattern, tool, argument, expected):
        """Prefix patterns, globs and bare tools match as declared."""
        assert pattern.matches(tool, argument) is expected
