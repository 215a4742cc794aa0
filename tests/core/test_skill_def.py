"""Tests for skill and command definition models."""

import pytest
from pydantic import ValidationError

from skillbook.core.skill_def import CommandDef, SkillDef
from skillbook.core.tool_patterns import parse_allowed_tools


class TestSkillDef:
    """Tests for SkillDef."""

    def test_qualified_id(self):
        """qualified_id joins category and id."""
        skill = SkillDef(
            id="unit-tests",
            name="unit-tests",
            description="Write unit tests",
            category="testing",
            content="# Unit tests",
        )

        assert skill.qualified_id == "testing/unit-tests"
        assert skill.path is None
        assert skill.extra == {}

    def test_rejects_unknown_fields(self):
        """Unknown model fields are rejected."""
        with pytest.raises(ValidationError):
            SkillDef(
                id="x",
                name="x",
                description="x",
                category="c",
                content="",
                version=2,
            )


class TestCommandDef:
    """Tests for CommandDef."""

    @pytest.fixture
    def command(self) -> CommandDef:
        return CommandDef(
            id="commit",
            description="Create a commit",
            allowed_tools=parse_allowed_tools("Bash(git add:*), Bash(git commit:*), Read"),
            content="# Commit",
        )

    def test_trigger(self, command: CommandDef):
        """The trigger is the id with a leading slash."""
        assert command.trigger == "/commit"

    @pytest.mark.parametrize(
        "tool,argument,expected",
        [
            ("Bash", "git add src/", True),
            ("Bash", "git commit -m wip", True),
            ("Bash", "git push", False),
            ("Bash", None, False),
            ("Read", "/etc/hosts", True),
            ("Write", "notes.md", False),
        ],
    )
    def test_allows(self, command: CommandDef, tool, argument, expected):
        """allows() checks invocations against the declared patterns."""
        assert command.allows(tool, argument) is expected

    def test_no_tools_allows_nothing(self):
        """A command without tools allows no invocation."""
        command = CommandDef(id="noop", description="Nothing", content="# Noop")

        assert command.allows("Read") is False
