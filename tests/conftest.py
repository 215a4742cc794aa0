"""Shared test fixtures for skillbook test suite."""

from pathlib import Path
from typing import Callable

import pytest

from skillbook.core.context import SharedContext
from skillbook.utils.config import Config

VALID_SKILL = """---
name: {name}
description: {description}
---

# {name}

Guidance goes here.
"""

VALID_COMMAND = """---
allowed-tools: {tools}
description: {description}
---

# {name}

## Steps

1. Do the thing.
"""


@pytest.fixture
def test_config(tmp_path: Path) -> Config:
    """Config with workspace pointing to tmp_path."""
    (tmp_path / "skills").mkdir()
    (tmp_path / "commands").mkdir()
    return Config(workspace=tmp_path)


@pytest.fixture
def test_context(test_config: Config) -> SharedContext:
    """SharedContext with test config."""
    return SharedContext(config=test_config)


@pytest.fixture
def write_skill(test_config: Config) -> Callable[..., Path]:
    """Write skills/<category>/<skill_id>/SKILL.md; raw content wins if given."""

    def _write(
        category: str,
        skill_id: str,
        name: str | None = None,
        description: str = "A test skill",
        raw: str | None = None,
    ) -> Path:
        skill_file = test_config.skills_path / category / skill_id / "SKILL.md"
        skill_file.parent.mkdir(parents=True, exist_ok=True)
        if raw is None:
            raw = VALID_SKILL.format(name=name or skill_id, description=description)
        skill_file.write_text(raw)
        return skill_file

    return _write


@pytest.fixture
def write_command(test_config: Config) -> Callable[..., Path]:
    """Write commands/<command_id>.md; raw content wins if given."""

    def _write(
        command_id: str,
        tools: str = "Bash(git status:*), Read",
        description: str = "A test command",
        raw: str | None = None,
    ) -> Path:
        command_file = test_config.commands_path / f"{command_id}.md"
        command_file.parent.mkdir(parents=True, exist_ok=True)
        if raw is None:
            raw = VALID_COMMAND.format(
                name=command_id, tools=tools, description=description
            )
        command_file.write_text(raw)
        return command_file

    return _write
