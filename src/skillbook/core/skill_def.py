"""Skill and slash command definition models."""

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from skillbook.core.tool_patterns import ToolPattern


class SkillDef(BaseModel):
    """Loaded skill definition."""

    model_config = ConfigDict(extra="forbid")

    id: str
    name: str
    description: str
    category: str
    content: str
    path: Path | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def qualified_id(self) -> str:
        return f"{self.category}/{self.id}"


class CommandDef(BaseModel):
    """Loaded slash command definition."""

    model_config = ConfigDict(extra="forbid")

    id: str
    description: str
    allowed_tools: list[ToolPattern] = Field(default_factory=list)
    argument_hint: str | None = None
    model: str | None = None
    content: str
    path: Path | None = None
    extra: dict[str, Any] = Field(default_factory=dict)

    @property
    def trigger(self) -> str:
        """The slash form used to invoke this command."""
        return f"/{self.id}"

    def allows(self, tool: str, argument: str | None = None) -> bool:
        """Check whether a tool invocation is whitelisted for this command."""
        return any(p.matches(tool, argument) for p in self.allowed_tools)
