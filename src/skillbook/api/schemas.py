"""Pydantic schemas for API request/response models."""

from pydantic import BaseModel, Field


class SkillCreate(BaseModel):
    """Request body for creating a skill."""

    category: str = Field(min_length=1)
    name: str | None = None
    description: str = Field(min_length=1)
    content: str


class CommandCreate(BaseModel):
    """Request body for creating a slash command."""

    description: str = Field(min_length=1)
    allowed_tools: list[str] = Field(default_factory=list)
    argument_hint: str | None = None
    content: str


class LintIssueOut(BaseModel):
    """A lint finding as returned by the API."""

    rule: str
    severity: str
    path: str | None
    line: int | None
    message: str


class LintReportOut(BaseModel):
    """Lint run summary."""

    ok: bool
    checked: int
    errors: int
    warnings: int
    issues: list[LintIssueOut]
