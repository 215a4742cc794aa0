"""Onboarding step classes."""

from pathlib import Path

import questionary
from pydantic import ValidationError
from rich.console import Console

from skillbook.core.readme import INDEX_END, INDEX_START
from skillbook.lint.rules import BUILTIN_RULES
from skillbook.utils.config import USER_CONFIG_FILE, Config


class BaseStep:
    """Base class for onboarding steps."""

    def __init__(self, workspace: Path, console: Console):
        self.workspace = workspace
        self.console = console

    def run(self, state: dict) -> bool:
        """Execute step. Return True on success, False to abort."""
        raise NotImplementedError


class CheckWorkspaceStep(BaseStep):
    """Check if a config exists and prompt for overwrite confirmation."""

    def run(self, state: dict) -> bool:
        config_path = self.workspace / USER_CONFIG_FILE

        if config_path.exists():
            self.console.print(
                f"\n[yellow]Skillbook config already exists at {config_path}[/yellow]"
            )

            proceed = questionary.confirm(
                "This will overwrite your existing configuration. Continue?",
                default=False,
            ).ask()

            return bool(proceed)

        return True


class SetupWorkspaceStep(BaseStep):
    """Create workspace directory and the skills/commands directories."""

    def run(self, state: dict) -> bool:
        self.workspace.mkdir(parents=True, exist_ok=True)

        for subdir in ("skills", "commands"):
            (self.workspace / subdir).mkdir(exist_ok=True)

        return True


class ConfigureLintStep(BaseStep):
    """Prompt user for lint strictness and rules to disable."""

    def run(self, state: dict) -> bool:
        disabled = (
            questionary.checkbox(
                "Select lint rules to disable:",
                choices=[
                    questionary.Choice(
                        title=f"{rule.code} {rule.name} - {rule.description}",
                        value=rule.code,
                    )
                    for rule in BUILTIN_RULES
                ],
            ).ask()
            or []
        )

        strict = questionary.confirm(
            "Treat warnings as errors?",
            default=False,
        ).ask()

        state["lint"] = {"disable": disabled, "warnings_as_errors": bool(strict)}
        return True


class CreateReadmeStep(BaseStep):
    """Create a README with an empty generated index region if none exists."""

    def run(self, state: dict) -> bool:
        readme = self.workspace / "README.md"
        if readme.exists():
            return True

        readme.write_text(
            f"# {self.workspace.name}\n\n"
            "Skills and slash commands for the coding assistant.\n\n"
            f"{INDEX_START}\n{INDEX_END}\n"
        )
        return True


class SaveConfigStep(BaseStep):
    """Validate and save the configuration."""

    def run(self, state: dict) -> bool:
        try:
            config = Config.model_validate({"workspace": self.workspace, **state})
        except ValidationError as e:
            self.console.print(f"[red]Configuration validation failed: {e}[/red]")
            return False

        (self.workspace / USER_CONFIG_FILE).write_text(config.to_user_yaml())
        return True
