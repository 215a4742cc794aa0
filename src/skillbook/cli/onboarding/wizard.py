# src/skillbook/cli/onboarding/wizard.py
"""Onboarding wizard orchestrator."""

from pathlib import Path

from rich.console import Console

from skillbook.cli.onboarding.steps import (
    BaseStep,
    CheckWorkspaceStep,
    ConfigureLintStep,
    CreateReadmeStep,
    SaveConfigStep,
    SetupWorkspaceStep,
)


class OnboardingWizard:
    """Guides users through setting up a skill corpus workspace."""

    STEPS: list[type[BaseStep]] = [
        CheckWorkspaceStep,
        SetupWorkspaceStep,
        ConfigureLintStep,
        CreateReadmeStep,
        SaveConfigStep,
    ]

    def __init__(self, workspace: Path | None = None):
        self.workspace = workspace or Path.cwd()

    def run(self) -> bool:
        """Run all onboarding steps. Returns True if successful."""
        console = Console()
        state: dict = {}

        console.print("\n[bold cyan]Welcome to Skillbook![/bold cyan]")
        console.print(f"Setting up a skill corpus in {self.workspace}\n")

        for step_cls in self.STEPS:
            step = step_cls(self.workspace, console)
            if not step.run(state):
                console.print("[yellow]Initialisation cancelled.[/yellow]")
                return False

        console.print("\n[green]Configuration saved![/green]")
        console.print(f"Config file: {self.workspace / 'skillbook.yaml'}")
        console.print("Run 'skillbook lint' to check the corpus.\n")
        return True
