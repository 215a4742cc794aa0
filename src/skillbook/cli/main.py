"""CLI interface for skillbook using Typer."""

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console

from skillbook.cli.commands import commands_app
from skillbook.cli.lint import index_command, lint_command
from skillbook.cli.new import new_app
from skillbook.cli.onboarding import OnboardingWizard
from skillbook.cli.server import server_command
from skillbook.cli.skills import skills_app
from skillbook.utils.config import Config

app = typer.Typer(
    name="skillbook",
    help="Skillbook: lint, index and serve skill and slash command documents",
    no_args_is_help=True,
    add_completion=True,
)
app.add_typer(skills_app, name="skills")
app.add_typer(commands_app, name="commands")
app.add_typer(new_app, name="new")

console = Console()

# Commands that can run before a workspace exists
NO_CONFIG_COMMANDS = {"init"}


@app.callback()
def main(
    ctx: typer.Context,
    workspace: Annotated[
        Path,
        typer.Option(
            "--workspace",
            "-w",
            help="Path to the corpus root (defaults to the current directory)",
        ),
    ] = Path("."),
) -> None:
    """
    Skillbook: tooling for skill and slash command corpora.

    Configuration is read from skillbook.yaml and skillbook.local.yaml in the
    workspace. Both are optional.
    """
    ctx.ensure_object(dict)
    ctx.obj["workspace"] = workspace

    if ctx.invoked_subcommand in NO_CONFIG_COMMANDS:
        return

    try:
        ctx.obj["config"] = Config.load(workspace)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)
    except ValidationError as e:
        console.print(f"[red]Error loading config: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def init(ctx: typer.Context) -> None:
    """Initialize a skill corpus with interactive onboarding."""
    wizard = OnboardingWizard(workspace=ctx.obj["workspace"])
    if not wizard.run():
        raise typer.Exit(1)


@app.command()
def lint(
    ctx: typer.Context,
    strict: Annotated[
        bool,
        typer.Option("--strict", help="Exit non-zero on warnings too"),
    ] = False,
    disable: Annotated[
        list[str] | None,
        typer.Option(
            "--disable",
            "-d",
            help="Rule code or name to skip (repeatable)",
        ),
    ] = None,
) -> None:
    """Check every skill and command document."""
    lint_command(ctx, strict=strict, disable=disable or [])


@app.command()
def index(
    ctx: typer.Context,
    write: Annotated[
        bool,
        typer.Option("--write", help="Update the README index region in place"),
    ] = False,
    check: Annotated[
        bool,
        typer.Option("--check", help="Exit non-zero if the README index is stale"),
    ] = False,
) -> None:
    """Render the skill and command index tables."""
    index_command(ctx, write=write, check=check)


@app.command("serve")
def serve(
    ctx: typer.Context,
    host: Annotated[str | None, typer.Option("--host", help="Bind address")] = None,
    port: Annotated[int | None, typer.Option("--port", help="Bind port")] = None,
) -> None:
    """Serve the corpus over the HTTP API."""
    server_command(ctx, host=host, port=port)


if __name__ == "__main__":
    app()
