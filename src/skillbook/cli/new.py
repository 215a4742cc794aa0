"""Scaffolding subcommands for new skills and commands."""

import questionary
import typer
from rich.console import Console

from skillbook.core.command_loader import CommandLoader
from skillbook.core.skill_loader import SkillLoader
from skillbook.utils.def_loader import KEBAB_CASE_RE, DefExistsError, InvalidDefError

new_app = typer.Typer(
    help="Scaffold new skill and command documents",
    no_args_is_help=True,
    add_completion=True,
)
console = Console()


def _title(identifier: str) -> str:
    return identifier.replace("-", " ").title()


def _ask_description(description: str | None) -> str:
    """Use the given description or prompt for one."""
    if description:
        return description
    answer = questionary.text("One-line description:").ask()
    if not answer or not answer.strip():
        console.print("[red]A description is required.[/red]")
        raise typer.Exit(1)
    return answer.strip()


@new_app.command("skill")
def new_skill(
    ctx: typer.Context,
    category: str = typer.Argument(..., help="Category directory, e.g. testing"),
    skill_id: str = typer.Argument(..., help="Kebab-case skill name"),
    description: str = typer.Option(None, "--description", "-d"),
) -> None:
    """Create skills/<category>/<skill>/SKILL.md."""
    if not KEBAB_CASE_RE.match(skill_id):
        console.print(f"[red]Skill name must be kebab-case: {skill_id}[/red]")
        raise typer.Exit(1)

    description = _ask_description(description)
    loader = SkillLoader.from_config(ctx.obj["config"])
    body = f"# {_title(skill_id)}\n\n## When to use\n\n## Guidance\n"

    try:
        skill = loader.create_skill(category, skill_id, description, body)
    except (DefExistsError, InvalidDefError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Created {skill.path}[/green]")


@new_app.command("command")
def new_command(
    ctx: typer.Context,
    command_id: str = typer.Argument(..., help="Command name without '/'"),
    description: str = typer.Option(None, "--description", "-d"),
    allowed_tools: list[str] = typer.Option(
        [],
        "--allowed-tools",
        "-t",
        help="Tool pattern such as 'Bash(git status:*)' (repeatable)",
    ),
) -> None:
    """Create commands/<command>.md."""
    description = _ask_description(description)
    loader = CommandLoader.from_config(ctx.obj["config"])
    body = (
        f"# {_title(command_id.removeprefix('/'))}\n\n"
        "## Steps\n\n1. \n\n## Output format\n"
    )

    try:
        command = loader.create_command(command_id, description, allowed_tools, body)
    except (DefExistsError, InvalidDefError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Created {command.path}[/green]")
