"""Skills subcommand group for skillbook CLI."""

import typer
from rich.console import Console
from rich.markdown import Markdown

from skillbook.core.skill_loader import SkillLoader
from skillbook.utils.def_loader import DefNotFoundError, InvalidDefError

skills_app = typer.Typer(
    help="Browse skill documents",
    no_args_is_help=True,
    add_completion=True,
)
console = Console()


@skills_app.command("list")
def list_skills(
    ctx: typer.Context,
    category: str = typer.Option(None, "--category", "-c", help="Only this category"),
) -> None:
    """List all available skills."""
    loader = SkillLoader.from_config(ctx.obj["config"])

    skills = loader.discover_skills()
    if category:
        skills = [s for s in skills if s.category == category]

    console.print(
        typer.style(f"Available Skills: {len(skills)}", bold=True, fg="cyan")
    )

    current_category = None
    for skill in skills:
        if skill.category != current_category:
            current_category = skill.category
            console.print(f"\n[bold]{current_category}[/bold]")
        console.print(f"  {typer.style(skill.name, bold=True, fg='cyan')}")
        console.print(f"    {skill.description}", markup=False)


@skills_app.command()
def show(
    ctx: typer.Context,
    skill_id: str = typer.Argument(..., help="Skill id or category/id"),
    raw: bool = typer.Option(False, "--raw", help="Print markdown without rendering"),
) -> None:
    """Show a skill's metadata and content."""
    loader = SkillLoader.from_config(ctx.obj["config"])

    try:
        skill = loader.load_skill(skill_id)
    except DefNotFoundError:
        console.print(f"[red]Skill not found: {skill_id}[/red]")
        console.print("\nAvailable skills:")
        for s in loader.discover_skills():
            console.print(f"  - {s.qualified_id}")
        raise typer.Exit(1)
    except InvalidDefError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(typer.style(f"Skill: {skill.name}", bold=True, fg="cyan"))
    console.print(f"Category: {skill.category}")
    console.print(f"Description: {skill.description}")
    console.print(f"Path: {skill.path}\n")

    if raw:
        typer.echo(skill.content)
    else:
        console.print(Markdown(skill.content))
