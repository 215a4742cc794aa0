"""Commands subcommand group for skillbook CLI."""

import typer
from rich.console import Console
from rich.markdown import Markdown

from skillbook.core.command_loader import CommandLoader
from skillbook.utils.def_loader import DefNotFoundError, InvalidDefError

commands_app = typer.Typer(
    help="Browse slash command documents",
    no_args_is_help=True,
    add_completion=True,
)
console = Console()


@commands_app.command("list")
def list_commands(ctx: typer.Context) -> None:
    """List all available slash commands."""
    loader = CommandLoader.from_config(ctx.obj["config"])

    commands = loader.discover_commands()

    console.print(
        typer.style(f"Available Commands: {len(commands)}", bold=True, fg="cyan")
    )

    for command in commands:
        console.print(f"\n{typer.style(command.trigger, bold=True, fg='cyan')}")
        console.print(f"  {command.description}", markup=False)


@commands_app.command()
def show(
    ctx: typer.Context,
    command_id: str = typer.Argument(..., help="Command name, with or without '/'"),
    raw: bool = typer.Option(False, "--raw", help="Print markdown without rendering"),
) -> None:
    """Show a command's metadata, allowed tools and content."""
    loader = CommandLoader.from_config(ctx.obj["config"])

    try:
        command = loader.load_command(command_id)
    except DefNotFoundError:
        console.print(f"[red]Command not found: {command_id}[/red]")
        console.print("\nAvailable commands:")
        for c in loader.discover_commands():
            console.print(f"  - {c.trigger}")
        raise typer.Exit(1)
    except InvalidDefError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(typer.style(f"Command: {command.trigger}", bold=True, fg="cyan"))
    console.print(f"Description: {command.description}")
    if command.argument_hint:
        console.print(f"Arguments: {command.argument_hint}", markup=False)
    console.print("\nAllowed tools:")
    if command.allowed_tools:
        for pattern in command.allowed_tools:
            console.print(f"  - {pattern}", markup=False)
    else:
        console.print("  None")
    console.print("")

    if raw:
        typer.echo(command.content)
    else:
        console.print(Markdown(command.content))
