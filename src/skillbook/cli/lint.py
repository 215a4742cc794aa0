"""Lint and index CLI commands."""

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from skillbook.core.context import SharedContext
from skillbook.core.readme import update_readme
from skillbook.lint.base import Severity
from skillbook.lint.registry import UnknownRuleError

console = Console()

SEVERITY_STYLES = {Severity.ERROR: "red", Severity.WARNING: "yellow"}


def lint_command(ctx: typer.Context, strict: bool, disable: list[str]) -> None:
    """Run lint rules and exit non-zero on failures."""
    config = ctx.obj["config"]
    context = SharedContext(config)

    try:
        report = context.rule_registry.run(
            context.scan(),
            disabled=[*config.lint.disable, *disable],
            severity_overrides=config.lint.severity,
        )
    except UnknownRuleError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(2)

    if report.issues:
        table = Table(show_header=True, header_style="bold")
        table.add_column("Location")
        table.add_column("Rule")
        table.add_column("Severity")
        table.add_column("Message")
        for issue in report.sorted():
            style = SEVERITY_STYLES[issue.severity]
            table.add_row(
                Text(issue.location()),
                issue.rule,
                Text(issue.severity.value, style=style),
                Text(issue.message),
            )
        console.print(table)

    summary = (
        f"{report.checked} document(s) checked: "
        f"{len(report.errors)} error(s), {len(report.warnings)} warning(s)"
    )
    if report.ok:
        console.print(f"[green]{summary}[/green]")
    else:
        console.print(f"[red]{summary}[/red]")

    code = report.exit_code(warnings_as_errors=strict or config.lint.warnings_as_errors)
    if code:
        raise typer.Exit(code)


def index_command(ctx: typer.Context, write: bool, check: bool) -> None:
    """Print, check or write the README index."""
    config = ctx.obj["config"]
    context = SharedContext(config)

    if check:
        current = config.readme_path.read_text() if config.readme_path.exists() else ""
        if update_readme(current, context.render_index()) != current:
            console.print(
                "[red]README index is out of date. Run 'skillbook index --write'.[/red]"
            )
            raise typer.Exit(1)
        console.print("[green]README index is up to date.[/green]")
        return

    if write:
        changed = context.write_index()
        if changed:
            console.print(f"[green]Updated {config.readme_path}[/green]")
        else:
            console.print(f"{config.readme_path} already up to date")
        return

    typer.echo(context.render_index())
