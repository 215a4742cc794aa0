"""Serve CLI command for the HTTP API."""

import logging

import typer
import uvicorn

from skillbook.api import create_app
from skillbook.core.context import SharedContext
from skillbook.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def server_command(
    ctx: typer.Context,
    host: str | None = None,
    port: int | None = None,
) -> None:
    """Start the HTTP API for the corpus."""
    config = ctx.obj.get("config")

    # Enable console logging for server mode
    setup_logging(config, console_output=True)

    host = host or config.api.host
    port = port or config.api.port

    typer.echo("Starting skillbook server...")
    typer.echo(f"Skills path: {config.skills_path}")
    typer.echo(f"Commands path: {config.commands_path}")
    typer.echo("Press Ctrl+C to stop")

    context = SharedContext(config)
    logger.info(f"Serving API on {host}:{port}")
    uvicorn.run(create_app(context), host=host, port=port, log_config=None)
