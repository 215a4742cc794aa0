"""FastAPI application factory."""

from fastapi import FastAPI

from skillbook import __version__
from skillbook.api.routers import commands, lint, skills
from skillbook.core.context import SharedContext


def create_app(context: SharedContext) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Skillbook API",
        description="HTTP API for browsing and editing a skill corpus",
        version=__version__,
    )
    app.state.context = context

    app.include_router(skills.router, prefix="/skills", tags=["skills"])
    app.include_router(commands.router, prefix="/commands", tags=["commands"])
    app.include_router(lint.router, prefix="/lint", tags=["lint"])

    return app
