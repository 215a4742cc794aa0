"""HTTP API for skillbook."""

from skillbook.api.app import create_app

__all__ = ["create_app"]
