"""Fixtures for API router tests."""

import pytest
from fastapi.testclient import TestClient

from skillbook.api import create_app


@pytest.fixture
def client(test_context, write_skill, write_command):
    """Test client over a workspace with one skill and one command."""
    write_skill("testing", "test-skill", description="A test skill")
    write_command("review", description="Review code")

    app = create_app(test_context)
    with TestClient(app) as client:
        yield client
