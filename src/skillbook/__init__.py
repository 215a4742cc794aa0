"""Skillbook: tooling for skill and slash command document corpora."""

__version__ = "0.1.0"
