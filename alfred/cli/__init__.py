"""CLI application setup using Typer."""

from alfred.cli.main import app

__all__ = ["app"]
