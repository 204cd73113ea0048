"""Command line interface for braces."""

from braces.cli.main import app, typer_app

__all__ = ["app", "typer_app"]
