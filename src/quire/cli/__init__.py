# src/quire/cli/__init__.py
"""CLI package for Quire.

This package provides the command-line interface using Typer.
The CLI is a thin wrapper around the commands layer.
"""

from quire.cli.app import app, console

__all__ = ["app", "console"]
