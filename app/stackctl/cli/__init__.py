"""CLI package for stackctl.

This package contains the Typer application and all subcommands.
"""

from stackctl.cli.main import app

__all__ = ["app"]
