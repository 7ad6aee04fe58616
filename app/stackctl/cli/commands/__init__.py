"""CLI commands for stackctl.

This package contains all subcommand implementations.
"""

from stackctl.cli.commands import config, install, scripts, status

__all__ = ["config", "install", "scripts", "status"]
