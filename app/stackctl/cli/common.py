"""Helpers shared by CLI commands."""

from pathlib import Path

import typer

from stackctl.core.config import ConfigError, StackConfig, load_config
from stackctl.utils.formatting import print_error


def get_config_path(ctx: typer.Context) -> Path | None:
    """Config path given with the global --config option, if any."""
    obj = ctx.obj or {}
    return obj.get("config_path")


def is_quiet(ctx: typer.Context) -> bool:
    """Check if the global --quiet option was given."""
    obj = ctx.obj or {}
    return bool(obj.get("quiet"))


def require_config(ctx: typer.Context) -> StackConfig:
    """Load the stack configuration or exit with code 1.

    Args:
        ctx: Typer context carrying the global options.

    Returns:
        Loaded configuration (defaults if no file exists).

    Raises:
        typer.Exit: If the config file is invalid.
    """
    try:
        return load_config(get_config_path(ctx))
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
