"""Config command implementation.

Shows, creates and locates the stack configuration file.
"""

from typing import Annotated

import tomli_w
import typer
from rich.syntax import Syntax

from stackctl.cli.common import get_config_path, require_config
from stackctl.core.config import ConfigError, StackConfig, config_to_dict, save_config
from stackctl.core.paths import get_config_path as default_config_path
from stackctl.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Show or create the configuration file.",
    no_args_is_help=True,
)


@app.command()
def show(ctx: typer.Context) -> None:
    """Print the effective configuration as TOML.

    Values missing from the file are shown with their defaults.
    """
    config = require_config(ctx)
    text = tomli_w.dumps(config_to_dict(config))
    console.print(Syntax(text, "toml", theme="ansi_dark", background_color="default"))


@app.command()
def init(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing config file.",
        ),
    ] = False,
) -> None:
    """Write a config file with the default values.

    Examples:
        stackctl config init
        stackctl --config ./stack.toml config init --force
    """
    path = get_config_path(ctx) or default_config_path()

    if path.exists():
        if not force:
            print_error(f"Config already exists: {path}")
            print_info("Use --force to overwrite.")
            raise typer.Exit(code=1)
        print_warning(f"Overwriting existing config: {path}")

    try:
        saved = save_config(StackConfig(), path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Config written: {saved}")


@app.command()
def path(ctx: typer.Context) -> None:
    """Print the config file location."""
    config_path = get_config_path(ctx) or default_config_path()
    typer.echo(str(config_path))
    if not config_path.exists():
        print_info("File does not exist; built-in defaults are used.")
