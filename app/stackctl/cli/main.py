"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from pathlib import Path
from typing import Annotated

import typer

from stackctl import __version__
from stackctl.cli.commands import config, install, scripts, status
from stackctl.utils.logging import configure_logging

app = typer.Typer(
    name="stackctl",
    help="Detect-then-converge provisioner for a ROCm GPU stack and ComfyUI.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print the version and stop."""
    if value:
        typer.echo(f"stackctl version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Print the stackctl version.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log every probe and command.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Hide the banner and log only errors.",
        ),
    ] = False,
    config_path: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config.toml (default: ~/.config/stackctl/config.toml).",
        ),
    ] = None,
) -> None:
    """stackctl - Install and update a ROCm GPU stack with ComfyUI.

    Inspects every component first, then installs what is missing,
    updates what is stale and skips what is current.
    """
    configure_logging(verbose=verbose, quiet=quiet)

    # Global options for the subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = config_path


app.add_typer(status.app, name="status")
app.add_typer(install.app, name="install")
app.add_typer(scripts.app, name="scripts")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
