"""Scripts command implementation.

Regenerates launch scripts and model directories without touching
packages, drivers or checkouts.
"""

from typing import Annotated

import typer

from stackctl.artifacts.generator import ArtifactGenerator
from stackctl.cli.common import require_config
from stackctl.cli.display import print_run_summary
from stackctl.models.outcome import RunContext
from stackctl.utils.formatting import print_error, print_info

app = typer.Typer(
    help="Regenerate launch scripts and model directories.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def generate_scripts(
    ctx: typer.Context,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be written without writing files.",
        ),
    ] = False,
) -> None:
    """Regenerate launch scripts, the desktop entry and model directories.

    Examples:
        stackctl scripts
        stackctl scripts --dry-run
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(ctx)
    run_ctx = RunContext(dry_run=dry_run)

    try:
        ArtifactGenerator(config, dry_run=dry_run).run(run_ctx)
    except OSError as e:
        print_error(f"Failed to write artifacts: {e}")
        raise typer.Exit(code=1) from e

    print_run_summary(run_ctx)
    if dry_run:
        print_info("[DRY-RUN] No files were written.")
