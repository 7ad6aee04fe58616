"""Status command implementation.

Shows the state of every component without changing anything.
"""

import typer

from stackctl.artifacts.generator import ArtifactGenerator
from stackctl.cli.common import require_config
from stackctl.cli.display import create_status_table
from stackctl.core.engine import inspect_all
from stackctl.core.stack import get_components
from stackctl.utils.formatting import console, print_info, print_success

app = typer.Typer(
    help="Show installation status.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_status(ctx: typer.Context) -> None:
    """Show the installation status of every component.

    Read-only: no package index refresh and no remote fetch.

    Examples:
        stackctl status
        stackctl --config my.toml status
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(ctx)
    components = get_components(config, dry_run=True)
    rows = inspect_all(components) + ArtifactGenerator(config, dry_run=True).status_rows()

    console.print(create_status_table(rows))

    pending = sum(1 for row in rows if not row.is_ok)
    if pending == 0:
        print_success("Everything is installed.")
    else:
        print_info(f"{pending} component(s) need attention. Run 'stackctl install' to converge.")
