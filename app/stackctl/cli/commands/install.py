"""Install command implementation.

Runs the full pipeline: preflight checks, status snapshot, confirmation,
convergence of every component, artifact generation, summary and the
optional reboot.
"""

from typing import Annotated

import typer

from stackctl.artifacts.generator import ArtifactGenerator
from stackctl.cli.common import is_quiet, require_config
from stackctl.cli.display import (
    create_status_table,
    print_banner,
    print_final_instructions,
    print_run_summary,
)
from stackctl.components.base import Component
from stackctl.core.config import StackConfig
from stackctl.core.engine import ConvergenceEngine, inspect_all
from stackctl.core.preflight import Confirm, UserDeclined, check_gpu, check_os, check_tools
from stackctl.core.stack import get_components
from stackctl.models.outcome import RunContext
from stackctl.operators.base import OperatorError
from stackctl.operators.system import SystemOperator
from stackctl.utils.formatting import console, print_error, print_header, print_info

app = typer.Typer(
    help="Install or update the GPU stack.",
    invoke_without_command=True,
)


def _confirm(yes: bool) -> Confirm:
    """Build a yes/no prompt that auto-accepts when --yes was given."""

    def confirm(question: str) -> bool:
        if yes:
            return True
        return typer.confirm(question, default=False)

    return confirm


def _handle_reboot(run_ctx: RunContext, yes: bool, reboot: bool) -> None:
    """Offer or trigger a reboot when the run changed drivers or groups.

    Args:
        run_ctx: Completed run context.
        yes: Non-interactive mode; never prompts.
        reboot: Reboot without asking.

    Raises:
        typer.Exit: If the reboot command fails.
    """
    if not run_ctx.reboot_required:
        return
    if run_ctx.dry_run:
        print_info("[DRY-RUN] A reboot would be required.")
        return

    if not reboot:
        if yes or not typer.confirm("\nWould you like to reboot now?", default=False):
            print_info("Remember to reboot before using the GPU stack!")
            return

    print_info("Rebooting system...")
    try:
        SystemOperator().reboot()
    except OperatorError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def _run_pipeline(config: StackConfig, components: list[Component], run_ctx: RunContext) -> None:
    """Converge components, then generate artifacts.

    Each component is inspected again before it is acted on.

    Raises:
        OperatorError: On the first failing command.
        OSError: If a file or directory cannot be written.
        RuntimeError: If the cache directory cannot be created.
    """
    ConvergenceEngine(components).run(run_ctx)
    ArtifactGenerator(config, dry_run=run_ctx.dry_run).run(run_ctx)


@app.callback(invoke_without_command=True)
def install_stack(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompts and proceed.",
        ),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would be done without making changes.",
        ),
    ] = False,
    reboot: Annotated[
        bool,
        typer.Option(
            "--reboot",
            help="Reboot without asking if a reboot is required.",
        ),
    ] = False,
) -> None:
    """Install missing components, update stale ones, skip current ones.

    Components are processed in a fixed order and the run stops at the
    first failing command. Run it again after fixing the cause; finished
    components are skipped.

    Examples:
        stackctl install                 # Interactive
        stackctl install --dry-run       # Preview commands
        stackctl install --yes --reboot  # Unattended, reboot if needed
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    config = require_config(ctx)
    confirm = _confirm(yes)

    if not is_quiet(ctx):
        print_banner(config)

    try:
        check_os(config, confirm)
        check_gpu(config, confirm)
        check_tools(config, confirm)
    except UserDeclined as e:
        print_info("Installation cancelled.")
        raise typer.Exit(code=0) from e

    print_header("System Status Check")
    components = get_components(config, dry_run=dry_run)
    rows = inspect_all(components) + ArtifactGenerator(config, dry_run=dry_run).status_rows()
    console.print(create_status_table(rows))

    if not confirm("\nContinue with installation/update?"):
        print_info("Installation cancelled.")
        raise typer.Exit(code=0)

    run_ctx = RunContext(dry_run=dry_run)
    try:
        _run_pipeline(config, components, run_ctx)
    except (OperatorError, OSError, RuntimeError) as e:
        print_error(str(e))
        print_run_summary(run_ctx)
        print_info("Fix the problem above and run 'stackctl install' again.")
        raise typer.Exit(code=1) from e

    print_run_summary(run_ctx)
    print_header("Setup Complete!")
    print_final_instructions(config, run_ctx)
    if dry_run:
        print_info("\n[DRY-RUN] No changes were made.")

    _handle_reboot(run_ctx, yes=yes, reboot=reboot)
