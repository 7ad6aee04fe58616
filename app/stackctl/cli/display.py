"""Shared Rich display functions for status, summary and follow-up.

Provides the status table, the banner and the end-of-run summary used
by the install and status commands.
"""

from rich.panel import Panel
from rich.table import Table

from stackctl import __version__
from stackctl.artifacts.templates import launch_script_name, update_script_name
from stackctl.core.config import StackConfig
from stackctl.models.component import Health, StatusRow
from stackctl.models.outcome import ActionOutcome, RunContext
from stackctl.utils.formatting import console

# Marker and style per health value
_HEALTH_MARKERS: dict[Health, tuple[str, str]] = {
    Health.OK: ("✓ Installed", "success"),
    Health.PARTIAL: ("⚠ Partial", "warning"),
    Health.MISSING: ("✗ Not Installed", "error"),
    Health.NEEDS_CONFIG: ("⚠ Needs Configuration", "warning"),
}


def create_status_table(rows: list[StatusRow]) -> Table:
    """Create a Rich table of component health.

    Args:
        rows: Status rows in convergence order.

    Returns:
        Rich Table with Component, Status and Details columns.
    """
    table = Table(
        title="Current Installation Status",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Component", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Details")

    for row in rows:
        marker, style = _HEALTH_MARKERS[row.health]
        table.add_row(
            row.title,
            f"[{style}]{marker}[/{style}]",
            f"[muted]{row.detail or ''}[/muted]",
        )

    return table


def print_banner(config: StackConfig) -> None:
    """Print the run banner."""
    body = (
        f"[header]{config.app_name} installer[/header]  [muted]stackctl {__version__}[/muted]\n"
        f"{config.expected_os_id.capitalize()} {config.expected_os_version}"
        f" + ROCm {config.rocm_version}\n\n"
        "[success]✓[/success] Checks existing installations\n"
        "[success]✓[/success] Updates outdated components\n"
        "[success]✓[/success] Installs only what's missing"
    )
    console.print(Panel(body, border_style="border", expand=False))


def _print_group(title: str, style: str, outcomes: tuple[ActionOutcome, ...]) -> None:
    if not outcomes:
        return
    console.print(f"  [{style}]{title}[/{style}]")
    for outcome in outcomes:
        console.print(f"    • {outcome.label}")


def print_run_summary(ctx: RunContext) -> None:
    """Print the three outcome groups of a run.

    Args:
        ctx: Completed run context.
    """
    marker = " [muted](dry run)[/muted]" if ctx.dry_run else ""
    console.print()
    console.print(f"[header]Installation Summary[/header]{marker}")
    _print_group("✓ INSTALLED:", "installed", ctx.installed)
    _print_group("↑ UPDATED:", "updated", ctx.updated)
    _print_group("○ SKIPPED (already up to date):", "skipped", ctx.skipped)
    if ctx.total == 0:
        console.print("  [muted]Nothing was processed.[/muted]")


def print_final_instructions(config: StackConfig, ctx: RunContext) -> None:
    """Print how to launch the application and whether a reboot is needed.

    Args:
        config: Stack configuration.
        ctx: Completed run context.
    """
    launch = config.app_dir / launch_script_name(config)
    low_vram = config.app_dir / launch_script_name(config, low_vram=True)
    update = config.app_dir / update_script_name(config)

    if ctx.reboot_required:
        console.print(
            Panel(
                "[error]IMPORTANT: A REBOOT IS REQUIRED![/error]\n"
                "Driver or group changes were made that require a reboot.",
                border_style="warning",
                expand=False,
            )
        )

    console.print(f"\n[info]To run {config.app_name}:[/info]")
    if ctx.reboot_required:
        console.print("  1. Reboot your system: [warning]sudo reboot[/warning]")
        console.print(f"  2. After reboot, run: [warning]{launch}[/warning]")
    else:
        console.print(f"  [warning]{launch}[/warning]")
    console.print(f"  Open browser to: [warning]{config.web_url}[/warning]")

    console.print("\n[info]Other commands:[/info]")
    console.print(f"  • Low VRAM mode: {low_vram}")
    console.print(f"  • Update all:    {update}")

    console.print("\n[info]Verify ROCm:[/info]")
    console.print("  • rocminfo")
    console.print("  • rocm-smi")
