"""Rich console output for stackctl.

Every convergence step reports through the same small vocabulary of
markers ([STEP], [CHECK], [SKIP], [UPDATE]), so a run can be followed
and audited from its output alone. Warnings and errors go to stderr.
"""

import sys

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from stackctl.core.theme import get_theme


def _make_console(stderr: bool = False) -> Console:
    # Hex palette colors need truecolor; elsewhere Rich decides
    stream = sys.stderr if stderr else sys.stdout
    color_system = "truecolor" if stream.isatty() else None
    return Console(theme=get_theme(), stderr=stderr, color_system=color_system)


console = _make_console()
err_console = _make_console(stderr=True)


def _marker(style: str, label: str, message: str) -> None:
    console.print(f"[{style}]\\[{label}][/] {message}")


def print_header(title: str) -> None:
    """Print a section header framing one stage of the run."""
    console.print()
    console.print(Panel(f"[header]{title}[/]", border_style="border", expand=True))


def print_step(message: str) -> None:
    """Print an action that is about to change the system."""
    _marker("step", "STEP", message)


def print_check(message: str) -> None:
    """Print an inspection result."""
    _marker("check", "CHECK", message)


def print_skip(message: str) -> None:
    """Print a component that needs no action."""
    _marker("skip", "SKIP", message)


def print_update(message: str) -> None:
    """Print an update of an existing component."""
    _marker("update", "UPDATE", message)


def print_info(message: str) -> None:
    """Print an informational message; the message is not parsed as markup."""
    console.print(f"[info]{escape(message)}[/]")


def print_success(message: str) -> None:
    """Print a success message with a check mark."""
    console.print(f"[success]✓ {escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning to stderr; the message is not parsed as markup."""
    err_console.print(f"[warning]⚠ {escape(message)}[/]")


def print_error(message: str) -> None:
    """Print an error to stderr; the message is not parsed as markup."""
    err_console.print(f"[error]✗ {escape(message)}[/]")
