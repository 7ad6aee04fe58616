"""Utility modules for stackctl.

This module exports commonly used utility functions.
"""

from stackctl.utils.formatting import (
    console,
    err_console,
    print_check,
    print_error,
    print_header,
    print_info,
    print_skip,
    print_step,
    print_success,
    print_update,
    print_warning,
)
from stackctl.utils.shell import CommandResult, command_exists, probe_output, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "print_check",
    "print_error",
    "print_header",
    "print_info",
    "print_skip",
    "print_step",
    "print_success",
    "print_update",
    "print_warning",
    "probe_output",
    "run_command",
]
