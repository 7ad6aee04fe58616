"""Subprocess helpers.

Three ways of running a command, one per caller:

- run_command() captures output for operators that parse it.
- run_interactive() hands the terminal to the child (sudo, apt, pip).
- probe_output() is for read-only probes that must never raise.
"""

import os
import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Captured outcome of a finished command.

    Attributes:
        stdout: Decoded standard output.
        stderr: Decoded standard error.
        returncode: Process exit status.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if the command exited with status 0."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Run a command with captured text output.

    A non-zero exit is reported through the result, never raised.

    Args:
        args: Executable followed by its arguments.
        timeout: Seconds before the child is killed; None waits forever.
        cwd: Working directory, or None for the current one.

    Returns:
        The captured CommandResult.

    Raises:
        FileNotFoundError: If the executable does not exist.
        subprocess.TimeoutExpired: If the timeout elapses.
    """
    completed = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=False,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(completed.stdout, completed.stderr, completed.returncode)


def command_exists(name: str) -> bool:
    """Check if an executable is on PATH."""
    return shutil.which(name) is not None


def run_interactive(
    args: list[str],
    *,
    cwd: str | None = None,
    env: dict[str, str] | None = None,
) -> int:
    """Run a command attached to the user's terminal.

    Output is not captured, so sudo can prompt for a password and apt,
    pip and git can draw their progress bars.

    Args:
        args: Executable followed by its arguments.
        cwd: Working directory, or None for the current one.
        env: Variables added on top of the inherited environment.

    Returns:
        The exit status.

    Raises:
        FileNotFoundError: If the executable does not exist.
    """
    merged = dict(os.environ)
    if env:
        merged.update(env)
    return subprocess.run(args, check=False, cwd=cwd, env=merged).returncode


def probe_output(
    args: list[str],
    *,
    timeout: float | None = 30.0,
    cwd: str | None = None,
) -> str | None:
    """Run a read-only probe and return its stripped stdout.

    A missing executable, a timeout and a non-zero exit all yield None,
    so "cannot tell" reads the same as "not there".
    """
    try:
        result = run_command(args, timeout=timeout, cwd=cwd)
    except (OSError, subprocess.TimeoutExpired):
        return None
    return result.stdout.strip() if result.success else None
