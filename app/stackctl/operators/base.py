"""Abstract base class for system operators.

Operators perform the mutating half of convergence: package installs,
clones, virtual environment creation, group changes. Every command runs
through Operator._execute so dry-run and failure handling stay uniform.
"""

import logging
import shlex
import subprocess
from abc import ABC

from stackctl.utils.shell import run_command, run_interactive

logger = logging.getLogger(__name__)


class OperatorError(RuntimeError):
    """Raised when an external command exits unsuccessfully.

    Attributes:
        command: The command line that failed.
        returncode: Exit status (127 if the executable was not found).
        stderr: Captured error output, if any.
    """

    def __init__(self, command: list[str], returncode: int, stderr: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        msg = f"Command failed with exit code {returncode}: {shlex.join(command)}"
        if stderr:
            msg = f"{msg}\n{stderr.strip()}"
        super().__init__(msg)


class Operator(ABC):
    """Base class for all operators.

    Attributes:
        dry_run: If True, commands are logged but never executed.

    Example:
        >>> operator = AptOperator(dry_run=True)
        >>> operator.install(["git", "curl"])  # logs, runs nothing
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the operator.

        Args:
            dry_run: If True, only log commands without executing them.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Check if operator is in dry-run mode."""
        return self._dry_run

    def is_available(self) -> bool:
        """Check if the tooling this operator drives is available.

        Operators that only touch files need no tooling.

        Returns:
            True if the operator can be used, False otherwise.
        """
        return True

    def _execute(
        self,
        args: list[str],
        *,
        cwd: str | None = None,
        interactive: bool = True,
        timeout: float | None = None,
    ) -> None:
        """Run a mutating command.

        Interactive commands inherit the terminal so sudo prompts and
        download progress are visible.

        Args:
            args: Command and arguments.
            cwd: Working directory.
            interactive: If False, capture output instead of inheriting
                the terminal.
            timeout: Timeout for captured commands.

        Raises:
            OperatorError: If the executable is missing or exits non-zero.
        """
        command = shlex.join(args)
        if self.dry_run:
            logger.info("[dry-run] %s", command)
            return

        logger.info("Running: %s", command)
        try:
            if interactive:
                returncode = run_interactive(args, cwd=cwd)
                stderr = ""
            else:
                result = run_command(args, timeout=timeout, cwd=cwd)
                returncode = result.returncode
                stderr = result.stderr
        except FileNotFoundError as e:
            raise OperatorError(args, 127, str(e)) from e
        except subprocess.TimeoutExpired as e:
            raise OperatorError(args, 124, f"timed out after {e.timeout}s") from e

        if returncode != 0:
            raise OperatorError(args, returncode, stderr)
