"""Virtual environment operator implementation."""

import logging
from pathlib import Path

from stackctl.operators.base import Operator, OperatorError
from stackctl.utils.shell import command_exists

logger = logging.getLogger(__name__)


class VenvOperator(Operator):
    """Creates a virtual environment and installs packages into it.

    Attributes:
        venv_dir: Virtual environment directory.
        python: Interpreter used to create the environment.
    """

    def __init__(self, venv_dir: Path, python: str = "python3", dry_run: bool = False) -> None:
        """Initialize the operator.

        Args:
            venv_dir: Virtual environment directory.
            python: Interpreter used to create the environment.
            dry_run: If True, only log commands without executing them.
        """
        super().__init__(dry_run=dry_run)
        self.venv_dir = venv_dir
        self.python = python

    @property
    def pip(self) -> Path:
        """pip of the environment."""
        return self.venv_dir / "bin" / "pip"

    def is_available(self) -> bool:
        """Check if the creating interpreter is available."""
        return command_exists(self.python)

    def create(self) -> None:
        """Create the virtual environment.

        Raises:
            OperatorError: If creation fails or leaves no pip behind.
        """
        args = [self.python, "-m", "venv", str(self.venv_dir)]
        self._execute(args)
        if not self.dry_run and not self.pip.is_file():
            raise OperatorError(args, 1, f"pip not found in {self.venv_dir} after creation")

    def pip_install(self, args: list[str], *, cwd: str | None = None) -> None:
        """Run pip install inside the environment.

        Args:
            args: Arguments after ``pip install``.
            cwd: Working directory (for relative requirement files).

        Raises:
            OperatorError: If pip is missing or the install fails.
        """
        command = [str(self.pip), "install", *args]
        if not self.dry_run and not self.pip.is_file():
            raise OperatorError(command, 127, f"pip not found in {self.venv_dir}")
        self._execute(command, cwd=cwd)
