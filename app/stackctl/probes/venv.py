"""Python virtual environment probe.

Runs the environment's own interpreter and pip so that queries never
touch the system Python.
"""

import logging
import re
import subprocess
from pathlib import Path

from stackctl.models.component import NOT_INSTALLED
from stackctl.utils.shell import probe_output, run_command

logger = logging.getLogger(__name__)

# First line of `pip index versions`: "torch (2.10.0a0+rocm7.10.0a20251120)"
_INDEX_VERSION_PATTERN = re.compile(r"^\S+\s+\(([^)]+)\)")


class VenvProbe:
    """Inspects a virtual environment and the packages inside it.

    Attributes:
        venv_dir: Virtual environment directory.
    """

    _PIP_TIMEOUT: float = 120.0

    def __init__(self, venv_dir: Path) -> None:
        self.venv_dir = venv_dir

    @property
    def python(self) -> Path:
        """Interpreter of the environment."""
        return self.venv_dir / "bin" / "python"

    @property
    def pip(self) -> Path:
        """pip of the environment."""
        return self.venv_dir / "bin" / "pip"

    def is_valid(self) -> bool:
        """Check that the environment has an activate script and pip."""
        return (
            self.venv_dir.is_dir()
            and (self.venv_dir / "bin" / "activate").is_file()
            and self.pip.is_file()
        )

    def has_module(self, name: str) -> bool:
        """Check if a module imports inside the environment."""
        if not self.is_valid():
            return False
        try:
            result = run_command([str(self.python), "-c", f"import {name}"], timeout=120.0)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Cannot run %s: %s", self.python, e)
            return False
        return result.success

    def module_version(self, name: str) -> str | None:
        """``__version__`` of a module inside the environment, if importable."""
        if not self.is_valid():
            return None
        return (
            probe_output(
                [str(self.python), "-c", f"import {name}; print({name}.__version__)"],
                timeout=120.0,
            )
            or None
        )

    def describe_torch(self) -> str:
        """Describe the framework build as "<version> (HIP: <hip version>)".

        Never raises; unreadable parts are reported as "not installed"
        and "N/A".
        """
        if not self.is_valid():
            return NOT_INSTALLED
        version = self.module_version("torch") or NOT_INSTALLED
        hip = probe_output(
            [
                str(self.python),
                "-c",
                "import torch; print(getattr(torch.version, 'hip', None) or 'N/A')",
            ],
            timeout=120.0,
        )
        return f"{version} (HIP: {hip or 'N/A'})"

    def latest_version(self, package: str, index_url: str, pre: bool = True) -> str:
        """Latest version of a package published on an index.

        Args:
            package: Distribution name.
            index_url: Package index to query.
            pre: Include pre-releases (nightly builds).

        Returns:
            Version string, or an empty string if it cannot be determined.
        """
        if not self.is_valid():
            return ""
        args = [str(self.pip), "index", "versions", package, "--index-url", index_url]
        if pre:
            args.append("--pre")
        output = probe_output(args, timeout=self._PIP_TIMEOUT)
        if not output:
            return ""
        match = _INDEX_VERSION_PATTERN.match(output.splitlines()[0])
        return match.group(1) if match else ""
