"""Python environment components: the virtual environment and the ML framework."""

import logging

from stackctl.components.base import Component
from stackctl.core.config import StackConfig
from stackctl.models.component import (
    UNKNOWN,
    ComponentState,
    Health,
    InstalledCurrent,
    InstalledStale,
    NotInstalled,
    StatusRow,
    classify_version,
)
from stackctl.models.outcome import ActionOutcome, installed, skipped, updated
from stackctl.operators.venv import VenvOperator
from stackctl.probes.venv import VenvProbe
from stackctl.utils.formatting import print_info, print_step

logger = logging.getLogger(__name__)

# Packaging tools upgraded in the environment after every run
_BOOTSTRAP_PACKAGES = ("pip", "setuptools", "wheel")


class VirtualEnv(Component):
    """The application's isolated Python environment."""

    name = "virtualenv"
    title = "Python virtual environment"

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(config, dry_run)
        self.probe = VenvProbe(config.venv_path)
        self.venv = VenvOperator(config.venv_path, dry_run=dry_run)

    def inspect(self) -> ComponentState:
        if not self.probe.is_valid():
            return NotInstalled()
        return InstalledCurrent()

    def status(self) -> StatusRow:
        if not self.probe.is_valid():
            return StatusRow(self.title, Health.MISSING)
        return StatusRow(self.title, Health.OK, str(self.config.venv_path))

    def install(self, state: NotInstalled) -> ActionOutcome:
        self.venv.create()
        return installed(self.title)

    def skip(self, state: InstalledCurrent) -> ActionOutcome:
        return skipped(f"{self.title} (already exists)")

    def finalize(self) -> None:
        print_step("Ensuring pip is up to date...")
        self.venv.pip_install(["--upgrade", *_BOOTSTRAP_PACKAGES, "--quiet"])


class Framework(Component):
    """The GPU build of the ML framework from its nightly index.

    Stale when the index publishes a version other than the installed
    one. The application's requirements are installed afterwards so
    they resolve against the GPU build.
    """

    name = "framework"
    title = "PyTorch"

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(config, dry_run)
        self.probe = VenvProbe(config.venv_path)
        self.venv = VenvOperator(config.venv_path, dry_run=dry_run)

    @property
    def module(self) -> str:
        """Import name of the framework."""
        return self.config.primary_torch_package

    def _pip_args(self, upgrade: bool) -> list[str]:
        args = ["--upgrade"] if upgrade else []
        return [
            *args,
            "--pre",
            *self.config.torch_packages,
            "--index-url",
            self.config.torch_index_url,
        ]

    def inspect(self) -> ComponentState:
        if not self.probe.has_module(self.module):
            return NotInstalled(missing=tuple(self.config.torch_packages))
        current = self.probe.module_version(self.module) or UNKNOWN
        available = self.probe.latest_version(
            self.config.primary_torch_package,
            self.config.torch_index_url,
        )
        return classify_version(current, available)

    def status(self) -> StatusRow:
        if not self.probe.has_module(self.module):
            return StatusRow(f"{self.title} ROCm", Health.MISSING)
        return StatusRow(f"{self.title} ROCm", Health.OK, self.probe.describe_torch())

    def install(self, state: NotInstalled) -> ActionOutcome:
        print_info(f"Using nightly builds from {self.config.torch_index_url}")
        self.venv.pip_install(self._pip_args(upgrade=False))
        return installed(self.config.framework_label)

    def update(self, state: InstalledStale) -> ActionOutcome:
        self.venv.pip_install(self._pip_args(upgrade=True))
        # Post-update verification is best effort
        if self.dry_run:
            after = state.available
        else:
            after = self.probe.module_version(self.module) or UNKNOWN
        return updated(self.title, before=state.current, after=after)

    def finalize(self) -> None:
        requirements = self.config.app_dir / "requirements.txt"
        if not self.dry_run and not requirements.is_file():
            logger.debug("No requirements file in %s", self.config.app_dir)
            return
        print_step(f"Installing/updating {self.config.app_name} dependencies...")
        self.venv.pip_install(["-r", str(requirements), "--quiet"])
