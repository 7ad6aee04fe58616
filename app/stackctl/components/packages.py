"""Base package prerequisites."""

import logging

from stackctl.components.base import Component
from stackctl.core.config import StackConfig
from stackctl.models.component import (
    ComponentState,
    Health,
    InstalledCurrent,
    NotInstalled,
    StatusRow,
)
from stackctl.models.outcome import ActionOutcome, installed, skipped
from stackctl.operators.apt import AptOperator
from stackctl.probes.apt import AptProbe
from stackctl.probes.host import kernel_release
from stackctl.utils.formatting import print_info

logger = logging.getLogger(__name__)


class Prerequisites(Component):
    """APT packages every later step depends on.

    Includes the kernel headers and extra modules of the running kernel,
    which the DKMS driver build needs.
    """

    name = "prerequisites"
    title = "Prerequisites"

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(config, dry_run)
        self.probe = AptProbe()
        self.apt = AptOperator(dry_run=dry_run)

    def required_packages(self) -> list[str]:
        """Configured prerequisites plus kernel-specific packages."""
        kernel = kernel_release()
        return [
            *self.config.prerequisites,
            f"linux-headers-{kernel}",
            f"linux-modules-extra-{kernel}",
        ]

    def missing_packages(self) -> list[str]:
        """Required packages not installed, in declaration order."""
        return [pkg for pkg in self.required_packages() if not self.probe.is_installed(pkg)]

    def inspect(self) -> ComponentState:
        missing = self.missing_packages()
        if missing:
            return NotInstalled(missing=tuple(missing))
        return InstalledCurrent()

    def status(self) -> StatusRow:
        required = self.required_packages()
        missing = self.missing_packages()
        if not missing:
            return StatusRow(self.title, Health.OK)
        if len(missing) == len(required):
            return StatusRow(self.title, Health.MISSING)
        return StatusRow(self.title, Health.PARTIAL, f"{len(missing)} missing")

    def install(self, state: NotInstalled) -> ActionOutcome:
        packages = list(state.missing)
        for pkg in packages:
            print_info(f"{pkg} needs to be installed")
        self.apt.update_index()
        self.apt.install(packages)
        return installed(f"{self.title}: {' '.join(packages)}")

    def skip(self, state: InstalledCurrent) -> ActionOutcome:
        return skipped(f"{self.title} (all already installed)")
