"""GPU driver components: the vendor installer utility and the DKMS kernel driver."""

import logging
import re

from stackctl.components.base import Component
from stackctl.core.config import StackConfig
from stackctl.core.paths import ensure_cache_dir, get_cache_dir
from stackctl.models.component import (
    UNKNOWN,
    ComponentState,
    Health,
    InstalledStale,
    NotInstalled,
    StatusRow,
    classify_version,
)
from stackctl.models.outcome import ActionOutcome, installed, updated
from stackctl.operators.apt import AptOperator
from stackctl.probes.apt import AptProbe
from stackctl.utils.shell import command_exists

logger = logging.getLogger(__name__)

# "7.1.1.70101-2255209.24.04" -> "7.1.1"
_RELEASE_PATTERN = re.compile(r"^\d+\.\d+\.\d+")


class DriverInstaller(Component):
    """The amdgpu-install utility, pinned to the configured ROCm release.

    Unlike the other versioned components the target is the configured
    release, not the package index candidate.
    """

    name = "driver-installer"
    title = "amdgpu-install"
    reboot_on_update = True

    _COMMAND = "amdgpu-install"

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(config, dry_run)
        self.probe = AptProbe()
        self.apt = AptOperator(dry_run=dry_run)

    def current_version(self) -> str | None:
        """Release of the installed utility, or None if it is absent."""
        if not command_exists(self._COMMAND):
            return None
        version = self.probe.installed_version(self._COMMAND) or ""
        match = _RELEASE_PATTERN.match(version)
        return match.group(0) if match else UNKNOWN

    def inspect(self) -> ComponentState:
        return classify_version(self.current_version(), self.config.rocm_version)

    def status(self) -> StatusRow:
        version = self.current_version()
        if version is None:
            return StatusRow(self.title, Health.MISSING)
        return StatusRow(self.title, Health.OK, f"v{version}")

    def install(self, state: NotInstalled) -> ActionOutcome:
        self._install_package()
        return installed(f"{self.title} {self.config.rocm_version}")

    def update(self, state: InstalledStale) -> ActionOutcome:
        self._install_package()
        return updated(self.title, before=state.current, after=self.config.rocm_version)

    def _install_package(self) -> None:
        cache_dir = get_cache_dir() if self.dry_run else ensure_cache_dir()
        self.apt.install_deb(self.config.driver_url, cache_dir)
        # The package adds the vendor repositories
        self.apt.update_index()


class KernelDriver(Component):
    """The DKMS kernel driver package.

    Staleness is decided against the APT candidate after refreshing the
    package index. Any change to it needs a reboot.
    """

    name = "kernel-driver"
    title = "AMDGPU-DKMS"
    reboot_on_install = True
    reboot_on_update = True

    def __init__(self, config: StackConfig, dry_run: bool = False) -> None:
        super().__init__(config, dry_run)
        self.probe = AptProbe()
        self.apt = AptOperator(dry_run=dry_run)

    @property
    def package(self) -> str:
        """Name of the driver package."""
        return self.config.kernel_driver_package

    def inspect(self) -> ComponentState:
        current = self.probe.installed_version(self.package)
        if current is None:
            return NotInstalled(missing=(self.package,))
        self.apt.update_index()
        return classify_version(current, self.probe.candidate_version(self.package))

    def status(self) -> StatusRow:
        version = self.probe.installed_version(self.package)
        if version is None:
            return StatusRow(self.title, Health.MISSING)
        return StatusRow(self.title, Health.OK, f"v{version}")

    def install(self, state: NotInstalled) -> ActionOutcome:
        self.apt.install([self.package])
        return installed(self.package)

    def update(self, state: InstalledStale) -> ActionOutcome:
        self.apt.install([self.package])
        return updated(self.package, before=state.current, after=state.available)
