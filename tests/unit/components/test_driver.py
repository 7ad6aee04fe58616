"""Unit tests for the driver components."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from stackctl.components.driver import DriverInstaller, KernelDriver
from stackctl.core.config import StackConfig
from stackctl.models.component import (
    UNKNOWN,
    Health,
    InstalledCurrent,
    InstalledStale,
    NotInstalled,
)
from stackctl.models.outcome import OutcomeKind


@pytest.fixture
def installer(config: StackConfig) -> DriverInstaller:
    """DriverInstaller with mocked probe and operator."""
    component = DriverInstaller(config)
    component.probe = MagicMock()
    component.apt = MagicMock()
    return component


@pytest.fixture
def kernel_driver(config: StackConfig) -> KernelDriver:
    """KernelDriver with mocked probe and operator."""
    component = KernelDriver(config)
    component.probe = MagicMock()
    component.apt = MagicMock()
    return component


class TestDriverInstaller:
    """Tests for DriverInstaller component."""

    def test_absent(self, installer: DriverInstaller) -> None:
        """No amdgpu-install command means not installed."""
        with patch("stackctl.components.driver.command_exists", return_value=False):
            assert isinstance(installer.inspect(), NotInstalled)
            assert installer.status().health == Health.MISSING

    def test_matching_release_is_current(self, installer: DriverInstaller) -> None:
        """The configured release is current."""
        installer.probe.installed_version.return_value = "7.1.1.70101-2255209.24.04"
        with patch("stackctl.components.driver.command_exists", return_value=True):
            assert installer.inspect() == InstalledCurrent(version="7.1.1")
            assert installer.status().detail == "v7.1.1"

    def test_other_release_is_stale(self, installer: DriverInstaller) -> None:
        """Any other release string is stale."""
        installer.probe.installed_version.return_value = "6.4.3.60403-2158813.24.04"
        with patch("stackctl.components.driver.command_exists", return_value=True):
            assert installer.inspect() == InstalledStale(current="6.4.3", available="7.1.1")

    def test_unreadable_version(self, installer: DriverInstaller) -> None:
        """A present command without a readable package version is unknown."""
        installer.probe.installed_version.return_value = None
        with patch("stackctl.components.driver.command_exists", return_value=True):
            assert installer.current_version() == UNKNOWN

    def test_install(self, installer: DriverInstaller, config: StackConfig, tmp_path: Path) -> None:
        """Install downloads the installer package and refreshes the index."""
        with patch("stackctl.components.driver.ensure_cache_dir", return_value=tmp_path):
            outcome = installer.install(NotInstalled())

        installer.apt.install_deb.assert_called_once_with(config.driver_url, tmp_path)
        installer.apt.update_index.assert_called_once()
        assert outcome.kind == OutcomeKind.INSTALLED
        assert outcome.description == "amdgpu-install 7.1.1"

    def test_update(self, installer: DriverInstaller, tmp_path: Path) -> None:
        """Update reinstalls and records the version pair."""
        with patch("stackctl.components.driver.ensure_cache_dir", return_value=tmp_path):
            outcome = installer.update(InstalledStale(current="6.4.3", available="7.1.1"))
        assert outcome.label == "amdgpu-install: 6.4.3 -> 7.1.1"

    def test_reboot_policy(self) -> None:
        """Only an update of the installer requires a reboot."""
        assert DriverInstaller.reboot_on_install is False
        assert DriverInstaller.reboot_on_update is True


class TestKernelDriver:
    """Tests for KernelDriver component."""

    def test_absent(self, kernel_driver: KernelDriver) -> None:
        """An uninstalled package is not installed and needs no index refresh."""
        kernel_driver.probe.installed_version.return_value = None
        assert kernel_driver.inspect() == NotInstalled(missing=("amdgpu-dkms",))
        kernel_driver.apt.update_index.assert_not_called()

    def test_current_against_candidate(self, kernel_driver: KernelDriver) -> None:
        """Installed equals candidate is current, after an index refresh."""
        kernel_driver.probe.installed_version.return_value = "1:6.16.6"
        kernel_driver.probe.candidate_version.return_value = "1:6.16.6"
        assert isinstance(kernel_driver.inspect(), InstalledCurrent)
        kernel_driver.apt.update_index.assert_called_once()

    def test_stale_against_candidate(self, kernel_driver: KernelDriver) -> None:
        """A different candidate is stale."""
        kernel_driver.probe.installed_version.return_value = "1:6.16.6"
        kernel_driver.probe.candidate_version.return_value = "1:6.16.7"
        assert kernel_driver.inspect() == InstalledStale(current="1:6.16.6", available="1:6.16.7")

    def test_empty_candidate_is_current(self, kernel_driver: KernelDriver) -> None:
        """An undeterminable candidate never triggers an update."""
        kernel_driver.probe.installed_version.return_value = "1:6.16.6"
        kernel_driver.probe.candidate_version.return_value = ""
        assert isinstance(kernel_driver.inspect(), InstalledCurrent)

    def test_install_and_update(self, kernel_driver: KernelDriver) -> None:
        """Install and update both apt-get install the package."""
        outcome = kernel_driver.install(NotInstalled())
        assert outcome.description == "amdgpu-dkms"

        outcome = kernel_driver.update(InstalledStale(current="1:6.16.6", available="1:6.16.7"))
        assert outcome.kind == OutcomeKind.UPDATED
        assert outcome.label == "amdgpu-dkms: 1:6.16.6 -> 1:6.16.7"
        assert kernel_driver.apt.install.call_count == 2

    def test_reboot_policy(self) -> None:
        """Any change to the kernel driver requires a reboot."""
        assert KernelDriver.reboot_on_install is True
        assert KernelDriver.reboot_on_update is True
