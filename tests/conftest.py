"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from pathlib import Path

import pytest
from stackctl.core.config import StackConfig
from stackctl.models.outcome import RunContext


@pytest.fixture
def config(tmp_path: Path) -> StackConfig:
    """Stack configuration with every location under tmp_path."""
    return StackConfig(
        app_dir=tmp_path / "ComfyUI",
        profile_path=tmp_path / ".bashrc",
        desktop_entry_path=tmp_path / "applications" / "comfyui.desktop",
    )


@pytest.fixture
def run_ctx() -> RunContext:
    """Empty run context."""
    return RunContext()


@pytest.fixture
def mock_dpkg_installed_output() -> str:
    """dpkg-query output for an installed package."""
    return "ii \t1:6.16.6.30100100-2212064.24.04"


@pytest.fixture
def mock_dpkg_removed_output() -> str:
    """dpkg-query output for a removed package with config files left."""
    return "rc \t1:6.10.5.60302-2109964.24.04"


@pytest.fixture
def mock_apt_policy_output() -> str:
    """Sample apt-cache policy output."""
    return """amdgpu-dkms:
  Installed: 1:6.16.6.30100100-2212064.24.04
  Candidate: 1:6.16.6.30100100-2212064.24.04
  Version table:
 *** 1:6.16.6.30100100-2212064.24.04 600
        600 https://repo.radeon.com/amdgpu/30.10.1/ubuntu noble/main amd64 Packages
        100 /var/lib/dpkg/status"""


@pytest.fixture
def mock_apt_upgradable_output() -> str:
    """Sample apt list --upgradable output listing a ROCm package."""
    return """Listing...
firefox/noble-updates 128.0.3 amd64 [upgradable from: 128.0]
rocm/noble 7.1.1.70101-38~24.04 amd64 [upgradable from: 7.1.0.70100-20~24.04]"""


@pytest.fixture
def mock_lspci_output() -> str:
    """Sample lspci output with an AMD display adapter."""
    return """00:00.0 Host bridge: Advanced Micro Devices, Inc. [AMD] Root Complex
03:00.0 VGA compatible controller: Advanced Micro Devices, Inc. [AMD/ATI] Navi 48 [Radeon RX 9070 XT] (rev c0)
04:00.0 Audio device: Advanced Micro Devices, Inc. [AMD/ATI] Navi 48 HDMI/DP Audio Controller"""


@pytest.fixture
def os_release_file(tmp_path: Path) -> Path:
    """os-release file for Ubuntu 24.04."""
    path = tmp_path / "os-release"
    path.write_text(
        'PRETTY_NAME="Ubuntu 24.04.3 LTS"\n'
        'NAME="Ubuntu"\n'
        'VERSION_ID="24.04"\n'
        "ID=ubuntu\n"
        "ID_LIKE=debian\n",
        encoding="utf-8",
    )
    return path
