"""Unit tests for RocmProbe."""

from pathlib import Path

import pytest
from stackctl.models.component import UNKNOWN
from stackctl.probes.rocm import RocmProbe


@pytest.fixture
def rocm_root(tmp_path: Path) -> Path:
    """A minimal ROCm tree."""
    root = tmp_path / "rocm"
    (root / "bin").mkdir(parents=True)
    (root / "bin" / "rocminfo").write_text("#!/bin/sh\n")
    return root


class TestRocmProbe:
    """Tests for RocmProbe class."""

    def test_installed(self, rocm_root: Path) -> None:
        """Installed when the prefix and rocminfo exist."""
        assert RocmProbe(rocm_root).is_installed() is True

    def test_not_installed_without_rocminfo(self, tmp_path: Path) -> None:
        """A bare directory is not an installation."""
        (tmp_path / "rocm").mkdir()
        assert RocmProbe(tmp_path / "rocm").is_installed() is False

    def test_version_from_info(self, rocm_root: Path) -> None:
        """.info/version is preferred."""
        (rocm_root / ".info").mkdir()
        (rocm_root / ".info" / "version").write_text("7.1.1-38\n")
        (rocm_root / "version").write_text("6.0.0\n")
        assert RocmProbe(rocm_root).version() == "7.1.1-38"

    def test_version_fallback(self, rocm_root: Path) -> None:
        """The top-level version file is the fallback."""
        (rocm_root / "version").write_text("7.1.0\n")
        assert RocmProbe(rocm_root).version() == "7.1.0"

    def test_version_unknown(self, rocm_root: Path) -> None:
        """No version file yields the unknown sentinel."""
        assert RocmProbe(rocm_root).version() == UNKNOWN
