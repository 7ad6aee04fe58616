"""Unit tests for ProfileOperator."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from stackctl.operators.profile import ProfileOperator

SENTINEL = "# ROCm Environment"
ENV = {
    "PATH": "$PATH:/opt/rocm/bin",
    "HSA_OVERRIDE_GFX_VERSION": "12.0.0",
    "PYTORCH_TUNABLEOP_ENABLED": "1",
}


@pytest.fixture
def profile_path(tmp_path: Path) -> Path:
    """A profile with unrelated content and no trailing newline."""
    path = tmp_path / ".bashrc"
    path.write_text("alias ll='ls -l'")
    return path


def _block() -> list[str]:
    return ["", f"{SENTINEL} (Added by stackctl)", *(f"export {k}={v}" for k, v in ENV.items())]


class TestEnsureBlock:
    """Tests for ProfileOperator.ensure_block."""

    def test_appends_block(self, profile_path: Path) -> None:
        """The block is appended after existing content."""
        assert ProfileOperator(profile_path).ensure_block(SENTINEL, _block()) is True
        text = profile_path.read_text()
        assert text.startswith("alias ll='ls -l'\n")
        assert "export HSA_OVERRIDE_GFX_VERSION=12.0.0\n" in text

    def test_creates_missing_profile(self, tmp_path: Path) -> None:
        """A missing profile is created."""
        path = tmp_path / ".bashrc"
        ProfileOperator(path).ensure_block(SENTINEL, _block())
        assert SENTINEL in path.read_text()

    def test_append_twice_is_idempotent(self, profile_path: Path) -> None:
        """Appending twice never duplicates the sentinel or any export."""
        operator = ProfileOperator(profile_path)
        operator.ensure_block(SENTINEL, _block())
        assert operator.ensure_block(SENTINEL, _block()) is False
        assert operator.ensure_exports(ENV) == []

        lines = profile_path.read_text().splitlines()
        assert sum(1 for line in lines if line.startswith(SENTINEL)) == 1
        for key, value in ENV.items():
            assert lines.count(f"export {key}={value}") == 1

    def test_dry_run_writes_nothing(self, profile_path: Path) -> None:
        """Dry-run leaves the profile untouched."""
        ProfileOperator(profile_path, dry_run=True).ensure_block(SENTINEL, _block())
        assert profile_path.read_text() == "alias ll='ls -l'"


class TestEnsureExports:
    """Tests for ProfileOperator.ensure_exports."""

    def test_appends_only_missing(self, profile_path: Path) -> None:
        """Present exports are not appended again."""
        profile_path.write_text(f"{SENTINEL}\nexport PATH=$PATH:/opt/rocm/bin\n")
        added = ProfileOperator(profile_path).ensure_exports(ENV)
        assert added == ["HSA_OVERRIDE_GFX_VERSION", "PYTORCH_TUNABLEOP_ENABLED"]
        assert profile_path.read_text().count("export PATH=") == 1


class TestApplyToProcess:
    """Tests for ProfileOperator.apply_to_process."""

    def test_expands_existing_values(self, profile_path: Path) -> None:
        """References to existing variables are expanded."""
        with patch.dict(os.environ, {"PATH": "/usr/bin"}, clear=True):
            ProfileOperator(profile_path).apply_to_process(ENV)
            assert os.environ["PATH"] == "/usr/bin:/opt/rocm/bin"
            assert os.environ["HSA_OVERRIDE_GFX_VERSION"] == "12.0.0"

    def test_dry_run_leaves_environment(self, profile_path: Path) -> None:
        """Dry-run does not touch the process environment."""
        with patch.dict(os.environ, {"PATH": "/usr/bin"}, clear=True):
            ProfileOperator(profile_path, dry_run=True).apply_to_process(ENV)
            assert "HSA_OVERRIDE_GFX_VERSION" not in os.environ
