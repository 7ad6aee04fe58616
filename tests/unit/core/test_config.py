"""Unit tests for stack configuration."""

import tomllib
from pathlib import Path

import pytest
from pydantic import ValidationError
from stackctl.core.config import (
    ConfigError,
    ConfigParseError,
    ConfigValidationError,
    StackConfig,
    config_to_dict,
    load_config,
    save_config,
)


class TestStackConfig:
    """Tests for StackConfig model."""

    def test_defaults(self) -> None:
        """Defaults describe Ubuntu 24.04 with ROCm 7.1.1."""
        config = StackConfig()
        assert config.expected_os_id == "ubuntu"
        assert config.expected_os_version == "24.04"
        assert config.rocm_version == "7.1.1"
        assert config.groups == ["render", "video"]
        assert config.env["HSA_OVERRIDE_GFX_VERSION"] == "12.0.0"
        assert "models/checkpoints" in config.model_dirs

    def test_derived_paths(self, tmp_path: Path) -> None:
        """venv and plugin paths derive from app_dir."""
        config = StackConfig(app_dir=tmp_path / "app")
        assert config.venv_path == tmp_path / "app" / "venv"
        assert config.plugin_dir == tmp_path / "app" / "custom_nodes" / "ComfyUI-Manager"

        config = StackConfig(app_dir=tmp_path / "app", venv_dir=tmp_path / "env")
        assert config.venv_path == tmp_path / "env"

    def test_driver_url(self) -> None:
        """The installer URL is composed from release, distro and build tag."""
        assert StackConfig().driver_url == (
            "https://repo.radeon.com/amdgpu-install/7.1.1/ubuntu/noble/"
            "amdgpu-install_7.1.1.70101-1_all.deb"
        )

    def test_rejects_unknown_fields(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            StackConfig.model_validate({"rocm": "7.1.1"})

    def test_rejects_bad_version(self) -> None:
        """The ROCm release must be x.y.z."""
        with pytest.raises(ValidationError):
            StackConfig(rocm_version="latest")


class TestLoadConfig:
    """Tests for load_config function."""

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        """A missing file yields the defaults."""
        assert load_config(tmp_path / "missing.toml") == StackConfig()

    def test_partial_file(self, tmp_path: Path) -> None:
        """Keys in the file override the defaults."""
        path = tmp_path / "config.toml"
        path.write_text('rocm_version = "7.2.0"\nrocm_version_short = "70200"\ngroups = ["render"]\n')
        config = load_config(path)
        assert config.rocm_version == "7.2.0"
        assert config.groups == ["render"]
        assert config.runtime_package == "rocm"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Broken TOML raises ConfigParseError."""
        path = tmp_path / "config.toml"
        path.write_text("rocm_version = ")
        with pytest.raises(ConfigParseError):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        """Schema violations raise ConfigValidationError."""
        path = tmp_path / "config.toml"
        path.write_text('groups = "render"\n')
        with pytest.raises(ConfigValidationError):
            load_config(path)

    def test_errors_share_base(self) -> None:
        """Both error kinds are ConfigErrors."""
        assert issubclass(ConfigParseError, ConfigError)
        assert issubclass(ConfigValidationError, ConfigError)


class TestSaveConfig:
    """Tests for save_config function."""

    def test_save_and_load(self, tmp_path: Path) -> None:
        """A saved config loads back equal."""
        config = StackConfig(app_dir=tmp_path / "ComfyUI", launch_flags=["--lowvram"])
        path = save_config(config, tmp_path / "nested" / "config.toml")
        assert path.exists()
        assert load_config(path) == config

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The atomic write leaves no temporary files behind."""
        save_config(StackConfig(), tmp_path / "config.toml")
        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]

    def test_none_values_dropped(self, tmp_path: Path) -> None:
        """Unset optional values are not written."""
        path = save_config(StackConfig(), tmp_path / "config.toml")
        with path.open("rb") as f:
            data = tomllib.load(f)
        assert "venv_dir" not in data
        assert "venv_dir" not in config_to_dict(StackConfig())
