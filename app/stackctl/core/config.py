"""Stack configuration and settings.

This module provides the configuration model and I/O functions for the
provisioned stack: install locations, versions, package lists, URLs,
environment exports and launch flags. Everything a run installs or
generates is derived from this model.

Configuration is stored in ~/.config/stackctl/config.toml. A missing file
means the built-in defaults (Ubuntu 24.04, ROCm 7.1.1, RX 9070 XT).
"""

import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from stackctl.core.paths import get_config_path

logger = logging.getLogger(__name__)

DEFAULT_PREREQUISITES: tuple[str, ...] = (
    "wget",
    "curl",
    "git",
    "python3",
    "python3-pip",
    "python3-venv",
    "python3-full",
    "python3-setuptools",
    "python3-wheel",
    "build-essential",
    "software-properties-common",
)

DEFAULT_ENV: dict[str, str] = {
    "PATH": "$PATH:/opt/rocm/bin:/opt/rocm/opencl/bin",
    "LD_LIBRARY_PATH": "$LD_LIBRARY_PATH:/opt/rocm/lib:/opt/rocm/lib64",
    "HSA_OVERRIDE_GFX_VERSION": "12.0.0",
    "HIP_VISIBLE_DEVICES": "0",
    "PYTORCH_TUNABLEOP_ENABLED": "1",
    "TORCH_ROCM_AOTRITON_ENABLE_EXPERIMENTAL": "1",
}

DEFAULT_MODEL_DIRS: tuple[str, ...] = (
    "models/checkpoints",
    "models/vae",
    "models/loras",
    "models/controlnet",
    "models/upscale_models",
    "models/embeddings",
    "models/clip",
    "models/clip_vision",
    "models/diffusion_models",
    "models/text_encoders",
    "input",
    "output",
)


class StackConfig(BaseModel):
    """Configuration for one provisioned GPU stack.

    Attributes:
        app_name: Application display name.
        app_dir: Application checkout directory.
        venv_dir: Python virtual environment (defaults to app_dir/venv).
        expected_os_id: Expected os-release ID.
        expected_os_version: Expected os-release VERSION_ID.
        gpu_vendor_pattern: Regex matched against lspci display adapters.
        rocm_version: Driver installer / ROCm release (e.g. "7.1.1").
        rocm_version_short: Numeric build tag used in the installer file name.
        driver_repo: Base URL of the driver installer repository.
        kernel_driver_package: DKMS kernel driver package name.
        runtime_package: Compute runtime metapackage name.
        prerequisites: Base apt packages.
        groups: Groups the user must belong to for GPU access.
        profile_path: Shell profile receiving the environment block.
        env_sentinel: Comment prefix marking the environment block.
        env: Environment exports, in order.
        app_repo: Application git URL.
        app_branches: Remote branches tried in order for the application.
        plugin_repo: Plugin git URL.
        plugin_dir_name: Plugin directory under app_dir/custom_nodes.
        plugin_branches: Remote branches tried in order for the plugin.
        torch_index_url: Package index carrying the nightly framework builds.
        torch_packages: Framework packages installed from that index.
        framework_label: Description recorded when the framework is installed.
        model_dirs: Directories created under app_dir.
        launch_flags: Flags passed to the application by the launch script.
        web_url: URL the application serves on.
        desktop_entry_path: Desktop shortcut location.
    """

    model_config = ConfigDict(extra="forbid")

    app_name: Annotated[
        str,
        Field(min_length=1, description="Application display name"),
    ] = "ComfyUI"
    app_dir: Annotated[
        Path,
        Field(description="Application checkout directory"),
    ] = Path.home() / "ComfyUI"
    venv_dir: Annotated[
        Path | None,
        Field(description="Virtual environment directory (None = app_dir/venv)"),
    ] = None
    expected_os_id: Annotated[str, Field(description="Expected os-release ID")] = "ubuntu"
    expected_os_version: Annotated[
        str,
        Field(description="Expected os-release VERSION_ID"),
    ] = "24.04"
    gpu_vendor_pattern: Annotated[
        str,
        Field(description="Regex matched against lspci display adapters"),
    ] = "AMD|ATI"
    rocm_version: Annotated[
        str,
        Field(pattern=r"^\d+\.\d+\.\d+$", description="ROCm / driver release"),
    ] = "7.1.1"
    rocm_version_short: Annotated[
        str,
        Field(pattern=r"^\d+$", description="Numeric build tag of the installer"),
    ] = "70101"
    driver_repo: Annotated[
        str,
        Field(description="Driver installer repository base URL"),
    ] = "https://repo.radeon.com/amdgpu-install"
    driver_distro: Annotated[str, Field(description="Distribution path segment")] = "ubuntu/noble"
    kernel_driver_package: Annotated[str, Field(description="DKMS driver package")] = "amdgpu-dkms"
    runtime_package: Annotated[str, Field(description="Compute runtime metapackage")] = "rocm"
    prerequisites: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_PREREQUISITES)),
    ]
    groups: Annotated[
        list[str],
        Field(default_factory=lambda: ["render", "video"], min_length=1),
    ]
    profile_path: Annotated[
        Path,
        Field(description="Shell profile receiving environment exports"),
    ] = Path.home() / ".bashrc"
    env_sentinel: Annotated[
        str,
        Field(description="Comment line marking the environment block"),
    ] = "# ROCm Environment"
    env: Annotated[
        dict[str, str],
        Field(default_factory=lambda: dict(DEFAULT_ENV)),
    ]
    app_repo: Annotated[str, Field(description="Application git URL")] = (
        "https://github.com/comfyanonymous/ComfyUI.git"
    )
    app_branches: Annotated[
        list[str],
        Field(default_factory=lambda: ["master", "main"], min_length=1),
    ]
    plugin_repo: Annotated[str, Field(description="Plugin git URL")] = (
        "https://github.com/Comfy-Org/ComfyUI-Manager.git"
    )
    plugin_dir_name: Annotated[str, Field(min_length=1)] = "ComfyUI-Manager"
    plugin_branches: Annotated[
        list[str],
        Field(default_factory=lambda: ["main", "master"], min_length=1),
    ]
    torch_index_url: Annotated[
        str,
        Field(description="Nightly framework package index"),
    ] = "https://rocm.nightlies.amd.com/v2/gfx120X-all/"
    torch_packages: Annotated[
        list[str],
        Field(default_factory=lambda: ["torch", "torchvision", "torchaudio"], min_length=1),
    ]
    framework_label: Annotated[str, Field(min_length=1)] = "PyTorch RDNA 4 (gfx120X)"
    model_dirs: Annotated[
        list[str],
        Field(default_factory=lambda: list(DEFAULT_MODEL_DIRS)),
    ]
    launch_flags: Annotated[
        list[str],
        Field(default_factory=lambda: ["--use-pytorch-cross-attention"]),
    ]
    web_url: Annotated[str, Field(description="Application web UI URL")] = "http://127.0.0.1:8188"
    desktop_entry_path: Annotated[
        Path,
        Field(description="Desktop shortcut location"),
    ] = Path.home() / ".local" / "share" / "applications" / "comfyui.desktop"

    @property
    def venv_path(self) -> Path:
        """Resolved virtual environment directory."""
        return self.venv_dir if self.venv_dir is not None else self.app_dir / "venv"

    @property
    def plugin_dir(self) -> Path:
        """Plugin checkout directory."""
        return self.app_dir / "custom_nodes" / self.plugin_dir_name

    @property
    def driver_package(self) -> str:
        """Driver installer .deb file name."""
        return f"amdgpu-install_{self.rocm_version}.{self.rocm_version_short}-1_all.deb"

    @property
    def driver_url(self) -> str:
        """Download URL of the driver installer .deb."""
        return f"{self.driver_repo}/{self.rocm_version}/{self.driver_distro}/{self.driver_package}"

    @property
    def primary_torch_package(self) -> str:
        """Framework package whose version represents the framework."""
        return self.torch_packages[0]


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the config file content doesn't match the schema."""


def load_config(path: Path | None = None) -> StackConfig:
    """Load stack configuration from a TOML file.

    A missing file is not an error: the defaults describe the reference
    machine.

    Args:
        path: Path to the config file. If None, uses default config path.

    Returns:
        Validated StackConfig object.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigValidationError: If the content doesn't match the schema.
        ConfigError: If the file cannot be read.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return StackConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return StackConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(f"Invalid config content: {e}") from e


def save_config(config: StackConfig, path: Path | None = None) -> Path:
    """Save stack configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The StackConfig object to save.
        path: Path to save the config. If None, uses default config path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def config_to_dict(config: StackConfig) -> dict[str, object]:
    """Convert StackConfig to a dictionary for TOML serialization.

    Paths become strings; None values are dropped since TOML has no null.

    Args:
        config: The StackConfig to convert.

    Returns:
        Dictionary ready for TOML serialization.
    """
    data = config.model_dump(mode="json")
    return {key: value for key, value in data.items() if value is not None}
