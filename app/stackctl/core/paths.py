"""Per-user locations of stackctl's own files.

Follows the XDG base directory layout:

- ``$XDG_CONFIG_HOME/stackctl`` (``~/.config/stackctl``) holds
  config.toml and theme.toml.
- ``$XDG_CACHE_HOME/stackctl`` (``~/.cache/stackctl``) holds downloaded
  driver installer packages.

Locations of the provisioned stack itself live in StackConfig.
"""

import os
from pathlib import Path

APP_NAME = "stackctl"

# XDG variable and its fallback under the home directory
_XDG_DEFAULTS: dict[str, str] = {
    "XDG_CONFIG_HOME": ".config",
    "XDG_CACHE_HOME": ".cache",
}


def _app_dir(variable: str) -> Path:
    base = os.environ.get(variable)
    root = Path(base) if base else Path.home() / _XDG_DEFAULTS[variable]
    return root / APP_NAME


def get_config_dir() -> Path:
    """Directory of config.toml and theme.toml."""
    return _app_dir("XDG_CONFIG_HOME")


def get_cache_dir() -> Path:
    """Directory of downloaded installer packages."""
    return _app_dir("XDG_CACHE_HOME")


def get_config_path() -> Path:
    """Default location of config.toml."""
    return get_config_dir() / "config.toml"


def ensure_cache_dir() -> Path:
    """Create the cache directory if needed.

    Returns:
        The cache directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    path = get_cache_dir()
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        msg = f"Cannot create cache directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path
