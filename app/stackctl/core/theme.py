"""Console color theme.

The bundled palette in ``stackctl/data/theme.toml`` can be partially
overridden by ``~/.config/stackctl/theme.toml``. Both files carry a
single ``[colors]`` table of hex values.
"""

import logging
import re
import tomllib
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.theme import Theme

from stackctl.core.paths import get_config_dir

logger = logging.getLogger(__name__)

THEME_FILE = "theme.toml"

_HEX_PATTERN = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def _check_hex(value: str) -> str:
    value = value.strip()
    if not _HEX_PATTERN.match(value):
        msg = f"'{value}' is not a #RGB or #RRGGBB color"
        raise ValueError(msg)
    return value


HexColor = Annotated[str, AfterValidator(_check_hex)]


class ThemeColors(BaseModel):
    """Palette used by the console helpers and tables.

    Attributes:
        text: Default foreground.
        muted: Secondary text (details, hints).
        header: Section headers and table headers.
        border: Panel and table borders.
        success: Success messages.
        warning: Warnings and attention markers.
        error: Errors and missing components.
        info: Informational messages.
        step: "[STEP]" marker.
        check: "[CHECK]" marker.
        skip: "[SKIP]" marker.
        update: "[UPDATE]" marker.
        installed: Installed group of the run summary.
        updated: Updated group of the run summary.
        skipped: Skipped group of the run summary.
    """

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#ffffff"
    muted: HexColor = "#b2bec3"
    header: HexColor = "#03b971"
    border: HexColor = "#0ec1c8"
    success: HexColor = "#03b971"
    warning: HexColor = "#f5b332"
    error: HexColor = "#f53263"
    info: HexColor = "#f5b332"
    step: HexColor = "#3282f5"
    check: HexColor = "#d44ebc"
    skip: HexColor = "#0ec1c8"
    update: HexColor = "#f5b332"
    installed: HexColor = "#03b971"
    updated: HexColor = "#f5b332"
    skipped: HexColor = "#3282f5"


def get_user_theme_path() -> Path:
    """Location of the user's palette override."""
    return get_config_dir() / THEME_FILE


def get_bundled_theme_path() -> Path:
    """Location of the palette shipped with the package."""
    return Path(str(resources.files("stackctl.data").joinpath(THEME_FILE)))


def read_colors(path: Path) -> dict[str, str]:
    """Read the ``[colors]`` table of a theme file.

    Unreadable or malformed files are logged and treated as empty so a
    broken override never prevents the CLI from starting.

    Args:
        path: Theme file.

    Returns:
        Mapping of color name to value; non-string values are dropped.
    """
    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme(user_path: Path | None = None) -> ThemeColors:
    """Merge the bundled palette with the user override.

    Args:
        user_path: Override file; defaults to get_user_theme_path().

    Returns:
        Validated colors; the built-in defaults if the merge is invalid.
    """
    colors = read_colors(get_bundled_theme_path())
    colors.update(read_colors(user_path or get_user_theme_path()))
    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme colors, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme: one style per color plus a few emphasis variants.

    Args:
        colors: Palette to use; loaded from disk if None.

    Returns:
        Rich Theme.
    """
    palette = colors or load_theme()
    styles = palette.model_dump()
    for marker in ("error", "step", "check", "skip", "update"):
        styles[marker] = f"bold {styles[marker]}"
    styles["bold_header"] = f"bold {palette.header}"
    styles["dim"] = palette.muted
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme, loaded once per process."""
    return get_rich_theme()


def reload_theme() -> Theme:
    """Drop the cached theme and load it again."""
    get_theme.cache_clear()
    return get_theme()
