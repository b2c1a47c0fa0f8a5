"""Color theme for structman output.

The bundled data/theme.toml provides every color; a user theme at
~/.config/structman/theme.toml may override any subset of them.
Each reconciliation outcome has its own style name so tables and
summaries can refer to "created", "conflict", ... directly.
"""

import logging
import sys
import tomllib
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator
from rich.theme import Theme

from structman.core.paths import get_user_theme_path

logger = logging.getLogger(__name__)

# Styles rendered in bold on top of their color
_BOLD_STYLES = frozenset({"error", "repaired", "conflict", "failed", "directory"})


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) for every named style."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#69B9A1"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0ec1c8"

    # One style per reconciliation outcome
    created: str = "#c1ff62"
    verified: str = "#226666"
    repaired: str = "#0e8ac8"
    conflict: str = "#f5b332"
    failed: str = "#f53263"

    directory: str = "#69B9A1"
    file: str = "#ffffff"

    @field_validator("*", mode="before")
    @classmethod
    def validate_hex_color(cls, v: object, info: Any) -> str:
        """Reject anything that is not a hex color code."""
        if not isinstance(v, str):
            msg = f"{info.field_name}: color must be a string"
            raise ValueError(msg)
        color = v.strip()
        digits = color.removeprefix("#")
        if digits == color:
            msg = f"{info.field_name}: color must start with '#'"
            raise ValueError(msg)
        if len(digits) not in (3, 6):
            msg = f"{info.field_name}: color must be #RGB or #RRGGBB format"
            raise ValueError(msg)
        if any(c not in "0123456789abcdefABCDEF" for c in digits):
            msg = f"{info.field_name}: invalid hex color '{color}'"
            raise ValueError(msg)
        return color


def get_bundled_theme_path() -> Path:
    """Path of the theme shipped inside the structman.data package."""
    return Path(str(resources.files("structman.data").joinpath("theme.toml")))


def _load_toml_colors(path: Path) -> dict[str, str] | None:
    """Read the [colors] table of a theme file.

    Non-string values are ignored.

    Args:
        path: Theme file to read.

    Returns:
        Color names mapped to values, or None if the file is missing,
        unreadable or malformed.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except tomllib.TOMLDecodeError as e:
        logger.warning("Failed to parse theme file %s: %s", path, e)
        print(f"Warning: Failed to parse {path}: {e}", file=sys.stderr)
        return None
    except OSError as e:
        logger.warning("Failed to read theme file %s: %s", path, e)
        return None

    section = data.get("colors", {})
    if not isinstance(section, dict):
        logger.warning("Invalid 'colors' section in %s", path)
        return None
    return {key: value for key, value in section.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Load the bundled theme merged with user overrides.

    An invalid merged theme falls back to the built-in defaults.

    Returns:
        Validated theme colors.
    """
    colors = _load_toml_colors(get_bundled_theme_path())
    if colors is None:
        logger.error("Bundled theme could not be loaded; using built-in colors")
        colors = {}

    user_path = get_user_theme_path()
    overrides = _load_toml_colors(user_path)
    if overrides:
        logger.debug("Applying %d theme override(s) from %s", len(overrides), user_path)
        colors = {**colors, **overrides}

    try:
        return ThemeColors.model_validate(colors)
    except ValidationError as e:
        logger.warning("Invalid theme configuration, using defaults: %s", e)
        print(f"Warning: Invalid theme configuration: {e}", file=sys.stderr)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build a Rich Theme with one style per color.

    Args:
        colors: Colors to use. Loaded from theme files when None.

    Returns:
        Rich Theme containing every color plus the "bold_header" and
        "dim" convenience styles.
    """
    if colors is None:
        colors = load_theme()

    styles = {
        name: f"bold {value}" if name in _BOLD_STYLES else value
        for name, value in colors.model_dump().items()
    }
    styles["bold_header"] = f"bold {colors.header}"
    styles["dim"] = colors.muted
    return Theme(styles)


_cached_theme: Theme | None = None


def get_theme() -> Theme:
    """Return the Rich theme, loading it on first use."""
    global _cached_theme
    if _cached_theme is None:
        _cached_theme = get_rich_theme()
    return _cached_theme


def reload_theme() -> Theme:
    """Discard the cached theme and load it again from disk."""
    global _cached_theme
    _cached_theme = get_rich_theme()
    return _cached_theme
