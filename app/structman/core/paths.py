"""XDG-compliant path management for structman.

This module provides standardized paths following the XDG Base Directory
Specification for structman's own configuration, and resolves the named
base directories (cache, config, document, ...) that a structure file
is anchored to.

XDG defaults:
- Config: ~/.config/structman/
"""

import logging
import os
import re
import tempfile
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

# Application identifier for directory naming
APP_NAME = "structman"


class PathResolutionError(Exception):
    """Raised when a base directory cannot be resolved on this system."""


class BaseDirectory(str, Enum):
    """Named base directories a structure can be anchored to.

    Values are the camelCase keys used in structure files.
    """

    APP_CACHE = "appCache"
    APP_CONFIG = "appConfig"
    APP_DATA = "appData"
    APP_LOCAL_DATA = "appLocalData"
    APP_LOG = "appLog"
    AUDIO = "audio"
    CACHE = "cache"
    CONFIG = "config"
    DATA = "data"
    DESKTOP = "desktop"
    DOCUMENT = "document"
    DOWNLOAD = "download"
    EXECUTABLE = "executable"
    FONT = "font"
    HOME = "home"
    LOCAL_DATA = "localData"
    PICTURE = "picture"
    PUBLIC = "public"
    RESOURCE = "resource"
    RUNTIME = "runtime"
    TEMP = "temp"
    TEMPLATE = "template"
    VIDEO = "video"

    @property
    def field_name(self) -> str:
        """Snake_case attribute name on StructureConfig."""
        return re.sub(r"(?<!^)(?=[A-Z])", "_", self.value).lower()

    @property
    def is_app_specific(self) -> bool:
        """Check if the base is scoped to an application identifier."""
        return self.value.startswith("app")


# Bases backed by an XDG variable: (environment variable, default under home, suffix)
_XDG_BASES: dict[BaseDirectory, tuple[str, str, str]] = {
    BaseDirectory.CACHE: ("XDG_CACHE_HOME", ".cache", ""),
    BaseDirectory.CONFIG: ("XDG_CONFIG_HOME", ".config", ""),
    BaseDirectory.DATA: ("XDG_DATA_HOME", ".local/share", ""),
    BaseDirectory.LOCAL_DATA: ("XDG_DATA_HOME", ".local/share", ""),
    BaseDirectory.FONT: ("XDG_DATA_HOME", ".local/share", "fonts"),
    BaseDirectory.EXECUTABLE: ("XDG_BIN_HOME", ".local/bin", ""),
}

# XDG user directories: (key in user-dirs.dirs or the environment, default under home)
_USER_DIRS: dict[BaseDirectory, tuple[str, str]] = {
    BaseDirectory.AUDIO: ("XDG_MUSIC_DIR", "Music"),
    BaseDirectory.DESKTOP: ("XDG_DESKTOP_DIR", "Desktop"),
    BaseDirectory.DOCUMENT: ("XDG_DOCUMENTS_DIR", "Documents"),
    BaseDirectory.DOWNLOAD: ("XDG_DOWNLOAD_DIR", "Downloads"),
    BaseDirectory.PICTURE: ("XDG_PICTURES_DIR", "Pictures"),
    BaseDirectory.PUBLIC: ("XDG_PUBLICSHARE_DIR", "Public"),
    BaseDirectory.TEMPLATE: ("XDG_TEMPLATES_DIR", "Templates"),
    BaseDirectory.VIDEO: ("XDG_VIDEOS_DIR", "Videos"),
}

# App-specific bases: (parent base, suffix under <parent>/<identifier>)
_APP_BASES: dict[BaseDirectory, tuple[BaseDirectory, str]] = {
    BaseDirectory.APP_CACHE: (BaseDirectory.CACHE, ""),
    BaseDirectory.APP_CONFIG: (BaseDirectory.CONFIG, ""),
    BaseDirectory.APP_DATA: (BaseDirectory.DATA, ""),
    BaseDirectory.APP_LOCAL_DATA: (BaseDirectory.LOCAL_DATA, ""),
    BaseDirectory.APP_LOG: (BaseDirectory.DATA, "logs"),
}


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Get an XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the shared (not application-specific) directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base)
    return Path.home() / default_subdir


def _read_user_dirs() -> dict[str, str]:
    """Read the user directory settings written by xdg-user-dirs-update.

    Lines have the form XDG_MUSIC_DIR="$HOME/Musik". Values must be
    absolute or relative to $HOME; anything else is ignored.

    Returns:
        Setting name mapped to an absolute path string.
    """
    path = _get_xdg_base("XDG_CONFIG_HOME", ".config") / "user-dirs.dirs"
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return {}
    except OSError as e:
        logger.warning("Failed to read %s: %s", path, e)
        return {}

    dirs: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        value = value.strip().strip('"')
        if value.startswith("$HOME"):
            value = str(Path.home() / value.removeprefix("$HOME").lstrip("/"))
        elif not value.startswith("/"):
            continue
        dirs[key.strip()] = value
    return dirs


def _get_user_dir(key: str, default_subdir: str) -> Path:
    """Get an XDG user directory (Music, Documents, ...).

    Args:
        key: Setting name (e.g., "XDG_MUSIC_DIR").
        default_subdir: Default subdirectory under home (e.g., "Music").

    Returns:
        Path from the environment, else from user-dirs.dirs, else the default.
    """
    value = os.environ.get(key) or _read_user_dirs().get(key)
    if value:
        return Path(value)
    return Path.home() / default_subdir


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/structman/ (or XDG_CONFIG_HOME/structman/).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_structure_path() -> Path:
    """Get the default structure file path.

    Returns:
        Path to ~/.config/structman/structure.toml.
    """
    return get_config_dir() / "structure.toml"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/structman/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def resolve_base_dir(
    base: BaseDirectory,
    identifier: str | None = None,
    overrides: dict[str, str] | None = None,
) -> Path:
    """Resolve a named base directory to a path.

    Overrides take precedence over platform defaults. App-specific bases
    (appCache, appConfig, ...) nest the application identifier under
    the matching shared directory; appLog adds a trailing "logs".
User directories (audio, document, ...) honour the environment first,
    then ~/.config/user-dirs.dirs, so localized names are found.

    Args:
        base: Base directory to resolve.
        identifier: Application identifier for app-specific bases.
        overrides: Explicit root paths keyed by base directory name.

    Returns:
        Path of the base directory.

    Raises:
        PathResolutionError: If the base cannot be resolved on this system.
    """
    if overrides and base.value in overrides:
        return Path(overrides[base.value]).expanduser()

    if base in _APP_BASES:
        if not identifier:
            msg = f"Cannot resolve '{base.value}': no application identifier configured"
            raise PathResolutionError(msg)
        parent, suffix = _APP_BASES[base]
        path = resolve_base_dir(parent) / identifier
        return path / suffix if suffix else path

    if base in _XDG_BASES:
        env_var, default, suffix = _XDG_BASES[base]
        path = _get_xdg_base(env_var, default)
        return path / suffix if suffix else path

    if base in _USER_DIRS:
        key, default = _USER_DIRS[base]
        return _get_user_dir(key, default)

    if base == BaseDirectory.HOME:
        return Path.home()

    if base == BaseDirectory.TEMP:
        return Path(tempfile.gettempdir())

    if base == BaseDirectory.RUNTIME:
        runtime = os.environ.get("XDG_RUNTIME_DIR")
        if not runtime:
            msg = "Cannot resolve 'runtime': XDG_RUNTIME_DIR is not set"
            raise PathResolutionError(msg)
        return Path(runtime)

    # resource has no platform default
    msg = f"Cannot resolve '{base.value}': set an explicit root for it"
    raise PathResolutionError(msg)
