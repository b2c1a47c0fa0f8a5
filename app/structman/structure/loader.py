"""Structure file I/O operations.

This module provides functions for loading and saving structure files
in TOML (preferred) or JSON format with validation using Pydantic models.
"""

import json
import logging
import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any

import tomli_w
from pydantic import ValidationError

from structman.core.paths import get_structure_path
from structman.structure.models import ConfigError, StructureError
from structman.structure.schema import StructureConfig, StructureItem, StructureItemOptions

logger = logging.getLogger(__name__)


class StructureNotFoundError(StructureError):
    """Raised when the structure file is not found."""


class StructureParseError(ConfigError):
    """Raised when the structure file cannot be parsed.

    Duplicate keys (two sibling directories with the same name) are
    reported this way, so it is a ConfigError like any other malformed
    structure.
    """


def load_structure(path: Path | None = None) -> StructureConfig:
    """Load and validate a structure configuration file.

    The format is chosen by suffix: ``.json`` files are parsed as JSON,
    everything else as TOML.

    Args:
        path: Path to the structure file. If None, uses the default path.

    Returns:
        Validated StructureConfig object.

    Raises:
        StructureNotFoundError: If the structure file doesn't exist.
        StructureParseError: If the file syntax is invalid.
        ConfigError: If the content doesn't match the schema.
        StructureError: If the file cannot be read.
    """
    structure_path = path or get_structure_path()

    if not structure_path.exists():
        raise StructureNotFoundError(f"Structure file not found: {structure_path}")

    try:
        if _is_json(structure_path):
            with open(structure_path, encoding="utf-8") as f:
                data = json.load(f, object_pairs_hook=_reject_duplicate_keys)
        else:
            with open(structure_path, "rb") as f:
                data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise StructureParseError(f"Invalid TOML syntax: {e}") from e
    except json.JSONDecodeError as e:
        raise StructureParseError(f"Invalid JSON syntax: {e}") from e
    except ValueError as e:
        # Raised by _reject_duplicate_keys
        raise StructureParseError(str(e)) from e
    except OSError as e:
        raise StructureError(f"Failed to read structure file: {e}") from e

    logger.debug("Loaded structure file %s", structure_path)

    try:
        return StructureConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid structure content: {e}") from e


def save_structure(config: StructureConfig, path: Path | None = None) -> Path:
    """Save a structure configuration to a file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.
    The temporary file is cleaned up on failure.

    Args:
        config: The StructureConfig object to save.
        path: Path to save to. If None, uses the default structure path.

    Returns:
        Path where the structure file was saved.

    Raises:
        StructureError: If the file cannot be written.
    """
    structure_path = path or get_structure_path()
    data = _structure_to_dict(config)

    tmp_path: Path | None = None
    try:
        structure_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=structure_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            if _is_json(structure_path):
                f.write(json.dumps(data, indent=2).encode("utf-8") + b"\n")
            else:
                tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(structure_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise StructureError(f"Failed to write structure file: {e}") from e

    return structure_path


def structure_exists(path: Path | None = None) -> bool:
    """Check if a structure file exists.

    Args:
        path: Path to check. If None, uses the default structure path.

    Returns:
        True if the structure file exists, False otherwise.
    """
    structure_path = path or get_structure_path()
    return structure_path.exists()


def require_structure(structure_path: Path | None = None) -> StructureConfig:
    """Load the structure file or exit with a helpful error message.

    This is a convenience wrapper around load_structure() that handles
    common error cases by printing user-friendly messages and exiting.

    Args:
        structure_path: Optional custom structure file path.

    Returns:
        Loaded and validated StructureConfig.

    Raises:
        typer.Exit: If the structure file cannot be loaded.
    """
    import typer

    from structman.utils.formatting import print_error, print_info

    path = structure_path or get_structure_path()
    try:
        return load_structure(path)
    except StructureNotFoundError as e:
        print_error(f"Structure file not found: {path}")
        print_info("Run 'structman init' to create a starter structure file.")
        raise typer.Exit(code=1) from e
    except StructureError as e:
        print_error(f"Failed to load structure file: {e}")
        raise typer.Exit(code=1) from e


def default_structure(identifier: str | None = None) -> StructureConfig:
    """Create a starter structure configuration.

    Args:
        identifier: Application identifier for the app-specific bases.

    Returns:
        StructureConfig declaring a small appData layout.
    """
    return StructureConfig(
        identifier=identifier or "com.example.app",
        app_data=StructureItem(
            options=StructureItemOptions(repair=True),
            files=["settings.json"],
            dirs={
                "projects": StructureItem(),
                "templates": StructureItem(),
            },
        ),
        app_log=StructureItem(),
    )


def _structure_to_dict(config: StructureConfig) -> dict[str, Any]:
    """Convert a StructureConfig to a dictionary suitable for serialization.

    Defaults (repair=false, empty lists) and unset bases are omitted so
    the written file stays minimal.

    Args:
        config: The StructureConfig object to convert.

    Returns:
        Dictionary keyed by the camelCase names used in structure files.
    """
    data: dict[str, Any] = {}
    if config.identifier:
        data["identifier"] = config.identifier
    if config.roots:
        data["roots"] = dict(config.roots)
    for base in config.configured_bases():
        item = config.get_item(base)
        if item is not None:
            data[base.value] = _item_to_dict(item)
    return data


def _item_to_dict(item: StructureItem) -> dict[str, Any]:
    """Convert a StructureItem to a dictionary for serialization.

    Args:
        item: The StructureItem to convert.

    Returns:
        Dictionary with options, files and dirs where non-default.
    """
    result: dict[str, Any] = {}
    if item.options.repair:
        result["options"] = {"repair": True}
    if item.files:
        result["files"] = list(item.files)
    if item.dirs:
        result["dirs"] = {name: _item_to_dict(sub) for name, sub in item.dirs.items()}
    return result


def _is_json(path: Path) -> bool:
    """Check if a path should be treated as JSON."""
    return path.suffix.lower() == ".json"


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """Build a JSON object, rejecting keys that appear more than once.

    Raises:
        ValueError: If a key is duplicated within one object.
    """
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            msg = f"Duplicate key '{key}' in structure file"
            raise ValueError(msg)
        result[key] = value
    return result
