"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum

import typer

from structman.core.paths import BaseDirectory

_BASE_NAMES = frozenset(b.value for b in BaseDirectory)


class OutputFormat(str, Enum):
    """Output format options for command results."""

    TABLE = "table"
    JSON = "json"


def parse_root_overrides(values: list[str] | None) -> dict[str, str]:
    """Parse repeated NAME=PATH options into a root override mapping.

    Args:
        values: Raw option values (e.g., ["appData=/srv/app"]).

    Returns:
        Dictionary of base directory name to path.

    Raises:
        typer.BadParameter: If a value is not of the form NAME=PATH or
            names an unknown base directory.
    """
    overrides: dict[str, str] = {}
    for value in values or []:
        name, sep, path = value.partition("=")
        if not sep or not name or not path:
            msg = f"Expected NAME=PATH, got '{value}'"
            raise typer.BadParameter(msg, param_hint="--root")
        name = name.strip()
        if name not in _BASE_NAMES:
            msg = f"Unknown base directory '{name}'"
            raise typer.BadParameter(msg, param_hint="--root")
        overrides[name] = path.strip()
    return overrides
