"""Rich consoles and message helpers shared by the CLI.

Messages are plain text: paths and error strings are escaped so that
brackets in them are never read as Rich markup.
"""

import sys

from rich.console import Console
from rich.markup import escape

from structman.core.theme import get_theme

# Full hex colors on a terminal; let Rich decide when piped
_COLOR_SYSTEM = "truecolor" if sys.stdout.isatty() else None

console = Console(theme=get_theme(), color_system=_COLOR_SYSTEM)
err_console = Console(theme=get_theme(), stderr=True, color_system=_COLOR_SYSTEM)


def print_info(message: str) -> None:
    """Print an informational message to stdout."""
    console.print(f"[info]{escape(message)}[/]")


def print_success(message: str) -> None:
    """Print a success message to stdout."""
    console.print(f"[success]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning to stderr."""
    err_console.print(f"[warning]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error to stderr."""
    err_console.print(f"[error]Error:[/] {escape(message)}")
