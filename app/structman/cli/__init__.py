"""CLI package for structman.

This package contains the Typer application and all subcommands.
"""

from structman.cli.main import app

__all__ = ["app"]
