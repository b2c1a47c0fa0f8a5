"""CLI commands for structman.

This package contains all subcommand implementations.
"""

from structman.cli.commands import init, paths, show, verify

__all__ = ["init", "paths", "show", "verify"]
