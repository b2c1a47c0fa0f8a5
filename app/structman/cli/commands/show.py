"""Show command implementation.

Renders the declared structure of each configured base directory as a
tree, without touching the filesystem.
"""

from pathlib import Path
from typing import Annotated

import typer

from structman.cli.display import create_structure_tree
from structman.core.paths import BaseDirectory
from structman.structure.build import build
from structman.structure.loader import require_structure
from structman.structure.models import ConfigError
from structman.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Show the declared directory structure.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_structure(
    ctx: typer.Context,
    structure: Annotated[
        Path | None,
        typer.Option(
            "--structure",
            "-s",
            help="Path to the structure file (TOML or JSON).",
        ),
    ] = None,
    base: Annotated[
        BaseDirectory | None,
        typer.Option(
            "--base",
            "-b",
            help="Only show this base directory.",
        ),
    ] = None,
) -> None:
    """Display the structure declared for each base directory.

    Examples:
        structman show                  # All configured bases
        structman show --base appData   # A single base
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_structure(structure)
    bases = config.configured_bases()

    if base is not None:
        if base not in bases:
            print_error(f"Base directory '{base.value}' is not configured.")
            raise typer.Exit(code=1)
        bases = [base]

    if not bases:
        print_info("No base directories are configured in the structure file.")
        return

    for target in bases:
        item = config.get_item(target)
        if item is None:
            continue
        try:
            tree = build(item)
        except ConfigError as e:
            print_error(f"Invalid structure for '{target.value}': {e}")
            raise typer.Exit(code=1) from e

        console.print(create_structure_tree(target.value, tree))
        console.print(f"[dim]{tree.count() - 1} declared entries[/dim]\n")
