"""Paths command implementation.

Lists the configured base directories and the root path each one
resolves to on this system.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from structman.cli.types import parse_root_overrides
from structman.core.paths import PathResolutionError, resolve_base_dir
from structman.structure.loader import require_structure
from structman.utils.formatting import console, print_info

app = typer.Typer(
    help="Show where configured base directories resolve to.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_paths(
    ctx: typer.Context,
    structure: Annotated[
        Path | None,
        typer.Option(
            "--structure",
            "-s",
            help="Path to the structure file (TOML or JSON).",
        ),
    ] = None,
    identifier: Annotated[
        str | None,
        typer.Option(
            "--identifier",
            "-i",
            help="Application identifier for app* base directories.",
        ),
    ] = None,
    root: Annotated[
        list[str] | None,
        typer.Option(
            "--root",
            "-r",
            help="Override a base directory root as NAME=PATH (repeatable).",
        ),
    ] = None,
) -> None:
    """Display the resolved root of each configured base directory.

    Exits with code 1 if any configured base cannot be resolved.
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_structure(structure)
    overrides = {**config.roots, **parse_root_overrides(root)}
    app_identifier = identifier or config.identifier

    bases = config.configured_bases()
    if not bases:
        print_info("No base directories are configured in the structure file.")
        return

    table = Table(
        title="Base Directories",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Base", style="bold")
    table.add_column("Root")
    table.add_column("Exists", width=8, justify="center")

    unresolved = 0
    for base in bases:
        try:
            path = resolve_base_dir(base, app_identifier, overrides)
        except PathResolutionError as e:
            unresolved += 1
            table.add_row(base.value, f"[error]{escape(str(e))}[/error]", "-")
            continue
        exists = "[success]yes[/success]" if path.is_dir() else "[muted]no[/muted]"
        table.add_row(base.value, escape(str(path)), exists)

    console.print(table)

    if unresolved:
        raise typer.Exit(code=1)
