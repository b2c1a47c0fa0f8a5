"""Init command implementation.

Creates a starter structure file that can be edited to describe the
directories an application needs.
"""

from pathlib import Path
from typing import Annotated

import typer

from structman.core.paths import get_structure_path
from structman.structure.loader import (
    default_structure,
    save_structure,
    structure_exists,
)
from structman.structure.models import StructureError
from structman.utils.formatting import print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Create a starter structure file.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init_structure(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path for the structure file (.toml or .json).",
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
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            "-f",
            help="Overwrite an existing structure file.",
        ),
    ] = False,
) -> None:
    """Write a starter structure file.

    Examples:
        structman init                          # Default location
        structman init -o structure.json        # JSON at a custom path
        structman init -i com.acme.editor       # Set the app identifier
    """
    if ctx.invoked_subcommand is not None:
        return

    output_path = output or get_structure_path()

    if structure_exists(output_path):
        if not force:
            print_error(f"Structure file already exists: {output_path}")
            print_info("Use --force to overwrite or specify a different path with --output.")
            raise typer.Exit(code=1)
        print_warning(f"Overwriting existing structure file: {output_path}")

    config = default_structure(identifier)

    try:
        saved_path = save_structure(config, output_path)
    except StructureError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Structure file created: {saved_path}")
