"""Verify command implementation.

Reconciles the configured base directories against the structure file:
missing entries are created, existing ones verified, and kind mismatches
repaired where the structure allows it.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from structman.cli.display import (
    create_report_table,
    print_verification_summary,
)
from structman.cli.types import OutputFormat, parse_root_overrides
from structman.core.paths import BaseDirectory
from structman.reconcile.manager import BaseVerification, StructureManager
from structman.structure.loader import require_structure
from structman.structure.models import ConfigError
from structman.utils.formatting import console, print_error, print_info

app = typer.Typer(
    help="Create, verify and repair the configured directory structure.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def verify_structure(
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
        list[BaseDirectory] | None,
        typer.Option(
            "--base",
            "-b",
            help="Base directory to verify (repeatable). Defaults to all configured.",
        ),
    ] = None,
    dry_run: Annotated[
        bool,
        typer.Option(
            "--dry-run",
            "-n",
            help="Show what would change without touching the filesystem.",
        ),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
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
    """Reconcile the filesystem against the structure file.

    Exits with code 1 if any base directory has conflicts, failed
    entries, or could not be resolved.

    Examples:
        structman verify                          # All configured bases
        structman verify --base appData           # A single base
        structman verify --dry-run                # Preview changes
        structman verify -r appData=/srv/app      # Custom root
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_structure(structure)
    overrides = parse_root_overrides(root)

    configured = config.configured_bases()
    if not configured:
        print_info("No base directories are configured in the structure file.")
        return

    targets = base or configured
    for target in targets:
        if target not in configured:
            print_error(f"Base directory '{target.value}' is not configured.")
            raise typer.Exit(code=1)

    manager = StructureManager(
        config,
        dry_run=dry_run,
        identifier=identifier,
        overrides=overrides,
    )
    try:
        verifications = manager.verify_all(targets)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    options = ctx.obj or {}
    if output_format == OutputFormat.JSON:
        _print_json(verifications)
    elif not options.get("quiet"):
        _print_tables(verifications, show_verified=bool(options.get("verbose")))
        if dry_run:
            print_info("[DRY-RUN] No changes were made.")

    if any(not v.success for v in verifications):
        raise typer.Exit(code=1)


def _print_tables(verifications: list[BaseVerification], show_verified: bool) -> None:
    """Display one results table per base, followed by the summary."""
    for verification in verifications:
        if verification.report is None:
            continue
        table = create_report_table(verification, show_verified=show_verified)
        if table.row_count:
            console.print(table)

    print_verification_summary(verifications)


def _print_json(verifications: list[BaseVerification]) -> None:
    """Display verification results as JSON."""
    data = [
        {
            "base": v.base.value,
            "root": v.root,
            "success": v.success,
            "error": v.error,
            "report": v.report.to_dict() if v.report is not None else None,
        }
        for v in verifications
    ]
    console.print_json(json.dumps(data))
