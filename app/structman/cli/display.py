"""Shared Rich display functions for reconciliation results.

Provides reusable table builders and summary printers for displaying
reconciliation reports and structure trees across CLI commands.
"""

from rich.markup import escape
from rich.table import Table
from rich.tree import Tree as RichTree

from structman.reconcile.manager import BaseVerification
from structman.reconcile.report import NodeResult, Outcome, Report
from structman.structure.models import Node, children_of
from structman.utils.formatting import console, print_success

_OUTCOME_LABELS: dict[Outcome, str] = {
    Outcome.CREATED: "[created]+created[/created]",
    Outcome.VERIFIED: "[verified]ok[/verified]",
    Outcome.REPAIRED: "[repaired]~repaired[/repaired]",
    Outcome.CONFLICT: "[conflict]!conflict[/conflict]",
    Outcome.FAILED: "[failed]xfailed[/failed]",
}


def format_outcome(result: NodeResult) -> str:
    """Format a result's outcome with Rich markup.

    Simulated outcomes are suffixed with "(dry-run)".

    Args:
        result: Node result to format.

    Returns:
        Rich markup string.
    """
    label = _OUTCOME_LABELS[result.outcome]
    if result.dry_run:
        return f"{label} [muted](dry-run)[/muted]"
    return label


def create_report_table(
    verification: BaseVerification,
    show_verified: bool = False,
) -> Table:
    """Create a Rich table displaying one base's reconciliation report.

    Verified entries are hidden unless show_verified is set; all other
    outcomes are always shown.

    Args:
        verification: Verification result for one base directory.
        show_verified: Include rows for entries that were already correct.

    Returns:
        Rich Table configured for report display.
    """
    title = f"{verification.base.value} [muted]({escape(verification.root or '-')})[/muted]"
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Outcome", width=18)
    table.add_column("Kind", width=9)
    table.add_column("Path", no_wrap=True)
    table.add_column("Details")

    report = verification.report
    if report is None:
        return table

    for result in report:
        if result.outcome == Outcome.VERIFIED and not show_verified:
            continue
        table.add_row(
            format_outcome(result),
            result.kind.value,
            escape(result.path),
            f"[muted]{escape(result.reason or '')}[/muted]",
        )

    return table


def format_counts(report: Report) -> str:
    """Format per-outcome counts of a report with Rich markup.

    Outcomes with a zero count are omitted.

    Args:
        report: Reconciliation report.

    Returns:
        Comma-separated markup string (empty if the report is empty).
    """
    parts: list[str] = []
    for outcome, count in report.counts().items():
        if count:
            style = outcome.value
            parts.append(f"[{style}]{count} {outcome.value}[/{style}]")
    return ", ".join(parts)


def print_verification_summary(verifications: list[BaseVerification]) -> None:
    """Print a summary line for each verified base and an overall result.

    Args:
        verifications: Results from StructureManager.verify_all().
    """
    for verification in verifications:
        if verification.error is not None:
            console.print(f"[error]{verification.base.value}[/error]: {escape(verification.error)}")
        elif verification.report is not None:
            counts = format_counts(verification.report)
            console.print(f"[header]{verification.base.value}[/header]: {counts}")

    failed = [v for v in verifications if not v.success]
    if not failed:
        print_success(f"All {len(verifications)} base(s) conform to the structure.")
    else:
        console.print(
            f"\n[success]{len(verifications) - len(failed)} ok[/success], "
            f"[error]{len(failed)} with problems[/error]"
        )


def create_structure_tree(label: str, node: Node) -> RichTree:
    """Render a structure tree with Rich.

    Directories flagged for repair are marked with "(repair)".

    Args:
        label: Label for the root of the tree.
        node: Root node of the structure.

    Returns:
        Rich Tree mirroring the structure.
    """
    root = RichTree(f"[directory]{escape(label)}[/directory]{_repair_marker(node)}")
    _add_children(root, node)
    return root


def _add_children(branch: RichTree, node: Node) -> None:
    """Recursively add a node's children to a Rich tree branch."""
    for child in children_of(node):
        if child.is_dir:
            sub = branch.add(f"[directory]{escape(child.name)}/[/directory]{_repair_marker(child)}")
            _add_children(sub, child)
        else:
            branch.add(f"[file]{escape(child.name)}[/file]")


def _repair_marker(node: Node) -> str:
    """Return the repair marker for a node, if any."""
    return " [repaired](repair)[/repaired]" if node.options.repair else ""
