"""Structure reconciliation engine.

Walks a structure tree against a real filesystem root, depth-first and
parent before children, creating missing entries, verifying existing
ones and repairing kind mismatches where the node allows it. Every
filesystem problem is captured in the Report; the walk never aborts.
"""

import logging
import shutil
import stat
from os import PathLike, stat_result
from pathlib import Path

from structman.reconcile.report import NodeResult, Outcome, Report
from structman.structure.models import Node, NodeKind, Tree, children_of

logger = logging.getLogger(__name__)


class Reconciler:
    """Brings a filesystem root into conformance with a structure tree.

    Attributes:
        _dry_run: If True, report outcomes without modifying the filesystem.
    """

    def __init__(self, dry_run: bool = False) -> None:
        """Initialize the Reconciler.

        Args:
            dry_run: If True, report what would change without changing it.
        """
        self._dry_run = dry_run

    @property
    def dry_run(self) -> bool:
        """Whether this reconciler simulates changes."""
        return self._dry_run

    def reconcile(self, root_path: str | PathLike[str], tree: Tree) -> Report:
        """Run one reconciliation pass.

        The root node maps directly to root_path. Missing ancestors of
        the root itself are created along with it.

        Args:
            root_path: Filesystem path the tree is anchored to.
            tree: Root directory node of the structure.

        Returns:
            Report with one result per visited node, in pre-order.
        """
        root = Path(root_path)
        report = Report(root=str(root))
        self._visit(root, tree, report, is_root=True)

        logger.debug(
            "Reconciled %s: %d node(s), success=%s",
            root,
            len(report),
            report.success,
        )
        return report

    def _visit(self, path: Path, node: Node, report: Report, is_root: bool = False) -> None:
        """Reconcile one node, then its children if it is descendable."""
        result = self._reconcile_node(path, node, is_root)
        report.add(result)

        # Conflicts and failures skip the whole subtree
        if node.is_dir and result.outcome.descendable:
            for child in children_of(node):
                self._visit(path / child.name, child, report)

    def _reconcile_node(self, path: Path, node: Node, is_root: bool) -> NodeResult:
        """Determine and apply the outcome for a single node.

        Args:
            path: Resolved filesystem path of the node.
            node: Node being reconciled.
            is_root: Whether this is the tree's root node.

        Returns:
            NodeResult for the node.
        """
        try:
            st = path.lstat()
        except (FileNotFoundError, NotADirectoryError):
            return self._create(path, node, parents=is_root)
        except OSError as e:
            return self._failed(path, node, e)

        actual = _kind_of(path, st)
        if actual == node.kind:
            return self._result(path, node, Outcome.VERIFIED)

        found = actual.value if actual else "other"
        if not node.options.repair:
            logger.debug("Conflict at %s: expected %s, found %s", path, node.kind.value, found)
            return self._result(
                path,
                node,
                Outcome.CONFLICT,
                reason=f"Expected {node.kind.value}, found {found}",
            )

        return self._repair(path, node, st, found)

    def _create(self, path: Path, node: Node, parents: bool = False) -> NodeResult:
        """Create a missing entry."""
        if self._dry_run:
            logger.info("Dry-run: would create %s %s", node.kind.value, path)
            return self._result(path, node, Outcome.CREATED)

        try:
            _materialize(path, node.kind, parents=parents)
        except OSError as e:
            return self._failed(path, node, e)

        logger.debug("Created %s %s", node.kind.value, path)
        return self._result(path, node, Outcome.CREATED)

    def _repair(self, path: Path, node: Node, st: stat_result, found: str) -> NodeResult:
        """Replace an entry of the wrong kind with the expected kind."""
        if self._dry_run:
            logger.info("Dry-run: would replace %s with %s at %s", found, node.kind.value, path)
            return self._result(path, node, Outcome.REPAIRED, reason=f"Replaced {found}")

        try:
            _remove(path, st)
            _materialize(path, node.kind)
        except OSError as e:
            return self._failed(path, node, e)

        logger.debug("Repaired %s: replaced %s with %s", path, found, node.kind.value)
        return self._result(path, node, Outcome.REPAIRED, reason=f"Replaced {found}")

    def _failed(self, path: Path, node: Node, error: OSError) -> NodeResult:
        """Record an I/O failure for a node."""
        logger.warning("Failed to reconcile %s: %s", path, error)
        return self._result(path, node, Outcome.FAILED, reason=str(error) or type(error).__name__)

    def _result(
        self,
        path: Path,
        node: Node,
        outcome: Outcome,
        reason: str | None = None,
    ) -> NodeResult:
        """Build a NodeResult carrying this reconciler's dry-run flag."""
        # Verification never mutates, so it is never a simulated outcome
        dry_run = self._dry_run and outcome in (Outcome.CREATED, Outcome.REPAIRED)
        return NodeResult(
            path=str(path),
            kind=node.kind,
            outcome=outcome,
            reason=reason,
            dry_run=dry_run,
        )


def reconcile(
    root_path: str | PathLike[str],
    tree: Tree,
    *,
    dry_run: bool = False,
) -> Report:
    """Reconcile a filesystem root against a structure tree.

    Convenience wrapper around Reconciler.reconcile().

    Args:
        root_path: Filesystem path the tree is anchored to.
        tree: Root directory node of the structure.
        dry_run: If True, report what would change without changing it.

    Returns:
        Report with one result per visited node, in pre-order.
    """
    return Reconciler(dry_run=dry_run).reconcile(root_path, tree)


def _kind_of(path: Path, st: stat_result) -> NodeKind | None:
    """Classify an existing entry from its lstat result.

    Symlinks are classified by their target. Dead symlinks, sockets,
    FIFOs and devices are neither kind.
    """
    if stat.S_ISLNK(st.st_mode):
        try:
            st = path.stat()
        except OSError:
            return None
    if stat.S_ISDIR(st.st_mode):
        return NodeKind.DIRECTORY
    if stat.S_ISREG(st.st_mode):
        return NodeKind.FILE
    return None


def _remove(path: Path, st: stat_result) -> None:
    """Remove an existing entry.

    Real directories are removed recursively; files, symlinks (including
    symlinks to directories) and special files are unlinked.
    """
    if stat.S_ISDIR(st.st_mode):
        shutil.rmtree(path)
    else:
        path.unlink()


def _materialize(path: Path, kind: NodeKind, parents: bool = False) -> None:
    """Create an empty directory or file at path.

    Raises:
        OSError: If the entry cannot be created.
    """
    if kind == NodeKind.DIRECTORY:
        path.mkdir(parents=parents)
    else:
        if parents:
            path.parent.mkdir(parents=True, exist_ok=True)
        path.touch(exist_ok=False)
