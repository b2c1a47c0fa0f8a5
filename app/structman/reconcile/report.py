"""Reconciliation outcomes and reports.

A Report is the accumulated result of one reconciliation pass: one
NodeResult per visited node, in depth-first pre-order. Nodes below a
conflict or failure are never visited and therefore absent.
"""

from collections import Counter
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from structman.structure.models import NodeKind


class Outcome(str, Enum):
    """Result of reconciling a single node.

    Attributes:
        CREATED: Entry was missing and has been created.
        VERIFIED: Entry exists with the expected kind; nothing changed.
        REPAIRED: Entry had the wrong kind and was replaced.
        CONFLICT: Entry has the wrong kind and repair is disabled.
        FAILED: An I/O operation on the entry failed.
    """

    CREATED = "created"
    VERIFIED = "verified"
    REPAIRED = "repaired"
    CONFLICT = "conflict"
    FAILED = "failed"

    @property
    def descendable(self) -> bool:
        """Check if children of a node with this outcome are processed."""
        return self in (Outcome.CREATED, Outcome.VERIFIED, Outcome.REPAIRED)

    @property
    def is_problem(self) -> bool:
        """Check if this outcome makes the pass unsuccessful."""
        return not self.descendable


@dataclass(frozen=True, slots=True)
class NodeResult:
    """Outcome of reconciling one node.

    Attributes:
        path: Filesystem path of the entry.
        kind: Expected kind of the entry.
        outcome: What happened to the entry.
        reason: Explanation for CONFLICT and FAILED outcomes.
        dry_run: Whether the outcome was simulated.
    """

    path: str
    kind: NodeKind
    outcome: Outcome
    reason: str | None = None
    dry_run: bool = False

    def __post_init__(self) -> None:
        """Validate result data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.outcome == Outcome.FAILED and not self.reason:
            msg = "Failed results require a reason"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "path": self.path,
            "kind": self.kind.value,
            "outcome": self.outcome.value,
            "reason": self.reason,
            "dry_run": self.dry_run,
        }


@dataclass(slots=True)
class Report:
    """Ordered results of one reconciliation pass.

    Attributes:
        root: Root path the tree was reconciled against.
        results: Node results in depth-first pre-order.
    """

    root: str
    results: list[NodeResult] = field(default_factory=list)

    def add(self, result: NodeResult) -> None:
        """Append a node result."""
        self.results.append(result)

    def __iter__(self) -> Iterator[NodeResult]:
        """Iterate over results in walk order."""
        return iter(self.results)

    def __len__(self) -> int:
        """Number of recorded results."""
        return len(self.results)

    @property
    def success(self) -> bool:
        """True if no node ended in CONFLICT or FAILED."""
        return not any(r.outcome.is_problem for r in self.results)

    @property
    def problems(self) -> list[NodeResult]:
        """Results with CONFLICT or FAILED outcomes."""
        return [r for r in self.results if r.outcome.is_problem]

    @property
    def changed(self) -> list[NodeResult]:
        """Results where an entry was created or repaired."""
        return [r for r in self.results if r.outcome in (Outcome.CREATED, Outcome.REPAIRED)]

    def counts(self) -> dict[Outcome, int]:
        """Count results per outcome.

        Returns:
            Mapping of every Outcome to its number of results.
        """
        counter = Counter(r.outcome for r in self.results)
        return {outcome: counter.get(outcome, 0) for outcome in Outcome}

    def outcome_for(self, path: str) -> Outcome | None:
        """Look up the outcome recorded for a path.

        Args:
            path: Filesystem path as recorded in the report.

        Returns:
            The outcome, or None if the path was not visited.
        """
        for result in self.results:
            if result.path == path:
                return result.outcome
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "root": self.root,
            "success": self.success,
            "counts": {outcome.value: count for outcome, count in self.counts().items()},
            "results": [r.to_dict() for r in self.results],
        }
