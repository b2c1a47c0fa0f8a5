"""Tests for reconciliation outcomes and reports."""

import pytest
from structman.reconcile.report import NodeResult, Outcome, Report
from structman.structure.models import NodeKind


def _result(path: str, outcome: Outcome, reason: str | None = None) -> NodeResult:
    return NodeResult(path=path, kind=NodeKind.DIRECTORY, outcome=outcome, reason=reason)


class TestOutcome:
    """Tests for Outcome enum."""

    @pytest.mark.parametrize(
        ("outcome", "descendable"),
        [
            (Outcome.CREATED, True),
            (Outcome.VERIFIED, True),
            (Outcome.REPAIRED, True),
            (Outcome.CONFLICT, False),
            (Outcome.FAILED, False),
        ],
    )
    def test_descendable(self, outcome: Outcome, descendable: bool) -> None:
        """Only conflicts and failures stop the walk."""
        assert outcome.descendable is descendable
        assert outcome.is_problem is not descendable


class TestNodeResult:
    """Tests for NodeResult dataclass."""

    def test_empty_path_rejected(self) -> None:
        """An empty path raises ValueError."""
        with pytest.raises(ValueError, match="Path cannot be empty"):
            _result("", Outcome.CREATED)

    def test_failed_requires_reason(self) -> None:
        """FAILED results must explain the failure."""
        with pytest.raises(ValueError, match="require a reason"):
            _result("/tmp/x", Outcome.FAILED)

    def test_to_dict(self) -> None:
        """to_dict uses plain values."""
        result = _result("/tmp/x", Outcome.CONFLICT, "Expected directory, found file")

        assert result.to_dict() == {
            "path": "/tmp/x",
            "kind": "directory",
            "outcome": "conflict",
            "reason": "Expected directory, found file",
            "dry_run": False,
        }


class TestReport:
    """Tests for Report aggregation."""

    @pytest.fixture
    def report(self) -> Report:
        report = Report(root="/srv")
        report.add(_result("/srv", Outcome.VERIFIED))
        report.add(_result("/srv/a", Outcome.CREATED))
        report.add(_result("/srv/b", Outcome.CONFLICT, "Expected directory, found file"))
        report.add(_result("/srv/c", Outcome.REPAIRED, "Replaced file"))
        return report

    def test_iteration_preserves_order(self, report: Report) -> None:
        """Results iterate in the order they were added."""
        assert [r.path for r in report] == ["/srv", "/srv/a", "/srv/b", "/srv/c"]
        assert len(report) == 4

    def test_success_false_with_conflict(self, report: Report) -> None:
        """Any conflict makes the report unsuccessful."""
        assert report.success is False
        assert [r.path for r in report.problems] == ["/srv/b"]

    def test_success_true_without_problems(self) -> None:
        """A report with only created and verified results succeeds."""
        report = Report(root="/srv", results=[_result("/srv", Outcome.CREATED)])

        assert report.success is True
        assert report.problems == []

    def test_empty_report_succeeds(self) -> None:
        """A report with no results is successful."""
        assert Report(root="/srv").success is True

    def test_changed(self, report: Report) -> None:
        """changed lists created and repaired entries."""
        assert [r.path for r in report.changed] == ["/srv/a", "/srv/c"]

    def test_counts_cover_every_outcome(self, report: Report) -> None:
        """counts includes zero entries for unseen outcomes."""
        assert report.counts() == {
            Outcome.CREATED: 1,
            Outcome.VERIFIED: 1,
            Outcome.REPAIRED: 1,
            Outcome.CONFLICT: 1,
            Outcome.FAILED: 0,
        }

    def test_outcome_for(self, report: Report) -> None:
        """outcome_for returns None for paths that were not visited."""
        assert report.outcome_for("/srv/b") == Outcome.CONFLICT
        assert report.outcome_for("/srv/b/child") is None

    def test_to_dict(self, report: Report) -> None:
        """to_dict includes success, counts and results."""
        data = report.to_dict()

        assert data["root"] == "/srv"
        assert data["success"] is False
        assert data["counts"]["conflict"] == 1
        assert len(data["results"]) == 4
