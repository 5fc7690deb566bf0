"""
Tests for twoam/models/decision.py - decisions and tick reports.
"""

from datetime import datetime

from twoam.models import Decision, Outcome, TenantOutcome, TickReport, TickStatus


class TestDecision:
    """Tests for Decision constructors."""

    def test_fire_has_no_reason(self):
        decision = Decision.fire()
        assert decision.outcome == Outcome.FIRE
        assert decision.reason is None
        assert decision.deletion_candidate is False

    def test_skip_can_flag_deletion_candidate(self):
        decision = Decision.skip("destination missing", deletion_candidate=True)
        assert decision.outcome == Outcome.SKIP
        assert decision.deletion_candidate is True

    def test_decisions_compare_by_value(self):
        assert Decision.defer("destination empty") == Decision.defer("destination empty")


class TestTickReport:
    """Tests for TickReport counting and summaries."""

    def test_counts_by_status(self):
        report = TickReport(started_at=datetime(2030, 1, 1, 2, 0, 0))
        report.outcomes = [
            TenantOutcome("1", TickStatus.FIRED),
            TenantOutcome("2", TickStatus.FIRED),
            TenantOutcome("3", TickStatus.DEFERRED, "destination empty"),
            TenantOutcome("4", TickStatus.SKIPPED, "not configured"),
            TenantOutcome("5", TickStatus.FAILED, "boom"),
        ]
        assert (report.fired, report.deferred, report.skipped, report.failed) == (2, 1, 1, 1)
        assert report.summary() == (
            "Tick at 2030-01-01 02:00:00: 2 fired, 1 deferred, 1 skipped, 1 failed"
        )

    def test_get_returns_outcome_for_tenant(self):
        report = TickReport(started_at=datetime(2030, 1, 1))
        report.outcomes.append(TenantOutcome("7", TickStatus.SKIPPED, "not configured"))
        assert report.get("7").reason == "not configured"
        assert report.get("8") is None

    def test_aborted_summary_includes_error(self):
        report = TickReport(started_at=datetime(2030, 1, 1, 2, 0, 0), aborted=True, error="disk I/O error")
        assert "aborted: disk I/O error" in report.summary()
