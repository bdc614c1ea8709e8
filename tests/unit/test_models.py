"""Tests for model serialization."""

from __future__ import annotations

import json

import pytest
from structlog.testing import capture_logs

from introspector.harvest import append_finding, build_finding, finalize_session, render_report
from introspector.models import (
    Environment,
    ExportChannel,
    Finding,
    GovernanceSummary,
    MetricsSnapshot,
    RarityKind,
    Session,
)


@pytest.fixture
def populated(session: Session) -> Session:
    append_finding(session, build_finding(session, {}, ["fn", "[[Scopes]]"], tags=["slot"]))
    append_finding(session, build_finding(session, {}, ["radio"], notes="950MHz"))
    return finalize_session(session)


class TestEnums:
    """Tests for StrEnum values."""

    def test_values_serialize_as_strings(self) -> None:
        assert json.dumps([ExportChannel.LOCAL_ONLY, RarityKind.INTERNAL_SLOT]) == (
            '["local-only", "internal-slot"]'
        )

    def test_environment_members(self) -> None:
        assert {e.value for e in Environment} >= {"browser", "worker", "headless"}


class TestFindingSerialization:
    """Tests for Finding.to_dict / from_dict."""

    def test_to_dict_uses_plain_types(self, populated: Session) -> None:
        data = populated.findings[0].to_dict()
        assert data["navigation_path"] == ["fn", "[[Scopes]]"]
        assert data["rare_object_kind"] == "internal-slot"
        assert data["export_channel"] == "github-issue"
        assert type(data["environment"]) is str

    def test_round_trip(self, populated: Session) -> None:
        for finding in populated.findings:
            assert Finding.from_dict(finding.to_dict()) == finding

    def test_ignores_unknown_fields(self, populated: Session) -> None:
        data = populated.findings[0].to_dict() | {"future_field": 1}
        assert Finding.from_dict(data) == populated.findings[0]

    def test_is_exportable(self, populated: Session) -> None:
        assert populated.findings[0].is_exportable is True
        assert populated.findings[1].is_exportable is False


class TestSessionSerialization:
    """Tests for Session.to_dict / from_dict."""

    def test_json_round_trip(self, populated: Session) -> None:
        restored = Session.from_dict(json.loads(json.dumps(populated.to_dict())))
        assert restored == populated
        assert restored.is_finalized

    def test_open_session_round_trip(self, session: Session) -> None:
        restored = Session.from_dict(session.to_dict())
        assert restored == session
        assert restored.governance_summary is None

    def test_tampered_count_is_rebuilt_from_findings(self, session: Session) -> None:
        data = session.to_dict() | {"finding_count": 7}
        with capture_logs() as logs:
            loaded = Session.from_dict(data)
        assert loaded.finding_count == 0
        assert loaded.findings == []
        assert "Findings: 0" in render_report(loaded)
        corrected = [e for e in logs if e["event"] == "session_finding_count_corrected"]
        assert corrected[0]["stored"] == 7
        assert corrected[0]["actual"] == 0

    def test_stale_metrics_are_recomputed(self, populated: Session) -> None:
        data = populated.to_dict()
        data["metrics_snapshot"] = MetricsSnapshot(99, 9.0, 9.0, {}).to_dict()
        loaded = Session.from_dict(data)
        assert loaded.metrics_snapshot == populated.metrics_snapshot
        assert loaded.metrics_snapshot.finding_count_total == 2

    def test_consistent_session_logs_nothing(self, populated: Session) -> None:
        with capture_logs() as logs:
            Session.from_dict(populated.to_dict())
        assert logs == []

    def test_missing_required_field(self) -> None:
        with pytest.raises(KeyError):
            Session.from_dict({"started_at_utc": "x", "environment": "browser"})

    def test_unknown_environment(self, session: Session) -> None:
        data = session.to_dict() | {"environment": "mainframe"}
        with pytest.raises(ValueError):
            Session.from_dict(data)

    def test_with_findings_is_shallow_copy(self, populated: Session) -> None:
        copy = populated.with_findings([])
        assert copy.findings == []
        assert copy.finding_count == 2
        assert len(populated.findings) == 2


class TestSnapshots:
    """Tests for metrics and governance summary records."""

    def test_metrics_round_trip(self) -> None:
        metrics = MetricsSnapshot(3, 1.5, 2.0, {"symbolic": 1 / 3})
        assert MetricsSnapshot.from_dict(metrics.to_dict()) == metrics

    def test_summary_round_trip(self, populated: Session) -> None:
        summary = populated.governance_summary
        assert summary is not None
        assert GovernanceSummary.from_dict(summary.to_dict()) == summary
