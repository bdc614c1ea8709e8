"""Session lifecycle: create, append findings, finalize.

A session is OPEN until finalize_session() attaches its governance summary
and FINALIZED afterwards. Finalized sessions reject new findings, which keeps
the summary consistent with the findings it describes.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

from introspector.clock import Clock, IdSource, RandomIdSource, SystemClock, utc_timestamp
from introspector.config import get_settings
from introspector.exceptions import SessionFinalizedError, SessionMismatchError
from introspector.harvest.finding import build_finding
from introspector.logging import get_logger
from introspector.models import (
    Environment,
    ExportChannel,
    Finding,
    GovernanceSummary,
    MetricsSnapshot,
    Session,
)

LOG = get_logger(__name__)

SESSION_ID_PREFIX = "INTROSPECT"


def create_session(
    *,
    session_id: str | None = None,
    player_handle: str | None = None,
    environment: Environment | str | None = None,
    clock: Clock | None = None,
    id_source: IdSource | None = None,
) -> Session:
    """Create an empty, open session.

    Args:
        session_id: Explicit identifier. Generated when omitted.
        player_handle: Operator handle. Defaults to settings.player_handle.
        environment: Host environment tag. Defaults to settings.environment.
        clock: Time source for started_at_utc and the generated id.
        id_source: Source of the random id suffix.

    Returns:
        A new Session with no findings and zeroed metrics.
    """
    settings = get_settings()
    clock = clock or SystemClock()
    env = Environment(environment) if environment is not None else settings.environment
    started_at = utc_timestamp(clock)

    if not session_id:
        suffix = (id_source or RandomIdSource()).suffix()
        session_id = f"{SESSION_ID_PREFIX}-{env}-{started_at}-{suffix}"

    session = Session(
        session_id=session_id,
        started_at_utc=started_at,
        environment=env,
        player_handle=player_handle or settings.player_handle,
    )
    LOG.debug("session_created", session_id=session_id, environment=str(env))
    return session


def compute_metrics(findings: Sequence[Finding]) -> MetricsSnapshot:
    """Compute the metrics snapshot for a list of findings from scratch."""
    return MetricsSnapshot.from_findings(findings)


def append_finding(session: Session, finding: Finding) -> Session:
    """Append a finding and recompute the session metrics.

    Args:
        session: Open session to append to.
        finding: Finding built for this session.

    Returns:
        The same session, for chaining.

    Raises:
        SessionFinalizedError: If the session has already been finalized.
        SessionMismatchError: If the finding was built for another session.
    """
    if session.is_finalized:
        raise SessionFinalizedError(session.session_id)
    if finding.session_id != session.session_id:
        raise SessionMismatchError(session.session_id, finding.session_id)

    session.findings.append(finding)
    session.finding_count = len(session.findings)
    session.metrics_snapshot = compute_metrics(session.findings)
    return session


def summarize_governance(
    session_id: str, findings: Sequence[Finding], *, policy_version: str, reviewer_role: str
) -> GovernanceSummary:
    """Scan findings once and total their governance outcomes."""
    redactions_total = 0
    neurosignal_events = 0
    blocked_exports = 0
    for f in findings:
        redactions_total += f.secret_redactions
        if f.neurosignal_blocked:
            neurosignal_events += 1
        if f.export_channel == ExportChannel.LOCAL_ONLY:
            blocked_exports += 1

    total = len(findings)
    return GovernanceSummary(
        session_id=session_id,
        total_findings=total,
        redactions_total=redactions_total,
        neurosignal_events=neurosignal_events,
        blocked_exports=blocked_exports,
        exportable_findings=total - blocked_exports,
        policy_version=policy_version,
        reviewer_role=reviewer_role,
    )


def finalize_session(session: Session, *, clock: Clock | None = None) -> Session:
    """Finalize a session and attach its governance summary.

    Every call stamps finished_at_utc. The governance summary is computed on
    the first call only and never recomputed.

    Args:
        session: Session to finalize.
        clock: Time source for finished_at_utc.

    Returns:
        The same session, with governance_summary set.
    """
    clock = clock or SystemClock()
    session.finished_at_utc = utc_timestamp(clock)

    if session.governance_summary is None:
        settings = get_settings()
        session.governance_summary = summarize_governance(
            session.session_id,
            session.findings,
            policy_version=settings.policy_version,
            reviewer_role=settings.reviewer_role,
        )
        summary = session.governance_summary
        LOG.info(
            "session_finalized",
            session_id=session.session_id,
            total_findings=summary.total_findings,
            redactions_total=summary.redactions_total,
            blocked_exports=summary.blocked_exports,
        )
    return session


def capture_finding(
    session: Session | None,
    root_object: Any,
    navigation_segments: Iterable[Any] | None,
    **options: Any,
) -> tuple[Session, Finding]:
    """Build a finding and append it, creating a session when needed.

    Args:
        session: Open session, or None to create one with default settings.
        root_object: Inspected root object.
        navigation_segments: Path labels leading from the root to the leaf.
        **options: Keyword arguments forwarded to build_finding().

    Returns:
        Tuple of (session, finding).
    """
    active = session if session is not None else create_session()
    finding = build_finding(active, root_object, navigation_segments, **options)
    append_finding(active, finding)
    return active, finding
