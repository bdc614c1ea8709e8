"""Export views over a session: a text report and a filtered payload."""

from __future__ import annotations

from introspector.harvest.finding import PATH_SEPARATOR
from introspector.harvest.session import finalize_session
from introspector.logging import get_logger
from introspector.models import Finding, SafePayload, Session

LOG = get_logger(__name__)

REPORT_SAMPLE_SIZE = 3

NO_HIGHLIGHTS_LINE = "  (no rare objects)"
NO_SAMPLES_LINE = "  (no navigation samples)"


def _rarity_sort_key(finding: Finding) -> str:
    return str(finding.rare_object_kind) if finding.rare_object_kind else ""


def render_report(session: Session) -> str:
    """Render a human-readable report for a session.

    Finalizes the session first when it has no governance summary. Findings
    are ordered by rarity kind (ordinary findings sort first); findings with
    the same kind keep their capture order.

    Args:
        session: Session to render.

    Returns:
        The report text, ending with a newline.
    """
    summary = session.governance_summary or finalize_session(session).governance_summary
    assert summary is not None

    ordered = sorted(session.findings, key=_rarity_sort_key)

    highlights = "\n".join(
        f"  {idx}. [{f.rare_object_kind or 'normal'}] "
        f"{f.rare_object_summary or f.root_object_hint} @ {f.source_location}"
        for idx, f in enumerate(ordered[:REPORT_SAMPLE_SIZE], start=1)
    )
    samples = "\n".join(
        f"  - {PATH_SEPARATOR.join(f.navigation_path)}" for f in ordered[:REPORT_SAMPLE_SIZE]
    )

    return "\n".join(
        [
            f"Session: {session.session_id}",
            f"Environment: {session.environment}",
            f"Findings: {session.finding_count}",
            f"Redactions: {summary.redactions_total}",
            f"Exportable findings: {summary.exportable_findings}",
            "",
            "Highlights:",
            highlights or NO_HIGHLIGHTS_LINE,
            "",
            "Navigation Samples:",
            samples or NO_SAMPLES_LINE,
            "",
        ]
    )


def render_safe_payload(session: Session) -> SafePayload:
    """Build the payload safe to hand to external or less-trusted consumers.

    Findings that were neurosignal-blocked or routed local-only are dropped.
    The payload's session is a shallow copy whose findings list is the
    filtered one; every other field, including finding_count and the
    governance summary, passes through unchanged.

    Args:
        session: Session to export.

    Returns:
        SafePayload with the filtered session copy and findings.
    """
    safe = [f for f in session.findings if f.is_exportable]
    LOG.debug(
        "safe_payload_rendered",
        session_id=session.session_id,
        kept=len(safe),
        dropped=len(session.findings) - len(safe),
    )
    return SafePayload(session=session.with_findings(safe), findings=tuple(safe))
