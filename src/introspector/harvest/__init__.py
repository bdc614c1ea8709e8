"""Finding capture, session aggregation, and export rendering."""

from introspector.harvest.export import render_report, render_safe_payload
from introspector.harvest.finding import (
    MAX_NAVIGATION_SEGMENTS,
    build_finding,
    normalize_navigation_path,
    resolve_export_channel,
)
from introspector.harvest.session import (
    append_finding,
    capture_finding,
    compute_metrics,
    create_session,
    finalize_session,
    summarize_governance,
)

__all__ = [
    "MAX_NAVIGATION_SEGMENTS",
    "append_finding",
    "build_finding",
    "capture_finding",
    "compute_metrics",
    "create_session",
    "finalize_session",
    "normalize_navigation_path",
    "render_report",
    "render_safe_payload",
    "resolve_export_channel",
    "summarize_governance",
]
