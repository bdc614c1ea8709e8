"""introspector - record and sanitize live object-inspection findings.

Capture what a human or tool finds while poking at in-memory objects during
live debugging, then export it without leaking secrets.

This package provides:
- Object classification (kind, summary, ancestor depth, rarity)
- A governance filter that redacts secrets and blocks banned signal markers
- Sessions that aggregate findings with running metrics
- A human-readable report and a filtered machine payload

Example:
    >>> from introspector import capture_finding, create_session, render_report
    >>> session = create_session(player_handle="dev-console")
    >>> session, finding = capture_finding(
    ...     session,
    ...     {"config": {"cache": {}}},
    ...     ["config", "cache"],
    ...     source_location="app/debugger.py:44:11",
    ... )
    >>> print(render_report(session))  # doctest: +SKIP
"""

from introspector.config import IntrospectorSettings, get_settings
from introspector.exceptions import (
    CommandError,
    IntrospectorError,
    PatternConfigError,
    SessionError,
    SessionFinalizedError,
    SessionMismatchError,
)
from introspector.governance import (
    DEFAULT_PATTERN_SET,
    REDACTION_MARKER,
    GovernancePattern,
    GovernanceResult,
    PatternSet,
    apply_governance_filter,
    load_pattern_set,
)
from introspector.harvest import (
    append_finding,
    build_finding,
    capture_finding,
    create_session,
    finalize_session,
    render_report,
    render_safe_payload,
)
from introspector.models import (
    Environment,
    ExportChannel,
    Finding,
    GovernanceSummary,
    MetricsSnapshot,
    RarityKind,
    RootObjectKind,
    SafePayload,
    Session,
    Visibility,
)
from introspector.objects import (
    ObjectProbe,
    PropertyDescriptor,
    PythonObjectProbe,
    classify_rarity,
    infer_kind,
    prototype_depth,
    summarize,
)

__version__ = "0.3.0"

__all__ = [
    # Version
    "__version__",
    # Capture
    "create_session",
    "build_finding",
    "append_finding",
    "capture_finding",
    "finalize_session",
    # Export
    "render_report",
    "render_safe_payload",
    # Governance
    "DEFAULT_PATTERN_SET",
    "REDACTION_MARKER",
    "GovernancePattern",
    "GovernanceResult",
    "PatternSet",
    "apply_governance_filter",
    "load_pattern_set",
    # Classification
    "ObjectProbe",
    "PropertyDescriptor",
    "PythonObjectProbe",
    "classify_rarity",
    "infer_kind",
    "prototype_depth",
    "summarize",
    # Models
    "Environment",
    "ExportChannel",
    "Finding",
    "GovernanceSummary",
    "MetricsSnapshot",
    "RarityKind",
    "RootObjectKind",
    "SafePayload",
    "Session",
    "Visibility",
    # Configuration
    "IntrospectorSettings",
    "get_settings",
    # Exceptions
    "IntrospectorError",
    "PatternConfigError",
    "SessionError",
    "SessionFinalizedError",
    "SessionMismatchError",
    "CommandError",
]
