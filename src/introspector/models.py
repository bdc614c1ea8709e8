"""Data model for introspection sessions and findings.

A Session owns an ordered, append-only list of Findings. Findings are frozen
once built; the Session is the only mutable aggregate, and is sealed when
its governance summary is attached at finalization.

Every record converts to and from a JSON-serializable dict whose keys match
the dataclass field names.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any

from introspector.logging import get_logger

LOG = get_logger(__name__)


class Environment(StrEnum):
    """Host environment a session was captured in."""

    BROWSER = "browser"
    WORKER = "worker"
    HEADLESS = "headless"
    NODE = "node"
    SANDBOX = "sandbox"


class RootObjectKind(StrEnum):
    """Coarse shape of an inspected root object."""

    BUFFER = "buffer"
    FUNCTION = "function"
    TYPED_ARRAY = "typed-array"
    OTHER = "other"


class RarityKind(StrEnum):
    """Structurally unusual property classes. Absence means ordinary."""

    CLOSURE_CAPTURE = "closure_capture"
    NON_ENUMERABLE = "non-enumerable"
    SYMBOLIC = "symbolic"
    INTERNAL_SLOT = "internal-slot"


class Visibility(StrEnum):
    """Whether the inspected leaf property shows up in plain listings."""

    ENUMERABLE = "enumerable"
    NON_ENUMERABLE = "non-enumerable"


class ExportChannel(StrEnum):
    """Destination policy label controlling which exports may include a finding."""

    GITHUB_ISSUE = "github-issue"
    AI_CHAT = "ai-chat"
    LOCAL_ONLY = "local-only"
    CAS_QUEUE = "cas-queue"


_FINDING_FIELDS = frozenset(
    {
        "session_id",
        "timestamp_utc",
        "environment",
        "root_object_kind",
        "root_object_hint",
        "navigation_path",
        "rare_object_kind",
        "rare_object_summary",
        "prototype_depth",
        "scope_depth",
        "visibility",
        "source_location",
        "tags",
        "notes",
        "governance_flags",
        "secret_redactions",
        "neurosignal_blocked",
        "export_channel",
    }
)


@dataclass(frozen=True)
class Finding:
    """Immutable record of one inspected value and its governance outcome.

    Note:
        ``notes`` only ever holds the redacted text. The raw annotation is
        discarded once the governance filter has run.

    Attributes:
        session_id: Session the finding was built for.
        timestamp_utc: ISO 8601 capture time.
        environment: Environment copied from the session at build time.
        root_object_kind: Coarse kind of the inspected root object.
        root_object_hint: Human-readable summary of the root object.
        navigation_path: Normalized path segments (at most 16).
        rare_object_kind: Rarity of the leaf property, None when ordinary.
        rare_object_summary: "<kind> at path <leaf>" when a rarity was found.
        prototype_depth: Ancestor chain length of the root object (capped).
        scope_depth: Length of the navigation path.
        visibility: Enumerability of the leaf property.
        source_location: Caller-supplied "file:line:col" string.
        tags: Caller-supplied tags, in the given order.
        notes: Post-redaction annotation text.
        governance_flags: Sorted ids of every governance pattern that matched.
        secret_redactions: Number of secret patterns that were redacted.
        neurosignal_blocked: True when a neurosignal marker matched.
        export_channel: Resolved export destination.
    """

    session_id: str
    timestamp_utc: str
    environment: Environment
    root_object_kind: RootObjectKind
    root_object_hint: str | None
    navigation_path: tuple[str, ...]
    prototype_depth: int
    scope_depth: int
    source_location: str
    notes: str
    rare_object_kind: RarityKind | None = None
    rare_object_summary: str | None = None
    visibility: Visibility = Visibility.ENUMERABLE
    tags: tuple[str, ...] = ()
    governance_flags: tuple[str, ...] = ()
    secret_redactions: int = 0
    neurosignal_blocked: bool = False
    export_channel: ExportChannel = ExportChannel.GITHUB_ISSUE

    @property
    def is_exportable(self) -> bool:
        """True when the finding may leave the local machine."""
        return not self.neurosignal_blocked and self.export_channel != ExportChannel.LOCAL_ONLY

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "session_id": self.session_id,
            "timestamp_utc": self.timestamp_utc,
            "environment": str(self.environment),
            "root_object_kind": str(self.root_object_kind),
            "root_object_hint": self.root_object_hint,
            "navigation_path": list(self.navigation_path),
            "rare_object_kind": str(self.rare_object_kind) if self.rare_object_kind else None,
            "rare_object_summary": self.rare_object_summary,
            "prototype_depth": self.prototype_depth,
            "scope_depth": self.scope_depth,
            "visibility": str(self.visibility),
            "source_location": self.source_location,
            "tags": list(self.tags),
            "notes": self.notes,
            "governance_flags": list(self.governance_flags),
            "secret_redactions": self.secret_redactions,
            "neurosignal_blocked": self.neurosignal_blocked,
            "export_channel": str(self.export_channel),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Finding:
        """Create instance from dictionary.

        Unknown fields are ignored for forward compatibility.
        """
        filtered = {k: v for k, v in data.items() if k in _FINDING_FIELDS}
        filtered["environment"] = Environment(filtered["environment"])
        filtered["root_object_kind"] = RootObjectKind(filtered["root_object_kind"])
        if filtered.get("rare_object_kind"):
            filtered["rare_object_kind"] = RarityKind(filtered["rare_object_kind"])
        else:
            filtered["rare_object_kind"] = None
        if "visibility" in filtered:
            filtered["visibility"] = Visibility(filtered["visibility"])
        if "export_channel" in filtered:
            filtered["export_channel"] = ExportChannel(filtered["export_channel"])
        for key in ("navigation_path", "tags", "governance_flags"):
            if key in filtered:
                filtered[key] = tuple(str(item) for item in filtered[key] or ())
        return cls(**filtered)


@dataclass(frozen=True)
class MetricsSnapshot:
    """Running statistics derived from a session's findings."""

    finding_count_total: int = 0
    avg_scope_depth: float = 0.0
    avg_prototype_depth: float = 0.0
    rare_object_ratio: dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_findings(cls, findings: Sequence[Finding]) -> MetricsSnapshot:
        """Compute the snapshot for a list of findings from scratch."""
        total = len(findings)
        if not total:
            return cls()

        rarity_counts = Counter(str(f.rare_object_kind) for f in findings if f.rare_object_kind)
        return cls(
            finding_count_total=total,
            avg_scope_depth=sum(f.scope_depth for f in findings) / total,
            avg_prototype_depth=sum(f.prototype_depth for f in findings) / total,
            rare_object_ratio={kind: count / total for kind, count in rarity_counts.items()},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "finding_count_total": self.finding_count_total,
            "avg_scope_depth": self.avg_scope_depth,
            "avg_prototype_depth": self.avg_prototype_depth,
            "rare_object_ratio": dict(self.rare_object_ratio),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MetricsSnapshot:
        """Create instance from dictionary."""
        return cls(
            finding_count_total=int(data.get("finding_count_total", 0)),
            avg_scope_depth=float(data.get("avg_scope_depth", 0.0)),
            avg_prototype_depth=float(data.get("avg_prototype_depth", 0.0)),
            rare_object_ratio={
                str(k): float(v) for k, v in (data.get("rare_object_ratio") or {}).items()
            },
        )


@dataclass(frozen=True)
class GovernanceSummary:
    """Harvester's own governance judgment over a finalized session.

    This is the automated filter's verdict, not a human review.
    """

    session_id: str
    total_findings: int
    redactions_total: int
    neurosignal_events: int
    blocked_exports: int
    exportable_findings: int
    policy_version: str
    reviewer_role: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "session_id": self.session_id,
            "total_findings": self.total_findings,
            "redactions_total": self.redactions_total,
            "neurosignal_events": self.neurosignal_events,
            "blocked_exports": self.blocked_exports,
            "exportable_findings": self.exportable_findings,
            "policy_version": self.policy_version,
            "reviewer_role": self.reviewer_role,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GovernanceSummary:
        """Create instance from dictionary."""
        return cls(
            session_id=data["session_id"],
            total_findings=int(data["total_findings"]),
            redactions_total=int(data["redactions_total"]),
            neurosignal_events=int(data["neurosignal_events"]),
            blocked_exports=int(data["blocked_exports"]),
            exportable_findings=int(data["exportable_findings"]),
            policy_version=data["policy_version"],
            reviewer_role=data["reviewer_role"],
        )


@dataclass
class Session:
    """Ordered, append-only collection of findings plus aggregate state.

    Sessions are OPEN until finalize_session() attaches a governance summary,
    after which they are FINALIZED and reject further findings.

    Attributes:
        session_id: Unique identifier within the process.
        started_at_utc: ISO 8601 creation time.
        environment: Host environment tag.
        player_handle: Optional operator handle.
        finished_at_utc: ISO 8601 finalization time, None while open.
        finding_count: Always equal to len(findings).
        findings: Findings in capture order.
        metrics_snapshot: Statistics over exactly the current findings.
        governance_summary: Set once at finalization.
    """

    session_id: str
    started_at_utc: str
    environment: Environment
    player_handle: str | None = None
    finished_at_utc: str | None = None
    finding_count: int = 0
    findings: list[Finding] = field(default_factory=list)
    metrics_snapshot: MetricsSnapshot = field(default_factory=MetricsSnapshot)
    governance_summary: GovernanceSummary | None = None

    @property
    def is_finalized(self) -> bool:
        """True once a governance summary has been attached."""
        return self.governance_summary is not None

    def with_findings(self, findings: list[Finding]) -> Session:
        """Return a shallow copy whose findings list is replaced.

        All other fields, including finding_count and the governance
        summary, are carried over unchanged.
        """
        return replace(self, findings=list(findings))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "session_id": self.session_id,
            "started_at_utc": self.started_at_utc,
            "finished_at_utc": self.finished_at_utc,
            "environment": str(self.environment),
            "player_handle": self.player_handle,
            "finding_count": self.finding_count,
            "findings": [f.to_dict() for f in self.findings],
            "metrics_snapshot": self.metrics_snapshot.to_dict(),
            "governance_summary": (
                self.governance_summary.to_dict() if self.governance_summary else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Session:
        """Create instance from dictionary.

        The finding count and metrics snapshot are rebuilt from the loaded
        findings; stored values that disagree are logged and replaced.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If an enumerated field holds an unknown value.
        """
        findings = [Finding.from_dict(f) for f in data.get("findings") or []]
        summary = data.get("governance_summary")
        stored_count = data.get("finding_count")
        if stored_count is not None and stored_count != len(findings):
            LOG.warning(
                "session_finding_count_corrected",
                session_id=data["session_id"],
                stored=stored_count,
                actual=len(findings),
            )
        return cls(
            session_id=data["session_id"],
            started_at_utc=data["started_at_utc"],
            environment=Environment(data["environment"]),
            player_handle=data.get("player_handle"),
            finished_at_utc=data.get("finished_at_utc"),
            finding_count=len(findings),
            findings=findings,
            metrics_snapshot=MetricsSnapshot.from_findings(findings),
            governance_summary=GovernanceSummary.from_dict(summary) if summary else None,
        )


@dataclass(frozen=True)
class SafePayload:
    """Export payload restricted to findings cleared for external consumers."""

    session: Session
    findings: tuple[Finding, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "session": self.session.to_dict(),
            "findings": [f.to_dict() for f in self.findings],
        }
