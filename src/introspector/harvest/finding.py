"""Build immutable findings from an inspected object and its navigation path."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from introspector.clock import Clock, SystemClock, utc_timestamp
from introspector.governance.filter import apply_governance_filter
from introspector.governance.patterns import PatternSet, get_pattern_set
from introspector.logging import get_logger
from introspector.models import ExportChannel, Finding, Session, Visibility
from introspector.objects.classifier import (
    classify_rarity,
    infer_kind,
    prototype_depth,
    summarize,
)
from introspector.objects.probe import ObjectProbe, PythonObjectProbe

LOG = get_logger(__name__)

MAX_NAVIGATION_SEGMENTS = 16

PATH_SEPARATOR = " -> "

UNKNOWN_SOURCE_LOCATION = "unknown:0:0"

UNPRINTABLE_TEXT = "<unprintable>"


def coerce_text(value: Any) -> str:
    """Render a caller-supplied label as text, falling back to repr()."""
    try:
        return str(value)
    except Exception:  # noqa: BLE001 - user __str__ may raise anything
        pass
    try:
        return repr(value)
    except Exception:  # noqa: BLE001 - broken __repr__
        return UNPRINTABLE_TEXT


def normalize_navigation_path(segments: Iterable[Any] | None) -> tuple[str, ...]:
    """Coerce path segments to strings and keep at most the first 16.

    Args:
        segments: Segment labels in navigation order, as captured by the UI.

    Returns:
        Normalized path as a tuple of strings.
    """
    if segments is None:
        return ()
    path: list[str] = []
    for segment in segments:
        if len(path) >= MAX_NAVIGATION_SEGMENTS:
            break
        path.append(coerce_text(segment))
    return tuple(path)


def resolve_export_channel(
    blocked: bool, flags: Iterable[str], secret_ids: frozenset[str]
) -> ExportChannel:
    """Resolve where a finding may be exported. First match wins."""
    if blocked:
        return ExportChannel.LOCAL_ONLY
    if any(flag in secret_ids for flag in flags):
        return ExportChannel.LOCAL_ONLY
    return ExportChannel.GITHUB_ISSUE


def build_finding(
    session: Session,
    root_object: Any,
    navigation_segments: Iterable[Any] | None,
    *,
    notes: str | None = None,
    source_location: str | None = None,
    tags: Iterable[str] | None = None,
    patterns: PatternSet | None = None,
    probe: ObjectProbe | None = None,
    clock: Clock | None = None,
) -> Finding:
    """Build a finding for one inspected value.

    The session is only read (for its id and environment); appending the
    result is a separate step.

    Args:
        session: Session the finding belongs to.
        root_object: Inspected root object. May be None.
        navigation_segments: Path labels leading from the root to the leaf.
        notes: Free-text annotation. Defaults to a rendering of the path.
        source_location: "file:line:col" of the inspection site.
        tags: Caller-supplied tags.
        patterns: Governance pattern set. Defaults to the process-wide set.
        probe: Capability probe. Defaults to PythonObjectProbe.
        clock: Time source for the capture timestamp.

    Returns:
        The built Finding.
    """
    probe = probe or PythonObjectProbe()
    pattern_set = patterns if patterns is not None else get_pattern_set()
    clock = clock or SystemClock()

    navigation_path = normalize_navigation_path(navigation_segments)

    raw_notes = notes or f"Introspect path: {PATH_SEPARATOR.join(navigation_path)}"
    governance = apply_governance_filter(raw_notes, pattern_set)

    leaf_name = navigation_path[-1] if navigation_path else ""
    descriptor = probe.own_descriptor(root_object, leaf_name) if root_object is not None else None
    leaf_value = descriptor.value if descriptor is not None else None
    rarity = classify_rarity(leaf_value, descriptor, leaf_name, probe)

    visibility = (
        Visibility.NON_ENUMERABLE
        if descriptor is not None and not descriptor.enumerable
        else Visibility.ENUMERABLE
    )
    channel = resolve_export_channel(
        governance.blocked, governance.flags, pattern_set.secret_ids
    )

    finding = Finding(
        session_id=session.session_id,
        timestamp_utc=utc_timestamp(clock),
        environment=session.environment,
        root_object_kind=infer_kind(root_object, probe),
        root_object_hint=summarize(root_object, probe),
        navigation_path=navigation_path,
        prototype_depth=prototype_depth(root_object, probe),
        scope_depth=len(navigation_path),
        source_location=source_location or UNKNOWN_SOURCE_LOCATION,
        notes=governance.redacted,
        rare_object_kind=rarity,
        rare_object_summary=f"{rarity} at path {leaf_name}" if rarity else None,
        visibility=visibility,
        tags=tuple(coerce_text(tag) for tag in tags or ()),
        governance_flags=governance.flags,
        secret_redactions=governance.secret_count,
        neurosignal_blocked=governance.blocked,
        export_channel=channel,
    )

    LOG.debug(
        "finding_built",
        session_id=finding.session_id,
        root_object_kind=str(finding.root_object_kind),
        scope_depth=finding.scope_depth,
        rare_object_kind=str(rarity) if rarity else None,
    )
    if channel == ExportChannel.LOCAL_ONLY:
        LOG.info(
            "finding_governance_blocked",
            session_id=finding.session_id,
            flags=list(governance.flags),
            neurosignal_blocked=governance.blocked,
        )
    return finding
