"""Governance filter: redact secrets and detect banned signal markers.

The filter is a best-effort detection heuristic built on regular
expressions. It is not a security boundary and does not guarantee that every
secret in a piece of text is found.
"""

from __future__ import annotations

from dataclasses import dataclass

from introspector.governance.patterns import REDACTION_MARKER, PatternSet, get_pattern_set


@dataclass(frozen=True)
class GovernanceResult:
    """Outcome of running the governance filter over one text.

    Attributes:
        redacted: Input text with every secret match replaced.
        secret_count: Number of secret patterns that matched (not occurrences).
        flags: Sorted, duplicate-free ids of every matching pattern.
        blocked: True when any neurosignal pattern matched.
    """

    redacted: str
    secret_count: int
    flags: tuple[str, ...]
    blocked: bool


def apply_governance_filter(
    text: str | None,
    patterns: PatternSet | None = None,
) -> GovernanceResult:
    """Redact secrets and flag neurosignal markers in text.

    Secret patterns run first and replace every match with the redaction
    marker. Neurosignal patterns then run over the redacted text; they only
    set the blocked flag and never alter the text.

    Args:
        text: Text to filter. None is treated as an empty string.
        patterns: Pattern set to apply. Defaults to the process-wide set.

    Returns:
        GovernanceResult for the text.
    """
    pattern_set = patterns if patterns is not None else get_pattern_set()
    redacted = text or ""
    secret_count = 0
    flags: list[str] = []
    blocked = False

    for pattern in pattern_set.secrets:
        redacted, replaced = pattern.regex.subn(REDACTION_MARKER, redacted)
        if replaced:
            secret_count += 1
            flags.append(pattern.id)

    for pattern in pattern_set.neurosignals:
        if pattern.regex.search(redacted):
            blocked = True
            flags.append(pattern.id)

    return GovernanceResult(
        redacted=redacted,
        secret_count=secret_count,
        flags=tuple(sorted(flags)),
        blocked=blocked,
    )
