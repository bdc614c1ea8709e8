"""Governance filtering for free-text finding annotations."""

from introspector.governance.filter import GovernanceResult, apply_governance_filter
from introspector.governance.patterns import (
    DEFAULT_PATTERN_SET,
    REDACTION_MARKER,
    GovernancePattern,
    PatternSet,
    get_pattern_set,
    load_pattern_set,
    reset_pattern_set,
)

__all__ = [
    "DEFAULT_PATTERN_SET",
    "REDACTION_MARKER",
    "GovernancePattern",
    "GovernanceResult",
    "PatternSet",
    "apply_governance_filter",
    "get_pattern_set",
    "load_pattern_set",
    "reset_pattern_set",
]
