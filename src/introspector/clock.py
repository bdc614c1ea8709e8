"""Time and identifier sources used when creating sessions and findings.

Both collaborators are injectable so callers (and tests) can pin timestamps
and session id suffixes.
"""

from __future__ import annotations

import secrets
import string
from datetime import UTC, datetime
from typing import Protocol

_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits


class Clock(Protocol):
    """Source of the current UTC time."""

    def now(self) -> datetime: ...


class IdSource(Protocol):
    """Source of short random suffixes for session identifiers."""

    def suffix(self) -> str: ...


class SystemClock:
    """Clock backed by the system wall clock."""

    def now(self) -> datetime:
        return datetime.now(UTC)


class RandomIdSource:
    """Six-character lowercase alphanumeric suffixes."""

    def __init__(self, length: int = 6) -> None:
        self._length = length

    def suffix(self) -> str:
        return "".join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(self._length))


def utc_timestamp(clock: Clock) -> str:
    """Render the clock's current time as an ISO 8601 UTC string."""
    return clock.now().astimezone(UTC).isoformat()
