"""Shared test helpers for unit tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from introspector.harvest import create_session
from introspector.models import Session
from introspector.objects.probe import PropertyDescriptor

START = datetime(2026, 1, 2, 3, 4, 5, tzinfo=UTC)


class FixedClock:
    """Clock that returns a pinned time until advanced."""

    def __init__(self, moment: datetime = START) -> None:
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def advance(self, **delta: float) -> None:
        self.moment += timedelta(**delta)


class FixedIdSource:
    """IdSource returning a constant suffix."""

    def __init__(self, value: str = "abc123") -> None:
        self.value = value

    def suffix(self) -> str:
        return self.value


class ScriptedProbe:
    """ObjectProbe answering from explicit tables instead of reflection.

    Unknown values are non-callable, non-buffer, unsized, and have no
    ancestors or descriptors.
    """

    def __init__(
        self,
        *,
        callables: set[int] | None = None,
        buffers: set[int] | None = None,
        element_sizes: dict[int, int] | None = None,
        lengths: dict[int, int] | None = None,
        descriptors: dict[tuple[int, str], PropertyDescriptor] | None = None,
        ancestors: dict[int, Any] | None = None,
        names: dict[int, str] | None = None,
        sources: dict[int, str] | None = None,
        type_names: dict[int, str] | None = None,
    ) -> None:
        self.callables = callables or set()
        self.buffers = buffers or set()
        self.element_sizes = element_sizes or {}
        self.lengths = lengths or {}
        self.descriptors = descriptors or {}
        self.ancestors = ancestors or {}
        self.names = names or {}
        self.sources = sources or {}
        self.type_names = type_names or {}

    def is_callable(self, value: Any) -> bool:
        return id(value) in self.callables

    def is_byte_buffer(self, value: Any) -> bool:
        return id(value) in self.buffers

    def element_size(self, value: Any) -> int | None:
        return self.element_sizes.get(id(value))

    def length(self, value: Any) -> int | None:
        return self.lengths.get(id(value))

    def own_descriptor(self, value: Any, key: str) -> PropertyDescriptor | None:
        return self.descriptors.get((id(value), key))

    def ancestor_of(self, value: Any) -> Any | None:
        return self.ancestors.get(id(value))

    def type_name(self, value: Any) -> str | None:
        return self.type_names.get(id(value))

    def callable_name(self, value: Any) -> str | None:
        return self.names.get(id(value))

    def render_source(self, value: Any) -> str:
        return self.sources.get(id(value), "")


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def id_source() -> FixedIdSource:
    return FixedIdSource()


@pytest.fixture
def session(clock: FixedClock, id_source: FixedIdSource) -> Session:
    """Open session with pinned time and id."""
    return create_session(clock=clock, id_source=id_source)


@pytest.fixture
def make_probe() -> type[ScriptedProbe]:
    """The ScriptedProbe class, for tests that need table-driven probes."""
    return ScriptedProbe
