"""Capability probes for inspected runtime values.

The classifier never reflects on values directly. It asks an ObjectProbe a
small set of questions (is it callable, is it a byte buffer, what is its own
property at a key, what is its ancestor) so that hosts with other object
models can plug in their own probe.
"""

from __future__ import annotations

import inspect
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from introspector.logging import get_logger

LOG = get_logger(__name__)


@dataclass(frozen=True)
class PropertyDescriptor:
    """An own property of an inspected value."""

    value: Any
    enumerable: bool = True


class ObjectProbe(Protocol):
    """Questions the classifier may ask about an inspected value."""

    def is_callable(self, value: Any) -> bool: ...

    def is_byte_buffer(self, value: Any) -> bool: ...

    def element_size(self, value: Any) -> int | None: ...

    def length(self, value: Any) -> int | None: ...

    def own_descriptor(self, value: Any, key: str) -> PropertyDescriptor | None: ...

    def ancestor_of(self, value: Any) -> Any | None: ...

    def type_name(self, value: Any) -> str | None: ...

    def callable_name(self, value: Any) -> str | None: ...

    def render_source(self, value: Any) -> str: ...


def _is_hidden_name(name: str) -> bool:
    return name.startswith("_")


class PythonObjectProbe:
    """ObjectProbe for plain Python values.

    Python has no enumerability flag, so underscore-prefixed attributes are
    reported as non-enumerable, mirroring how dir()-style listings and
    debugger variable views hide them. Mapping keys and sequence indices are
    always enumerable.

    Every method is total: exceptions raised by user objects while probing
    degrade to "absent" answers.
    """

    def is_callable(self, value: Any) -> bool:
        return callable(value)

    def is_byte_buffer(self, value: Any) -> bool:
        if isinstance(value, (bytes, bytearray)):
            return True
        try:
            return bool(getattr(value, "_is_buffer", False))
        except Exception:  # noqa: BLE001 - user __getattr__ may raise anything
            return False

    def element_size(self, value: Any) -> int | None:
        try:
            size = getattr(value, "itemsize", None)
        except Exception:  # noqa: BLE001 - user __getattr__ may raise anything
            return None
        if isinstance(size, int) and not isinstance(size, bool) and size > 0:
            return size
        return None

    def length(self, value: Any) -> int | None:
        try:
            return len(value)
        except Exception:  # noqa: BLE001 - unsized values and broken __len__
            return None

    def own_descriptor(self, value: Any, key: str) -> PropertyDescriptor | None:
        if value is None:
            return None
        try:
            return self._own_descriptor(value, key)
        except Exception as exc:  # noqa: BLE001 - best-effort lookup on arbitrary objects
            LOG.debug("own_descriptor_lookup_failed", key=key, error=str(exc))
            return None

    def _own_descriptor(self, value: Any, key: str) -> PropertyDescriptor | None:
        if isinstance(value, Mapping):
            if key in value:
                return PropertyDescriptor(value[key])
            for candidate in value:
                if str(candidate) == key:
                    return PropertyDescriptor(value[candidate])
            return None

        if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
            if key.isdigit() and int(key) < len(value):
                return PropertyDescriptor(value[int(key)])
            return None

        attrs = getattr(value, "__dict__", None)
        if isinstance(attrs, Mapping) and key in attrs:
            return PropertyDescriptor(attrs[key], enumerable=not _is_hidden_name(key))

        for klass in type(value).__mro__:
            slots = klass.__dict__.get("__slots__", ())
            if isinstance(slots, str):
                slots = (slots,)
            if key in slots and hasattr(value, key):
                return PropertyDescriptor(getattr(value, key), enumerable=not _is_hidden_name(key))
        return None

    def ancestor_of(self, value: Any) -> Any | None:
        if isinstance(value, type):
            return value.__base__
        return type(value)

    def type_name(self, value: Any) -> str | None:
        return getattr(type(value), "__name__", None)

    def callable_name(self, value: Any) -> str | None:
        try:
            name = getattr(value, "__name__", None)
        except Exception:  # noqa: BLE001 - user __getattr__ may raise anything
            return None
        if not isinstance(name, str) or not name or name == "<lambda>":
            return None
        return name

    def render_source(self, value: Any) -> str:
        try:
            return inspect.getsource(value)
        except (OSError, TypeError):
            pass
        try:
            return repr(value)
        except Exception:  # noqa: BLE001 - broken __repr__
            return ""
