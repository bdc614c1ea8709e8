"""Object classification: kind, summary, ancestor depth, and rarity."""

from __future__ import annotations

import re
from typing import Any

from introspector.models import RarityKind, RootObjectKind
from introspector.objects.probe import ObjectProbe, PropertyDescriptor, PythonObjectProbe

# Bounds the ancestor walk on cyclic or pathological chains
MAX_PROTOTYPE_HOPS = 32

SYMBOL_SLOT_PREFIX = "Symbol("
INTERNAL_SLOT_PREFIX = "[["

CLOSURE_MARKER_REGEX = re.compile(r"\bclosure\b", re.IGNORECASE)

_DEFAULT_PROBE = PythonObjectProbe()


def infer_kind(value: Any, probe: ObjectProbe | None = None) -> RootObjectKind:
    """Infer the coarse kind of an inspected root object.

    Byte buffers are checked before callables, and callables before typed
    arrays. Anything else (including None) is "other".
    """
    probe = probe or _DEFAULT_PROBE
    if value is None:
        return RootObjectKind.OTHER
    if probe.is_byte_buffer(value):
        return RootObjectKind.BUFFER
    if probe.is_callable(value):
        return RootObjectKind.FUNCTION
    if probe.element_size(value) and probe.length(value) is not None:
        return RootObjectKind.TYPED_ARRAY
    return RootObjectKind.OTHER


def summarize(value: Any, probe: ObjectProbe | None = None) -> str:
    """Summarize an inspected root object as a short hint string.

    Examples:
        >>> summarize(None)
        'null|undefined'
        >>> summarize(len)
        'function len()'
        >>> summarize(b"abc")
        'buffer(len=3)'
        >>> summarize({})
        'dict'
    """
    probe = probe or _DEFAULT_PROBE
    if value is None:
        return "null|undefined"
    if probe.is_callable(value):
        name = probe.callable_name(value)
        return f"function {name}()" if name else "anonymous function"
    if probe.is_byte_buffer(value):
        length = probe.length(value)
        return f"buffer(len={length if length is not None else '?'})"
    return probe.type_name(value) or "object"


def prototype_depth(value: Any, probe: ObjectProbe | None = None) -> int:
    """Count ancestor links from value until none remains.

    The walk stops after MAX_PROTOTYPE_HOPS links so cyclic chains terminate.
    """
    probe = probe or _DEFAULT_PROBE
    if value is None:
        return 0
    depth = 0
    current = probe.ancestor_of(value)
    while current is not None and depth < MAX_PROTOTYPE_HOPS:
        depth += 1
        current = probe.ancestor_of(current)
    return depth


def classify_rarity(
    value: Any,
    descriptor: PropertyDescriptor | None,
    slot_name: str | None,
    probe: ObjectProbe | None = None,
) -> RarityKind | None:
    """Classify how unusual an inspected property is.

    Precedence: non-enumerable descriptor, symbolic slot name, internal
    ``[[slot]]`` name, then callables whose source mentions a closure.

    Returns:
        The rarity kind, or None for an ordinary property.
    """
    probe = probe or _DEFAULT_PROBE
    if descriptor is not None and not descriptor.enumerable:
        return RarityKind.NON_ENUMERABLE
    if slot_name and slot_name.startswith(SYMBOL_SLOT_PREFIX):
        return RarityKind.SYMBOLIC
    if slot_name and slot_name.startswith(INTERNAL_SLOT_PREFIX):
        return RarityKind.INTERNAL_SLOT
    if value is not None and probe.is_callable(value):
        if CLOSURE_MARKER_REGEX.search(probe.render_source(value)):
            return RarityKind.CLOSURE_CAPTURE
    return None
