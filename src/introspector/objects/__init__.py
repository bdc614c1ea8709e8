"""Classification of inspected runtime values."""

from introspector.objects.classifier import (
    MAX_PROTOTYPE_HOPS,
    classify_rarity,
    infer_kind,
    prototype_depth,
    summarize,
)
from introspector.objects.probe import ObjectProbe, PropertyDescriptor, PythonObjectProbe

__all__ = [
    "MAX_PROTOTYPE_HOPS",
    "ObjectProbe",
    "PropertyDescriptor",
    "PythonObjectProbe",
    "classify_rarity",
    "infer_kind",
    "prototype_depth",
    "summarize",
]
