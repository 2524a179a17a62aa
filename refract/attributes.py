"""
Flattening of OTLP typed attributes into plain Python mappings.

OTLP carries attributes as ``KeyValue`` lists whose values are ``AnyValue``
oneofs. The translator needs ordinary dicts, so each value is converted to
its closest native type:

    ==============  =====================
    AnyValue field  Python type
    ==============  =====================
    string_value    str
    bool_value      bool
    int_value       int
    double_value    float
    bytes_value     bytes
    array_value     list (of converted values)
    kvlist_value    dict (of converted values)
    (unset)         None
    ==============  =====================
"""

from __future__ import annotations

from typing import Iterable, MutableMapping

from opentelemetry.proto.common.v1.common_pb2 import AnyValue, KeyValue

from .models import AttributeMap, AttributeValue

__all__ = [
    "any_value_to_native",
    "add_attributes_to_map",
    "attributes_to_dict",
]


def any_value_to_native(value: AnyValue) -> AttributeValue:
    """Convert one ``AnyValue`` to a native Python value."""
    kind = value.WhichOneof("value")
    if kind is None:
        return None
    if kind == "array_value":
        return [any_value_to_native(v) for v in value.array_value.values]
    if kind == "kvlist_value":
        return attributes_to_dict(value.kvlist_value.values)
    # string_value, bool_value, int_value, double_value, bytes_value
    return getattr(value, kind)


def add_attributes_to_map(
    target: MutableMapping[str, AttributeValue],
    attributes: Iterable[KeyValue],
) -> MutableMapping[str, AttributeValue]:
    """
    Insert every attribute into ``target``.

    Keys are processed in input order; a later duplicate key overwrites an
    earlier one, whether it came from this list or was already in
    ``target``.

    Args:
        target: Mapping to populate. Modified in place.
        attributes: OTLP ``KeyValue`` list (resource, span or event scope).

    Returns:
        ``target``, for chaining.
    """
    for attr in attributes:
        target[attr.key] = any_value_to_native(attr.value)
    return target


def attributes_to_dict(attributes: Iterable[KeyValue]) -> AttributeMap:
    """Flatten ``attributes`` into a new dict."""
    return add_attributes_to_map({}, attributes)
