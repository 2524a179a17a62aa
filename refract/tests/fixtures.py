"""
Builders for OTLP protobuf test payloads.
"""

from __future__ import annotations

from typing import Any

from opentelemetry.proto.collector.trace.v1.trace_service_pb2 import ExportTraceServiceRequest
from opentelemetry.proto.common.v1.common_pb2 import AnyValue, KeyValue
from opentelemetry.proto.trace.v1.trace_pb2 import Span

TRACE_ID = bytes.fromhex("5b8efff798038103d269b633813fc60c")
SPAN_ID = bytes.fromhex("eee19b7ec3c1b174")
PARENT_SPAN_ID = bytes.fromhex("eee19b7ec3c1b173")


def any_value(value: Any) -> AnyValue:
    """Wrap a native value in an AnyValue."""
    if isinstance(value, bool):
        return AnyValue(bool_value=value)
    if isinstance(value, int):
        return AnyValue(int_value=value)
    if isinstance(value, float):
        return AnyValue(double_value=value)
    if isinstance(value, bytes):
        return AnyValue(bytes_value=value)
    if isinstance(value, list):
        out = AnyValue()
        out.array_value.values.extend(any_value(v) for v in value)
        return out
    if isinstance(value, dict):
        out = AnyValue()
        out.kvlist_value.values.extend(key_values(value))
        return out
    return AnyValue(string_value=value)


def key_values(attrs: dict) -> list[KeyValue]:
    return [KeyValue(key=k, value=any_value(v)) for k, v in attrs.items()]


def make_span(
    name: str = "GET /cart",
    kind: int = Span.SPAN_KIND_SERVER,
    start: int = 1_000_000_000,
    end: int = 1_050_000_000,
    trace_id: bytes = TRACE_ID,
    span_id: bytes = SPAN_ID,
    parent_span_id: bytes = b"",
    attributes: dict | None = None,
) -> Span:
    span = Span(
        trace_id=trace_id,
        span_id=span_id,
        parent_span_id=parent_span_id,
        name=name,
        kind=kind,
        start_time_unix_nano=start,
        end_time_unix_nano=end,
    )
    span.attributes.extend(key_values(attributes or {}))
    return span


def make_request(*groups: dict) -> ExportTraceServiceRequest:
    """
    Build a request from resource-span group descriptions.

    Each group is a dict with optional ``resource`` (attribute dict) and
    ``scopes``: a list of dicts with optional ``name``/``version`` and a
    list of ``spans``.
    """
    request = ExportTraceServiceRequest()
    for group in groups:
        resource_spans = request.resource_spans.add()
        if "resource" in group:
            resource_spans.resource.attributes.extend(key_values(group["resource"]))
        for scope in group.get("scopes", []):
            scope_spans = resource_spans.scope_spans.add()
            if scope.get("name"):
                scope_spans.scope.name = scope["name"]
            if scope.get("version"):
                scope_spans.scope.version = scope["version"]
            scope_spans.spans.extend(scope.get("spans", []))
    return request


def checkout_request() -> ExportTraceServiceRequest:
    """One resource, one scope, one SERVER span named "GET /cart"."""
    return make_request({
        "resource": {"service.name": "checkout"},
        "scopes": [{"name": "io.opentelemetry.http", "version": "1.2.0", "spans": [make_span()]}],
    })
