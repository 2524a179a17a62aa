"""
Span status and kind normalization.

OTLP changed how span status is reported: older senders set
``deprecated_code``, newer ones set ``code``. The rules below follow the
backward compatibility notes in the trace proto:

https://github.com/open-telemetry/opentelemetry-proto/blob/59c488bfb8fb6d0458ad6425758b70259ff4a2bd/opentelemetry/proto/trace/v1/trace.proto#L230

The current upstream schema no longer declares ``deprecated_code`` (field
1 is reserved), so a value sent by a legacy exporter is kept by protobuf as
an unknown field and read from there.
"""

from __future__ import annotations

from typing import Optional

from google.protobuf.unknown_fields import UnknownFieldSet
from opentelemetry.proto.trace.v1.trace_pb2 import Span, Status

__all__ = [
    "DEPRECATED_STATUS_CODE_OK",
    "DEPRECATED_STATUS_CODE_FIELD",
    "get_deprecated_code",
    "reconcile_status_code",
    "get_span_status_code",
    "get_span_kind",
]

DEPRECATED_STATUS_CODE_OK = 0
DEPRECATED_STATUS_CODE_FIELD = 1

_VARINT_WIRE_TYPE = 0

_SPAN_KINDS = {
    Span.SPAN_KIND_UNSPECIFIED: "unspecified",
    Span.SPAN_KIND_CLIENT: "client",
    Span.SPAN_KIND_SERVER: "server",
    Span.SPAN_KIND_PRODUCER: "producer",
    Span.SPAN_KIND_CONSUMER: "consumer",
    Span.SPAN_KIND_INTERNAL: "internal",
}


def get_deprecated_code(status: Status) -> int:
    """Return the legacy ``deprecated_code`` carried by ``status``.

    Absent means ``DEPRECATED_STATUS_CODE_OK``, the proto3 default. If the
    field was sent more than once the last value wins, as protobuf does for
    scalar fields.
    """
    code = DEPRECATED_STATUS_CODE_OK
    for unknown in UnknownFieldSet(status):
        if unknown.field_number == DEPRECATED_STATUS_CODE_FIELD and unknown.wire_type == _VARINT_WIRE_TYPE:
            code = unknown.data
    return code


def reconcile_status_code(code: int, deprecated_code: int = DEPRECATED_STATUS_CODE_OK) -> int:
    """
    Combine the current and deprecated status codes into one status code.

    Args:
        code: ``Status.code`` (a ``Status.StatusCode`` value).
        deprecated_code: The legacy deprecated status code.

    Returns:
        A ``Status.StatusCode`` value.
    """
    if code == Status.STATUS_CODE_UNSET:
        if deprecated_code == DEPRECATED_STATUS_CODE_OK:
            return Status.STATUS_CODE_UNSET
        return Status.STATUS_CODE_ERROR
    return code


def get_span_status_code(status: Optional[Status]) -> int:
    """Reconciled status code for a span's status, ``UNSET`` if there is none."""
    if status is None:
        return Status.STATUS_CODE_UNSET
    return reconcile_status_code(status.code, get_deprecated_code(status))


def get_span_kind(kind: int) -> str:
    """Name of a ``Span.SpanKind`` value; unknown values map to "unspecified"."""
    return _SPAN_KINDS.get(kind, "unspecified")
