"""
OTLP trace request translation.

Converts an OTLP ``ExportTraceServiceRequest`` into flat events grouped by
target dataset:

    ExportTraceServiceRequest
      └─ ResourceSpans        → Batch   (dataset, size_bytes)
           └─ ScopeSpans
                └─ Span       → Event   (attributes, timestamp, sample_rate)

Attributes from the three OTLP scopes are kept apart under
``resourceAttributes``, ``spanAttributes`` and ``eventAttributes`` so that
a key used at more than one scope never overwrites another. Span events do
not become events of their own; their attributes are merged into the owning
span's ``eventAttributes``. Span links are only counted.

The decoded request is never modified.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta, timezone
from typing import Any, BinaryIO, Dict, List

from opentelemetry.proto.collector.trace.v1.trace_service_pb2 import ExportTraceServiceRequest
from opentelemetry.proto.trace.v1.trace_pb2 import ResourceSpans, Span, Status

from .attributes import add_attributes_to_map, attributes_to_dict
from .body import parse_otlp_body
from .exceptions import BodyReadError, ParseBodyError
from .ids import bytes_to_span_id, bytes_to_trace_id
from .metrics import record_failure, record_translation
from .models import AttributeMap, Batch, Event, RequestInfo, TranslationResult
from .sampling import extract_sample_rate
from .status import get_span_kind, get_span_status_code

__all__ = [
    "LIBRARY_NAME_KEY",
    "LIBRARY_VERSION_KEY",
    "translate_trace_request",
    "translate_trace_request_from_reader",
]

logger = logging.getLogger("refract.trace")

LIBRARY_NAME_KEY = "library.name"
LIBRARY_VERSION_KEY = "library.version"

_NANOS_PER_MILLI = 1_000_000
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _unix_nano_to_datetime(unix_nano: int) -> datetime:
    # datetime resolution is microseconds
    return _EPOCH + timedelta(microseconds=unix_nano // 1000)


def _span_event_attributes(span: Span) -> AttributeMap:
    """Attributes of all span events merged into one map, later events win."""
    merged: AttributeMap = {}
    for span_event in span.events:
        add_attributes_to_map(merged, span_event.attributes)
    return merged


def _translate_span(span: Span, resource_attrs: AttributeMap) -> Event:
    status = span.status if span.HasField("status") else None
    status_code = get_span_status_code(status)
    span_kind = get_span_kind(span.kind)

    attrs: Dict[str, Any] = {
        "traceTraceID": bytes_to_trace_id(span.trace_id),
        "traceSpanID": bytes_to_span_id(span.span_id),
        "type": span_kind,
        "spanKind": span_kind,
        "spanName": span.name,
        "durationMs": (span.end_time_unix_nano - span.start_time_unix_nano) / _NANOS_PER_MILLI,
        "startTime": span.start_time_unix_nano,
        "endTime": span.end_time_unix_nano,
        "statusCode": status_code,
        "spanNumLinks": len(span.links),
        "spanNumEvents": len(span.events),
    }
    if span.parent_span_id:
        attrs["traceParentID"] = bytes_to_span_id(span.parent_span_id)
    attrs["error"] = status_code == Status.STATUS_CODE_ERROR
    if status is not None and status.message:
        attrs["statusMessage"] = status.message

    attrs["resourceAttributes"] = dict(resource_attrs)
    attrs["spanAttributes"] = attributes_to_dict(span.attributes)
    attrs["eventAttributes"] = _span_event_attributes(span)
    attrs["time"] = span.start_time_unix_nano

    sample_rate = extract_sample_rate(attrs)
    return Event(
        attributes=attrs,
        timestamp=_unix_nano_to_datetime(span.start_time_unix_nano),
        sample_rate=sample_rate,
    )


def _translate_resource_spans(resource_spans: ResourceSpans, dataset: str) -> Batch:
    resource_attrs: AttributeMap = {}
    if resource_spans.HasField("resource"):
        add_attributes_to_map(resource_attrs, resource_spans.resource.attributes)

    events: List[Event] = []
    for scope_spans in resource_spans.scope_spans:
        scope = scope_spans.scope
        if scope.name:
            resource_attrs[LIBRARY_NAME_KEY] = scope.name
        if scope.version:
            resource_attrs[LIBRARY_VERSION_KEY] = scope.version

        for span in scope_spans.spans:
            events.append(_translate_span(span, resource_attrs))

    return Batch(
        dataset=dataset,
        size_bytes=resource_spans.ByteSize(),
        events=events,
    )


def translate_trace_request(
    request: ExportTraceServiceRequest,
    request_info: RequestInfo,
) -> TranslationResult:
    """
    Translate a decoded OTLP trace request (the OTLP/gRPC path).

    Every span yields exactly one event, and every resource-span group
    yields one batch, in input order. Missing optional fields fall back to
    defaults instead of failing.

    Args:
        request: Decoded ``ExportTraceServiceRequest``. Not modified.
        request_info: Validated request context; ``dataset`` is used
            verbatim for every batch.

    Returns:
        TranslationResult with the request's wire size and its batches.
    """
    start = time.perf_counter()
    batches = [
        _translate_resource_spans(resource_spans, request_info.dataset)
        for resource_spans in request.resource_spans
    ]
    result = TranslationResult(request_size=request.ByteSize(), batches=batches)

    record_translation(result.event_count, result.request_size, time.perf_counter() - start)
    logger.debug(
        f"Translated {result.event_count} spans in {len(batches)} batches "
        f"({result.request_size} bytes) for dataset {request_info.dataset!r}"
    )
    return result


def translate_trace_request_from_reader(
    body: BinaryIO,
    request_info: RequestInfo,
) -> TranslationResult:
    """
    Translate an OTLP/HTTP trace request body.

    The body is read to completion, decompressed according to
    ``request_info.content_encoding``, decoded and translated. The stream
    is always closed.

    Raises:
        BodyReadError: If the body stream cannot be read.
        ParseBodyError: If the body cannot be decompressed or decoded.
    """
    try:
        request = parse_otlp_body(body, request_info.content_encoding)
    except BodyReadError:
        record_failure("read_error")
        raise
    except ParseBodyError:
        record_failure("parse_error")
        raise
    return translate_trace_request(request, request_info)
