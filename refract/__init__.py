"""Refract: OTLP trace translator.

Refract converts OpenTelemetry (OTLP) trace export requests into flat,
dataset-partitioned events for an event ingestion pipeline, reporting the
wire size of the request and of each batch for quota accounting.

Example:
    ```python
    from refract import RequestInfo, translate_trace_request_from_reader

    info = RequestInfo(dataset="checkout", content_encoding="gzip")
    result = translate_trace_request_from_reader(request.stream, info)
    for batch in result.batches:
        pipeline.send(batch.dataset, batch.events)
    ```
"""

from .config import TranslatorConfig, configure, get_config, reset_config
from .exceptions import (
    BodyReadError,
    DecompressionError,
    MalformedPayloadError,
    ParseBodyError,
    TranslateError,
)
from .ids import bytes_to_span_id, bytes_to_trace_id
from .models import Batch, Event, RequestInfo, TranslationResult
from .sampling import extract_sample_rate
from .status import get_span_kind, get_span_status_code, reconcile_status_code
from .trace import translate_trace_request, translate_trace_request_from_reader

__version__ = "0.1.0"
__all__ = [
    "TranslatorConfig",
    "configure",
    "get_config",
    "reset_config",
    "TranslateError",
    "BodyReadError",
    "ParseBodyError",
    "DecompressionError",
    "MalformedPayloadError",
    "RequestInfo",
    "Event",
    "Batch",
    "TranslationResult",
    "bytes_to_trace_id",
    "bytes_to_span_id",
    "reconcile_status_code",
    "get_span_status_code",
    "get_span_kind",
    "extract_sample_rate",
    "translate_trace_request",
    "translate_trace_request_from_reader",
]
