"""
Prometheus Metrics for the trace translator.
"""
import logging

from prometheus_client import Counter, Histogram

from .config import get_config

__all__ = [
    "REQUESTS_TRANSLATED",
    "SPANS_TRANSLATED",
    "REQUEST_SIZE",
    "TRANSLATE_LATENCY",
    "record_translation",
    "record_failure",
]

logger = logging.getLogger("refract.metrics")

# --- Counters ---
REQUESTS_TRANSLATED = Counter(
    "refract_requests_translated_total",
    "Total number of OTLP trace requests handled",
    ["outcome"]
)

SPANS_TRANSLATED = Counter(
    "refract_spans_translated_total",
    "Total number of spans translated into events"
)

# --- Histograms ---
REQUEST_SIZE = Histogram(
    "refract_request_size_bytes",
    "Wire-encoded size of translated OTLP trace requests",
    buckets=[256, 1024, 4096, 16384, 65536, 262144, 1048576, 4194304, 16777216]
)

TRANSLATE_LATENCY = Histogram(
    "refract_translate_latency_seconds",
    "Time spent translating a decoded request",
    buckets=[0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0]
)


def record_translation(span_count: int, request_size: int, duration: float):
    """Record a successfully translated request."""
    if not get_config().metrics_enabled:
        return
    REQUESTS_TRANSLATED.labels(outcome="ok").inc()
    SPANS_TRANSLATED.inc(span_count)
    REQUEST_SIZE.observe(request_size)
    TRANSLATE_LATENCY.observe(duration)


def record_failure(outcome: str):
    """Record a request that failed before translation ("parse_error", "read_error")."""
    if not get_config().metrics_enabled:
        return
    REQUESTS_TRANSLATED.labels(outcome=outcome).inc()
