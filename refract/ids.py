"""
Hex encoding of OTLP trace and span identifiers.
"""

from __future__ import annotations

__all__ = [
    "TRACE_ID_SHORT_LENGTH",
    "TRACE_ID_LONG_LENGTH",
    "bytes_to_trace_id",
    "bytes_to_span_id",
]

TRACE_ID_SHORT_LENGTH = 8
TRACE_ID_LONG_LENGTH = 16

_ZERO_HALF = bytes(TRACE_ID_SHORT_LENGTH)


def bytes_to_trace_id(trace_id: bytes) -> str:
    """
    Encode a raw trace ID as lowercase hex.

    128-bit IDs whose high 8 bytes are all zero are legacy 64-bit IDs that
    were zero-padded on the way in, e.g. ``0000000000000000f798a1e7f33c8af6``.
    Those are shortened to the 16-char form. Every other length is encoded
    as-is.

    !!! example
        ```python
        bytes_to_trace_id(bytes(8) + b"\\xf7\\x98\\xa1\\xe7\\xf3\\x3c\\x8a\\xf6")
        # 'f798a1e7f33c8af6'
        ```
    """
    if len(trace_id) == TRACE_ID_LONG_LENGTH and trace_id[:TRACE_ID_SHORT_LENGTH] == _ZERO_HALF:
        trace_id = trace_id[TRACE_ID_SHORT_LENGTH:]
    return trace_id.hex()


def bytes_to_span_id(span_id: bytes) -> str:
    """Encode a raw span ID as lowercase hex."""
    return span_id.hex()
