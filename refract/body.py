"""
Body decoding for OTLP/HTTP trace requests.

Turns a raw request body into an ``ExportTraceServiceRequest``:

    1. read the stream to completion (and close it)
    2. undo the declared Content-Encoding (gzip, zstd or identity)
    3. decode the OTLP protobuf message

Steps 2 and 3 fail with subclasses of ``ParseBodyError`` so the caller
sees one "failed to parse body" condition regardless of which layer
rejected the payload.
"""

from __future__ import annotations

import gzip
import io
import logging
import zlib
from typing import BinaryIO, Optional

import zstandard as zstd
from google.protobuf.message import DecodeError
from opentelemetry.proto.collector.trace.v1.trace_service_pb2 import ExportTraceServiceRequest

from .config import get_config
from .exceptions import BodyReadError, DecompressionError, MalformedPayloadError

__all__ = [
    "GZIP_ENCODING",
    "ZSTD_ENCODING",
    "read_body",
    "decompress_body",
    "parse_trace_request",
    "parse_otlp_body",
]

logger = logging.getLogger("refract.body")

GZIP_ENCODING = "gzip"
ZSTD_ENCODING = "zstd"


def read_body(body: BinaryIO, max_body_bytes: int = 0) -> bytes:
    """
    Read ``body`` to completion and close it.

    The stream is closed exactly once, whether reading succeeds or not.

    Args:
        body: Readable binary stream.
        max_body_bytes: Reject bodies larger than this; 0 means no limit.

    Raises:
        BodyReadError: If the stream fails or exceeds ``max_body_bytes``.
    """
    try:
        if max_body_bytes > 0:
            data = body.read(max_body_bytes + 1)
            if len(data) > max_body_bytes:
                raise BodyReadError(f"request body exceeds {max_body_bytes} bytes")
        else:
            data = body.read()
    except OSError as exc:
        raise BodyReadError(f"failed to read request body: {exc}") from exc
    finally:
        body.close()
    return bytes(data)


def _gunzip(raw: bytes) -> bytes:
    if not raw:
        raise DecompressionError("empty gzip body")
    try:
        with gzip.GzipFile(fileobj=io.BytesIO(raw)) as reader:
            return reader.read()
    except (OSError, EOFError, zlib.error) as exc:
        logger.warning(f"Gzip decompression failed: {exc}")
        raise DecompressionError() from exc


def _unzstd(raw: bytes) -> bytes:
    dctx = zstd.ZstdDecompressor()
    chunks = []
    remaining = raw
    try:
        # One decompressobj per frame; every frame must reach its end marker
        while remaining:
            dobj = dctx.decompressobj()
            chunks.append(dobj.decompress(remaining))
            if not dobj.eof:
                logger.warning("Zstd decompression failed: truncated frame")
                raise DecompressionError()
            remaining = dobj.unused_data
    except zstd.ZstdError as exc:
        logger.warning(f"Zstd decompression failed: {exc}")
        raise DecompressionError() from exc
    return b"".join(chunks)


def decompress_body(raw: bytes, content_encoding: str) -> bytes:
    """
    Undo the declared content encoding of ``raw``.

    "gzip" and "zstd" are decompressed; any other value, including the
    empty string, is treated as identity.

    Raises:
        DecompressionError: If ``raw`` is not valid for the declared encoding.
    """
    if content_encoding == GZIP_ENCODING:
        return _gunzip(raw)
    if content_encoding == ZSTD_ENCODING:
        return _unzstd(raw)
    return raw


def parse_trace_request(data: bytes) -> ExportTraceServiceRequest:
    """
    Decode ``data`` as an OTLP ``ExportTraceServiceRequest``.

    Raises:
        MalformedPayloadError: If ``data`` is not a valid encoding of the message.
    """
    request = ExportTraceServiceRequest()
    try:
        request.ParseFromString(data)
    except DecodeError as exc:
        logger.warning(f"OTLP trace request decode failed: {exc}")
        raise MalformedPayloadError() from exc
    return request


def parse_otlp_body(
    body: BinaryIO,
    content_encoding: str,
    max_body_bytes: Optional[int] = None,
) -> ExportTraceServiceRequest:
    """
    Read, decompress and decode an OTLP/HTTP trace request body.

    Args:
        body: Readable binary stream, closed once consumed.
        content_encoding: Declared Content-Encoding of the body.
        max_body_bytes: Raw size limit; defaults to the configured value.

    Raises:
        BodyReadError: If the body cannot be read.
        ParseBodyError: If the body cannot be decompressed or decoded.
    """
    if max_body_bytes is None:
        max_body_bytes = get_config().max_body_bytes
    raw = read_body(body, max_body_bytes)
    data = decompress_body(raw, content_encoding)
    logger.debug(f"Read {len(raw)} body bytes ({content_encoding or 'identity'}), {len(data)} decoded")
    return parse_trace_request(data)
