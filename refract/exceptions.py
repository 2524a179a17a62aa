"""
Translation errors for refract.
"""

__all__ = [
    "TranslateError",
    "BodyReadError",
    "ParseBodyError",
    "DecompressionError",
    "MalformedPayloadError",
]


class TranslateError(Exception):
    """Base class for all translation failures."""
    pass


class BodyReadError(TranslateError):
    """Raised when the request body stream cannot be fully read."""
    pass


class ParseBodyError(TranslateError):
    """Raised when the request body cannot be turned into an OTLP request.

    Decompression and decode failures both surface as this error so callers
    only have to handle a single "failed to parse body" condition. The
    library error is available as ``__cause__``.
    """

    def __init__(self, message: str = "failed to parse body") -> None:
        super().__init__(message)


class DecompressionError(ParseBodyError):
    """Raised when the body does not match its declared content encoding."""
    pass


class MalformedPayloadError(ParseBodyError):
    """Raised when the body does not decode as an ExportTraceServiceRequest."""
    pass
