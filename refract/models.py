"""
Data structures produced by the trace translator.

A translation call turns one ``ExportTraceServiceRequest`` into a
:class:`TranslationResult`: one :class:`Batch` per resource-span group,
each holding one :class:`Event` per span. Nothing here outlives the call
that built it; every map and list is freshly allocated per request.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field

__all__ = [
    "AttributeValue",
    "AttributeMap",
    "RequestInfo",
    "Event",
    "Batch",
    "TranslationResult",
]

# Values produced by flattening an OTLP AnyValue. Arrays become lists and
# nested key/value lists become dicts, both holding further AttributeValues.
AttributeValue = Union[str, bool, int, float, bytes, List[Any], Dict[str, Any], None]
AttributeMap = Dict[str, AttributeValue]


class RequestInfo(BaseModel):
    """
    Request context supplied by the transport layer.

    Header/metadata validation happens before the translator sees this
    object; the values are used verbatim.

    Attributes:
        dataset: Dataset name assigned to every batch of the request.
        content_encoding: Declared body encoding ("gzip", "zstd", anything
            else is treated as identity).
    """
    dataset: str = Field(default="", description="Target dataset for all batches")
    content_encoding: str = Field(default="", description="Content-Encoding of the body")

    class Config:
        """Pydantic configuration."""
        frozen = True


@dataclass(slots=True)
class Event:
    """A single translated span, ready for the event pipeline."""
    attributes: Dict[str, Any]
    timestamp: datetime
    sample_rate: int = 0


@dataclass(slots=True)
class Batch:
    """
    Events from one resource-span group.

    ``size_bytes`` is the wire-encoded size of the source ResourceSpans
    message and is used for quota accounting.
    """
    dataset: str
    size_bytes: int
    events: List[Event] = field(default_factory=list)


@dataclass(slots=True)
class TranslationResult:
    """An OTLP trace request translated into per-dataset batches."""
    request_size: int
    batches: List[Batch] = field(default_factory=list)

    @property
    def event_count(self) -> int:
        """Total number of events across all batches."""
        return sum(len(batch.events) for batch in self.batches)
