"""
Sample rate extraction from translated attributes.
"""

from __future__ import annotations

import logging
import re
from typing import Any, MutableMapping, Optional

__all__ = [
    "SAMPLE_RATE_KEYS",
    "ZERO_SAMPLE_RATE",
    "DEFAULT_SAMPLE_RATE",
    "MAX_SAMPLE_RATE",
    "MIN_SAMPLE_RATE",
    "extract_sample_rate",
]

logger = logging.getLogger("refract.sampling")

# Looked up in this order, first match wins
SAMPLE_RATE_KEYS = ("sampleRate", "SampleRate")

ZERO_SAMPLE_RATE = 0
DEFAULT_SAMPLE_RATE = 1
MAX_SAMPLE_RATE = 2**31 - 1
MIN_SAMPLE_RATE = -(2**31)

# ASCII decimal with optional sign, no whitespace or underscores
_INTEGER_STRING = re.compile(r"[+-]?[0-9]+")


def _sample_rate_key(attrs: MutableMapping[str, Any]) -> Optional[str]:
    for key in SAMPLE_RATE_KEYS:
        if key in attrs:
            return key
    return None


def _clamp(value: int) -> int:
    return max(MIN_SAMPLE_RATE, min(value, MAX_SAMPLE_RATE))


def extract_sample_rate(attrs: MutableMapping[str, Any]) -> int:
    """
    Pop the sample rate out of ``attrs`` and return it as a 32-bit int.

    This MUTATES ``attrs``: the matched sample rate key is removed.

    Returns ``ZERO_SAMPLE_RATE`` and leaves the mapping untouched when no
    sample rate key is present. A key holding something that is not an
    integer or an integer string yields ``DEFAULT_SAMPLE_RATE``. Integers
    are clamped to the signed 32-bit range.

    !!! example
        ```python
        attrs = {"sampleRate": "42", "spanName": "GET /cart"}
        extract_sample_rate(attrs)  # 42
        attrs                       # {"spanName": "GET /cart"}
        ```
    """
    key = _sample_rate_key(attrs)
    if key is None:
        return ZERO_SAMPLE_RATE

    sample_rate = DEFAULT_SAMPLE_RATE
    value = attrs.pop(key)
    # bool is an int subclass but never a valid rate
    if isinstance(value, str):
        if _INTEGER_STRING.fullmatch(value):
            sample_rate = _clamp(int(value))
        else:
            logger.debug(f"Ignoring non-numeric {key}={value!r}")
    elif isinstance(value, int) and not isinstance(value, bool):
        sample_rate = _clamp(value)
    return sample_rate
