"""
Minutes Transformer

Normalizes the heterogeneous "minutes played" field of a box score line
into fractional minutes.
"""

import re
from enum import Enum
from typing import Any


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


class MinutesKind(str, Enum):
    """Shape of a raw minutes value."""

    ABSENT = "absent"
    NUMBER = "number"
    BARE = "bare"  # text without a colon, e.g. "34"
    CLOCK = "clock"  # "MM:SS"
    OTHER = "other"


def classify_minutes(value: Any) -> MinutesKind:
    """Classify a raw minutes value before parsing it."""
    if value is None or value == "":
        return MinutesKind.ABSENT
    if isinstance(value, str):
        return MinutesKind.CLOCK if ":" in value else MinutesKind.BARE
    # bool is an int subclass but never a minutes count
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return MinutesKind.NUMBER
    return MinutesKind.OTHER


def _parse_int_prefix(text: str) -> int | None:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else None


def parse_minutes(value: Any) -> float:
    """
    Convert minutes played to fractional minutes.

    Handles:
    - None / "" -> 0
    - "34" -> 34.0 (leading integer of the text, "abc" -> 0)
    - 34.5 -> 34.5 (numbers are returned as-is)
    - "34:30" -> 34.5 (split on the first colon, seconds / 60)
    - anything else -> 0

    Examples:
        >>> parse_minutes("34:30")
        34.5
        >>> parse_minutes("12")
        12.0
        >>> parse_minutes(None)
        0.0
    """
    kind = classify_minutes(value)

    if kind is MinutesKind.NUMBER:
        return float(value)

    if kind is MinutesKind.BARE:
        minutes = _parse_int_prefix(value)
        return float(minutes) if minutes is not None else 0.0

    if kind is MinutesKind.CLOCK:
        left, right = value.split(":", 1)
        minutes = _parse_int_prefix(left)
        seconds = _parse_int_prefix(right)
        if minutes is None or seconds is None:
            return 0.0
        return minutes + seconds / 60

    return 0.0
