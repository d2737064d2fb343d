"""Interval arithmetic over time-of-day values.

Intervals are half-open ``[start, end)`` in minutes since midnight. An
interval whose end is earlier than its start crosses midnight and ends on
the following day.
"""

from __future__ import annotations

import re
from datetime import time
from typing import Union

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import InvalidFormatError

TimeLike = Union[str, time]

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{1,2})$")


def to_minutes(value: TimeLike) -> int:
    """Convert ``"HH:MM"`` (or a ``datetime.time``) to minutes since midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute

    m = _HHMM_RE.match(value) if isinstance(value, str) else None
    if not m:
        raise InvalidFormatError(f"Invalid time value: {value!r}")

    hour, minute = int(m.group(1)), int(m.group(2))
    if hour > 23 or minute > 59:
        raise InvalidFormatError(f"Time out of range: {value!r}")
    return hour * 60 + minute


def _span(start: TimeLike, end: TimeLike) -> tuple[int, int]:
    s = to_minutes(start)
    e = to_minutes(end)
    if e < s:
        e += MINUTES_PER_DAY
    return s, e


def duration_hours(start: TimeLike, end: TimeLike) -> float:
    """Length of the interval in hours, wrapping past midnight when end < start.

    Equal start and end yield 0.0.
    """
    s, e = _span(start, end)
    return (e - s) / 60


def overlaps(start1: TimeLike, end1: TimeLike, start2: TimeLike, end2: TimeLike) -> bool:
    """True when the two intervals share at least one minute.

    The second interval is also tried one day earlier and one day later, so
    an overnight shift collides with the early hours of the same date.
    Touching endpoints do not overlap.
    """
    s1, e1 = _span(start1, end1)
    s2, e2 = _span(start2, end2)

    for offset in (-MINUTES_PER_DAY, 0, MINUTES_PER_DAY):
        if s1 < e2 + offset and s2 + offset < e1:
            return True
    return False
