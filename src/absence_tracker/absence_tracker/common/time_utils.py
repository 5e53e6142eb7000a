"""Clock-time helpers for absence durations.

- parse_clock_time("HH:MM") -> minutes since midnight (raises on invalid input)
- duration_minutes(start, end, allow_over_midnight=False) -> minutes (>= 0)
- format_duration(minutes) -> "HhMM" (e.g. "1h05")
"""
from __future__ import annotations

import math
import re

from ..core.constants import MINUTES_PER_DAY
from ..core.exceptions import InvalidTimeFormat, InvertedTimeRange

_CLOCK_RE = re.compile(r"([01]?\d|2[0-3]):([0-5]\d)", re.ASCII)


def parse_clock_time(value: str) -> int:
    if not isinstance(value, str):
        raise InvalidTimeFormat(f"Invalid time: {value!r}")
    m = _CLOCK_RE.fullmatch(value)
    if not m:
        raise InvalidTimeFormat(f"Invalid time: {value!r}")
    return int(m.group(1)) * 60 + int(m.group(2))


def duration_minutes(start: str, end: str, *, allow_over_midnight: bool = False) -> int:
    s = parse_clock_time(start)
    e = parse_clock_time(end)
    if e < s:
        if allow_over_midnight:
            return (e + MINUTES_PER_DAY) - s
        raise InvertedTimeRange(f"End time {end} is before start time {start}")
    return e - s


def format_duration(total_minutes) -> str:
    """Display formatter; never raises."""

    try:
        total = float(total_minutes)
    except (TypeError, ValueError):
        return "0h00"
    if not math.isfinite(total) or total < 0:
        return "0h00"
    hours, minutes = divmod(int(round(total)), 60)
    return f"{hours}h{minutes:02d}"
