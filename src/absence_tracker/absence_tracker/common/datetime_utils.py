from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Tuple


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def date_range_preset(name: str, today: date) -> Tuple[str, str]:
    """Resolve a dashboard preset into an inclusive (start, end) ISO pair.

    Supported presets: ``last7days`` (today and the six days before it),
    ``thisMonth`` (first of the month up to today) and ``lastMonth`` (the whole
    previous calendar month).
    """

    if name == "last7days":
        start, end = today - timedelta(days=6), today
    elif name == "thisMonth":
        start, end = today.replace(day=1), today
    elif name == "lastMonth":
        end = today.replace(day=1) - timedelta(days=1)
        start = end.replace(day=1)
    else:
        raise ValueError(f"Unknown date preset: {name!r}")
    return start.isoformat(), end.isoformat()
