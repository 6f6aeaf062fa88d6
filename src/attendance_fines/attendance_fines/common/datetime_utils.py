from __future__ import annotations

from datetime import date, datetime, time


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_datetime(value: str) -> datetime:
    """Parse an ISO-8601 timestamp (``2025-03-01T07:45:00``)."""
    return datetime.fromisoformat(value)


def parse_hhmm(value: str) -> time:
    """Parse ``HH:MM`` or ``HH:MM:SS`` into a time-of-day."""
    v = value.strip()
    fmt = "%H:%M:%S" if v.count(":") == 2 else "%H:%M"
    return datetime.strptime(v, fmt).time()


def seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def minutes_between(earlier: time, later: time) -> int:
    """Whole minutes from ``earlier`` to ``later``, rounded down (0 if reversed)."""
    delta = seconds_of_day(later) - seconds_of_day(earlier)
    return max(delta // 60, 0)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
