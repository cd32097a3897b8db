"""
Low-level timezone and timestamp utilities.

Domain-agnostic helpers for UTC datetimes and epoch seconds. Season rules
belong in date_utils.py.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any

SECONDS_PER_DAY = 86400


def now_utc() -> datetime:
    """Return the current timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def today_utc() -> date:
    """Return the current date in UTC timezone."""
    return now_utc().date()


def date_to_utc_datetime(day: date) -> datetime:
    """Midnight UTC at the start of ``day``."""
    return datetime(day.year, day.month, day.day, tzinfo=timezone.utc)


def iso_to_epoch_seconds(value: Any) -> int | None:
    """Parse an ISO-8601 timestamp to whole epoch seconds.

    ESPN writes "2024-01-31T23:59Z". Naive timestamps are treated as UTC.
    Returns None for anything unparseable.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = f"{text[:-1]}+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() // 1)


def start_of_day_epoch(day: date) -> int:
    return int(date_to_utc_datetime(day).timestamp())


def end_of_day_epoch(day: date) -> int:
    """Last second of ``day`` in UTC, inclusive."""
    return start_of_day_epoch(day) + SECONDS_PER_DAY - 1


def trailing_days(days: int, *, today: date | None = None) -> tuple[date, date]:
    """Return the (start, end) dates covering the last ``days`` days through today."""
    end = today or today_utc()
    return end - timedelta(days=max(days - 1, 0)), end
