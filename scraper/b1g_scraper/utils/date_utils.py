"""College basketball season helpers."""

from __future__ import annotations

from datetime import date, datetime

# Seasons are labelled by the calendar year they end in; the new season's
# label applies from July onward.
SEASON_ROLLOVER_MONTH = 7


def season_from_date(value: date | datetime) -> int:
    """Season label for a date, e.g. Nov 2024 -> 2025, Mar 2025 -> 2025."""
    if value.month >= SEASON_ROLLOVER_MONTH:
        return value.year + 1
    return value.year


def parse_iso_day(value: str) -> date:
    """Parse a strict YYYY-MM-DD string. Raises ValueError otherwise."""
    text = value.strip()
    if len(text) != 10:
        raise ValueError(f"Expected YYYY-MM-DD, got {value!r}")
    return datetime.strptime(text, "%Y-%m-%d").date()
