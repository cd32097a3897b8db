"""Merge per-partition team schedules into one deduplicated schedule."""

from __future__ import annotations

from ..models import ScheduleGame

# Undated events lose to any dated copy of the same event
_MISSING_DATE = -1


def merge_schedules(*partitions: list[ScheduleGame]) -> list[ScheduleGame]:
    """Deduplicate by external id across partitions.

    When an event appears more than once, the copy with the later date wins
    and ties keep the first copy seen. Output is sorted by date ascending with
    undated events first.
    """
    merged: dict[str, ScheduleGame] = {}
    for partition in partitions:
        for game in partition:
            existing = merged.get(game.external_id)
            if existing is None:
                merged[game.external_id] = game
                continue
            existing_date = existing.date if existing.date is not None else _MISSING_DATE
            candidate_date = game.date if game.date is not None else _MISSING_DATE
            if candidate_date > existing_date:
                merged[game.external_id] = game
    return sorted(merged.values(), key=lambda game: game.date or 0)
