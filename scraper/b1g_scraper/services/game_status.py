"""Classify provider status strings as final or not."""

from __future__ import annotations

FINAL_STATUSES = frozenset(
    {
        "final",
        "f",
        "status_final",
        "completed",
        "complete",
        "post",
        "final/ot",
        "f/ot",
        *(f"final/{n}ot" for n in range(2, 6)),
        *(f"f/{n}ot" for n in range(2, 6)),
    }
)


def is_final_status(status: str | None) -> bool:
    """True only for recognized final statuses; anything else is not final."""
    if not status:
        return False
    return status.strip().lower() in FINAL_STATUSES
