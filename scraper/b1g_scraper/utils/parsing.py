"""
Generic, format-agnostic parsing utilities.

Provider payloads are untrusted: numbers may arrive as ints, floats,
numeric strings, "-" placeholders or garbage. These helpers never raise.
"""

from __future__ import annotations

import math
from typing import Any


def parse_int(value: Any) -> int | None:
    """Parse a value to an integer, flooring fractional input.

    Accepts strings, ints, floats, or None. Returns None for empty strings,
    "-", non-numeric text and non-finite numbers.
    """
    if isinstance(value, bool):
        return None
    if value in (None, "", "-"):
        return None
    try:
        return math.floor(float(value))
    except (ValueError, TypeError, OverflowError):
        return None


def parse_float(value: Any) -> float | None:
    """Parse a value to a finite float."""
    if isinstance(value, bool):
        return None
    if value in (None, "", "-"):
        return None
    try:
        result = float(value)
    except (ValueError, TypeError):
        return None
    if not math.isfinite(result):
        return None
    return result


def parse_made_attempted(value: Any) -> tuple[int | None, int | None]:
    """Split a "made-attempted" display string such as "25-58".

    Either half is None when it is missing or not a number.
    """
    if value is None:
        return None, None
    text = str(value).strip()
    if "-" not in text:
        return None, None
    made, _, attempted = text.partition("-")
    return parse_int(made.strip()), parse_int(attempted.strip())
