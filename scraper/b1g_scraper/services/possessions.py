"""Possession estimate for a team box score."""

from __future__ import annotations

import math

from ..models import TeamStatLine

FREE_THROW_POSSESSION_FACTOR = 0.44


def _one_side(stats: TeamStatLine, opponent: TeamStatLine) -> float:
    return (
        (stats.fga or 0)
        + FREE_THROW_POSSESSION_FACTOR * (stats.fta or 0)
        - (stats.oreb or 0)
        + (opponent.tov or 0)
    )


def estimate_possessions(stats: TeamStatLine, opponent: TeamStatLine) -> float | None:
    """Average both teams' FGA + 0.44*FTA - OREB + opponent TOV.

    Missing inputs count as zero. Returns None if the result is not finite.
    """
    estimate = 0.5 * (_one_side(stats, opponent) + _one_side(opponent, stats))
    return estimate if math.isfinite(estimate) else None
