"""Tests for the possession estimate."""

from __future__ import annotations

import pytest

from b1g_scraper.models import TeamStatLine
from b1g_scraper.services.possessions import estimate_possessions


class TestEstimatePossessions:
    """Tests for estimate_possessions."""

    def test_worked_example(self):
        team = TeamStatLine(fga=70, fta=20, oreb=10, tov=12)
        opponent = TeamStatLine(fga=65, fta=15, oreb=8, tov=14)
        # (70 + 8.8 - 10 + 14 + 65 + 6.6 - 8 + 12) / 2
        assert estimate_possessions(team, opponent) == pytest.approx(79.2)

    def test_is_symmetric(self):
        team = TeamStatLine(fga=70, fta=20, oreb=10, tov=12)
        opponent = TeamStatLine(fga=65, fta=15, oreb=8, tov=14)
        assert estimate_possessions(team, opponent) == pytest.approx(estimate_possessions(opponent, team))

    def test_missing_inputs_count_as_zero(self):
        assert estimate_possessions(TeamStatLine(fga=60), TeamStatLine()) == pytest.approx(30.0)
        assert estimate_possessions(TeamStatLine(), TeamStatLine()) == 0.0
