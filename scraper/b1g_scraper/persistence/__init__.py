"""Persistence helpers for normalized provider data.

- teams: team lookup by slug or name, upsert, roster seeding
- games: game upsert keyed by provider event id
- boxscores: per-team stat rows keyed by (game, team)
"""

from .boxscores import StatsUpsertResult, upsert_team_game_stats
from .games import GameUpsertResult, resolve_team_id, upsert_game
from .teams import (
    TeamUpsertResult,
    ensure_team,
    seed_known_teams,
    team_slug,
    upsert_teams,
    upsert_teams_from_schedule,
)

__all__ = [
    "TeamUpsertResult",
    "ensure_team",
    "seed_known_teams",
    "team_slug",
    "upsert_teams",
    "upsert_teams_from_schedule",
    "GameUpsertResult",
    "resolve_team_id",
    "upsert_game",
    "StatsUpsertResult",
    "upsert_team_game_stats",
]
