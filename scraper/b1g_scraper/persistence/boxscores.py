"""Team box score persistence."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db import TeamGameStat
from ..logging import logger
from ..models import BoxscoreTeam, GameBoxscore
from ..services.possessions import estimate_possessions
from ..utils.db_queries import any_column_changed, upsert_insert
from .teams import team_slug

STAT_FIELDS = (
    "fgm",
    "fga",
    "fg3m",
    "fg3a",
    "ftm",
    "fta",
    "oreb",
    "dreb",
    "reb",
    "ast",
    "stl",
    "blk",
    "tov",
    "pf",
)


@dataclass
class StatsUpsertResult:
    inserted: int = 0
    updated: int = 0


def _opponent_of(entry: BoxscoreTeam, boxscore: GameBoxscore) -> BoxscoreTeam | None:
    slug = team_slug(entry.team)
    return next(
        (candidate for candidate in boxscore.teams if team_slug(candidate.team) != slug),
        None,
    )


def _stat_values(entry: BoxscoreTeam, opponent: BoxscoreTeam | None) -> dict[str, object]:
    stats = entry.stats
    possessions = stats.possessions_est
    if possessions is None and opponent is not None:
        possessions = estimate_possessions(stats, opponent.stats)

    values: dict[str, object] = {field: getattr(stats, field) for field in STAT_FIELDS}
    values["points"] = stats.points if stats.points is not None else entry.team.score
    values["possessions_est"] = possessions
    return values


def upsert_team_game_stats(
    session: Session,
    game_id: int,
    team_ids: dict[str, int],
    boxscore: GameBoxscore,
) -> StatsUpsertResult:
    """Upsert one stat row per box score side, keyed by (game, team).

    A side whose team isn't in ``team_ids`` is skipped. Possessions come from
    the provider when present, otherwise they are estimated from both sides.
    """
    result = StatsUpsertResult()
    for entry in boxscore.teams:
        slug = team_slug(entry.team)
        team_id = team_ids.get(slug)
        if team_id is None:
            logger.debug("team_stats_side_skipped", game_id=game_id, slug=slug)
            continue

        opponent = _opponent_of(entry, boxscore)
        opp_team_id = team_ids.get(team_slug(opponent.team)) if opponent is not None else None

        values = {
            "game_id": game_id,
            "team_id": team_id,
            "opp_team_id": opp_team_id,
            "is_home": entry.is_home,
            **_stat_values(entry, opponent),
        }
        existing_id = session.execute(
            select(TeamGameStat.id).where(
                TeamGameStat.game_id == game_id, TeamGameStat.team_id == team_id
            )
        ).scalar_one_or_none()

        stmt = upsert_insert(session, TeamGameStat).values(**values)
        update_columns = {
            column: getattr(stmt.excluded, column)
            for column in values
            if column not in ("game_id", "team_id")
        }
        stmt = stmt.on_conflict_do_update(
            index_elements=["game_id", "team_id"],
            set_={**update_columns, "updated_at": func.now()},
            where=any_column_changed(TeamGameStat, update_columns),
        )
        session.execute(stmt)
        if existing_id is None:
            result.inserted += 1
        else:
            result.updated += 1

    logger.debug(
        "team_stats_upserted",
        game_id=game_id,
        external_id=boxscore.external_id,
        inserted=result.inserted,
        updated=result.updated,
    )
    return result
