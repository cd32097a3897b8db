"""Game persistence helpers."""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from ..db import Game
from ..exceptions import DataIntegrityError
from ..logging import logger
from ..models import ScheduleGame, TeamRef
from ..utils.db_queries import any_column_changed, upsert_insert
from .teams import ensure_team, team_slug


@dataclass(frozen=True)
class GameUpsertResult:
    id: int
    inserted: bool
    updated: bool


def resolve_team_id(session: Session, ref: TeamRef, team_ids: dict[str, int]) -> int:
    """Look the team up by slug, ensuring it exists when it isn't known yet.

    ``team_ids`` is updated in place so later games reuse the id.
    """
    slug = team_slug(ref)
    team_id = team_ids.get(slug)
    if team_id is None:
        team_id = ensure_team(session, ref).id
        team_ids[slug] = team_id
    return team_id


def upsert_game(session: Session, game: ScheduleGame, team_ids: dict[str, int]) -> GameUpsertResult:
    """Insert or update a game keyed by its provider event id.

    A game whose columns all match the stored row is left untouched.

    Raises DataIntegrityError when both sides resolve to the same team.
    """
    home_team_id = resolve_team_id(session, game.home_team, team_ids)
    away_team_id = resolve_team_id(session, game.away_team, team_ids)
    if home_team_id == away_team_id:
        raise DataIntegrityError(
            f"Invalid team mapping for game {game.external_id}: "
            f"home and away both resolve to team {home_team_id}"
        )

    values = {
        "external_id": game.external_id,
        "season": game.season,
        "date": game.date,
        "status": game.status,
        "neutral_site": game.neutral_site,
        "venue": game.venue,
        "home_team_id": home_team_id,
        "away_team_id": away_team_id,
        "home_score": game.home_team.score,
        "away_score": game.away_team.score,
    }
    existing_id = session.execute(
        select(Game.id).where(Game.external_id == game.external_id)
    ).scalar_one_or_none()

    stmt = upsert_insert(session, Game).values(**values)
    update_columns = {
        column: getattr(stmt.excluded, column)
        for column in values
        if column != "external_id"
    }
    stmt = stmt.on_conflict_do_update(
        index_elements=["external_id"],
        set_={**update_columns, "updated_at": func.now()},
        where=any_column_changed(Game, update_columns),
    ).returning(Game.id)
    game_id = session.execute(stmt).scalar_one_or_none()
    if game_id is None:
        # Unchanged, or an identical row landed after the lookup
        game_id = existing_id
        if game_id is None:
            game_id = session.execute(
                select(Game.id).where(Game.external_id == game.external_id)
            ).scalar_one()
    inserted = existing_id is None

    logger.debug(
        "game_upserted",
        game_id=game_id,
        external_id=game.external_id,
        status=game.status,
        inserted=inserted,
    )
    return GameUpsertResult(id=game_id, inserted=inserted, updated=not inserted)
