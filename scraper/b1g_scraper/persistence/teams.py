"""Team persistence helpers.

Teams are matched by slug OR display name so a team first stored under
one naming convention is refreshed, not duplicated, when it shows up under
another.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from sqlalchemy import func, or_, select, update
from sqlalchemy.orm import Session

from ..db import Team
from ..logging import logger
from ..models import ScheduleGame, TeamRef, UpsertCounts
from ..normalization import B1G_TEAMS, conference_for_slug, get_known_team, slugify_team_name
from ..utils.db_queries import any_column_changed, upsert_insert


@dataclass(frozen=True)
class TeamUpsertResult:
    id: int
    inserted: bool


def team_slug(ref: TeamRef) -> str:
    """Slug used as the team lookup key, rebuilt from the name if blank."""
    slug = ref.slug.strip() if ref.slug else ""
    return slug or slugify_team_name(ref.name or ref.short_name or "team")


def _team_values(ref: TeamRef) -> dict[str, object]:
    slug = team_slug(ref)
    known = get_known_team(slug)
    return {
        "slug": slug,
        "name": known.name if known else ref.name,
        "short_name": known.short_name if known else (ref.short_name or ref.name),
        "conference": conference_for_slug(slug),
        "logo_url": ref.logo_url,
    }


def ensure_team(session: Session, ref: TeamRef) -> TeamUpsertResult:
    """Find a team by slug or name and refresh it, or insert it.

    The insert is an upsert on slug, so two runs inserting the same new team
    at once converge on one row. A logo is never cleared by a sighting that
    has none, and a sighting that changes nothing leaves the row untouched.
    """
    values = _team_values(ref)
    existing_id = session.execute(
        select(Team.id)
        .where(or_(Team.slug == values["slug"], Team.name == values["name"]))
        .order_by(Team.id)
        .limit(1)
    ).scalar_one_or_none()

    if existing_id is not None:
        changes = dict(values)
        changes["logo_url"] = func.coalesce(values["logo_url"], Team.logo_url)
        session.execute(
            update(Team)
            .where(Team.id == existing_id, any_column_changed(Team, changes))
            .values(**changes, updated_at=func.now())
            .execution_options(synchronize_session=False)
        )
        return TeamUpsertResult(id=existing_id, inserted=False)

    stmt = upsert_insert(session, Team).values(**values)
    update_columns = {
        "name": stmt.excluded.name,
        "short_name": stmt.excluded.short_name,
        "conference": stmt.excluded.conference,
        "logo_url": func.coalesce(stmt.excluded.logo_url, Team.logo_url),
    }
    stmt = stmt.on_conflict_do_update(
        index_elements=["slug"],
        set_={**update_columns, "updated_at": func.now()},
        where=any_column_changed(Team, update_columns),
    ).returning(Team.id)
    team_id = session.execute(stmt).scalar_one_or_none()
    if team_id is None:
        # Lost an insert race to an identical row
        team_id = session.execute(select(Team.id).where(Team.slug == values["slug"])).scalar_one()
    logger.info("team_inserted", team_id=team_id, slug=values["slug"], name=values["name"])
    return TeamUpsertResult(id=team_id, inserted=True)


def upsert_teams(session: Session, refs: Iterable[TeamRef]) -> tuple[dict[str, int], UpsertCounts]:
    """Ensure each distinct team exists; later refs for a slug win."""
    unique: dict[str, TeamRef] = {}
    for ref in refs:
        unique[team_slug(ref)] = ref

    counts = UpsertCounts()
    team_ids: dict[str, int] = {}
    for slug, ref in unique.items():
        result = ensure_team(session, ref)
        team_ids[slug] = result.id
        if result.inserted:
            counts.teams_inserted += 1
        else:
            counts.teams_updated += 1
    return team_ids, counts


def upsert_teams_from_schedule(
    session: Session, games: Iterable[ScheduleGame]
) -> tuple[dict[str, int], UpsertCounts]:
    """Ensure every team referenced by a schedule exists, keyed by slug."""
    refs: list[TeamRef] = []
    for game in games:
        refs.extend((game.home_team, game.away_team))
    return upsert_teams(session, refs)


def seed_known_teams(session: Session) -> UpsertCounts:
    """Ensure every rostered conference team exists with its canonical names."""
    refs = [
        TeamRef(slug=team.slug, name=team.name, short_name=team.short_name)
        for team in B1G_TEAMS
    ]
    _, counts = upsert_teams(session, refs)
    logger.info(
        "known_teams_seeded",
        inserted=counts.teams_inserted,
        updated=counts.teams_updated,
    )
    return counts
