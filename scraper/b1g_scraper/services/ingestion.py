"""Conference ingest orchestrator.

One run walks the conference roster team by team: fetch and merge the
team's schedule, keep games in the requested window, make sure every
referenced team exists, upsert each game once per run, and (when asked)
pull box scores for final games.

Failure scopes:
- request problems raise ValidationError before anything is written
- a failure while processing a team's schedule or games is recorded once
  for that team and skips the rest of its games
- a box score failure is recorded for that event and the team continues

Work is committed after each unit (team batch, game, stat rows) so an
interrupted run keeps its progress and a rerun converges.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.orm import Session

from ..exceptions import TransportError, ValidationError
from ..live.espn import ESPNClient
from ..logging import logger
from ..models import (
    IngestError,
    IngestRequest,
    IngestSummary,
    NormalizedIngestRequest,
    ScheduleGame,
    TeamRef,
)
from ..normalization import resolve_slug
from ..persistence import upsert_game, upsert_team_game_stats, upsert_teams_from_schedule
from ..utils.date_utils import parse_iso_day, season_from_date
from ..utils.datetime_utils import end_of_day_epoch, now_utc, start_of_day_epoch
from .game_status import is_final_status


def current_season_year(now: datetime | None = None) -> int:
    """Season label for today: from July onward it's next year's season."""
    return season_from_date(now or now_utc())


def _parse_day_bound(name: str, value: str | None, *, end_of_day: bool) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        day = parse_iso_day(value)
    except ValueError as exc:
        raise ValidationError(f"{name} must be a YYYY-MM-DD date, got {value!r}") from exc
    return end_of_day_epoch(day) if end_of_day else start_of_day_epoch(day)


def normalize_ingest_request(
    request: IngestRequest | None = None, now: datetime | None = None
) -> NormalizedIngestRequest:
    """Apply defaults and validate an ingest request."""
    request = request or IngestRequest()
    team = request.team.strip().lower() if request.team else None
    team = team or None
    mode = request.mode or ("team" if team else "all")

    since = _parse_day_bound("since", request.since, end_of_day=False)
    until = _parse_day_bound("until", request.until, end_of_day=True)
    if since is not None and until is not None and since > until:
        raise ValidationError("since must be less than or equal to until")
    if mode == "team" and not team:
        raise ValidationError("team is required when mode is 'team'")

    return NormalizedIngestRequest(
        season=request.season if request.season is not None else current_season_year(now),
        mode=mode,
        team=team,
        since=since,
        until=until,
        include_boxscore=bool(request.include_boxscore),
    )


def _select_teams(roster: list[TeamRef], request: NormalizedIngestRequest) -> list[TeamRef]:
    if request.mode == "all":
        return roster
    wanted = resolve_slug(request.team)
    selected = [team for team in roster if team.slug == wanted]
    if not selected:
        raise ValidationError(f'No Big Ten ESPN team found for slug "{request.team}"')
    return selected[:1]


def _error_message(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _ingest_boxscore(
    session: Session,
    client: ESPNClient,
    game: ScheduleGame,
    game_id: int,
    team_ids: dict[str, int],
    summary: IngestSummary,
) -> None:
    boxscore = client.fetch_boxscore(game.external_id)
    if boxscore is None:
        return
    stats = upsert_team_game_stats(session, game_id, team_ids, boxscore)
    session.commit()
    summary.stats_upserted += stats.inserted + stats.updated
    summary.counts.stats_inserted += stats.inserted
    summary.counts.stats_updated += stats.updated


def _ingest_team(
    session: Session,
    client: ESPNClient,
    team: TeamRef,
    request: NormalizedIngestRequest,
    summary: IngestSummary,
    processed_game_ids: set[str],
) -> None:
    schedule = client.fetch_team_schedule(team.external_id or "", request.season)
    games = [game for game in schedule if request.in_window(game.date)]

    team_ids, team_counts = upsert_teams_from_schedule(session, games)
    session.commit()
    summary.counts.merge(team_counts)

    for game in games:
        if game.external_id in processed_game_ids:
            continue
        processed_game_ids.add(game.external_id)

        result = upsert_game(session, game, team_ids)
        session.commit()
        summary.games_upserted += 1
        summary.counts.games_inserted += int(result.inserted)
        summary.counts.games_updated += int(result.updated)

        if not request.include_boxscore or not is_final_status(game.status):
            continue

        try:
            _ingest_boxscore(session, client, game, result.id, team_ids, summary)
        except Exception as exc:
            session.rollback()
            logger.warning(
                "ingest_boxscore_failed",
                team=team.slug,
                event_id=game.external_id,
                error=str(exc),
            )
            summary.errors.append(
                IngestError(team=team.slug, event_id=game.external_id, message=_error_message(exc))
            )

    logger.info(
        "ingest_team_complete",
        team=team.slug,
        schedule_games=len(schedule),
        window_games=len(games),
    )


def run_ingest(
    session: Session,
    client: ESPNClient,
    request: IngestRequest | None = None,
    *,
    now: datetime | None = None,
) -> IngestSummary:
    """Run one ingest pass and return its summary.

    Raises ValidationError for a bad request. Per-team and per-event failures
    never raise; they are reported in ``summary.errors``.
    """
    normalized = normalize_ingest_request(request, now=now)
    summary = IngestSummary(
        mode=normalized.mode,
        season=normalized.season,
        include_boxscore=normalized.include_boxscore,
    )
    logger.info(
        "ingest_run_started",
        mode=normalized.mode,
        season=normalized.season,
        team=normalized.team,
        since=normalized.since,
        until=normalized.until,
        include_boxscore=normalized.include_boxscore,
    )

    try:
        roster = client.fetch_conference_roster()
    except TransportError as exc:
        logger.error("ingest_roster_failed", status=exc.status_code, error=str(exc))
        summary.errors.append(IngestError(team=normalized.team, message=_error_message(exc)))
        return summary

    processed_game_ids: set[str] = set()
    for team in _select_teams(roster, normalized):
        summary.teams_processed += 1
        try:
            _ingest_team(session, client, team, normalized, summary, processed_game_ids)
        except Exception as exc:
            session.rollback()
            logger.warning("ingest_team_failed", team=team.slug, error=str(exc), exc_info=True)
            summary.errors.append(IngestError(team=team.slug, message=_error_message(exc)))

    logger.info(
        "ingest_run_finished",
        mode=summary.mode,
        season=summary.season,
        teams_processed=summary.teams_processed,
        games_upserted=summary.games_upserted,
        stats_upserted=summary.stats_upserted,
        errors=len(summary.errors),
    )
    return summary
