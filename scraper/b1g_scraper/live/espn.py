"""ESPN site-API client for Big Ten men's basketball.

Endpoints (all under ``{base_url}/{sport_path}``):
    teams?groups=7              conference roster
    teams/{id}/schedule         per-team schedule, one season partition per call
    summary?event={id}          header + team box score for one event
    scoreboard?dates=YYYYMMDD   every event on one day
"""

from __future__ import annotations

from datetime import date
from typing import Any

import httpx
from tenacity import Retrying, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config import ESPNConfig
from ..exceptions import TransportError
from ..logging import logger
from ..models import GameBoxscore, ScheduleGame, TeamRef
from ..services.schedule_merge import merge_schedules
from .espn_parser import parse_boxscore, parse_roster, parse_schedule

REGULAR_SEASON = 2
POSTSEASON = 3


class ESPNClient:
    """Synchronous client; one request in flight at a time."""

    def __init__(
        self,
        config: ESPNConfig,
        client: httpx.Client | None = None,
        season_types: list[int] | None = None,
    ) -> None:
        self.config = config
        self.season_types = season_types or [REGULAR_SEASON, POSTSEASON]
        self._owns_client = client is None
        self.client = client or httpx.Client(
            timeout=config.request_timeout_seconds,
            headers={"User-Agent": config.user_agent, "Accept": "application/json"},
        )

    def __enter__(self) -> ESPNClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_client:
            self.client.close()

    def _url(self, path: str) -> str:
        return f"{self.config.sport_url}/{path.lstrip('/')}"

    def _send(self, url: str, params: dict[str, Any]) -> httpx.Response:
        retrying = Retrying(
            stop=stop_after_attempt(max(self.config.max_attempts, 1)),
            wait=wait_exponential(multiplier=self.config.retry_backoff_seconds, max=10),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        )
        for attempt in retrying:
            with attempt:
                return self.client.get(url, params=params)
        raise TransportError(None, url)  # pragma: no cover

    def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        url = self._url(path)
        params = params or {}
        try:
            response = self._send(url, params)
        except httpx.TransportError as exc:
            logger.warning("espn_request_failed", url=url, params=params, error=str(exc))
            raise TransportError(None, url, str(exc)) from exc

        if not 200 <= response.status_code < 300:
            logger.warning("espn_request_bad_status", url=url, params=params, status=response.status_code)
            raise TransportError(response.status_code, url)

        try:
            return response.json()
        except ValueError as exc:
            logger.warning("espn_response_not_json", url=url, params=params)
            raise TransportError(response.status_code, url, "response body is not JSON") from exc

    def fetch_conference_roster(self) -> list[TeamRef]:
        """Fetch the conference's teams, deduplicated by ESPN team id."""
        payload = self._get_json(
            "teams",
            {"groups": self.config.conference_group_id, "limit": self.config.roster_limit},
        )
        roster = parse_roster(payload)
        logger.info("espn_roster_fetched", count=len(roster), group=self.config.conference_group_id)
        return roster

    def fetch_team_schedule_partition(
        self, external_team_id: str, season: int, season_type: int
    ) -> list[ScheduleGame]:
        payload = self._get_json(
            f"teams/{external_team_id}/schedule",
            {"season": season, "seasontype": season_type},
        )
        return parse_schedule(payload, external_team_id)

    def fetch_team_schedule(self, external_team_id: str, season: int) -> list[ScheduleGame]:
        """Fetch every season partition for a team and merge them.

        A failing partition counts as empty since the postseason partition
        404s routinely before March. When every partition fails the last
        TransportError is raised.
        """
        partitions: list[list[ScheduleGame]] = []
        last_error: TransportError | None = None
        for season_type in self.season_types:
            try:
                partitions.append(
                    self.fetch_team_schedule_partition(external_team_id, season, season_type)
                )
            except TransportError as exc:
                last_error = exc
                logger.warning(
                    "espn_schedule_partition_failed",
                    team_id=external_team_id,
                    season=season,
                    season_type=season_type,
                    status=exc.status_code,
                    error=str(exc),
                )
        if not partitions and last_error is not None:
            raise last_error
        merged = merge_schedules(*partitions)
        logger.info(
            "espn_schedule_fetched",
            team_id=external_team_id,
            season=season,
            partitions=len(partitions),
            count=len(merged),
        )
        return merged

    def fetch_boxscore(self, external_game_id: str) -> GameBoxscore | None:
        payload = self._get_json("summary", {"event": external_game_id})
        boxscore = parse_boxscore(payload, external_game_id)
        if boxscore is None:
            logger.info("espn_boxscore_empty", event_id=external_game_id)
        return boxscore

    def fetch_scoreboard(self, day: date) -> list[ScheduleGame]:
        """Fetch every event on ``day``, not tied to a requested team."""
        payload = self._get_json(
            "scoreboard",
            {"dates": day.strftime("%Y%m%d"), "limit": self.config.scoreboard_limit},
        )
        games = parse_schedule(payload)
        logger.info("espn_scoreboard_fetched", day=str(day), count=len(games))
        return games
