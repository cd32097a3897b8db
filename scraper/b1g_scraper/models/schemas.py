"""Pydantic models for normalized provider data and ingest requests."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

IngestMode = Literal["all", "team"]


class TeamRef(BaseModel):
    external_id: str | None = None
    slug: str
    name: str
    short_name: str
    logo_url: str | None = None
    score: int | None = None


class ScheduleGame(BaseModel):
    external_id: str
    season: int | None = None
    date: int | None = None  # epoch seconds
    status: str = "Scheduled"
    neutral_site: bool | None = None
    venue: str | None = None
    home_team: TeamRef
    away_team: TeamRef
    team_external_id: str | None = None
    opponent_external_id: str | None = None
    is_home: bool | None = None
    recap_url: str | None = None
    boxscore_url: str | None = None


class TeamStatLine(BaseModel):
    points: int | None = None
    fgm: int | None = None
    fga: int | None = None
    fg3m: int | None = None
    fg3a: int | None = None
    ftm: int | None = None
    fta: int | None = None
    oreb: int | None = None
    dreb: int | None = None
    reb: int | None = None
    ast: int | None = None
    stl: int | None = None
    blk: int | None = None
    tov: int | None = None
    pf: int | None = None
    possessions_est: float | None = None


class BoxscoreTeam(BaseModel):
    team: TeamRef
    is_home: bool | None = None
    stats: TeamStatLine = Field(default_factory=TeamStatLine)


class GameBoxscore(BaseModel):
    external_id: str
    season: int | None = None
    date: int | None = None
    status: str = "Scheduled"
    home_team: TeamRef | None = None
    away_team: TeamRef | None = None
    teams: list[BoxscoreTeam] = Field(default_factory=list)


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class IngestRequest(_CamelModel):
    """Caller-facing ingest request. Every field is optional."""

    season: int | None = None
    team: str | None = None
    mode: IngestMode | None = None
    since: str | None = None
    until: str | None = None
    include_boxscore: bool | None = None


class NormalizedIngestRequest(BaseModel):
    season: int
    mode: IngestMode
    team: str | None = None
    since: int | None = None  # inclusive epoch seconds
    until: int | None = None  # inclusive epoch seconds
    include_boxscore: bool = False

    def in_window(self, game_date: int | None) -> bool:
        """Undated games only pass when no window is set."""
        if self.since is None and self.until is None:
            return True
        if game_date is None:
            return False
        if self.since is not None and game_date < self.since:
            return False
        if self.until is not None and game_date > self.until:
            return False
        return True


class UpsertCounts(_CamelModel):
    teams_inserted: int = 0
    teams_updated: int = 0
    games_inserted: int = 0
    games_updated: int = 0
    stats_inserted: int = 0
    stats_updated: int = 0

    def merge(self, other: UpsertCounts) -> None:
        for field in type(self).model_fields:
            setattr(self, field, getattr(self, field) + getattr(other, field))


class IngestError(_CamelModel):
    team: str | None = None
    event_id: str | None = None
    message: str


class IngestSummary(_CamelModel):
    mode: IngestMode
    season: int
    include_boxscore: bool
    teams_processed: int = 0
    games_upserted: int = 0
    stats_upserted: int = 0
    counts: UpsertCounts = Field(default_factory=UpsertCounts)
    errors: list[IngestError] = Field(default_factory=list)

    def to_response(self) -> dict[str, Any]:
        """camelCase payload; error keys that don't apply are left out."""
        payload = self.model_dump(by_alias=True, exclude={"errors"})
        payload["errors"] = [error.model_dump(by_alias=True, exclude_none=True) for error in self.errors]
        return payload
