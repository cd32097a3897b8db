"""Typed models shared across the provider client, persistence and orchestrator."""

from .schemas import (
    BoxscoreTeam,
    GameBoxscore,
    IngestError,
    IngestMode,
    IngestRequest,
    IngestSummary,
    NormalizedIngestRequest,
    ScheduleGame,
    TeamRef,
    TeamStatLine,
    UpsertCounts,
)

__all__ = [
    "TeamRef",
    "ScheduleGame",
    "TeamStatLine",
    "BoxscoreTeam",
    "GameBoxscore",
    "IngestMode",
    "IngestRequest",
    "NormalizedIngestRequest",
    "IngestError",
    "IngestSummary",
    "UpsertCounts",
]
