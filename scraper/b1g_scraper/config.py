"""
Typed settings for the Big Ten basketball ingestion service.

Uses Pydantic Settings to load configuration from environment variables
with validation and type safety. Settings are loaded from the root .env
file when one exists.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .validate_env import validate_env


class ESPNConfig(BaseModel):
    base_url: str = Field(default="https://site.api.espn.com/apis/site/v2/sports")
    sport_path: str = Field(default="basketball/mens-college-basketball")
    # ESPN "groups" id for the Big Ten conference
    conference_group_id: int = 7
    roster_limit: int = 100
    scoreboard_limit: int = 300
    request_timeout_seconds: float = 15.0
    user_agent: str = "b1g-scraper/1.0"
    # Attempts per request on network failures (non-2xx responses are never retried)
    max_attempts: int = 2
    retry_backoff_seconds: float = 1.0

    @property
    def sport_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/{self.sport_path.strip('/')}"


class IngestConfig(BaseModel):
    # Trailing window used by the scheduled ingest task
    scheduled_window_days: int = Field(default=3)
    # Season partitions requested per team: 2 = regular season, 3 = postseason
    season_types: list[int] = Field(default_factory=lambda: [2, 3])


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    In Docker, environment variables are passed directly. For local
    development the root .env file is read when present.
    """
    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="allow",
    )

    database_url: str = Field(..., alias="DATABASE_URL")

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_async_to_sync(cls, v: str) -> str:
        """Rewrite asyncpg URLs to psycopg; the ingest pipeline is synchronous."""
        if isinstance(v, str) and "asyncpg" in v:
            return v.replace("asyncpg", "psycopg")
        return v

    redis_url: str = Field("redis://localhost:6379/2", alias="REDIS_URL")
    environment: str = Field("development", alias="ENVIRONMENT")
    log_level: str | None = Field(None, alias="LOG_LEVEL")
    espn_config: ESPNConfig = Field(default_factory=ESPNConfig)
    ingest_config: IngestConfig = Field(default_factory=IngestConfig)
    espn_base_url_override: str | None = Field(None, alias="ESPN_BASE_URL")

    @model_validator(mode="after")
    def _apply_espn_overrides(self) -> Settings:
        """Let ESPN_BASE_URL override the nested provider config."""
        if self.espn_base_url_override:
            self.espn_config.base_url = self.espn_base_url_override
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Return cached settings instance.

    Environment variables don't change during runtime, so parsing
    them once is enough.
    """
    validate_env()
    return Settings()


settings = get_settings()
