"""Celery tasks for scheduled conference ingestion."""

from __future__ import annotations

from datetime import date
from typing import Any

from celery import shared_task

from ..config import settings
from ..db import get_session
from ..live.espn import ESPNClient
from ..logging import logger
from ..models import IngestRequest
from ..services.ingestion import run_ingest
from ..utils.datetime_utils import trailing_days
from ..utils.redis_lock import LOCK_TIMEOUT_1HOUR, acquire_redis_lock, release_redis_lock

INGEST_LOCK_NAME = "lock:b1g_conference_ingest"


def scheduled_ingest_request(
    window_days: int,
    *,
    include_boxscore: bool = True,
    season: int | None = None,
    today: date | None = None,
) -> IngestRequest:
    """All-teams request covering the trailing ``window_days`` days."""
    start, end = trailing_days(window_days, today=today)
    return IngestRequest(
        mode="all",
        season=season,
        since=start.isoformat(),
        until=end.isoformat(),
        include_boxscore=include_boxscore,
    )


@shared_task(name="run_conference_ingest")
def run_conference_ingest(
    include_boxscore: bool = True,
    window_days: int | None = None,
    season: int | None = None,
) -> dict[str, Any]:
    """Ingest every conference team's recent games.

    Guarded by a Redis lock so overlapping beat firings don't run twice.
    """
    if not acquire_redis_lock(INGEST_LOCK_NAME, timeout=LOCK_TIMEOUT_1HOUR):
        logger.info("conference_ingest_skipped_locked", lock=INGEST_LOCK_NAME)
        return {"status": "skipped", "reason": "locked"}

    try:
        request = scheduled_ingest_request(
            window_days or settings.ingest_config.scheduled_window_days,
            include_boxscore=include_boxscore,
            season=season,
        )
        with ESPNClient(
            settings.espn_config, season_types=settings.ingest_config.season_types
        ) as client, get_session() as session:
            summary = run_ingest(session, client, request)
        return {"status": "ok", "source": "cron", **summary.to_response()}
    finally:
        release_redis_lock(INGEST_LOCK_NAME)
