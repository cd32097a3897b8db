"""Celery app configuration for scheduled conference ingestion."""

from __future__ import annotations

from celery import Celery, signals
from celery.schedules import crontab

from .config import settings
from .logging import logger

celery_config = {
    "task_serializer": "json",
    "accept_content": ["json"],
    "result_serializer": "json",
    "timezone": "UTC",
    "enable_utc": True,
    "task_track_started": True,
    "worker_prefetch_multiplier": 1,
    "task_time_limit": 3600,
    "task_soft_time_limit": 3300,
    "task_default_queue": "b1g-ingest",
}

app = Celery(
    "b1g-scraper",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["b1g_scraper.jobs.ingest_tasks"],
)
app.conf.update(**celery_config)
app.conf.task_routes = {
    "run_conference_ingest": {"queue": "b1g-ingest", "routing_key": "b1g-ingest"},
}
# Daily at 10:00 UTC (5:00 AM EST), after the previous night's games are final.
app.conf.beat_schedule = {
    "daily-conference-ingest-5am-eastern": {
        "task": "run_conference_ingest",
        "schedule": crontab(minute=0, hour=10),
        "kwargs": {"include_boxscore": True},
        "options": {"queue": "b1g-ingest", "routing_key": "b1g-ingest"},
    },
}


@signals.worker_ready.connect
def on_worker_ready(sender=None, **kwargs):
    """Log worker startup."""
    worker_name = getattr(sender, "hostname", None) or (str(sender) if sender else "unknown")
    logger.info("celery_worker_ready", worker=worker_name)
