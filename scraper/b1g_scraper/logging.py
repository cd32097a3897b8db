"""
Structured logging for the Big Ten ESPN ingest.

The celery worker, the ingest task and the command-line scripts all log
through the module-level ``logger``. Each line is one JSON object carrying the
``b1g-scraper`` service name and the deployment environment, with snake_case
event names such as ``ingest_team_failed`` or ``espn_schedule_partition_failed``
so a run can be followed team by team.
"""

from __future__ import annotations

import logging

import structlog

from .config import settings

SERVICE_NAME = "b1g-scraper"


def _normalize_log_level(level: str | None, environment: str) -> int:
    """LOG_LEVEL wins; otherwise production logs at INFO and everything else at DEBUG."""
    if level:
        normalized = level.strip().upper()
    else:
        normalized = "INFO" if environment.lower() == "production" else "DEBUG"
    return logging.getLevelNamesMapping().get(normalized, logging.INFO)


def configure_logging() -> None:
    """Send JSON ingest events to stdout at the configured level."""
    resolved_level = _normalize_log_level(settings.log_level, settings.environment)
    logging.basicConfig(level=resolved_level)
    structlog.configure(
        processors=[
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.EventRenamer("message"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(resolved_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
    )


configure_logging()

logger = structlog.get_logger(SERVICE_NAME).bind(
    service=SERVICE_NAME,
    environment=settings.environment,
)
