#!/usr/bin/env python3
"""Run one conference ingest from the command line and print the summary.

Usage:
    python scripts/ingest_season.py [--season 2025] [--team ohio-state]
        [--mode all|team] [--since 2024-11-01] [--until 2024-11-30]
        [--include-boxscore]
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

script_dir = Path(__file__).resolve().parent
scraper_dir = script_dir.parent
if str(scraper_dir) not in sys.path:
    sys.path.insert(0, str(scraper_dir))

from b1g_scraper.config import settings
from b1g_scraper.db import get_session
from b1g_scraper.exceptions import ValidationError
from b1g_scraper.live.espn import ESPNClient
from b1g_scraper.logging import logger
from b1g_scraper.models import IngestRequest
from b1g_scraper.services.ingestion import run_ingest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ingest Big Ten schedules and box scores from ESPN")
    parser.add_argument("--season", type=int, help="Season label (spring year); defaults to the current season")
    parser.add_argument("--team", type=str, help="Team slug, name or alias (implies --mode team)")
    parser.add_argument("--mode", choices=["all", "team"], help="Ingest every conference team or one team")
    parser.add_argument("--since", type=str, help="First day to include, YYYY-MM-DD")
    parser.add_argument("--until", type=str, help="Last day to include, YYYY-MM-DD")
    parser.add_argument("--include-boxscore", action="store_true", help="Fetch box scores for final games")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    request = IngestRequest(
        season=args.season,
        team=args.team,
        mode=args.mode,
        since=args.since,
        until=args.until,
        include_boxscore=args.include_boxscore,
    )
    try:
        with ESPNClient(
            settings.espn_config, season_types=settings.ingest_config.season_types
        ) as client, get_session() as session:
            summary = run_ingest(session, client, request)
    except ValidationError as exc:
        logger.error("ingest_request_invalid", error=str(exc))
        print(json.dumps({"status": "error", "message": str(exc)}, indent=2))
        return 2

    print(json.dumps({"status": "ok", **summary.to_response()}, indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
