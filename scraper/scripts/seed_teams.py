#!/usr/bin/env python3
"""Seed the teams table with the Big Ten roster.

Existing rows (matched by slug or name) are refreshed with canonical names
and conference; missing teams are inserted.

Usage:
    python scripts/seed_teams.py [--dry-run]
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

script_dir = Path(__file__).resolve().parent
scraper_dir = script_dir.parent
if str(scraper_dir) not in sys.path:
    sys.path.insert(0, str(scraper_dir))

from b1g_scraper.db import get_session
from b1g_scraper.normalization import B1G_TEAMS
from b1g_scraper.persistence import seed_known_teams


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Seed Big Ten teams")
    parser.add_argument("--dry-run", action="store_true", help="List the teams without writing")
    args = parser.parse_args(argv)

    if args.dry_run:
        for team in B1G_TEAMS:
            print(f"{team.slug:<16} {team.name:<16} {team.short_name:<6} {team.conference}")
        print(f"\n{len(B1G_TEAMS)} teams (dry run, nothing written)")
        return 0

    with get_session() as session:
        counts = seed_known_teams(session)
    print(f"Seeded {len(B1G_TEAMS)} teams: {counts.teams_inserted} inserted, {counts.teams_updated} updated")
    return 0


if __name__ == "__main__":
    sys.exit(main())
