"""Team identity resolution for matching provider names to stable slugs.

ESPN reports the same team as "Ohio State Buckeyes", "Ohio State", "OSU"
and so on depending on the endpoint. Known Big Ten teams resolve through an
alias table; anything else gets a deterministic slug of its first usable name.
"""

from __future__ import annotations

import re
from types import MappingProxyType
from typing import Mapping

from .b1g_teams import B1G_TEAMS, BIG_TEN, KnownTeam

UNKNOWN_TEAM_SLUG = "unknown-team"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def normalize_key(value: str) -> str:
    """Lowercase, spell out "&", collapse non-alphanumeric runs to one space."""
    lowered = value.lower().replace("&", "and")
    return _NON_ALNUM.sub(" ", lowered).strip()


def slugify_team_name(name: str) -> str:
    """Build a URL-safe slug such as "ohio-state" from a display name."""
    lowered = name.lower().replace("&", "and")
    return _NON_ALNUM.sub("-", lowered).strip("-")


def _build_alias_table(teams: tuple[KnownTeam, ...]) -> Mapping[str, str]:
    table: dict[str, str] = {}
    for team in teams:
        for alias in (team.name, team.short_name, team.slug, *team.aliases):
            key = normalize_key(alias)
            if key:
                table.setdefault(key, team.slug)
    return MappingProxyType(table)


ALIAS_TO_SLUG: Mapping[str, str] = _build_alias_table(B1G_TEAMS)
KNOWN_TEAMS: Mapping[str, KnownTeam] = MappingProxyType({team.slug: team for team in B1G_TEAMS})


def resolve_known_slug(*candidates: str | None) -> str | None:
    """Return the slug of the first candidate matching a known alias, if any."""
    for candidate in candidates:
        if not candidate:
            continue
        slug = ALIAS_TO_SLUG.get(normalize_key(candidate))
        if slug:
            return slug
    return None


def resolve_slug(*candidates: str | None) -> str:
    """Resolve raw team names to a stable slug.

    Known aliases win in candidate order. Otherwise the first candidate that
    slugifies to something non-empty is used, and with nothing usable the
    result is "unknown-team".
    """
    known = resolve_known_slug(*candidates)
    if known:
        return known
    for candidate in candidates:
        if not candidate:
            continue
        slug = slugify_team_name(candidate)
        if slug:
            return slug
    return UNKNOWN_TEAM_SLUG


def get_known_team(slug: str) -> KnownTeam | None:
    return KNOWN_TEAMS.get(slug)


def conference_for_slug(slug: str) -> str | None:
    team = KNOWN_TEAMS.get(slug)
    return team.conference if team else None


__all__ = [
    "ALIAS_TO_SLUG",
    "B1G_TEAMS",
    "BIG_TEN",
    "KNOWN_TEAMS",
    "KnownTeam",
    "UNKNOWN_TEAM_SLUG",
    "conference_for_slug",
    "get_known_team",
    "normalize_key",
    "resolve_known_slug",
    "resolve_slug",
    "slugify_team_name",
]
