"""Normalization of raw ESPN site-API payloads.

Every accessor here is defensive: ESPN omits keys freely, changes value
types between endpoints (ints vs numeric strings) and occasionally sends
lists where objects are expected. Nothing in this module raises on bad input;
unusable entries are dropped or left as None.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from ..models import BoxscoreTeam, GameBoxscore, ScheduleGame, TeamRef, TeamStatLine
from ..normalization import get_known_team, resolve_known_slug, resolve_slug
from ..utils.datetime_utils import iso_to_epoch_seconds
from ..utils.parsing import parse_float, parse_int, parse_made_attempted

DEFAULT_STATUS = "Scheduled"

# Stat names ESPN has used over time, first match wins
FIELD_GOAL_NAMES = ("fieldGoalsMade-fieldGoalsAttempted", "fieldGoals", "fg")
THREE_POINT_NAMES = (
    "threePointFieldGoalsMade-threePointFieldGoalsAttempted",
    "threePointFieldGoals",
    "threePointersMade-threePointersAttempted",
    "3ptFieldGoals",
    "threePointers",
)
FREE_THROW_NAMES = ("freeThrowsMade-freeThrowsAttempted", "freeThrows", "ft")
COUNTING_STAT_NAMES: dict[str, tuple[str, ...]] = {
    "points": ("points",),
    "oreb": ("offensiveRebounds",),
    "dreb": ("defensiveRebounds",),
    "reb": ("rebounds", "totalRebounds"),
    "ast": ("assists",),
    "stl": ("steals",),
    "blk": ("blocks",),
    "tov": ("turnovers",),
    "pf": ("totalFouls", "fouls"),
}
POSSESSION_NAMES = ("possessions", "estimatedPossessions")


def _dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _first(value: Any) -> dict[str, Any]:
    items = _list(value)
    return _dict(items[0]) if items else {}


def _str_or_none(value: Any) -> str | None:
    if isinstance(value, str):
        return value or None
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return None


def _external_id(value: Any) -> str | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (str, int)):
        text = str(value).strip()
        return text or None
    return None


def _parse_score(value: Any) -> int | None:
    # Schedule endpoints wrap scores as {"value": 71.0, "displayValue": "71"}
    if isinstance(value, dict):
        parsed = parse_int(value.get("value"))
        return parsed if parsed is not None else parse_int(value.get("displayValue"))
    return parse_int(value)


def _logo_url(team: dict[str, Any]) -> str | None:
    logo = _str_or_none(team.get("logo"))
    if logo:
        return logo
    return _str_or_none(_first(team.get("logos")).get("href"))


def parse_team_ref(competitor: Any) -> TeamRef | None:
    """Build a TeamRef from a competitor (or any object with a "team" key)."""
    team = _dict(_dict(competitor).get("team"))
    if not team:
        return None

    display_name = _str_or_none(team.get("displayName"))
    short_display = _str_or_none(team.get("shortDisplayName"))
    abbreviation = _str_or_none(team.get("abbreviation"))
    # Aliases match on the full name first, unknown teams slug from the short one
    slug = resolve_known_slug(display_name, short_display, abbreviation) or resolve_slug(
        short_display, display_name, abbreviation
    )

    known = get_known_team(slug)
    if known:
        name, short_name = known.name, known.short_name
    else:
        name = display_name or short_display or slug
        short_name = short_display or abbreviation or name

    return TeamRef(
        external_id=_external_id(team.get("id")),
        slug=slug,
        name=name,
        short_name=short_name,
        logo_url=_logo_url(team),
        score=_parse_score(_dict(competitor).get("score")),
    )


def _split_competitors(competitors: list[Any]) -> tuple[Any, Any]:
    entries = [entry for entry in competitors if isinstance(entry, dict)]
    home = next((entry for entry in entries if entry.get("homeAway") == "home"), None)
    away = next((entry for entry in entries if entry.get("homeAway") == "away"), None)
    if home is None and entries:
        home = entries[0]
    if away is None and len(entries) > 1:
        away = entries[1]
    return home, away


def parse_status(competition: dict[str, Any]) -> str:
    status_type = _dict(_dict(competition.get("status")).get("type"))
    for key in ("shortDetail", "description", "name"):
        value = _str_or_none(status_type.get(key))
        if value:
            return value
    return DEFAULT_STATUS


def _extract_link(links: Any, matcher: Callable[[str], bool]) -> str | None:
    for link in _list(links):
        link = _dict(link)
        rel = " ".join(str(item) for item in _list(link.get("rel")))
        text = f"{link.get('text') or ''} {rel}".lower()
        href = _str_or_none(link.get("href"))
        if href and matcher(text):
            return href
    return None


def parse_schedule_event(event: Any, team_external_id: str | None = None) -> ScheduleGame | None:
    """Normalize one schedule/scoreboard event. Returns None without both sides."""
    event = _dict(event)
    external_id = _external_id(event.get("id"))
    if not external_id:
        return None

    competition = _first(event.get("competitions"))
    home_competitor, away_competitor = _split_competitors(_list(competition.get("competitors")))
    home_team = parse_team_ref(home_competitor)
    away_team = parse_team_ref(away_competitor)
    if home_team is None or away_team is None:
        return None

    is_home: bool | None = None
    opponent_external_id: str | None = None
    if team_external_id:
        if home_team.external_id == team_external_id:
            is_home, opponent_external_id = True, away_team.external_id
        elif away_team.external_id == team_external_id:
            is_home, opponent_external_id = False, home_team.external_id

    neutral_site = competition.get("neutralSite")
    links = event.get("links")

    return ScheduleGame(
        external_id=external_id,
        season=parse_int(_dict(event.get("season")).get("year")),
        date=iso_to_epoch_seconds(competition.get("date") or event.get("date")),
        status=parse_status(competition),
        neutral_site=neutral_site if isinstance(neutral_site, bool) else None,
        venue=_str_or_none(_dict(competition.get("venue")).get("fullName")),
        home_team=home_team,
        away_team=away_team,
        team_external_id=team_external_id,
        opponent_external_id=opponent_external_id,
        is_home=is_home,
        recap_url=_extract_link(links, lambda text: "recap" in text),
        boxscore_url=_extract_link(links, lambda text: "box" in text),
    )


def parse_schedule(payload: Any, team_external_id: str | None = None) -> list[ScheduleGame]:
    games: list[ScheduleGame] = []
    for event in _list(_dict(payload).get("events")):
        game = parse_schedule_event(event, team_external_id)
        if game is not None:
            games.append(game)
    return games


def _stat_value(stats: Iterable[Any], names: Iterable[str]) -> Any:
    rows = [row for row in stats if isinstance(row, dict)]
    for name in names:
        hit = next((row for row in rows if row.get("name") == name), None)
        if hit is None:
            continue
        display_value = hit.get("displayValue")
        if isinstance(display_value, str):
            return display_value
        if hit.get("value") is not None:
            return hit.get("value")
    return None


def parse_stat_line(statistics: Any) -> TeamStatLine:
    """Parse a box-score team "statistics" array."""
    stats = _list(statistics)
    fgm, fga = parse_made_attempted(_stat_value(stats, FIELD_GOAL_NAMES))
    fg3m, fg3a = parse_made_attempted(_stat_value(stats, THREE_POINT_NAMES))
    ftm, fta = parse_made_attempted(_stat_value(stats, FREE_THROW_NAMES))
    counting = {
        field: parse_int(_stat_value(stats, names))
        for field, names in COUNTING_STAT_NAMES.items()
    }
    return TeamStatLine(
        fgm=fgm,
        fga=fga,
        fg3m=fg3m,
        fg3a=fg3a,
        ftm=ftm,
        fta=fta,
        possessions_est=parse_float(_stat_value(stats, POSSESSION_NAMES)),
        **counting,
    )


def parse_boxscore(payload: Any, external_game_id: str) -> GameBoxscore | None:
    """Normalize a summary payload.

    Returns None when the payload has neither header competitors nor
    box-score team rows, i.e. the game has no box score yet.
    """
    payload = _dict(payload)
    competition = _first(_dict(payload.get("header")).get("competitions"))
    home_competitor, away_competitor = _split_competitors(_list(competition.get("competitors")))
    home_team = parse_team_ref(home_competitor)
    away_team = parse_team_ref(away_competitor)

    header_sides: dict[str, TeamRef] = {}
    home_away: dict[str, bool] = {}
    for ref, is_home in ((home_team, True), (away_team, False)):
        if ref is not None and ref.external_id:
            header_sides[ref.external_id] = ref
            home_away[ref.external_id] = is_home

    teams: list[BoxscoreTeam] = []
    for row in _list(_dict(payload.get("boxscore")).get("teams")):
        row = _dict(row)
        ref = parse_team_ref({"team": row.get("team")})
        if ref is None:
            continue
        header_ref = header_sides.get(ref.external_id or "")
        if header_ref is not None and ref.score is None:
            ref = ref.model_copy(update={"score": header_ref.score})
        teams.append(
            BoxscoreTeam(
                team=ref,
                is_home=home_away.get(ref.external_id or ""),
                stats=parse_stat_line(row.get("statistics")),
            )
        )

    if home_team is None and away_team is None and not teams:
        return None

    return GameBoxscore(
        external_id=external_game_id,
        season=parse_int(_dict(_dict(payload.get("header")).get("season")).get("year")),
        date=iso_to_epoch_seconds(competition.get("date")),
        status=parse_status(competition),
        home_team=home_team,
        away_team=away_team,
        teams=teams,
    )


def parse_roster(payload: Any) -> list[TeamRef]:
    """Conference roster from the teams endpoint, deduplicated by provider id."""
    sport = _first(_dict(payload).get("sports"))
    league = _first(sport.get("leagues"))
    roster: list[TeamRef] = []
    seen: set[str] = set()
    for entry in _list(league.get("teams")):
        ref = parse_team_ref(_dict(entry))
        if ref is None or not ref.external_id or ref.external_id in seen:
            continue
        seen.add(ref.external_id)
        roster.append(ref)
    return roster
