"""Static Big Ten roster used for team identity resolution."""

from __future__ import annotations

from dataclasses import dataclass

BIG_TEN = "Big Ten"


@dataclass(frozen=True)
class KnownTeam:
    name: str
    short_name: str
    slug: str
    aliases: tuple[str, ...]
    conference: str = BIG_TEN


# Canonical name, short name, slug and the nicknames the provider uses
B1G_TEAMS: tuple[KnownTeam, ...] = (
    KnownTeam("Illinois", "ILL", "illinois", ("illinois fighting illini", "fighting illini", "uiuc")),
    KnownTeam("Indiana", "IU", "indiana", ("indiana hoosiers", "hoosiers")),
    KnownTeam("Iowa", "IOWA", "iowa", ("iowa hawkeyes", "hawkeyes")),
    KnownTeam("Maryland", "MD", "maryland", ("maryland terrapins", "terrapins")),
    KnownTeam("Michigan", "MICH", "michigan", ("michigan wolverines", "wolverines")),
    KnownTeam("Michigan State", "MSU", "michigan-state", ("michigan state spartans", "spartans")),
    KnownTeam("Minnesota", "MINN", "minnesota", ("minnesota golden gophers", "golden gophers")),
    KnownTeam("Nebraska", "NEB", "nebraska", ("nebraska cornhuskers", "cornhuskers")),
    KnownTeam("Northwestern", "NU", "northwestern", ("northwestern wildcats", "wildcats")),
    KnownTeam("Ohio State", "OSU", "ohio-state", ("ohio state buckeyes", "buckeyes")),
    KnownTeam("Oregon", "ORE", "oregon", ("oregon ducks", "ducks")),
    KnownTeam("Penn State", "PSU", "penn-state", ("penn state nittany lions", "nittany lions")),
    KnownTeam("Purdue", "PUR", "purdue", ("purdue boilermakers", "boilermakers")),
    KnownTeam("Rutgers", "RUTG", "rutgers", ("rutgers scarlet knights", "scarlet knights")),
    KnownTeam("UCLA", "UCLA", "ucla", ("ucla bruins", "bruins")),
    KnownTeam("USC", "USC", "usc", ("usc trojans", "southern california", "trojans")),
    KnownTeam("Washington", "WASH", "washington", ("washington huskies", "huskies")),
    KnownTeam("Wisconsin", "WIS", "wisconsin", ("wisconsin badgers", "badgers")),
)
