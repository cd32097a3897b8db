"""Tests for team, game and stat-row upserts against SQLite."""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import func, select, update

from b1g_scraper.db import Game, Team, TeamGameStat
from b1g_scraper.exceptions import DataIntegrityError
from b1g_scraper.live.espn_parser import parse_boxscore
from b1g_scraper.models import ScheduleGame, TeamRef
from b1g_scraper.persistence import (
    ensure_team,
    resolve_team_id,
    seed_known_teams,
    upsert_game,
    upsert_team_game_stats,
    upsert_teams,
)
from payloads import summary_payload

OHIO_STATE = TeamRef(external_id="194", slug="ohio-state", name="Ohio State", short_name="OSU")
MICHIGAN = TeamRef(external_id="130", slug="michigan", name="Michigan", short_name="MICH")
GONZAGA = TeamRef(external_id="2250", slug="gonzaga", name="Gonzaga Bulldogs", short_name="Gonzaga")
STALE = datetime(2020, 1, 1)


def _count(session, model) -> int:
    return session.execute(select(func.count()).select_from(model)).scalar_one()


def _mark_stale(session, model) -> None:
    session.execute(update(model).values(updated_at=STALE))
    session.commit()


def _updated_at(session, model, row_id):
    session.expire_all()
    return session.get(model, row_id).updated_at


def _game(external_id: str = "401", status: str = "Scheduled", **overrides) -> ScheduleGame:
    values = {
        "external_id": external_id,
        "season": 2024,
        "date": 1705165200,
        "status": status,
        "home_team": OHIO_STATE,
        "away_team": MICHIGAN,
    }
    values.update(overrides)
    return ScheduleGame(**values)


class TestEnsureTeam:
    """Tests for ensure_team."""

    def test_inserts_then_updates(self, db_session):
        first = ensure_team(db_session, OHIO_STATE)
        second = ensure_team(db_session, OHIO_STATE)
        db_session.commit()

        assert first.inserted is True
        assert second.inserted is False
        assert first.id == second.id
        assert db_session.get(Team, first.id).conference == "Big Ten"

    def test_matches_existing_row_by_name(self, db_session):
        db_session.add(Team(slug="ohio-st", name="Ohio State", short_name="OSU"))
        db_session.commit()

        result = ensure_team(db_session, OHIO_STATE)
        db_session.commit()

        assert result.inserted is False
        assert _count(db_session, Team) == 1
        assert db_session.get(Team, result.id).slug == "ohio-state"

    def test_known_team_gets_canonical_names(self, db_session):
        ref = TeamRef(slug="ohio-state", name="Ohio State Buckeyes", short_name="Ohio State")
        result = ensure_team(db_session, ref)
        db_session.commit()

        team = db_session.get(Team, result.id)
        assert team.name == "Ohio State"
        assert team.short_name == "OSU"

    def test_unknown_team_has_no_conference(self, db_session):
        result = ensure_team(db_session, GONZAGA)
        db_session.commit()

        team = db_session.get(Team, result.id)
        assert team.name == "Gonzaga Bulldogs"
        assert team.conference is None

    def test_logo_is_never_cleared(self, db_session):
        with_logo = OHIO_STATE.model_copy(update={"logo_url": "https://example.com/osu.png"})
        result = ensure_team(db_session, with_logo)
        ensure_team(db_session, OHIO_STATE)
        db_session.commit()
        assert db_session.get(Team, result.id).logo_url == "https://example.com/osu.png"

        ensure_team(db_session, OHIO_STATE.model_copy(update={"logo_url": "https://example.com/new.png"}))
        db_session.commit()
        assert db_session.get(Team, result.id).logo_url == "https://example.com/new.png"

    def test_unchanged_sighting_leaves_row_untouched(self, db_session):
        result = ensure_team(db_session, OHIO_STATE.model_copy(update={"logo_url": "https://example.com/osu.png"}))
        db_session.commit()
        _mark_stale(db_session, Team)

        again = ensure_team(db_session, OHIO_STATE)
        db_session.commit()

        assert again.inserted is False
        assert _updated_at(db_session, Team, result.id) == STALE

        ensure_team(db_session, OHIO_STATE.model_copy(update={"short_name": "Ohio St"}))
        db_session.commit()
        # Known teams keep their canonical short name, so nothing changed
        assert _updated_at(db_session, Team, result.id) == STALE

        ensure_team(db_session, OHIO_STATE.model_copy(update={"logo_url": "https://example.com/new.png"}))
        db_session.commit()
        assert _updated_at(db_session, Team, result.id) != STALE

    def test_conference_follows_roster_membership(self, db_session):
        db_session.add(Team(slug="ohio-state", name="Ohio State", short_name="OSU"))
        db_session.add(Team(slug="gonzaga", name="Gonzaga Bulldogs", short_name="Gonzaga", conference="WCC"))
        db_session.commit()

        ohio_state = ensure_team(db_session, OHIO_STATE)
        gonzaga = ensure_team(db_session, GONZAGA)
        db_session.commit()

        assert db_session.get(Team, ohio_state.id).conference == "Big Ten"
        assert db_session.get(Team, gonzaga.id).conference is None

    def test_blank_slug_is_rebuilt_from_name(self, db_session):
        result = ensure_team(db_session, TeamRef(slug="  ", name="Somewhere State", short_name="SWS"))
        db_session.commit()
        assert db_session.get(Team, result.id).slug == "somewhere-state"


class TestUpsertTeams:
    """Tests for batch team upserts and seeding."""

    def test_dedupes_by_slug(self, db_session):
        team_ids, counts = upsert_teams(db_session, [OHIO_STATE, MICHIGAN, OHIO_STATE])
        db_session.commit()

        assert set(team_ids) == {"ohio-state", "michigan"}
        assert counts.teams_inserted == 2
        assert counts.teams_updated == 0
        assert _count(db_session, Team) == 2

    def test_seed_known_teams_is_idempotent(self, db_session):
        first = seed_known_teams(db_session)
        second = seed_known_teams(db_session)
        db_session.commit()

        assert first.teams_inserted == 18
        assert second.teams_inserted == 0
        assert second.teams_updated == 18
        assert _count(db_session, Team) == 18


class TestUpsertGame:
    """Tests for upsert_game."""

    def test_insert_then_update(self, db_session):
        team_ids, _ = upsert_teams(db_session, [OHIO_STATE, MICHIGAN])

        first = upsert_game(db_session, _game(status="Scheduled"), team_ids)
        final = _game(
            status="Final",
            home_team=OHIO_STATE.model_copy(update={"score": 70}),
            away_team=MICHIGAN.model_copy(update={"score": 65}),
        )
        second = upsert_game(db_session, final, team_ids)
        db_session.commit()

        assert (first.inserted, first.updated) == (True, False)
        assert (second.inserted, second.updated) == (False, True)
        assert first.id == second.id
        game = db_session.get(Game, first.id)
        assert game.status == "Final"
        assert (game.home_score, game.away_score) == (70, 65)
        assert game.home_team_id == team_ids["ohio-state"]
        assert game.away_team_id == team_ids["michigan"]
        assert _count(db_session, Game) == 1

    def test_unchanged_game_is_not_rewritten(self, db_session):
        team_ids, _ = upsert_teams(db_session, [OHIO_STATE, MICHIGAN])
        first = upsert_game(db_session, _game(), team_ids)
        db_session.commit()
        _mark_stale(db_session, Game)

        again = upsert_game(db_session, _game(), team_ids)
        db_session.commit()

        assert (again.id, again.inserted, again.updated) == (first.id, False, True)
        assert _updated_at(db_session, Game, first.id) == STALE

        upsert_game(db_session, _game(venue="Crisler Center"), team_ids)
        db_session.commit()
        assert _updated_at(db_session, Game, first.id) != STALE
        assert db_session.get(Game, first.id).venue == "Crisler Center"

    def test_missing_team_is_created(self, db_session):
        team_ids: dict[str, int] = {}
        upsert_game(db_session, _game(), team_ids)
        db_session.commit()

        assert set(team_ids) == {"ohio-state", "michigan"}
        assert _count(db_session, Team) == 2

    def test_same_team_on_both_sides_rejected(self, db_session):
        team_ids, _ = upsert_teams(db_session, [OHIO_STATE])
        alias = OHIO_STATE.model_copy(update={"external_id": "999"})

        with pytest.raises(DataIntegrityError):
            upsert_game(db_session, _game(away_team=alias), team_ids)

        assert _count(db_session, Game) == 0

    def test_resolve_team_id_reuses_map(self, db_session):
        team_ids = {"ohio-state": 42}
        assert resolve_team_id(db_session, OHIO_STATE, team_ids) == 42
        assert _count(db_session, Team) == 0


class TestUpsertTeamGameStats:
    """Tests for upsert_team_game_stats."""

    def _setup(self, session):
        team_ids, _ = upsert_teams(session, [OHIO_STATE, MICHIGAN])
        game = upsert_game(session, _game(status="Final"), team_ids)
        return game.id, team_ids

    def test_writes_one_row_per_side(self, db_session):
        game_id, team_ids = self._setup(db_session)
        boxscore = parse_boxscore(summary_payload("194", "130"), "401")

        result = upsert_team_game_stats(db_session, game_id, team_ids, boxscore)
        db_session.commit()

        assert (result.inserted, result.updated) == (2, 0)
        rows = {
            row.team_id: row
            for row in db_session.scalars(select(TeamGameStat).where(TeamGameStat.game_id == game_id))
        }
        home = rows[team_ids["ohio-state"]]
        away = rows[team_ids["michigan"]]
        assert home.is_home is True
        assert away.is_home is False
        assert home.opp_team_id == team_ids["michigan"]
        assert away.opp_team_id == team_ids["ohio-state"]
        assert (home.fgm, home.fga, home.tov) == (25, 58, 11)
        # No points row in the box score, so the header score is used
        assert (home.points, away.points) == (70, 65)
        # (58 + 0.44*16 - 10 + 13 + 61 + 0.44*16 - 10 + 11) / 2
        assert home.possessions_est == pytest.approx(68.54)
        assert away.possessions_est == pytest.approx(68.54)

    def test_rerun_updates_in_place(self, db_session):
        game_id, team_ids = self._setup(db_session)
        boxscore = parse_boxscore(summary_payload("194", "130"), "401")

        upsert_team_game_stats(db_session, game_id, team_ids, boxscore)
        result = upsert_team_game_stats(db_session, game_id, team_ids, boxscore)
        db_session.commit()

        assert (result.inserted, result.updated) == (0, 2)
        assert _count(db_session, TeamGameStat) == 2

    def test_identical_rerun_leaves_rows_untouched(self, db_session):
        game_id, team_ids = self._setup(db_session)
        boxscore = parse_boxscore(summary_payload("194", "130"), "401")
        upsert_team_game_stats(db_session, game_id, team_ids, boxscore)
        db_session.commit()
        _mark_stale(db_session, TeamGameStat)

        result = upsert_team_game_stats(db_session, game_id, team_ids, boxscore)
        db_session.commit()

        assert (result.inserted, result.updated) == (0, 2)
        db_session.expire_all()
        assert {row.updated_at for row in db_session.scalars(select(TeamGameStat))} == {STALE}

    def test_provider_possessions_are_kept(self, db_session):
        game_id, team_ids = self._setup(db_session)
        payload = summary_payload("194", "130")
        payload["boxscore"]["teams"][0]["statistics"].append({"name": "possessions", "displayValue": "66.0"})
        boxscore = parse_boxscore(payload, "401")

        upsert_team_game_stats(db_session, game_id, team_ids, boxscore)
        db_session.commit()

        home = db_session.scalars(
            select(TeamGameStat).where(TeamGameStat.team_id == team_ids["ohio-state"])
        ).one()
        assert home.possessions_est == pytest.approx(66.0)

    def test_unknown_side_is_skipped(self, db_session):
        game_id, team_ids = self._setup(db_session)
        boxscore = parse_boxscore(summary_payload("194", "130"), "401")
        del team_ids["michigan"]

        result = upsert_team_game_stats(db_session, game_id, team_ids, boxscore)
        db_session.commit()

        assert result.inserted == 1
        row = db_session.scalars(select(TeamGameStat)).one()
        assert row.opp_team_id is None
