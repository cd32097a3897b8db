"""Tests for building ingest requests from query strings and bodies."""

from __future__ import annotations

import pytest

from b1g_scraper.exceptions import ValidationError
from b1g_scraper.services.ingest_request import (
    ingest_request_from_body,
    ingest_request_from_query,
    parse_query_bool,
    parse_query_season,
)


class TestQueryParsing:
    """Tests for lenient query-string parsing."""

    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "Yes"])
    def test_true_values(self, value):
        assert parse_query_bool(value) is True

    @pytest.mark.parametrize("value", [None, "", "0", "false", "on", "y"])
    def test_everything_else_is_false(self, value):
        assert parse_query_bool(value) is False

    @pytest.mark.parametrize("value, expected", [("2025", 2025), ("2025.0", 2025), ("2025.5", None), ("abc", None), ("", None), (None, None)])
    def test_season(self, value, expected):
        assert parse_query_season(value) == expected

    def test_full_query(self):
        request = ingest_request_from_query(
            {
                "season": "2024",
                "team": "osu",
                "mode": "team",
                "since": "2024-01-01",
                "until": "2024-01-31",
                "includeBoxscore": "yes",
            }
        )
        assert request.season == 2024
        assert request.team == "osu"
        assert request.mode == "team"
        assert request.since == "2024-01-01"
        assert request.until == "2024-01-31"
        assert request.include_boxscore is True

    def test_unknown_mode_and_empty_values_dropped(self):
        request = ingest_request_from_query({"mode": "everything", "team": "", "season": "x"})
        assert request.mode is None
        assert request.team is None
        assert request.season is None
        assert request.include_boxscore is False


class TestBodyParsing:
    """Tests for JSON body validation."""

    def test_camel_case_body(self):
        request = ingest_request_from_body({"season": 2024, "mode": "all", "includeBoxscore": True})
        assert request.season == 2024
        assert request.mode == "all"
        assert request.include_boxscore is True

    def test_missing_body_is_empty_request(self):
        request = ingest_request_from_body(None)
        assert request.season is None
        assert request.include_boxscore is None

    def test_non_object_body_rejected(self):
        with pytest.raises(ValidationError):
            ingest_request_from_body(["season", 2024])

    def test_bad_field_rejected(self):
        with pytest.raises(ValidationError) as exc_info:
            ingest_request_from_body({"mode": "everything"})
        assert "mode" in str(exc_info.value)
