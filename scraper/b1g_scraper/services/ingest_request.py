"""Build ingest requests from query strings and JSON bodies."""

from __future__ import annotations

from typing import Any, Mapping

import pydantic

from ..exceptions import ValidationError
from ..models import IngestMode, IngestRequest

TRUE_VALUES = frozenset({"1", "true", "yes"})


def parse_query_bool(value: str | None) -> bool:
    """Only "1", "true" and "yes" (any case) are true; everything else is false."""
    if not value:
        return False
    return value.strip().lower() in TRUE_VALUES


def parse_query_mode(value: str | None) -> IngestMode | None:
    if value in ("all", "team"):
        return value
    return None


def parse_query_season(value: str | None) -> int | None:
    """Integral seasons only; "2025" and "2025.0" parse, "2025.5" doesn't."""
    if not value or not value.strip():
        return None
    try:
        parsed = float(value)
    except ValueError:
        return None
    return int(parsed) if parsed.is_integer() else None


def _query_text(value: str | None) -> str | None:
    return value if value else None


def ingest_request_from_query(params: Mapping[str, str | None]) -> IngestRequest:
    """Lenient parse of query parameters; unusable values are dropped."""
    return IngestRequest(
        season=parse_query_season(params.get("season")),
        team=_query_text(params.get("team")),
        mode=parse_query_mode(params.get("mode")),
        since=_query_text(params.get("since")),
        until=_query_text(params.get("until")),
        include_boxscore=parse_query_bool(params.get("includeBoxscore")),
    )


def ingest_request_from_body(body: Any) -> IngestRequest:
    """Validate a JSON body with camelCase keys. Raises ValidationError on bad shape."""
    if body is None:
        return IngestRequest()
    if not isinstance(body, Mapping):
        raise ValidationError("Ingest request body must be a JSON object")
    try:
        return IngestRequest.model_validate(dict(body))
    except pydantic.ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        raise ValidationError(f"Invalid ingest request: {fields}") from exc
