"""Shared query helpers for the persistence layer."""

from __future__ import annotations

from typing import Any, Mapping

from sqlalchemy import or_
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session


def upsert_insert(session: Session, table: Any):
    """Return a dialect-specific INSERT supporting ON CONFLICT.

    Production runs on PostgreSQL; the test suite runs against SQLite.
    Both dialects expose the same on_conflict_do_update API.
    """
    dialect = session.get_bind().dialect.name
    if dialect == "sqlite":
        return sqlite.insert(table)
    return postgresql.insert(table)


def any_column_changed(model: Any, values: Mapping[str, Any]):
    """NULL-safe clause that is true when any column differs from ``values``.

    Used as the WHERE of an update so re-applying identical data leaves the
    row (including ``updated_at``) untouched.
    """
    return or_(
        *(getattr(model, column).is_distinct_from(value) for column, value in values.items())
    )
