"""Initial schema: teams, games, team_game_stats."""

from __future__ import annotations

from alembic import op

from b1g_scraper.db.base import Base
from b1g_scraper.db import sports  # noqa: F401

# revision identifiers, used by Alembic.
revision = "20261017_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create the schema from SQLAlchemy metadata."""
    bind = op.get_bind()
    Base.metadata.create_all(bind=bind)


def downgrade() -> None:
    bind = op.get_bind()
    Base.metadata.drop_all(bind=bind)
