"""Provider integrations for schedules and box scores."""

from .espn import ESPNClient

__all__ = ["ESPNClient"]
