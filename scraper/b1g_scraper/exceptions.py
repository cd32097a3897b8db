"""Error types raised by the ingest pipeline."""

from __future__ import annotations


class ScraperError(RuntimeError):
    """Base error for ingest failures."""


class ValidationError(ScraperError):
    """An ingest request is malformed. Raised before anything is persisted."""


class TransportError(ScraperError):
    """The provider returned a non-success status or could not be reached."""

    def __init__(self, status_code: int | None, url: str, detail: str | None = None) -> None:
        self.status_code = status_code
        self.url = url
        self.detail = detail
        if status_code is None:
            message = f"Request to {url} failed"
        else:
            message = f"Request to {url} returned {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class DataIntegrityError(ScraperError):
    """Resolved data would break a storage invariant, e.g. a game against itself."""
