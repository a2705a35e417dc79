"""Error taxonomy shared by the fetch, process and cache layers."""

from __future__ import annotations
from typing import Any


class SeasonDataError(Exception):
    """Base class for season data pipeline failures."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(SeasonDataError):
    """Raised for unknown processors, bad registrations or missing division URLs."""


class NetworkError(SeasonDataError):
    """Raised when a page cannot be retrieved or returns a non-success status."""


class NotFoundError(SeasonDataError):
    """Raised when a domain lookup (e.g. team id by name) has no match."""


class CacheCorruptionError(SeasonDataError):
    """Raised internally when a persisted cache entry cannot be used."""
