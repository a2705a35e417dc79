"""Structured parsing errors for league page parsers."""

from __future__ import annotations

from core.errors import SeasonDataError


class ParseError(SeasonDataError):
    """Base class for parsing related issues."""


class MissingSectionError(ParseError):
    """Raised when an expected HTML section is absent."""


class ValueExtractionError(ParseError):
    """Raised when a critical value (date, team id, etc.) cannot be extracted."""
