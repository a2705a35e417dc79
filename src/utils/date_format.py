"""Display formatting for fixture dates."""

from __future__ import annotations

from datetime import datetime

DAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
SHORT_DAYS = ["Mo", "Tu", "We", "Th", "Fr", "Sa", "Su"]
MONTHS = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def _ordinal_suffix(day: int) -> str:
    if day in (1, 21, 31):
        return "st"
    if day in (2, 22):
        return "nd"
    if day in (3, 23):
        return "rd"
    return "th"


def format_fixture_date(dt: datetime) -> str:
    """e.g. 'Fri 12th Dec'."""
    return f"{DAYS[dt.weekday()]} {dt.day}{_ordinal_suffix(dt.day)} {MONTHS[dt.month - 1]}"


def format_fixture_date_time(dt: datetime) -> str:
    """e.g. 'Fri 12th Dec 19:00'."""
    return f"{format_fixture_date(dt)} {dt.hour:02d}:{dt.minute:02d}"


def short_format_fixture_date(dt: datetime) -> str:
    """e.g. 'Fr 12-Dec'."""
    return f"{SHORT_DAYS[dt.weekday()]} {dt.day}-{MONTHS[dt.month - 1]}"


def is_same_day(a: datetime, b: datetime) -> bool:
    return a.date() == b.date()
