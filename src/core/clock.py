"""Overridable "current instant" source.

Everything time-dependent (cache ages, registration windows) reads the clock
through `get_clock_time` so tests and local runs can pin the current instant,
either with `set_fixed_clock_time` or the TTLEAGUE_FIXED_CLOCK_TIME
environment variable (ISO-8601, e.g. '2025-01-15T14:30:00Z').
"""

from __future__ import annotations

import os
from datetime import datetime, timezone
from typing import Callable, Optional

FIXED_CLOCK_ENV = "TTLEAGUE_FIXED_CLOCK_TIME"

Clock = Callable[[], datetime]

_fixed: Optional[datetime] = None


def _parse_instant(value: str) -> datetime:
    # fromisoformat only accepts a trailing 'Z' from 3.11 onwards
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def set_fixed_clock_time(value: datetime | str | None) -> None:
    """Pin the clock to `value`; None restores the wall clock."""
    global _fixed
    if value is None:
        _fixed = None
    elif isinstance(value, str):
        _fixed = _parse_instant(value)
    else:
        _fixed = value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def get_clock_time() -> datetime:
    if _fixed is not None:
        return _fixed
    env_value = os.environ.get(FIXED_CLOCK_ENV)
    if env_value:
        return _parse_instant(env_value)
    return datetime.now(timezone.utc)


def to_epoch_ms(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(moment.timestamp() * 1000)


def now_ms(clock: Clock = get_clock_time) -> int:
    return to_epoch_ms(clock())
