"""Active season processor registry and factory.

Processors are registered under the name used by the configuration's
``custom_processor`` field. Supporting a new league or season only needs a new
class implementing `get_team_fixtures` plus a `register_processor` call.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from config import settings
from config.season_config import ActiveSeasonDataSource
from core.errors import ConfigurationError
from core.kv_store import SqliteKeyValueStore
from core.swr_cache import SWRCache
from .active_season_processor import ActiveSeasonProcessor
from .cached_processor import ActiveSeasonProcessorWithCache
from .clttl_2025_processor import CLTTLActiveSeason2025Processor
from .dummy_processor import DummyActiveSeasonProcessor

__all__ = [
    "ProcessorConstructor",
    "register_processor",
    "unregister_processor",
    "registered_processors",
    "build_active_season_processor",
    "create_active_season_processor",
    "cache_key_for",
    "default_cache",
]

_log = logging.getLogger(__name__)

ProcessorConstructor = Callable[[ActiveSeasonDataSource, str, str, bool], ActiveSeasonProcessor]

_registry: Dict[str, ProcessorConstructor] = {}
_default_cache: Optional[SWRCache] = None


def register_processor(
    name: str, constructor: ProcessorConstructor, *, allow_override: bool = False
) -> None:
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError("Processor name must be a non-empty string")
    if not callable(constructor):
        raise ConfigurationError(f'Processor "{name}" constructor is not callable')
    if name in _registry and not allow_override:
        raise ConfigurationError(f'Active Season Processor "{name}" already registered.')
    _registry[name] = constructor


def unregister_processor(name: str) -> None:
    """Remove a processor; noop if missing."""
    _registry.pop(name, None)


def registered_processors() -> List[str]:
    return sorted(_registry)


def build_active_season_processor(
    name: str,
    data_source: ActiveSeasonDataSource,
    division: str,
    team: str,
    avoid_cors: bool = False,
) -> ActiveSeasonProcessor:
    """Instantiate the raw (uncached) processor registered under `name`."""
    constructor = _registry.get(name)
    if constructor is None:
        raise ConfigurationError(
            f'Active Season Processor "{name}" not present or registered.',
            context={"name": name, "registered": registered_processors()},
        )
    return constructor(data_source, division, team, avoid_cors)


def cache_key_for(data_source: ActiveSeasonDataSource, division: str, team: str) -> str:
    return f"{settings.CACHE_KEY_PREFIX}{data_source.league}_{data_source.season}_{division}_{team}"


def default_cache() -> SWRCache:
    """Process-wide cache persisted in the SQLite store at settings.CACHE_DB_PATH."""
    global _default_cache
    if _default_cache is None:
        _log.debug("Opening SWR cache store %s", settings.CACHE_DB_PATH)
        _default_cache = SWRCache(SqliteKeyValueStore(settings.CACHE_DB_PATH))
    return _default_cache


def create_active_season_processor(
    name: str,
    data_source: ActiveSeasonDataSource,
    division: str,
    team: str,
    avoid_cors: bool = False,
    *,
    cache: Optional[SWRCache] = None,
) -> ActiveSeasonProcessorWithCache:
    """Instantiate the processor registered under `name`, wrapped in the SWR cache.

    Raises ConfigurationError if the name is not registered.
    """
    real = build_active_season_processor(name, data_source, division, team, avoid_cors)
    return ActiveSeasonProcessorWithCache(
        real, cache_key_for(data_source, division, team), cache or default_cache()
    )


register_processor("CLTTLActiveSeason2025Processor", CLTTLActiveSeason2025Processor)
register_processor("DummyActiveSeasonProcessor", DummyActiveSeasonProcessor)
