"""Stale-while-revalidate wrapper for a season processor's fixtures."""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from config import settings
from core.swr_cache import SWRCache, SWROptions
from domain.models import Fixture
from .active_season_processor import ActiveSeasonProcessor

FIXTURES_SWR_OPTIONS = SWROptions(
    fresh_duration_ms=settings.FIXTURES_FRESH_DURATION_MS,  # 72 hours
    stale_duration_ms=settings.FIXTURES_STALE_DURATION_MS,  # 6 days
)


def deserialize_fixtures(data: List[Dict[str, Any]]) -> List[Fixture]:
    return [Fixture.from_dict(item) for item in data]


class ActiveSeasonProcessorWithCache:
    """Serves fixtures from the SWR cache, revalidating through the real processor.

    The cache key must encode league, season, division and team so entries of
    different teams never collide.
    """

    def __init__(
        self,
        real_processor: ActiveSeasonProcessor,
        cache_key: str,
        cache: SWRCache,
        *,
        options: SWROptions = FIXTURES_SWR_OPTIONS,
        on_fixtures_updated: Optional[Callable[[List[Fixture]], Any]] = None,
    ) -> None:
        self.real_processor = real_processor
        self.cache_key = cache_key
        self.cache = cache
        self.options = options
        self.on_fixtures_updated = on_fixtures_updated

    async def _fetch_serialized(self) -> List[Dict[str, Any]]:
        fixtures = await self.real_processor.get_team_fixtures()
        return [f.to_dict() for f in fixtures]

    async def get_team_fixtures(self) -> List[Fixture]:
        return await self.cache.with_swr(
            self.cache_key,
            self._fetch_serialized,
            self.options,
            transformer=deserialize_fixtures,
            on_background_update=self.on_fixtures_updated,
        )

    def invalidate(self) -> None:
        self.cache.invalidate_cache(self.cache_key)
