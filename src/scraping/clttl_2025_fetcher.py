"""Page fetching for the CLTTL 2025 active season.

Resolves division names to page URLs through the ActiveSeasonDataSource and
downloads the raw HTML. Knows nothing about the page structure.
"""

from __future__ import annotations

from typing import Dict, List, Optional
from urllib.parse import quote

import httpx
from config import settings
from config.season_config import ActiveSeasonDataSource
from core import async_http
from core.errors import ConfigurationError


class CLTTLActiveSeason2025PagesFetcher:
    def __init__(
        self,
        data_source: ActiveSeasonDataSource,
        *,
        avoid_cors: bool = False,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float | None = None,
        retries: int | None = None,
    ) -> None:
        self.data_source = data_source
        self.avoid_cors = avoid_cors
        self._client = client
        self._timeout = timeout
        self._retries = retries

    @staticmethod
    def _url_from_source(source: List[Dict[str, str]], division: str) -> str:
        for entry in source:
            url = entry.get(division)
            if url:
                return url
        raise ConfigurationError(
            f'Division "{division}" not found in data source.', context={"division": division}
        )

    def _route(self, url: str) -> str:
        if not self.avoid_cors:
            return url
        return settings.CORS_PROXY_URL_TEMPLATE.format(url=quote(url, safe=""))

    async def _fetch(self, url: str) -> str:
        return await async_http.fetch(
            self._route(url), client=self._client, timeout=self._timeout, retries=self._retries
        )

    async def get_teams(self, division: str) -> str:
        """Division table page."""
        return await self._fetch(self._url_from_source(self.data_source.division_tables, division))

    async def get_team_fixtures(self, division: str) -> str:
        """Division fixtures page."""
        return await self._fetch(
            self._url_from_source(self.data_source.division_fixtures, division)
        )

    async def get_team_ids(self, division: str) -> str:
        """Division player averages page (holds the team selector)."""
        return await self._fetch(
            self._url_from_source(self.data_source.division_players, division)
        )

    async def get_team_players(self, division: str, team_id: int) -> str:
        """Player averages page filtered to one team id."""
        base_url = self._url_from_source(self.data_source.division_players, division)
        separator = "&" if "?" in base_url else "?"
        return await self._fetch(f"{base_url}{separator}stx=&swp=&spp=&t={team_id}")
