"""Season processor for the CLTTL 2025 league pages."""

from __future__ import annotations

import logging
from typing import List, Optional

from config.season_config import ActiveSeasonDataSource
from core.errors import NotFoundError
from domain.models import Fixture
from parsing import clttl_2025_parser
from scraping.clttl_2025_fetcher import CLTTLActiveSeason2025PagesFetcher

_log = logging.getLogger(__name__)


class CLTTLActiveSeason2025Processor:
    """Answers team-level questions for one division/team of the active season."""

    def __init__(
        self,
        data_source: ActiveSeasonDataSource,
        division: str,
        team: str,
        avoid_cors: bool = False,
        *,
        fetcher: Optional[CLTTLActiveSeason2025PagesFetcher] = None,
    ) -> None:
        self.fetcher = fetcher or CLTTLActiveSeason2025PagesFetcher(
            data_source, avoid_cors=avoid_cors
        )
        self.division = division
        self.team = team

    async def get_teams(self) -> List[str]:
        html = await self.fetcher.get_teams(self.division)
        return clttl_2025_parser.get_teams(html)

    async def get_team_fixtures(self) -> List[Fixture]:
        """Fixtures involving the configured team, earliest first."""
        html = await self.fetcher.get_team_fixtures(self.division)
        fixtures = clttl_2025_parser.get_team_fixtures(html)
        own = [f for f in fixtures if f.involves(self.team)]
        _log.debug(
            "%d of %d fixtures in %s involve %s", len(own), len(fixtures), self.division, self.team
        )
        return sorted(own, key=lambda f: f.start_datetime)

    async def get_team_players(self) -> List[str]:
        """Roster of the configured team.

        Two fetches: the division's team-id selector, then the team's averages
        page for the resolved id.
        """
        ids_html = await self.fetcher.get_team_ids(self.division)
        entry = next(
            (e for e in clttl_2025_parser.get_team_ids(ids_html) if e.matches(self.team)), None
        )
        if entry is None:
            raise NotFoundError(
                f'Team "{self.team}" not found in division "{self.division}".',
                context={"team": self.team, "division": self.division},
            )
        players_html = await self.fetcher.get_team_players(self.division, entry.id)
        return clttl_2025_parser.get_team_players(players_html)
