"""Placeholder processor for leagues without a page source yet."""

from __future__ import annotations

from typing import List

from config.season_config import ActiveSeasonDataSource
from domain.models import Fixture


class DummyActiveSeasonProcessor:
    def __init__(
        self,
        data_source: ActiveSeasonDataSource,
        division: str,
        team: str,
        avoid_cors: bool = False,
    ) -> None:
        self.division = division
        self.team = team

    async def get_team_fixtures(self) -> List[Fixture]:
        return []
