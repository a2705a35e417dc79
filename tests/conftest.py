# Shared fixtures for the season data tests. Sources live under src/ and are
# imported as top-level packages (pytest pythonpath is set in pyproject.toml).

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from config.season_config import ActiveSeasonDataSource
from core import clock
from tests.factories import (
    ALL_PLAYERS_HTML,
    DIVISION,
    FIXTURES_HTML,
    TABLES_HTML,
    TEAM_PLAYERS_HTML,
    FakeClock,
    FakePagesFetcher,
)


@pytest.fixture
def data_source() -> ActiveSeasonDataSource:
    return ActiveSeasonDataSource(
        league="CLTTL",
        season="2025-2026",
        custom_processor="CLTTLActiveSeason2025Processor",
        registrations_start_date=1756684800,
        ratings_end_date=1782864000,
        division_tables=[{DIVISION: "https://league.test/Tables/Division_4"}],
        division_fixtures=[{DIVISION: "https://league.test/Fixtures/Division_4"}],
        division_players=[{DIVISION: "https://league.test/Averages/All_Divisions?d=9445"}],
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock(datetime(2025, 10, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture(autouse=True)
def _reset_fixed_clock():
    yield
    clock.set_fixed_clock_time(None)


@pytest.fixture
def fake_fetcher() -> FakePagesFetcher:
    return FakePagesFetcher(
        {
            "teams": TABLES_HTML,
            "fixtures": FIXTURES_HTML,
            "team_ids": ALL_PLAYERS_HTML,
            "players": TEAM_PLAYERS_HTML,
        }
    )
