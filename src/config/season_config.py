"""Active season data sources loaded from the JSON environment configuration.

The configuration file is either a list of data sources or an object holding
them under ``active_seasons_data_source``. Each entry maps division names to
page URLs for three resource kinds::

    {
      "league": "CLTTL", "season": "2025-2026",
      "custom_processor": "CLTTLActiveSeason2025Processor",
      "registrations_start_date": 1756684800, "ratings_end_date": 1782864000,
      "division_tables":   [{"Division 4": "https://.../Tables/Division_4"}],
      "division_fixtures": [{"Division 4": "https://.../Fixtures/Division_4"}],
      "division_players":  [{"Division 4": "https://.../Averages/All_Divisions?d=9445"}]
    }
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from core.errors import ConfigurationError

_log = logging.getLogger(__name__)

DATA_SOURCES_KEY = "active_seasons_data_source"
URL_TABLE_FIELDS = ("division_tables", "division_fixtures", "division_players")


@dataclass(frozen=True)
class ActiveSeasonDataSource:
    league: str
    season: str
    custom_processor: str
    registrations_start_date: int = 0
    ratings_end_date: int = 0
    division_tables: List[Dict[str, str]] = field(default_factory=list)
    division_fixtures: List[Dict[str, str]] = field(default_factory=list)
    division_players: List[Dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "ActiveSeasonDataSource":
        try:
            tables = {name: _url_table(raw.get(name, []), name) for name in URL_TABLE_FIELDS}
            return cls(
                league=str(raw["league"]),
                season=str(raw["season"]),
                custom_processor=str(raw["custom_processor"]),
                registrations_start_date=int(raw.get("registrations_start_date") or 0),
                ratings_end_date=int(raw.get("ratings_end_date") or 0),
                **tables,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid active season data source: {e}", context={"entry": raw}
            ) from e

    def divisions(self) -> List[str]:
        """Division names in configuration order (from the tables listing)."""
        names: List[str] = []
        for entry in self.division_tables:
            for name in entry:
                if name not in names:
                    names.append(name)
        return names

    def is_registration_open(self, now: datetime) -> bool:
        ts = int(now.timestamp())
        return self.registrations_start_date <= ts <= self.ratings_end_date


def _url_table(value: Any, name: str) -> List[Dict[str, str]]:
    if not isinstance(value, list):
        raise TypeError(f"{name} must be a list of {{division: url}} objects")
    table: List[Dict[str, str]] = []
    for item in value:
        if not isinstance(item, dict):
            raise TypeError(f"{name} entries must be objects")
        table.append({str(k): str(v) for k, v in item.items()})
    return table


def parse_data_sources(payload: Any) -> List[ActiveSeasonDataSource]:
    if isinstance(payload, dict):
        payload = payload.get(DATA_SOURCES_KEY, [])
    if not isinstance(payload, list):
        raise ConfigurationError(f"'{DATA_SOURCES_KEY}' must be a list")
    return [ActiveSeasonDataSource.from_dict(item) for item in payload]


def load_data_sources(path: str) -> List[ActiveSeasonDataSource]:
    try:
        with open(path, "r", encoding="utf-8") as fh:
            payload = json.load(fh)
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Unable to read configuration {path}: {e}", context={"path": path}
        ) from e
    sources = parse_data_sources(payload)
    _log.debug("Loaded %d active season data source(s) from %s", len(sources), path)
    return sources


def find_data_source(
    sources: List[ActiveSeasonDataSource], league: str, season: Optional[str] = None
) -> ActiveSeasonDataSource:
    for src in sources:
        if src.league.casefold() == league.casefold() and (season is None or src.season == season):
            return src
    label = f"{league} {season}" if season else league
    raise ConfigurationError(f'Active season "{label}" not found in configuration.')
