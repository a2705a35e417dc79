"""Domain models for league season data."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List


@dataclass(slots=True)
class Fixture:
    start_datetime: datetime
    venue: str
    home_team: str
    away_team: str
    home_team_players: List[str] = field(default_factory=list)
    away_team_players: List[str] = field(default_factory=list)
    is_completed: bool = False

    def involves(self, team: str) -> bool:
        wanted = team.strip().casefold()
        return wanted in (self.home_team.strip().casefold(), self.away_team.strip().casefold())

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form; start_datetime is flattened to ISO-8601."""
        return {
            "start_datetime": self.start_datetime.isoformat(),
            "venue": self.venue,
            "home_team": self.home_team,
            "home_team_players": list(self.home_team_players),
            "away_team": self.away_team,
            "away_team_players": list(self.away_team_players),
            "is_completed": self.is_completed,
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "Fixture":
        start = raw["start_datetime"]
        if not isinstance(start, datetime):
            start = datetime.fromisoformat(start)
        return cls(
            start_datetime=start,
            venue=raw.get("venue", ""),
            home_team=raw["home_team"],
            away_team=raw["away_team"],
            home_team_players=list(raw.get("home_team_players") or []),
            away_team_players=list(raw.get("away_team_players") or []),
            is_completed=bool(raw.get("is_completed", False)),
        )


@dataclass(slots=True, frozen=True)
class TeamIdEntry:
    team: str
    id: int

    def matches(self, team: str) -> bool:
        return self.team.strip().casefold() == team.strip().casefold()
