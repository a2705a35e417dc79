"""Capability shared by season processors and their cached wrappers."""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from domain.models import Fixture


@runtime_checkable
class ActiveSeasonProcessor(Protocol):
    async def get_team_fixtures(self) -> List[Fixture]: ...
