"""Parsing of CLTTL 2025 league pages (division tables, fixtures, averages).

All functions are pure. A missing section marker raises MissingSectionError so
callers can tell an empty division apart from a page whose layout changed.
"""

from __future__ import annotations

from datetime import datetime
from typing import List

from bs4 import BeautifulSoup
from domain.models import Fixture, TeamIdEntry
from utils import html_utils
from .errors import MissingSectionError, ValueExtractionError

PLAYER_LINK_TITLE = "View player statistics"


def _section(soup: BeautifulSoup, selector: str, page: str):
    found = soup.select_one(selector)
    if found is None:
        raise MissingSectionError(
            f"Expected '{selector}' section not found in {page} page",
            context={"selector": selector, "page": page},
        )
    return found


def get_teams(html: str) -> List[str]:
    """Team names from the division table, in page order."""
    soup = BeautifulSoup(html, "html.parser")
    tables = _section(soup, "#Tables", "division table")
    teams: List[str] = []
    for cell in tables.select("td.teamName"):
        # Narrow layout first, then the wide one
        span = cell.select_one("span.visible-xs") or cell.select_one("span.hidden-xs")
        if span is None:
            continue
        name = html_utils.node_text(span.find("a"))
        if name:
            teams.append(name)
    return teams


def _players(team_div) -> List[str]:
    if team_div is None:
        return []
    els = team_div.select(".playerName span a") or team_div.select(".playerName span")
    return [t for t in (html_utils.node_text(el) for el in els) if t]


def _start_datetime(fixture_el, index: int) -> datetime:
    date_el = fixture_el.select_one('.date[itemprop="startDate"]')
    time_tag = date_el.find("time") if date_el is not None else None
    date_str = time_tag.get("datetime") if time_tag is not None else None
    if not date_str:
        raise ValueExtractionError(
            f"Fixture #{index} has no start date", context={"index": index}
        )
    clock = html_utils.extract_time(date_el.get_text(" ", strip=True))
    try:
        if clock:
            return datetime.fromisoformat(f"{date_str}T{clock}")
        return datetime.fromisoformat(date_str)
    except ValueError as e:
        raise ValueExtractionError(
            f"Fixture #{index} has an invalid start date '{date_str}'",
            context={"index": index, "date": date_str, "time": clock},
        ) from e


def get_team_fixtures(html: str) -> List[Fixture]:
    """Every fixture of the division (played or not), unfiltered and unsorted."""
    soup = BeautifulSoup(html, "html.parser")
    section = _section(soup, "#Fixtures", "division fixtures")
    fixtures: List[Fixture] = []
    for idx, fixture_el in enumerate(section.select(".fixture")):
        home_div = fixture_el.select_one(".homeTeam")
        away_div = fixture_el.select_one(".awayTeam")
        fixtures.append(
            Fixture(
                start_datetime=_start_datetime(fixture_el, idx),
                venue=html_utils.first_text(fixture_el, ".venue span a", ".venue span"),
                home_team=html_utils.first_text(home_div, ".teamName span a", ".teamName"),
                away_team=html_utils.first_text(away_div, ".teamName span a", ".teamName"),
                home_team_players=_players(home_div),
                away_team_players=_players(away_div),
                is_completed="complete" in (fixture_el.get("class") or []),
            )
        )
    return fixtures


def get_team_ids(html: str) -> List[TeamIdEntry]:
    """(team, id) pairs from the team selector of the averages page."""
    soup = BeautifulSoup(html, "html.parser")
    select = _section(soup, "select#t", "division players")
    entries: List[TeamIdEntry] = []
    for option in select.find_all("option"):
        value = (option.get("value") or "").strip()
        if not value:
            continue
        try:
            team_id = int(value)
        except ValueError as e:
            raise ValueExtractionError(
                f"Team option value '{value}' is not a numeric id", context={"value": value}
            ) from e
        entries.append(TeamIdEntry(team=html_utils.node_text(option), id=team_id))
    return entries


def get_team_players(html: str) -> List[str]:
    """Player names listed in a team's averages page."""
    soup = BeautifulSoup(html, "html.parser")
    averages = _section(soup, "#Averages", "team players")
    players: List[str] = []
    for link in averages.find_all("a", title=PLAYER_LINK_TITLE):
        name = html_utils.node_text(link)
        if name:
            players.append(name)
    return players
