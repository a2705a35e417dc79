"""CLI entry point for season data lookups and cache maintenance."""

from __future__ import annotations
import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any

from config import settings
from config.season_config import find_data_source, load_data_sources
from core.clock import get_clock_time
from core.errors import SeasonDataError
from services import processor_factory
from utils.date_format import format_fixture_date_time, is_same_day, short_format_fixture_date

_log = logging.getLogger("season-data")


def configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get("TTLEAGUE_LOG_LEVEL", "WARNING")
    logging.basicConfig(
        level=getattr(logging, level_name.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


def _emit(result: Any, as_json: bool, lines: list[str]) -> None:
    if as_json:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    else:
        for line in lines:
            print(line)


def _data_source(args: argparse.Namespace):
    sources = load_data_sources(args.config)
    return find_data_source(sources, args.league, args.season)


async def cmd_teams(args: argparse.Namespace) -> None:
    source = _data_source(args)
    processor = processor_factory.build_active_season_processor(
        source.custom_processor, source, args.division, args.team or "", args.avoid_cors
    )
    teams = await processor.get_teams()  # type: ignore[attr-defined]
    _emit(teams, args.json, teams)


async def cmd_players(args: argparse.Namespace) -> None:
    source = _data_source(args)
    processor = processor_factory.build_active_season_processor(
        source.custom_processor, source, args.division, args.team, args.avoid_cors
    )
    players = await processor.get_team_players()  # type: ignore[attr-defined]
    _emit(players, args.json, players)


async def cmd_fixtures(args: argparse.Namespace) -> None:
    source = _data_source(args)
    processor = processor_factory.create_active_season_processor(
        source.custom_processor, source, args.division, args.team, args.avoid_cors
    )
    fixtures = await processor.get_team_fixtures()
    # Let a revalidation started by a stale read land in the store before exit
    await processor.cache.drain_background_refreshes()
    lines: list[str] = []
    previous = None
    for f in fixtures:
        if previous is None or not is_same_day(previous.start_datetime, f.start_datetime):
            lines.append(f"== {short_format_fixture_date(f.start_datetime)}")
        lines.append(
            f"{format_fixture_date_time(f.start_datetime)}  {f.home_team} v {f.away_team}"
            f"  @ {f.venue}{'  (played)' if f.is_completed else ''}"
        )
        previous = f
    _emit([f.to_dict() for f in fixtures], args.json, lines)


async def cmd_seasons(args: argparse.Namespace) -> None:
    now = get_clock_time()
    result = []
    lines = []
    for source in load_data_sources(args.config):
        divisions = source.divisions()
        registration_open = source.is_registration_open(now)
        result.append(
            {
                "league": source.league,
                "season": source.season,
                "processor": source.custom_processor,
                "divisions": divisions,
                "registration_open": registration_open,
            }
        )
        status = "open" if registration_open else "closed"
        lines.append(f"{source.league} {source.season} (registration {status})")
        lines.extend(f"  {name}" for name in divisions)
    _emit(result, args.json, lines)


async def cmd_invalidate(args: argparse.Namespace) -> None:
    cache = processor_factory.default_cache()
    if args.key:
        cache.invalidate_cache(args.key)
        print(f"Removed {args.key}")
    else:
        removed = cache.invalidate_cache_by_prefix(args.prefix)
        print(f"Removed {removed} entr{'y' if removed == 1 else 'ies'} with prefix {args.prefix!r}")


def _add_season_args(p: argparse.ArgumentParser, team_required: bool = True) -> None:
    p.add_argument("--config", default=settings.CONFIG_PATH, help="Environment config JSON")
    p.add_argument("--league", required=True, help="League name, e.g. CLTTL")
    p.add_argument("--season", required=False, help="Season, e.g. 2025-2026")
    p.add_argument("--division", required=True, help="Division name")
    p.add_argument("--team", required=team_required, help="Team name")
    p.add_argument("--avoid-cors", action="store_true", help="Fetch through the CORS proxy")
    p.add_argument("--json", action="store_true", help="Output JSON")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="season-data")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    seasons = sub.add_parser("seasons", help="List configured seasons and divisions")
    seasons.add_argument("--config", default=settings.CONFIG_PATH, help="Environment config JSON")
    seasons.add_argument("--json", action="store_true", help="Output JSON")
    seasons.set_defaults(func=cmd_seasons)

    teams = sub.add_parser("teams", help="List the teams of a division")
    _add_season_args(teams, team_required=False)
    teams.set_defaults(func=cmd_teams)

    fixtures = sub.add_parser("fixtures", help="Fixtures of a team (cached)")
    _add_season_args(fixtures)
    fixtures.set_defaults(func=cmd_fixtures)

    players = sub.add_parser("players", help="Players of a team")
    _add_season_args(players)
    players.set_defaults(func=cmd_players)

    invalidate = sub.add_parser("invalidate", help="Drop cached entries")
    group = invalidate.add_mutually_exclusive_group(required=True)
    group.add_argument("--key", help="Exact cache key")
    group.add_argument("--prefix", help="Key prefix, e.g. cache_CLTTL_")
    invalidate.set_defaults(func=cmd_invalidate)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    try:
        asyncio.run(args.func(args))
    except SeasonDataError as e:
        _log.debug("command failed", exc_info=True)
        print(f"Unable to load {args.command}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
