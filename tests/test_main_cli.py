import json

import pytest

import main
from core import clock
from core.kv_store import InMemoryKeyValueStore
from core.swr_cache import SWRCache
from services import processor_factory
from tests.factories import ALL_PLAYERS_HTML, FIXTURES_HTML, TABLES_HTML, TEAM_PLAYERS_HTML

PAGES = {
    "https://league.test/Tables/Division_4": TABLES_HTML,
    "https://league.test/Fixtures/Division_4": FIXTURES_HTML,
    "https://league.test/Averages/All_Divisions?d=9445": ALL_PLAYERS_HTML,
    "https://league.test/Averages/All_Divisions?d=9445&stx=&swp=&spp=&t=73149": TEAM_PLAYERS_HTML,
}


@pytest.fixture
def cli_env(tmp_path, monkeypatch, data_source):
    config_path = tmp_path / "test.env.json"
    config_path.write_text(
        json.dumps(
            {
                "active_seasons_data_source": [
                    {
                        "league": data_source.league,
                        "season": data_source.season,
                        "custom_processor": data_source.custom_processor,
                        "registrations_start_date": data_source.registrations_start_date,
                        "ratings_end_date": data_source.ratings_end_date,
                        "division_tables": data_source.division_tables,
                        "division_fixtures": data_source.division_fixtures,
                        "division_players": data_source.division_players,
                    }
                ]
            }
        ),
        encoding="utf-8",
    )
    fetched: list[str] = []

    async def fake_fetch(url, **kwargs):
        fetched.append(url)
        return PAGES[url]

    monkeypatch.setattr("core.async_http.fetch", fake_fetch)
    cache = SWRCache(InMemoryKeyValueStore())
    monkeypatch.setattr(processor_factory, "_default_cache", cache)
    return str(config_path), fetched, cache


def _args(config, command, *extra):
    return [command, "--config", config, "--league", "CLTTL", "--division", "Division 4", *extra]


def test_fixtures_command_outputs_sorted_team_fixtures(cli_env, capsys):
    config, fetched, cache = cli_env
    assert main.main(_args(config, "fixtures", "--team", "Fusion 5", "--json")) == 0

    out = json.loads(capsys.readouterr().out)
    assert [f["start_datetime"] for f in out] == ["2025-10-07T19:15:00", "2025-10-20T19:00:00"]
    assert cache.store.keys() == ["cache_CLTTL_2025-2026_Division 4_Fusion 5"]

    # Second run is served from the cache
    assert main.main(_args(config, "fixtures", "--team", "Fusion 5")) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "== Tu 7-Oct"
    assert lines[1].startswith("Tue 7th Oct 19:15  Morpeth 10 v Fusion 5")
    assert lines[2] == "== Mo 20-Oct"
    assert lines[3].startswith("Mon 20th Oct 19:00  Fusion 5 v Morpeth 10")
    assert len(fetched) == 1


def test_seasons_command_reports_divisions_and_registration(cli_env, capsys):
    config, fetched, _ = cli_env
    clock.set_fixed_clock_time("2025-10-01T12:00:00Z")
    assert main.main(["seasons", "--config", config, "--json"]) == 0
    assert json.loads(capsys.readouterr().out) == [
        {
            "league": "CLTTL",
            "season": "2025-2026",
            "processor": "CLTTLActiveSeason2025Processor",
            "divisions": ["Division 4"],
            "registration_open": True,
        }
    ]
    assert fetched == []


def test_seasons_command_shows_closed_registration(cli_env, capsys):
    config, _, _ = cli_env
    clock.set_fixed_clock_time("2026-08-01T00:00:00Z")
    assert main.main(["seasons", "--config", config]) == 0
    assert capsys.readouterr().out.splitlines() == [
        "CLTTL 2025-2026 (registration closed)",
        "  Division 4",
    ]


def test_players_command(cli_env, capsys):
    config, _, _ = cli_env
    assert main.main(_args(config, "players", "--team", "fusion 5")) == 0
    assert capsys.readouterr().out.splitlines() == ["Ke Xin Li", "Luca Minudel"]


def test_teams_command(cli_env, capsys):
    config, _, _ = cli_env
    assert main.main(_args(config, "teams", "--json")) == 0
    assert json.loads(capsys.readouterr().out) == ["Fusion 5", "Morpeth 10", "Highbury 3"]


def test_failures_are_reported_as_unable_to_load(cli_env, capsys):
    config, _, _ = cli_env
    code = main.main(
        ["players", "--config", config, "--league", "CLTTL", "--division", "Division 4",
         "--team", "Nobody"]
    )
    assert code == 1
    assert 'Unable to load players: Team "Nobody" not found' in capsys.readouterr().err


def test_invalidate_by_prefix(cli_env, capsys):
    _, _, cache = cli_env
    for key in ("cache_CLTTL_a", "cache_CLTTL_b", "kudos_cache_x"):
        cache.store.set(key, "{}")
    assert main.main(["invalidate", "--prefix", "cache_CLTTL_"]) == 0
    assert cache.store.keys() == ["kudos_cache_x"]
    assert "Removed 2 entries" in capsys.readouterr().out
