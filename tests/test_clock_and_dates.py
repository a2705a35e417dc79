from datetime import datetime, timezone

from core import clock
from utils.date_format import (
    format_fixture_date,
    format_fixture_date_time,
    is_same_day,
    short_format_fixture_date,
)


def test_fixed_clock_overrides_wall_clock():
    clock.set_fixed_clock_time("2025-01-15T14:30:00Z")
    assert clock.get_clock_time() == datetime(2025, 1, 15, 14, 30, tzinfo=timezone.utc)
    assert clock.now_ms() == 1736951400000
    clock.set_fixed_clock_time(None)
    assert clock.get_clock_time() != datetime(2025, 1, 15, 14, 30, tzinfo=timezone.utc)


def test_env_clock_override(monkeypatch):
    monkeypatch.setenv(clock.FIXED_CLOCK_ENV, "2025-09-29T18:00:00+01:00")
    assert clock.get_clock_time() == datetime(2025, 9, 29, 17, 0, tzinfo=timezone.utc)


def test_naive_instants_are_treated_as_utc():
    assert clock.to_epoch_ms(datetime(1970, 1, 1, 0, 0, 1)) == 1000


def test_fixture_date_formatting():
    dt = datetime(2025, 12, 12, 19, 0)
    assert format_fixture_date(dt) == "Fri 12th Dec"
    assert format_fixture_date_time(dt) == "Fri 12th Dec 19:00"
    assert short_format_fixture_date(dt) == "Fr 12-Dec"
    assert format_fixture_date(datetime(2025, 9, 1)) == "Mon 1st Sep"
    assert format_fixture_date(datetime(2025, 10, 22)) == "Wed 22nd Oct"
    assert format_fixture_date(datetime(2025, 10, 23)) == "Thu 23rd Oct"


def test_is_same_day():
    assert is_same_day(datetime(2025, 10, 7, 9), datetime(2025, 10, 7, 21))
    assert not is_same_day(datetime(2025, 10, 7, 23), datetime(2025, 10, 8, 0))
