from datetime import UTC, date, datetime, time

import pytz

from app.services.time_normalizer import day_of_week, resolve_timezone, to_local, to_utc, wall_time_exists

WARSAW = pytz.timezone("Europe/Warsaw")


def test_to_utc_follows_winter_and_summer_offsets() -> None:
    assert to_utc(date(2025, 1, 14), time(9, 0), WARSAW) == datetime(2025, 1, 14, 8, 0, tzinfo=UTC)
    assert to_utc(date(2025, 7, 15), time(9, 0), WARSAW) == datetime(2025, 7, 15, 7, 0, tzinfo=UTC)


def test_to_utc_shifts_time_inside_spring_forward_gap() -> None:
    # 02:30 does not exist in Warsaw on 2025-03-30
    assert to_utc(date(2025, 3, 30), time(2, 30), WARSAW) == datetime(2025, 3, 30, 1, 30, tzinfo=UTC)


def test_to_utc_resolves_ambiguous_time_to_standard_time() -> None:
    # 02:30 happens twice on 2025-10-26; the CET occurrence is used
    assert to_utc(date(2025, 10, 26), time(2, 30), WARSAW) == datetime(2025, 10, 26, 1, 30, tzinfo=UTC)


def test_to_local_converts_instant_and_accepts_naive_utc() -> None:
    assert to_local(datetime(2025, 7, 15, 7, 0, tzinfo=UTC), WARSAW) == (date(2025, 7, 15), time(9, 0))
    assert to_local(datetime(2025, 1, 14, 23, 30), WARSAW) == (date(2025, 1, 15), time(0, 30))


def test_resolve_timezone_known_zone() -> None:
    resolved = resolve_timezone("Europe/Warsaw", "UTC")
    assert resolved.name == "Europe/Warsaw"
    assert resolved.fallback is False


def test_resolve_timezone_falls_back_to_configured_default() -> None:
    resolved = resolve_timezone("Mars/Olympus_Mons", "Europe/Berlin")
    assert resolved.name == "Europe/Berlin"
    assert resolved.fallback is True
    assert to_utc(date(2025, 1, 14), time(9, 0), resolved.tz) == datetime(2025, 1, 14, 8, 0, tzinfo=UTC)


def test_resolve_timezone_empty_name_is_flagged() -> None:
    resolved = resolve_timezone(None, "UTC")
    assert resolved.fallback is True
    assert resolved.name == "UTC"


def test_day_of_week_starts_on_sunday() -> None:
    assert day_of_week(date(2025, 3, 9)) == 0  # Sunday
    assert day_of_week(date(2025, 3, 11)) == 2  # Tuesday
    assert day_of_week(date(2025, 3, 15)) == 6  # Saturday


def test_spring_forward_gap_has_no_wall_times() -> None:
    # 2025-03-30: Warsaw jumps from 02:00 to 03:00
    assert wall_time_exists(date(2025, 3, 30), time(1, 45), WARSAW)
    assert not wall_time_exists(date(2025, 3, 30), time(2, 0), WARSAW)
    assert not wall_time_exists(date(2025, 3, 30), time(2, 45), WARSAW)
    assert wall_time_exists(date(2025, 3, 30), time(3, 0), WARSAW)
    # Repeated hour on 2025-10-26 still exists
    assert wall_time_exists(date(2025, 10, 26), time(2, 30), WARSAW)
