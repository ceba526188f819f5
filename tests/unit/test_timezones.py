"""Timezone resolution and local-time arithmetic."""

import logging
from datetime import UTC, datetime, time
from zoneinfo import ZoneInfo

import pytest

from diary.shared.utils.timezones import (
    UnknownTimeZoneError,
    get_time_zone,
    is_valid_time_zone,
    local_time_on_date_to_utc,
    resolve_time_zone_or_utc,
    same_local_date,
    to_local,
)

NEW_YORK = ZoneInfo("America/New_York")


@pytest.mark.parametrize("name", [None, "", "UTC", "utc"])
def test_empty_or_utc_name_is_utc(name) -> None:
    assert get_time_zone(name) is UTC


def test_iana_name_resolves() -> None:
    assert get_time_zone("America/New_York") == NEW_YORK


def test_unknown_name_raises() -> None:
    with pytest.raises(UnknownTimeZoneError):
        get_time_zone("Mars/Olympus_Mons")


@pytest.mark.parametrize("name", ["America", "Europe"])
def test_zone_directory_name_is_unknown(name) -> None:
    with pytest.raises(UnknownTimeZoneError):
        get_time_zone(name)
    assert not is_valid_time_zone(name)
    assert resolve_time_zone_or_utc(name, owner="user-1") is UTC


def test_resolve_falls_back_to_utc_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING):
        tz = resolve_time_zone_or_utc("Not/AZone", owner="user-2")
    assert tz is UTC
    assert "user-2" in caplog.text
    assert "falling back to UTC" in caplog.text


def test_is_valid_time_zone() -> None:
    assert is_valid_time_zone("Europe/London")
    assert is_valid_time_zone("")
    assert not is_valid_time_zone("Eastern Standard Time")


def test_preferred_time_before_dst_start_uses_standard_offset() -> None:
    local_now = to_local(datetime(2025, 3, 8, 15, 0, tzinfo=UTC), NEW_YORK)
    assert local_time_on_date_to_utc(local_now, time(10, 0), NEW_YORK) == datetime(
        2025, 3, 8, 15, 0, tzinfo=UTC
    )


def test_preferred_time_after_dst_start_uses_daylight_offset() -> None:
    local_now = to_local(datetime(2025, 3, 10, 14, 0, tzinfo=UTC), NEW_YORK)
    assert local_time_on_date_to_utc(local_now, time(10, 0), NEW_YORK) == datetime(
        2025, 3, 10, 14, 0, tzinfo=UTC
    )


def test_transition_day_uses_offset_in_force_at_that_time() -> None:
    """2025-03-09: clocks jump at 02:00, so 10:00 local is already EDT."""
    local_now = to_local(datetime(2025, 3, 9, 14, 0, tzinfo=UTC), NEW_YORK)
    assert local_time_on_date_to_utc(local_now, time(10, 0), NEW_YORK) == datetime(
        2025, 3, 9, 14, 0, tzinfo=UTC
    )


def test_time_in_spring_forward_gap_uses_pre_transition_offset() -> None:
    local_now = to_local(datetime(2025, 3, 9, 12, 0, tzinfo=UTC), NEW_YORK)
    # 02:30 does not exist on that date; fold=0 applies EST (-05:00).
    assert local_time_on_date_to_utc(local_now, time(2, 30), NEW_YORK) == datetime(
        2025, 3, 9, 7, 30, tzinfo=UTC
    )


def test_ambiguous_fall_back_time_resolves_to_first_occurrence() -> None:
    local_now = to_local(datetime(2025, 11, 2, 12, 0, tzinfo=UTC), NEW_YORK)
    # 01:30 happens twice; the first is still EDT (-04:00).
    assert local_time_on_date_to_utc(local_now, time(1, 30), NEW_YORK) == datetime(
        2025, 11, 2, 5, 30, tzinfo=UTC
    )


def test_same_local_date_uses_the_zone_not_utc() -> None:
    # 03:00Z and 23:00Z on 2025-04-06 are different New York dates (04-05 and 04-06).
    a = datetime(2025, 4, 6, 3, 0, tzinfo=UTC)
    b = datetime(2025, 4, 6, 23, 0, tzinfo=UTC)
    assert not same_local_date(a, b, NEW_YORK)
    assert same_local_date(a, b, UTC)
