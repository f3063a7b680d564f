"""Tests for calendar period utilities."""

from datetime import timedelta
from zoneinfo import ZoneInfo

import pytest

from conftest import TZ, at
from goaltrio.errors import InvalidTimestamp, InvalidWeekStartConfig
from goaltrio.utils.time_utils import (
    day_start,
    month_start,
    same_day,
    same_month,
    same_week,
    to_local,
    validate_week_start,
    week_start,
)


def test_week_start_monday():
    """Friday 2025-12-26 with Monday weeks starts on Monday 2025-12-22."""
    friday = at(2025, 12, 26, 15, 30)
    start = to_local(week_start(friday, 2, TZ), TZ)

    assert (start.year, start.month, start.day) == (2025, 12, 22)
    assert (start.hour, start.minute, start.second) == (0, 0, 0)


def test_week_start_all_days():
    """Every configured week-start day, including 'today is the first day'."""
    friday = at(2025, 12, 26, 15, 30)
    expected = {1: 21, 2: 22, 3: 23, 4: 24, 5: 25, 6: 26, 7: 20}

    for week_start_day, day in expected.items():
        start = to_local(week_start(friday, week_start_day, TZ), TZ)
        assert start.day == day, f"week_start={week_start_day}"
        assert (start.year, start.month) == (2025, 12)


def test_week_start_contains_and_is_idempotent():
    """weekStart(t) is in t's week, and applying it twice changes nothing."""
    t = at(2025, 12, 1, 0, 0)
    for _ in range(24 * 40):
        for w in range(1, 8):
            start = week_start(t, w, TZ)
            assert same_week(start, t, w, TZ)
            assert week_start(start, w, TZ) == start
        t += 7 * 60 * 60 * 1000  # step 7h to hit every hour of the week


def test_week_start_across_dst():
    """Week arithmetic uses calendar days, so midnight survives DST."""
    # US DST starts Sunday 2026-03-08
    tuesday = at(2026, 3, 10, 12)
    start = to_local(week_start(tuesday, 1, TZ), TZ)

    assert (start.month, start.day, start.hour) == (3, 8, 0)

    # The week of the switch is one hour short
    following = week_start(at(2026, 3, 17, 12), 1, TZ)
    assert following - week_start(tuesday, 1, TZ) == (7 * 24 - 1) * 60 * 60 * 1000


def test_day_start():
    start = to_local(day_start(at(2025, 12, 27, 15, 30), TZ), TZ)
    assert (start.year, start.month, start.day, start.hour, start.minute) == (
        2025, 12, 27, 0, 0
    )


def test_month_start():
    start = to_local(month_start(at(2025, 12, 27, 15, 30), TZ), TZ)
    assert (start.year, start.month, start.day, start.hour) == (2025, 12, 1, 0)


def test_same_day():
    assert same_day(at(2025, 12, 27, 10), at(2025, 12, 27, 15, 30), TZ)
    assert not same_day(at(2025, 12, 27, 10), at(2025, 12, 28, 10), TZ)
    assert not same_day(at(2025, 1, 1), at(2026, 1, 1), TZ)


def test_same_day_depends_on_zone():
    """'Same day' is a local-calendar question."""
    late_evening = at(2025, 12, 27, 22)  # 03:00 UTC on the 28th
    next_morning = at(2025, 12, 28, 8)

    assert not same_day(late_evening, next_morning, TZ)
    assert same_day(late_evening, next_morning, ZoneInfo("UTC"))


def test_same_week():
    monday = at(2025, 12, 22, 10)
    friday = at(2025, 12, 26, 10)
    next_monday = at(2025, 12, 29, 10)

    assert same_week(monday, friday, 2, TZ)
    assert not same_week(monday, next_monday, 2, TZ)
    # With Friday weeks, Monday and Friday are in different weeks
    assert not same_week(monday, friday, 6, TZ)


def test_same_month():
    assert same_month(at(2025, 12, 1, 10), at(2025, 12, 31, 15, 30), TZ)
    assert not same_month(at(2025, 12, 31, 10), at(2026, 1, 1, 10), TZ)
    assert not same_month(at(2025, 1, 15), at(2026, 1, 15), TZ)


def test_to_local_keeps_milliseconds():
    t = at(2025, 12, 26, 15, 30) + 123
    assert to_local(t, TZ).microsecond == 123000


def test_invalid_timestamp():
    with pytest.raises(InvalidTimestamp):
        to_local(10**20, TZ)

    with pytest.raises(InvalidTimestamp):
        day_start(-(10**20), TZ)

    with pytest.raises(InvalidTimestamp):
        to_local("1735000000000", TZ)  # type: ignore[arg-type]

    with pytest.raises(InvalidTimestamp):
        to_local(1.5, TZ)  # type: ignore[arg-type]


def test_validate_week_start():
    assert validate_week_start(1) == 1
    assert validate_week_start(7) == 7
    assert validate_week_start("3") == 3
    assert validate_week_start(" 2 ") == 2

    for bad in (0, 8, -1, "x", "", True, None, 2.0):
        with pytest.raises(InvalidWeekStartConfig):
            validate_week_start(bad)


def test_week_functions_reject_bad_week_start():
    with pytest.raises(InvalidWeekStartConfig):
        week_start(at(2025, 12, 26), 0, TZ)

    with pytest.raises(InvalidWeekStartConfig):
        same_week(at(2025, 12, 26), at(2025, 12, 27), 8, TZ)


def test_month_start_one_day_before_is_previous_month():
    start = month_start(at(2026, 3, 15), TZ)
    before = to_local(start - 1, TZ)
    assert (before.year, before.month, before.day) == (2026, 2, 28)
    assert to_local(start, TZ) - before == timedelta(milliseconds=1)
