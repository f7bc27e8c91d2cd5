"""
Test the 03:00 Europe/Istanbul ledger-day boundary.
"""

from datetime import date, datetime, timezone

from contentcast.services.reset_clock import (
    calendar_date, current_ledger_day, next_reset_at, seconds_until_next_reset
)


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


def test_afternoon_belongs_to_same_day():
    now = utc(2025, 3, 10, 12, 0)

    assert current_ledger_day(now) == "2025-03-10"
    assert next_reset_at(now) == utc(2025, 3, 11, 0, 0)
    assert seconds_until_next_reset(now) == 12 * 3600


def test_before_reset_hour_is_still_previous_day():
    # 23:30 UTC is 02:30 the next morning in Istanbul
    now = utc(2025, 3, 10, 23, 30)

    assert current_ledger_day(now) == "2025-03-10"
    assert seconds_until_next_reset(now) == 30 * 60


def test_reset_boundary():
    just_before = utc(2025, 3, 10, 23, 59, 59)
    just_after = utc(2025, 3, 11, 0, 0, 1)

    assert current_ledger_day(just_before) == "2025-03-10"
    assert current_ledger_day(just_after) == "2025-03-11"
    assert seconds_until_next_reset(just_before) == 1
    assert seconds_until_next_reset(just_after) == 86399


def test_reset_in_is_never_negative():
    exactly = utc(2025, 3, 11, 0, 0)

    assert seconds_until_next_reset(exactly) == 86400


def test_calendar_date_uses_utc():
    istanbul_morning = datetime.fromisoformat("2025-03-11T01:30:00+03:00")

    assert calendar_date(istanbul_morning) == date(2025, 3, 10)


def test_small_hours_match_previous_evening():
    # Istanbul is UTC+3: 23:59 local on the 10th, then 02:00 and 03:01 on the 11th
    evening = utc(2025, 3, 10, 20, 59)
    small_hours = utc(2025, 3, 10, 23, 0)
    after_reset = utc(2025, 3, 11, 0, 1)

    assert current_ledger_day(small_hours) == current_ledger_day(evening) == "2025-03-10"
    assert current_ledger_day(after_reset) == "2025-03-11"
