"""Tests for BusinessCalendar and BusinessSchedule validation."""

from datetime import date, datetime, timezone

import pytest

from helpdesk_sla.domain.errors import ConfigurationError
from helpdesk_sla.domain.policies.business_calendar import BusinessCalendar
from helpdesk_sla.domain.value_objects.business_schedule import BusinessSchedule, DayWindow


def test_weekday_is_business_day(calendar):
    assert calendar.is_business_day(date(2025, 8, 25))


def test_weekend_closed_when_excluded(calendar):
    assert not calendar.is_business_day(date(2025, 8, 23))
    assert not calendar.is_business_day(date(2025, 8, 24))


def test_weekend_open_when_included(weekend_calendar):
    assert weekend_calendar.is_business_day(date(2025, 8, 23))


def test_holiday_is_closed(calendar):
    # Labor Day 2025 is configured as a holiday
    assert not calendar.is_business_day(date(2025, 9, 1))


def test_weekday_window(calendar, local):
    start, end = calendar.business_window(date(2025, 8, 25))
    assert start == local(2025, 8, 25, 8, 30)
    assert end == local(2025, 8, 25, 17, 30)


def test_weekend_window_is_shorter(weekend_calendar, local):
    start, end = weekend_calendar.business_window(date(2025, 8, 23))
    assert start == local(2025, 8, 23, 8, 30)
    assert end == local(2025, 8, 23, 16, 0)


def test_closed_day_window_is_empty(calendar):
    start, end = calendar.business_window(date(2025, 8, 23))
    assert start == end


def test_within_business_hours_boundaries(calendar, local):
    assert calendar.is_within_business_hours(local(2025, 8, 25, 8, 30))
    assert calendar.is_within_business_hours(local(2025, 8, 25, 17, 29))
    assert not calendar.is_within_business_hours(local(2025, 8, 25, 17, 30))
    assert not calendar.is_within_business_hours(local(2025, 8, 25, 8, 29))


def test_localize_naive_is_civil_time(calendar, tz):
    moment = calendar.localize(datetime(2025, 8, 25, 9, 0))
    assert moment.tzinfo == tz
    assert moment.hour == 9


def test_localize_converts_aware(calendar):
    # 14:00 UTC is 09:00 CDT
    moment = calendar.localize(datetime(2025, 8, 25, 14, 0, tzinfo=timezone.utc))
    assert (moment.hour, moment.minute) == (9, 0)


def test_civil_date_uses_schedule_zone(calendar):
    # 03:00 UTC on the 26th is still the evening of the 25th in Chicago
    assert calendar.civil_date(datetime(2025, 8, 26, 3, 0, tzinfo=timezone.utc)) == date(2025, 8, 25)


# ─── Schedule validation ─────────────────────────────────────────────


@pytest.mark.parametrize("start,end", [(17.5, 8.5), (9, 9), (-1, 8), (8, 25)])
def test_invalid_window_rejected(start, end):
    with pytest.raises(ConfigurationError, match="Invalid business window"):
        DayWindow(start, end)


def test_unknown_timezone_rejected():
    with pytest.raises(ConfigurationError, match="Unknown timezone"):
        BusinessSchedule(timezone="Mars/Olympus", weekday=DayWindow(8, 17), weekend=DayWindow(8, 16))


def test_holidays_coerced_to_frozenset():
    schedule = BusinessSchedule(
        timezone="UTC", weekday=DayWindow(8, 17), weekend=DayWindow(8, 16),
        holidays=[date(2025, 12, 25)],
    )
    assert isinstance(schedule.holidays, frozenset)
    assert not BusinessCalendar(schedule).is_business_day(date(2025, 12, 25))


def test_window_length():
    assert DayWindow(8.5, 17.5).length_hours == 9.0
