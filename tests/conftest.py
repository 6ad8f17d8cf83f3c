"""Pytest configuration and shared fixtures.

Dates used across the suite: 2025-08-22 is a Friday, 2025-08-25 a Monday.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from helpdesk_sla.domain.policies.business_calendar import BusinessCalendar
from helpdesk_sla.domain.value_objects.business_schedule import BusinessSchedule, DayWindow
from helpdesk_sla.domain.value_objects.sla_policy import SLAPolicy
from helpdesk_sla.domain.value_objects.sla_thresholds import (
    FollowUpPolicy,
    MilestoneLimits,
    RiskThresholds,
    SLAThresholdTable,
)

CHICAGO = ZoneInfo("America/Chicago")

POLICY_YAML = """\
timezone: America/Chicago
business_hours:
  weekday: {start: "08:30", end: "17:30"}
  weekend: {start: "08:30", end: "16:00"}
  include_weekends: false
  holidays: [2025-09-01]
sla:
  critical: {assignment: 1, first_response: 2}
  high: {assignment: 2, first_response: 4}
  normal: {assignment: 4, first_response: 8}
  low: {assignment: 8, first_response: 16}
follow_up:
  after_user_response_hours: 18
  no_user_response_hours: 27
technician_domains: ["corp\\\\"]
"""


@pytest.fixture
def tz():
    return CHICAGO


@pytest.fixture
def local():
    """Factory for aware datetimes in the support desk's civil timezone."""
    def _local(y, mo, d, h=0, mi=0):
        return datetime(y, mo, d, h, mi, tzinfo=CHICAGO)
    return _local


@pytest.fixture
def schedule():
    return BusinessSchedule(
        timezone="America/Chicago",
        weekday=DayWindow(8.5, 17.5),
        weekend=DayWindow(8.5, 16.0),
        include_weekends=False,
        holidays=frozenset({date(2025, 9, 1)}),
    )


@pytest.fixture
def calendar(schedule):
    return BusinessCalendar(schedule)


@pytest.fixture
def weekend_calendar():
    return BusinessCalendar(BusinessSchedule(
        timezone="America/Chicago",
        weekday=DayWindow(8.5, 17.5),
        weekend=DayWindow(8.5, 16.0),
        include_weekends=True,
    ))


@pytest.fixture
def thresholds():
    return SLAThresholdTable({
        "critical": MilestoneLimits(assignment=1, first_response=2),
        "high": MilestoneLimits(assignment=2, first_response=4),
        "normal": MilestoneLimits(assignment=4, first_response=8),
        "low": MilestoneLimits(assignment=8, first_response=16),
    })


@pytest.fixture
def follow_up_policy():
    return FollowUpPolicy(after_user_response_hours=18, no_user_response_hours=27)


@pytest.fixture
def policy(schedule, thresholds, follow_up_policy):
    return SLAPolicy(
        schedule=schedule,
        thresholds=thresholds,
        follow_up=follow_up_policy,
        risk=RiskThresholds(),
        technician_domains=("corp\\",),
    )


@pytest.fixture
def policy_file(tmp_path):
    path = tmp_path / "sla_policy.yaml"
    path.write_text(POLICY_YAML, encoding="utf-8")
    return path
