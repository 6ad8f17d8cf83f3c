"""BusinessCalendar — which civil days are open, and when."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta

from helpdesk_sla.domain.value_objects.business_schedule import BusinessSchedule, DayWindow
from helpdesk_sla.domain.value_objects.timestamps import to_zone

SATURDAY = 5


class BusinessCalendar:
    """Answers calendar questions for one BusinessSchedule.

    All instants are interpreted in the schedule's civil timezone, whatever
    zone they were stored in.
    """

    def __init__(self, schedule: BusinessSchedule):
        self.schedule = schedule
        self.tz = schedule.tz

    def localize(self, moment: datetime) -> datetime:
        return to_zone(moment, self.tz)

    def civil_date(self, moment: datetime) -> date:
        return self.localize(moment).date()

    def _window_for(self, day: date) -> DayWindow | None:
        if day in self.schedule.holidays:
            return None
        if day.weekday() >= SATURDAY:
            return self.schedule.weekend if self.schedule.include_weekends else None
        return self.schedule.weekday

    def is_business_day(self, day: date) -> bool:
        return self._window_for(day) is not None

    def business_window(self, day: date) -> tuple[datetime, datetime]:
        """Business start/end of *day* as aware instants.

        Closed days get an empty window (start == end, at local midnight).
        """
        midnight = datetime.combine(day, time(0), tzinfo=self.tz)
        window = self._window_for(day)
        if window is None:
            return midnight, midnight
        return (
            midnight + timedelta(hours=window.start),
            midnight + timedelta(hours=window.end),
        )

    def is_within_business_hours(self, moment: datetime) -> bool:
        local = self.localize(moment)
        start, end = self.business_window(local.date())
        return start <= local < end
