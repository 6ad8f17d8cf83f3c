"""Business-hours and business-day arithmetic over a BusinessCalendar."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

from helpdesk_sla.domain.policies.business_calendar import BusinessCalendar

SECONDS_PER_HOUR = 3600.0


def _hours(start: datetime, end: datetime) -> float:
    # Subtract in UTC so DST shifts inside the span are measured correctly.
    return (end.astimezone(timezone.utc) - start.astimezone(timezone.utc)).total_seconds() / SECONDS_PER_HOUR


def business_hours_between(start: datetime, end: datetime, calendar: BusinessCalendar) -> float:
    """Sum of business-hour overlap between *start* and *end*.

    Walks one civil day at a time from the day containing *start* to the day
    containing *end*, clamping the span to each day's business window.
    Returns 0.0 for empty or inverted ranges.
    """
    start = calendar.localize(start)
    end = calendar.localize(end)
    if start >= end:
        return 0.0

    total = 0.0
    first_day = start.date()
    for offset in range((end.date() - first_day).days + 1):
        day = first_day + timedelta(days=offset)
        window_start, window_end = calendar.business_window(day)
        overlap_start = max(start, window_start)
        overlap_end = min(end, window_end)
        if overlap_end > overlap_start:
            total += _hours(overlap_start, overlap_end)
    return total


def business_days_between(start: datetime | date, end: datetime | date, calendar: BusinessCalendar) -> int:
    """Count business days after *start*'s civil date up to and including *end*'s.

    Same-day spans and inverted ranges count as zero days.
    """
    start_day = calendar.civil_date(start) if isinstance(start, datetime) else start
    end_day = calendar.civil_date(end) if isinstance(end, datetime) else end
    if end_day <= start_day:
        return 0

    # Offsets keep the walk from stepping past date.max.
    return sum(
        calendar.is_business_day(start_day + timedelta(days=offset))
        for offset in range(1, (end_day - start_day).days + 1)
    )
