"""UpdateFreshness policy — how stale is the last word on a ticket."""

from __future__ import annotations

from datetime import datetime

from helpdesk_sla.domain.entities.ticket import is_waiting_status
from helpdesk_sla.domain.entities.verdict import UpdateFreshness
from helpdesk_sla.domain.policies.business_calendar import BusinessCalendar
from helpdesk_sla.domain.policies.business_hours import business_days_between
from helpdesk_sla.domain.value_objects.enums import Severity, UpdateCategory

ACTIVE_ALLOWANCE_DAYS = 1
WAITING_ALLOWANCE_DAYS = 2


def categorize_last_update(
    last_update: datetime | None,
    status: str | None,
    now: datetime,
    calendar: BusinessCalendar,
) -> UpdateFreshness:
    """Bucket the time since *last_update* in business days.

    Tickets waiting on the requester, parts or a delivery get one extra
    business day before they count as overdue.
    """
    if last_update is None:
        return UpdateFreshness(UpdateCategory.NEVER_UPDATED, Severity.CRITICAL, None)

    waiting = is_waiting_status(status)
    allowance = WAITING_ALLOWANCE_DAYS if waiting else ACTIVE_ALLOWANCE_DAYS
    days = business_days_between(last_update, now, calendar)

    if days == 0:
        category, severity = UpdateCategory.UPDATED_TODAY, Severity.GOOD
    elif days == 1 and not waiting:
        category, severity = UpdateCategory.DUE_FOR_UPDATE, Severity.WARNING
    elif days <= allowance:
        category, severity = UpdateCategory.WITHIN_SLA, Severity.GOOD
    elif days <= allowance + 1:
        category, severity = UpdateCategory.OVERDUE, Severity.WARNING
    else:
        category, severity = UpdateCategory.SEVERELY_OVERDUE, Severity.CRITICAL

    return UpdateFreshness(category, severity, days, waiting_status=waiting)
