"""SLAEvaluator — assignment, first-response and follow-up verdicts for one ticket.

Pure functions of (ticket, timeline, thresholds, calendar, now). ``now`` is
always supplied by the caller.
"""

from __future__ import annotations

import logging
from datetime import datetime

from helpdesk_sla.domain.entities.ticket import Ticket
from helpdesk_sla.domain.entities.timeline import Timeline
from helpdesk_sla.domain.entities.verdict import MilestoneVerdicts, SLAVerdict
from helpdesk_sla.domain.policies.business_calendar import BusinessCalendar
from helpdesk_sla.domain.policies.business_hours import business_hours_between
from helpdesk_sla.domain.value_objects.enums import EventKind, Milestone, SLAStatus
from helpdesk_sla.domain.value_objects.sla_thresholds import FollowUpPolicy, SLAThresholdTable

logger = logging.getLogger(__name__)

# Below this share of the limit an open first-response milestone is only "pending".
PENDING_RATIO = 0.75


def _closed_status(elapsed: float, limit: float) -> SLAStatus:
    return SLAStatus.COMPLIANT if elapsed <= limit else SLAStatus.VIOLATED


def _open_status(elapsed: float, limit: float, allow_pending: bool) -> SLAStatus:
    if elapsed > limit:
        return SLAStatus.VIOLATED
    if allow_pending and elapsed < PENDING_RATIO * limit:
        return SLAStatus.PENDING
    return SLAStatus.AT_RISK


def _verdict(
    milestone: Milestone,
    start: datetime,
    met_at: datetime | None,
    now: datetime,
    limit: float,
    calendar: BusinessCalendar,
    allow_pending: bool = False,
) -> SLAVerdict:
    end = met_at if met_at is not None else now
    elapsed = business_hours_between(start, end, calendar)
    if met_at is not None:
        status = _closed_status(elapsed, limit)
    else:
        status = _open_status(elapsed, limit, allow_pending)
    return SLAVerdict(
        milestone=milestone,
        status=status,
        business_hours_elapsed=elapsed,
        limit=limit,
        overdue_by=max(0.0, elapsed - limit),
        started_at=calendar.localize(start),
        met_at=calendar.localize(met_at) if met_at is not None else None,
    )


def evaluate(
    ticket: Ticket,
    timeline: Timeline,
    thresholds: SLAThresholdTable,
    calendar: BusinessCalendar,
    now: datetime,
) -> MilestoneVerdicts:
    """Assignment and first-response verdicts.

    Assignment runs from creation to the first assignment event. First
    response runs from that assignment (or creation, when no assignment is
    visible in the log) to the first technician response at or after it.
    Milestones that have not happened are measured up to ``now``.
    """
    limits = thresholds[ticket.priority_tier]
    created = ticket.created_at

    assignment_event = timeline.first(EventKind.ASSIGNMENT)
    assignment = _verdict(
        Milestone.ASSIGNMENT,
        start=created,
        met_at=assignment_event.timestamp if assignment_event else None,
        now=now,
        limit=limits.assignment,
        calendar=calendar,
    )

    response_start = assignment_event.timestamp if assignment_event else created
    response_event = timeline.first(EventKind.TECHNICIAN_RESPONSE, not_before=response_start)
    first_response = _verdict(
        Milestone.FIRST_RESPONSE,
        start=response_start,
        met_at=response_event.timestamp if response_event else None,
        now=now,
        limit=limits.first_response,
        calendar=calendar,
        allow_pending=True,
    )

    logger.debug(
        "Ticket %s: assignment=%s (%.2fh), first_response=%s (%.2fh)",
        ticket.id, assignment.status.value, assignment.business_hours_elapsed,
        first_response.status.value, first_response.business_hours_elapsed,
    )
    return MilestoneVerdicts(assignment=assignment, first_response=first_response)


def evaluate_follow_up(
    timeline: Timeline,
    policy: FollowUpPolicy,
    calendar: BusinessCalendar,
    now: datetime,
) -> SLAVerdict | None:
    """Follow-up verdict in business hours, or None when nobody has spoken yet.

    If the requester wrote after the last technician response, the clock runs
    from that message with the shorter limit; otherwise it runs from the last
    technician response with the longer one.
    """
    last_tech = timeline.last(EventKind.TECHNICIAN_RESPONSE)
    last_user = timeline.last(EventKind.USER_RESPONSE)
    user_waiting = last_user is not None and (last_tech is None or last_user.timestamp > last_tech.timestamp)

    if user_waiting:
        reference, limit = last_user, policy.after_user_response_hours
    elif last_tech is not None:
        reference, limit = last_tech, policy.no_user_response_hours
    else:
        return None

    elapsed = business_hours_between(reference.timestamp, now, calendar)
    if elapsed > limit:
        status = SLAStatus.VIOLATED
    elif elapsed > limit * policy.at_risk_ratio:
        status = SLAStatus.AT_RISK
    else:
        status = SLAStatus.COMPLIANT

    return SLAVerdict(
        milestone=Milestone.FOLLOW_UP,
        status=status,
        business_hours_elapsed=elapsed,
        limit=limit,
        overdue_by=max(0.0, elapsed - limit),
        started_at=calendar.localize(reference.timestamp),
        met_at=None,
    )
