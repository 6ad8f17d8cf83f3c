"""SelectTicketForReviewUseCase — pick one worked ticket for a quality review."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterable

from helpdesk_sla.domain.entities.review_ledger import ReviewLedger
from helpdesk_sla.domain.entities.ticket import Ticket
from helpdesk_sla.domain.policies.business_calendar import BusinessCalendar

logger = logging.getLogger(__name__)

REVIEW_MIN_AGE = timedelta(hours=72)


@dataclass(frozen=True)
class ReviewSelection:
    ticket: Ticket
    eligible_count: int

    def to_dict(self) -> dict:
        return {"ticket_id": self.ticket.id, "eligible_count": self.eligible_count}


class SelectTicketForReviewUseCase:
    """Random pick among open, assigned, worked tickets old enough to judge.

    The ledger enforces the daily cap and remembers reviewed tickets. Days
    are counted on the calendar's civil date. The random source is injected
    so selections can be reproduced.
    """

    def __init__(
        self,
        ledger: ReviewLedger,
        calendar: BusinessCalendar,
        rng: random.Random,
        min_age: timedelta = REVIEW_MIN_AGE,
    ):
        self._ledger = ledger
        self._calendar = calendar
        self._rng = rng
        self._min_age = min_age

    def is_eligible(self, ticket: Ticket, now: datetime) -> bool:
        if not ticket.is_open() or not ticket.has_technician():
            return False
        if not ticket.raw_comments.strip():
            return False
        if self._ledger.was_reviewed(ticket.id):
            return False
        age = now.astimezone(timezone.utc) - ticket.created_at.astimezone(timezone.utc)
        return age >= self._min_age

    def execute(self, tickets: Iterable[Ticket], now: datetime) -> ReviewSelection | None:
        """Select and record one ticket, or None when the cap is hit or nothing qualifies."""
        day = self._calendar.civil_date(now)
        if self._ledger.remaining(day) == 0:
            logger.info("Review cap reached for %s, skipping selection", day.isoformat())
            return None

        eligible = [t for t in tickets if self.is_eligible(t, now)]
        if not eligible:
            logger.info("No tickets eligible for review (open, assigned, worked, %s old)", self._min_age)
            return None

        chosen = self._rng.choice(eligible)
        self._ledger.record(chosen.id, day)
        logger.info("Selected ticket %s for review among %d eligible", chosen.id, len(eligible))
        return ReviewSelection(ticket=chosen, eligible_count=len(eligible))
