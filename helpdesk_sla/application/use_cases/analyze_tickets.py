"""AnalyzeTicketUseCase / BatchAnalysisUseCase — timeline → verdicts → risk for tickets."""

from __future__ import annotations

import logging
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime
from typing import Mapping, Sequence

from helpdesk_sla.domain.entities.ticket import Ticket
from helpdesk_sla.domain.entities.timeline import Timeline
from helpdesk_sla.domain.entities.verdict import RiskAssessment, SLAVerdict, UpdateFreshness
from helpdesk_sla.domain.errors import InvalidTicketError
from helpdesk_sla.domain.policies.business_calendar import BusinessCalendar
from helpdesk_sla.domain.policies.business_hours import business_days_between
from helpdesk_sla.domain.policies.risk_classifier import classify
from helpdesk_sla.domain.policies.sla_evaluator import evaluate, evaluate_follow_up
from helpdesk_sla.domain.policies.timeline_extractor import TimelineExtractor, technicians_involved
from helpdesk_sla.domain.policies.update_freshness import categorize_last_update
from helpdesk_sla.domain.value_objects.enums import RiskTier
from helpdesk_sla.domain.value_objects.sla_policy import SLAPolicy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TicketAnalysis:
    """Everything the engine concludes about one ticket at one instant."""

    ticket: Ticket
    timeline: Timeline
    assignment: SLAVerdict
    first_response: SLAVerdict
    follow_up: SLAVerdict | None
    age_in_business_days: int
    risk: RiskAssessment
    freshness: UpdateFreshness
    technicians: tuple[str, ...]

    @property
    def is_open(self) -> bool:
        return self.ticket.is_open()

    def to_dict(self) -> dict:
        return {
            "ticket_id": self.ticket.id,
            "subject": self.ticket.subject,
            "priority": self.ticket.priority_tier.value,
            "status": self.ticket.status,
            "is_open": self.is_open,
            "created_at": self.ticket.created_at.isoformat(),
            "assigned_technician": self.ticket.assigned_technician,
            "technicians": list(self.technicians),
            "age_in_business_days": self.age_in_business_days,
            "timeline": self.timeline.to_list(),
            "assignment": self.assignment.to_dict(),
            "first_response": self.first_response.to_dict(),
            "follow_up": self.follow_up.to_dict() if self.follow_up else None,
            "risk_tier": self.risk.tier.value,
            "recommended_action": self.risk.action.value,
            "risk_reason": self.risk.reason,
            "last_update": self.freshness.to_dict(),
        }


class AnalyzeTicketUseCase:
    """Runs the per-ticket pipeline against one SLA policy."""

    def __init__(self, policy: SLAPolicy, extractor: TimelineExtractor | None = None):
        self.policy = policy
        self.calendar = BusinessCalendar(policy.schedule)
        self._extractor = extractor or TimelineExtractor.for_domains(policy.technician_domains)

    def build_ticket(self, record: Mapping[str, str | None]) -> Ticket:
        """Ticket from an ingestion row, read in the policy's civil timezone."""
        return Ticket.from_record(record, self.calendar.tz)

    def execute(self, ticket: Ticket, now: datetime) -> TicketAnalysis:
        """Analyze *ticket* as of *now*.

        Pipeline:
        1. Extract the timeline from the activity log
        2. Evaluate assignment / first-response / follow-up milestones
        3. Age in business days → risk tier and action
        4. Freshness of the last logged activity
        """
        now = self.calendar.localize(now)
        timeline = self._extractor.extract(ticket, self.calendar.tz)

        verdicts = evaluate(ticket, timeline, self.policy.thresholds, self.calendar, now)
        follow_up = evaluate_follow_up(timeline, self.policy.follow_up, self.calendar, now)

        age = business_days_between(ticket.created_at, now, self.calendar)
        risk = classify(ticket, verdicts, age, timeline=timeline, thresholds=self.policy.risk)

        last_event = timeline.last()
        freshness = categorize_last_update(
            last_event.timestamp if last_event else None, ticket.status, now, self.calendar,
        )

        return TicketAnalysis(
            ticket=ticket,
            timeline=timeline,
            assignment=verdicts.assignment,
            first_response=verdicts.first_response,
            follow_up=follow_up,
            age_in_business_days=age,
            risk=risk,
            freshness=freshness,
            technicians=tuple(technicians_involved(ticket, timeline)),
        )


@dataclass(frozen=True)
class TicketFailure:
    """A row that could not be analyzed."""

    row_index: int
    ticket_id: str | None
    error: str

    def to_dict(self) -> dict:
        return {"row_index": self.row_index, "ticket_id": self.ticket_id, "error": self.error}


@dataclass
class BatchResult:
    """Summary of one batch run."""

    evaluated_at: datetime
    analyses: list[TicketAnalysis] = field(default_factory=list)
    failures: list[TicketFailure] = field(default_factory=list)

    def summary(self) -> dict:
        open_analyses = [a for a in self.analyses if a.is_open]
        tiers = Counter(a.risk.tier.value for a in open_analyses)
        return {
            "total": len(self.analyses) + len(self.failures),
            "analyzed": len(self.analyses),
            "failed": len(self.failures),
            "open": len(open_analyses),
            "assignment_violations": sum(a.assignment.is_violated for a in open_analyses),
            "first_response_violations": sum(a.first_response.is_violated for a in open_analyses),
            "follow_up_violations": sum(
                bool(a.follow_up and a.follow_up.is_violated) for a in open_analyses
            ),
            "risk_tiers": {tier.value: tiers.get(tier.value, 0) for tier in RiskTier},
        }

    def to_dict(self) -> dict:
        return {
            "evaluated_at": self.evaluated_at.isoformat(),
            "summary": self.summary(),
            "tickets": [a.to_dict() for a in self.analyses],
            "failures": [f.to_dict() for f in self.failures],
        }


class BatchAnalysisUseCase:
    """Analyzes a batch of ingestion rows, isolating per-ticket failures.

    Tickets are independent, so with ``workers > 1`` the batch fans out over
    a thread pool. Results keep input order either way.
    """

    def __init__(self, analyzer: AnalyzeTicketUseCase, workers: int = 1):
        if workers < 1:
            raise ValueError("workers must be at least 1")
        self._analyzer = analyzer
        self._workers = workers

    def _analyze_row(
        self, index: int, row: Mapping[str, str | None], now: datetime
    ) -> TicketAnalysis | TicketFailure:
        try:
            ticket = self._analyzer.build_ticket(row)
            return self._analyzer.execute(ticket, now)
        except InvalidTicketError as e:
            logger.warning("Row %d skipped: %s", index, e.message)
            return TicketFailure(row_index=index, ticket_id=e.ticket_id, error=e.message)
        except Exception as e:
            ticket_id = (row.get("id") or "").strip() or None
            logger.exception("Error analyzing row %d (ticket %s)", index, ticket_id)
            return TicketFailure(row_index=index, ticket_id=ticket_id, error=str(e))

    def execute(self, rows: Sequence[Mapping[str, str | None]], now: datetime) -> BatchResult:
        now = self._analyzer.calendar.localize(now)
        if self._workers > 1 and len(rows) > 1:
            with ThreadPoolExecutor(max_workers=self._workers) as pool:
                outcomes = list(pool.map(lambda item: self._analyze_row(item[0], item[1], now), enumerate(rows)))
        else:
            outcomes = [self._analyze_row(i, row, now) for i, row in enumerate(rows)]

        result = BatchResult(evaluated_at=now)
        for outcome in outcomes:
            if isinstance(outcome, TicketFailure):
                result.failures.append(outcome)
            else:
                result.analyses.append(outcome)

        summary = result.summary()
        logger.info(
            "Analyzed %d/%d tickets (%d open, %d assignment / %d first-response violations, %d failed)",
            summary["analyzed"], summary["total"], summary["open"],
            summary["assignment_violations"], summary["first_response_violations"], summary["failed"],
        )
        return result
