"""SLA verdicts and the risk assessment derived from them."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from helpdesk_sla.domain.value_objects.enums import (
    Milestone,
    RecommendedAction,
    RiskTier,
    Severity,
    SLAStatus,
    UpdateCategory,
)


@dataclass(frozen=True)
class SLAVerdict:
    """Compliance state of one milestone at evaluation time.

    ``overdue_by`` is always ``max(0, elapsed - limit)``; values are kept at
    full precision, rounding is left to whoever renders them.
    """

    milestone: Milestone
    status: SLAStatus
    business_hours_elapsed: float
    limit: float
    overdue_by: float
    started_at: datetime
    met_at: datetime | None = None

    @property
    def occurred(self) -> bool:
        return self.met_at is not None

    @property
    def is_violated(self) -> bool:
        return self.status == SLAStatus.VIOLATED

    def to_dict(self) -> dict:
        return {
            "milestone": self.milestone.value,
            "status": self.status.value,
            "business_hours_elapsed": self.business_hours_elapsed,
            "limit": self.limit,
            "overdue_by": self.overdue_by,
            "started_at": self.started_at.isoformat(),
            "met_at": self.met_at.isoformat() if self.met_at else None,
        }


@dataclass(frozen=True)
class MilestoneVerdicts:
    assignment: SLAVerdict
    first_response: SLAVerdict

    def any_violated(self) -> bool:
        return self.assignment.is_violated or self.first_response.is_violated


@dataclass(frozen=True)
class RiskAssessment:
    tier: RiskTier
    action: RecommendedAction
    reason: str


@dataclass(frozen=True)
class UpdateFreshness:
    category: UpdateCategory
    severity: Severity
    business_days: int | None
    waiting_status: bool = False

    def to_dict(self) -> dict:
        return {
            "category": self.category.value,
            "severity": self.severity.value,
            "business_days": self.business_days,
            "waiting_status": self.waiting_status,
        }
