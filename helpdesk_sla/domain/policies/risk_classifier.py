"""RiskClassifier — ticket age and SLA state → risk tier and next action."""

from __future__ import annotations

from helpdesk_sla.domain.entities.ticket import Ticket
from helpdesk_sla.domain.entities.timeline import Timeline
from helpdesk_sla.domain.entities.verdict import MilestoneVerdicts, RiskAssessment
from helpdesk_sla.domain.value_objects.enums import EventKind, RecommendedAction, RiskTier
from helpdesk_sla.domain.value_objects.sla_thresholds import RiskThresholds

TIER_ACTIONS = {
    RiskTier.CRITICAL: RecommendedAction.ESCALATE,
    RiskTier.HIGH: RecommendedAction.SENIOR_REVIEW,
    RiskTier.MEDIUM: RecommendedAction.FOLLOW_UP,
    RiskTier.LOW: RecommendedAction.MONITOR,
}


def tier_for_age(age_in_business_days: float, thresholds: RiskThresholds) -> RiskTier:
    if age_in_business_days > thresholds.critical_days:
        return RiskTier.CRITICAL
    if age_in_business_days > thresholds.high_days:
        return RiskTier.HIGH
    if age_in_business_days > thresholds.medium_days:
        return RiskTier.MEDIUM
    return RiskTier.LOW


def classify(
    ticket: Ticket,
    verdicts: MilestoneVerdicts,
    age_in_business_days: float,
    timeline: Timeline | None = None,
    thresholds: RiskThresholds | None = None,
) -> RiskAssessment:
    """Risk tier and recommended action for one open ticket.

    1. Tier from age: above critical/high/medium thresholds, else low.
    2. A violated milestone lifts a low tier to medium.
    3. Tickets nobody owns (no assigned technician, no assignment in the
       log) get "assign immediately" unless they already need escalation.
    """
    thresholds = thresholds or RiskThresholds()
    tier = tier_for_age(age_in_business_days, thresholds)
    reasons = [f"open {age_in_business_days:g} business days"]

    if verdicts.any_violated():
        violated = [
            v.milestone.value for v in (verdicts.assignment, verdicts.first_response) if v.is_violated
        ]
        reasons.append(f"violated: {', '.join(violated)}")
        if tier.rank < RiskTier.MEDIUM.rank:
            tier = RiskTier.MEDIUM

    action = TIER_ACTIONS[tier]
    assigned_in_log = timeline is not None and timeline.first(EventKind.ASSIGNMENT) is not None
    if not ticket.has_technician() and not assigned_in_log:
        reasons.append("no technician assigned")
        if tier != RiskTier.CRITICAL:
            action = RecommendedAction.ASSIGN_IMMEDIATELY

    return RiskAssessment(tier=tier, action=action, reason="; ".join(reasons))
