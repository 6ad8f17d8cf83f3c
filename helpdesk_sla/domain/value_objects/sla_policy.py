"""SLAPolicy — everything a deploying organization configures, in one bundle."""

from __future__ import annotations

from dataclasses import dataclass, field

from helpdesk_sla.domain.value_objects.business_schedule import BusinessSchedule
from helpdesk_sla.domain.value_objects.sla_thresholds import (
    FollowUpPolicy,
    RiskThresholds,
    SLAThresholdTable,
)


@dataclass(frozen=True)
class SLAPolicy:
    schedule: BusinessSchedule
    thresholds: SLAThresholdTable
    follow_up: FollowUpPolicy
    risk: RiskThresholds = field(default_factory=RiskThresholds)
    technician_domains: tuple[str, ...] = ()
