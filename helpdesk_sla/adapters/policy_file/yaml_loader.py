"""SLA policy file loader — YAML in, immutable domain configuration out.

Example layout (see ``sla_policy.example.yaml``)::

    timezone: America/Chicago
    business_hours:
      weekday: {start: "08:30", end: "17:30"}
      weekend: {start: "08:30", end: "16:00"}
      include_weekends: false
      holidays: [2025-12-25]
    sla:
      critical: {assignment: 1, first_response: 2}
      ...

Clock times must be quoted: YAML 1.1 reads an unquoted ``17:30`` as the
base-60 integer 1050.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from helpdesk_sla.domain.errors import ConfigurationError
from helpdesk_sla.domain.value_objects.business_schedule import BusinessSchedule, DayWindow
from helpdesk_sla.domain.value_objects.sla_policy import SLAPolicy
from helpdesk_sla.domain.value_objects.sla_thresholds import (
    FollowUpPolicy,
    MilestoneLimits,
    RiskThresholds,
    SLAThresholdTable,
)

logger = logging.getLogger(__name__)

_CLOCK = re.compile(r"^(?P<h>\d{1,2}):(?P<m>\d{2})$")


def parse_clock(value: Any) -> float:
    """``"08:30"`` → 8.5; plain numbers are taken as fractional hours."""
    if isinstance(value, bool):
        raise ValueError(f"not a clock time: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    match = _CLOCK.match(str(value).strip())
    if not match:
        raise ValueError(f"expected HH:MM, got {value!r}")
    hours, minutes = int(match.group("h")), int(match.group("m"))
    if minutes >= 60:
        raise ValueError(f"invalid minutes in {value!r}")
    return hours + minutes / 60


class WindowModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    start: float
    end: float

    @field_validator("start", "end", mode="before")
    @classmethod
    def _clock(cls, v: Any) -> float:
        return parse_clock(v)


class BusinessHoursModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    weekday: WindowModel
    weekend: WindowModel
    include_weekends: bool
    holidays: list[date] = Field(default_factory=list)


class LimitsModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    assignment: float
    first_response: float


class FollowUpModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    after_user_response_hours: float
    no_user_response_hours: float
    at_risk_ratio: float = 0.8


class RiskModel(BaseModel):
    model_config = ConfigDict(extra="forbid")

    critical_days: float = 21
    high_days: float = 14
    medium_days: float = 7


class PolicyFileModel(BaseModel):
    """Raw shape of the policy file, before domain validation."""

    model_config = ConfigDict(extra="forbid")

    timezone: str
    business_hours: BusinessHoursModel
    sla: dict[str, LimitsModel]
    follow_up: FollowUpModel
    risk: RiskModel = Field(default_factory=RiskModel)
    technician_domains: list[str] = Field(default_factory=list)


def policy_from_dict(data: Any) -> SLAPolicy:
    """Validate a parsed policy mapping and build the domain objects.

    Raises:
        ConfigurationError: on any missing, malformed or inconsistent value.
    """
    if not isinstance(data, dict):
        raise ConfigurationError("SLA policy must be a mapping at the top level")
    try:
        model = PolicyFileModel.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid SLA policy: {e.error_count()} error(s)",
            {"errors": e.errors(include_url=False)},
        ) from e

    hours = model.business_hours
    schedule = BusinessSchedule(
        timezone=model.timezone,
        weekday=DayWindow(hours.weekday.start, hours.weekday.end),
        weekend=DayWindow(hours.weekend.start, hours.weekend.end),
        include_weekends=hours.include_weekends,
        holidays=frozenset(hours.holidays),
    )
    thresholds = SLAThresholdTable({
        tier.strip().lower(): MilestoneLimits(limits.assignment, limits.first_response)
        for tier, limits in model.sla.items()
    })
    return SLAPolicy(
        schedule=schedule,
        thresholds=thresholds,
        follow_up=FollowUpPolicy(
            after_user_response_hours=model.follow_up.after_user_response_hours,
            no_user_response_hours=model.follow_up.no_user_response_hours,
            at_risk_ratio=model.follow_up.at_risk_ratio,
        ),
        risk=RiskThresholds(
            critical_days=model.risk.critical_days,
            high_days=model.risk.high_days,
            medium_days=model.risk.medium_days,
        ),
        technician_domains=tuple(model.technician_domains),
    )


def load_policy(path: Path | str) -> SLAPolicy:
    """Load the SLA policy file at *path*.

    Raises:
        ConfigurationError: if the file is missing, is not valid YAML, or
            describes an unusable schedule or threshold table.
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigurationError(f"SLA policy file not found: {path}", {"path": str(path)})

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"SLA policy file {path} is not valid YAML: {e}") from e

    policy = policy_from_dict(data)
    logger.info(
        "Loaded SLA policy from %s (tz=%s, include_weekends=%s, %d holidays)",
        path.name, policy.schedule.timezone,
        policy.schedule.include_weekends, len(policy.schedule.holidays),
    )
    return policy
