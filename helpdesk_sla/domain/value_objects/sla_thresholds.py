"""SLA threshold configuration — per-priority limits, follow-up and risk-age thresholds."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from helpdesk_sla.domain.errors import ConfigurationError
from helpdesk_sla.domain.value_objects.enums import Priority


@dataclass(frozen=True)
class MilestoneLimits:
    """Business-hour limits for one priority tier."""

    assignment: float
    first_response: float

    def __post_init__(self) -> None:
        for name in ("assignment", "first_response"):
            value = getattr(self, name)
            if value is None or value <= 0:
                raise ConfigurationError(
                    f"SLA limit '{name}' must be a positive number of business hours, got {value!r}"
                )


class SLAThresholdTable:
    """Priority tier → milestone limits. Every tier must be present."""

    def __init__(self, limits: Mapping[Priority | str, MilestoneLimits]):
        table: dict[Priority, MilestoneLimits] = {}
        for key, value in limits.items():
            try:
                priority = Priority(key)
            except ValueError as e:
                raise ConfigurationError(f"Unknown priority tier in SLA table: {key!r}") from e
            if not isinstance(value, MilestoneLimits):
                raise ConfigurationError(f"SLA limits for {priority.value!r} are malformed")
            table[priority] = value

        missing = [p.value for p in Priority if p not in table]
        if missing:
            raise ConfigurationError(
                f"SLA table is missing priority tiers: {', '.join(missing)}",
                {"missing": missing},
            )
        self._table = MappingProxyType(table)

    def __getitem__(self, priority: Priority | str) -> MilestoneLimits:
        return self._table[Priority.parse(priority) if isinstance(priority, str) else priority]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, SLAThresholdTable) and dict(self._table) == dict(other._table)

    def __repr__(self) -> str:
        return f"SLAThresholdTable({dict(self._table)!r})"


@dataclass(frozen=True)
class FollowUpPolicy:
    """Business-hour limits for keeping the requester informed."""

    after_user_response_hours: float
    no_user_response_hours: float
    at_risk_ratio: float = 0.8

    def __post_init__(self) -> None:
        if self.after_user_response_hours <= 0 or self.no_user_response_hours <= 0:
            raise ConfigurationError("Follow-up limits must be positive")
        if not (0 < self.at_risk_ratio < 1):
            raise ConfigurationError("Follow-up at_risk_ratio must be between 0 and 1")


@dataclass(frozen=True)
class RiskThresholds:
    """Ticket age (business days) above which each risk tier applies."""

    critical_days: float = 21
    high_days: float = 14
    medium_days: float = 7

    def __post_init__(self) -> None:
        if not (0 <= self.medium_days <= self.high_days <= self.critical_days):
            raise ConfigurationError(
                "Risk thresholds must satisfy medium_days <= high_days <= critical_days"
            )
