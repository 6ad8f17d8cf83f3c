"""BusinessSchedule value object — opening hours, weekend policy and holidays."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from helpdesk_sla.domain.errors import ConfigurationError


@dataclass(frozen=True)
class DayWindow:
    """Civil opening hours for one day type, as fractional hours (8.5 = 08:30)."""

    start: float
    end: float

    def __post_init__(self) -> None:
        if not (0 <= self.start < self.end <= 24):
            raise ConfigurationError(
                f"Invalid business window {self.start}-{self.end}: "
                "expected 0 <= start < end <= 24",
                {"start": self.start, "end": self.end},
            )

    @property
    def length_hours(self) -> float:
        return self.end - self.start


@dataclass(frozen=True)
class BusinessSchedule:
    """Immutable opening-hours configuration for one support organization.

    ``include_weekends`` decides whether Saturday and Sunday accrue business
    time at all. When it is False the weekend window is ignored.
    """

    timezone: str
    weekday: DayWindow
    weekend: DayWindow
    include_weekends: bool = True
    holidays: frozenset[date] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        try:
            ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(
                f"Unknown timezone: {self.timezone!r}", {"timezone": self.timezone}
            ) from e
        if not isinstance(self.holidays, frozenset):
            object.__setattr__(self, "holidays", frozenset(self.holidays))

    @property
    def tz(self) -> tzinfo:
        return ZoneInfo(self.timezone)
