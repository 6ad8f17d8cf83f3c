"""ReviewLedger — caller-owned record of how many ticket reviews ran each day."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from helpdesk_sla.domain.errors import ConfigurationError


@dataclass
class ReviewLedger:
    """Per-day review counts with a daily cap.

    The ledger is the only mutable state in the review flow; whoever runs
    the selection owns it and decides how long it lives.
    """

    max_per_day: int = 1
    counts: dict[date, int] = field(default_factory=dict)
    reviewed: dict[str, date] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.max_per_day < 0:
            raise ConfigurationError("max_per_day must not be negative")

    def count(self, day: date) -> int:
        return self.counts.get(day, 0)

    def remaining(self, day: date) -> int:
        return max(0, self.max_per_day - self.count(day))

    def was_reviewed(self, ticket_id: str) -> bool:
        return ticket_id in self.reviewed

    def record(self, ticket_id: str, day: date) -> None:
        """Count one review of *ticket_id* on *day*.

        Raises:
            ValueError: if the daily cap is already reached.
        """
        if self.remaining(day) == 0:
            raise ValueError(f"Daily review cap of {self.max_per_day} reached for {day.isoformat()}")
        self.counts[day] = self.count(day) + 1
        self.reviewed[ticket_id] = day
