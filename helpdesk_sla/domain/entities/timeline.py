"""Event and Timeline — the classified activity history of one ticket."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from helpdesk_sla.domain.value_objects.enums import EventKind


@dataclass(frozen=True)
class Event:
    timestamp: datetime
    kind: EventKind
    actor: str
    raw_text: str
    rule: str = ""
    assignee: str | None = None

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp.isoformat(),
            "kind": self.kind.value,
            "actor": self.actor,
            "raw_text": self.raw_text,
            "rule": self.rule,
            "assignee": self.assignee,
        }


@dataclass(frozen=True)
class Timeline:
    """Events ordered by timestamp; ties keep log order."""

    events: tuple[Event, ...] = ()

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self):
        return iter(self.events)

    def __bool__(self) -> bool:
        return bool(self.events)

    def of_kind(self, kind: EventKind) -> list[Event]:
        return [e for e in self.events if e.kind == kind]

    def first(self, kind: EventKind, not_before: datetime | None = None) -> Event | None:
        """Earliest event of *kind*, optionally at or after *not_before*."""
        for event in self.events:
            if event.kind != kind:
                continue
            if not_before is not None and event.timestamp < not_before:
                continue
            return event
        return None

    def last(self, kind: EventKind | None = None) -> Event | None:
        for event in reversed(self.events):
            if kind is None or event.kind == kind:
                return event
        return None

    def technicians(self) -> list[str]:
        """Distinct technician identities, in order of first appearance."""
        seen: dict[str, None] = {}
        for event in self.events:
            if event.kind == EventKind.TECHNICIAN_RESPONSE and event.actor:
                seen.setdefault(event.actor, None)
            if event.kind == EventKind.ASSIGNMENT and event.assignee:
                seen.setdefault(event.assignee, None)
        return list(seen)

    def to_list(self) -> list[dict]:
        return [e.to_dict() for e in self.events]
