"""Ticket entity — one row of the helpdesk export, read-only to the SLA engine."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Mapping

from helpdesk_sla.domain.errors import InvalidTicketError
from helpdesk_sla.domain.value_objects.enums import Priority
from helpdesk_sla.domain.value_objects.timestamps import parse_civil_timestamp, to_zone

CLOSED_STATUS_MARKERS = ("closed", "resolved", "completed", "done")

WAITING_STATUSES = (
    "awaiting customer response",
    "awaiting delivery",
    "shipped-pending delivery",
    "waiting for parts",
    "scheduled",
)


def is_waiting_status(status: str | None) -> bool:
    """True when the status parks the ticket on the requester or a delivery."""
    lowered = (status or "").lower()
    return any(waiting in lowered for waiting in WAITING_STATUSES)


@dataclass(frozen=True)
class Ticket:
    id: str
    created_at: datetime
    priority: str = ""
    status: str = ""
    raw_comments: str = ""
    assigned_technician: str | None = None
    subject: str | None = None
    submitted_by: str | None = None

    @property
    def priority_tier(self) -> Priority:
        return Priority.parse(self.priority)

    def is_open(self) -> bool:
        status = (self.status or "").lower()
        return not any(marker in status for marker in CLOSED_STATUS_MARKERS)

    def is_waiting(self) -> bool:
        return is_waiting_status(self.status)

    def has_technician(self) -> bool:
        return bool(self.assigned_technician and self.assigned_technician.strip())

    @classmethod
    def from_record(cls, record: Mapping[str, str | None], tz: tzinfo) -> "Ticket":
        """Build a ticket from a normalized ingestion record.

        Raises:
            InvalidTicketError: if the id is missing or the creation
                timestamp cannot be parsed.
        """
        ticket_id = (record.get("id") or "").strip()
        if not ticket_id:
            raise InvalidTicketError(None, "missing ticket id")

        raw_created = record.get("created_at")
        created = parse_civil_timestamp(raw_created)
        if created is None:
            raise InvalidTicketError(
                ticket_id,
                f"unparseable creation timestamp {raw_created!r}",
                {"ticket_id": ticket_id, "created_at": raw_created},
            )

        return cls(
            id=ticket_id,
            created_at=to_zone(created, tz),
            priority=record.get("priority") or "",
            status=record.get("status") or "",
            raw_comments=record.get("comments") or "",
            assigned_technician=record.get("assigned_technician") or None,
            subject=record.get("subject") or None,
            submitted_by=record.get("submitted_by") or None,
        )
