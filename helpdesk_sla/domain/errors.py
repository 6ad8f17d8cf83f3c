"""Domain errors — raised at the edges of the SLA engine, never inside a ticket's log parsing."""

from __future__ import annotations


class HelpdeskSLAError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)


class ConfigurationError(HelpdeskSLAError):
    """A business schedule or SLA table is unusable.

    Raised at construction time so that nothing is evaluated against a
    broken configuration.
    """


class InvalidTicketError(HelpdeskSLAError):
    """A single ticket record violates the ingestion contract."""

    def __init__(self, ticket_id: str | None, message: str, details: dict | None = None):
        self.ticket_id = ticket_id
        prefix = f"Ticket {ticket_id}: " if ticket_id else ""
        super().__init__(prefix + message, details or {"ticket_id": ticket_id})
