"""Port interface for ticket ingestion."""

from abc import ABC, abstractmethod


class TicketSource(ABC):
    @abstractmethod
    def load_rows(self) -> list[dict[str, str | None]]:
        """Return normalized ticket rows.

        Each row carries the keys ``id``, ``created_at``, ``priority``,
        ``status``, ``comments``, ``assigned_technician``, ``subject`` and
        ``submitted_by`` (values may be None).
        """
        ...
