"""CSV loader — reads helpdesk ticket exports into normalized rows."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from helpdesk_sla.adapters.csv_loader.normalizer import (
    clean_string,
    clean_technician_name,
    normalize_columns,
)
from helpdesk_sla.application.ports.ticket_source import TicketSource

logger = logging.getLogger(__name__)

# Normalized column names accepted for each row key, in order of preference.
COLUMN_ALIASES: dict[str, tuple[str, ...]] = {
    "id": ("issueid", "issue_id", "ticket_id", "ticketid", "id"),
    "created_at": ("issuedate", "issue_date", "created_at", "created", "startdate", "date_opened"),
    "priority": ("priority", "issue_priority"),
    "status": ("current_status", "status", "issue_status"),
    "comments": ("comments", "comment_log", "activity_log", "ticket_body", "notes"),
    "assigned_technician": ("tech_assigned", "technician", "assigned_to", "assigned_technician"),
    "subject": ("subject", "title", "summary"),
    "submitted_by": ("submitted_by", "requester", "submitter", "customer_name"),
}


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect the delimiter (comma/semicolon/tab) from the header line."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [",", ";", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect
    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = normalize_columns(reader.fieldnames)
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def _pick(row: dict[str, str | None], key: str) -> str | None:
    for column in COLUMN_ALIASES[key]:
        value = row.get(column)
        if value:
            return value
    return None


def normalize_ticket_row(row: dict[str, str | None]) -> dict[str, str | None]:
    """Map one normalized CSV row onto the ticket record keys."""
    record = {key: _pick(row, key) for key in COLUMN_ALIASES}
    record["assigned_technician"] = clean_technician_name(record["assigned_technician"])
    # One log entry per line for the extractor.
    if record["comments"]:
        record["comments"] = record["comments"].replace("\r\n", "\n").replace("\r", "\n")
    return record


def load_tickets(file_path: Path | str) -> list[dict[str, str | None]]:
    """Load and normalize a helpdesk ticket export.

    Expected columns (after normalization, aliases accepted):
        issueid, issuedate, priority, current_status, comments,
        tech_assigned, subject, submitted_by

    Rows with neither an id nor a creation date are dropped (blank trailer
    lines in exports).
    """
    rows = _read_csv(Path(file_path))
    tickets = []
    for row in rows:
        record = normalize_ticket_row(row)
        if not record["id"] and not record["created_at"]:
            continue
        tickets.append(record)
    logger.info("Parsed %d tickets", len(tickets))
    return tickets


class CsvTicketSource(TicketSource):
    """TicketSource backed by a CSV export on disk."""

    def __init__(self, file_path: Path | str):
        self._path = Path(file_path)

    def load_rows(self) -> list[dict[str, str | None]]:
        return load_tickets(self._path)
