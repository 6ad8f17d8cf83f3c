"""Civil timestamp parsing shared by ticket ingestion and log extraction."""

from __future__ import annotations

import re
from datetime import datetime, tzinfo

# Formats seen in helpdesk exports, most common first.
CIVIL_FORMATS: tuple[str, ...] = (
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %I:%M %p",
    "%m/%d/%Y %I:%M:%S %p",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%dT%H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%m/%d/%Y",
    "%Y-%m-%d",
)

# Leading timestamp token of an activity-log line.
LEADING_TIMESTAMP = re.compile(
    r"^\s*(?P<ts>"
    r"\d{1,2}/\d{1,2}/\d{4}\s+\d{1,2}:\d{2}(?::\d{2})?(?:\s*[AaPp][Mm]\b)?"
    r"|\d{4}-\d{2}-\d{2}[ T]\d{1,2}:\d{2}(?::\d{2})?"
    r")"
)


def parse_civil_timestamp(text: str | None) -> datetime | None:
    """Parse a naive civil timestamp. Returns None when nothing matches."""
    if not text:
        return None
    value = " ".join(text.strip().split())
    value = re.sub(r"\s*([AaPp][Mm])$", lambda m: " " + m.group(1).upper(), value)
    for fmt in CIVIL_FORMATS:
        try:
            return datetime.strptime(value, fmt)
        except ValueError:
            continue
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        return None


def to_zone(moment: datetime, tz: tzinfo) -> datetime:
    """Interpret naive values as civil time in *tz*; convert aware ones into *tz*."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)
