"""TimelineExtractor — turn a free-text activity log into classified events.

Each log entry starts with a timestamp, usually followed by
``actor : Role : message``, e.g.::

    08/24/2025 14:34 : corp\\jdoe : Technician : Replaced the toner cartridge

Lines are classified by an ordered rule table. The first rule whose
predicate holds (and whose exclusion does not) decides the event kind:

    1. assignment           → ASSIGNMENT  ("ticket has been assigned to technician: X")
    2. creation             → CREATION    ("ticket was created")
    3. follow_up_question   → USER_RESPONSE ("any updates?", "following up")
    4. technician_role      → TECHNICIAN_RESPONSE (role column says Technician)
    5. technician_domain    → TECHNICIAN_RESPONSE (actor belongs to a technician domain)
    6. technician_activity  → TECHNICIAN_RESPONSE (no role column, work verbs like "fixed")
    7. requester            → USER_RESPONSE (everything else)

Assignment lines win over technician activity: they mark who owns the
ticket, they do not answer the requester.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from datetime import datetime, tzinfo
from typing import Callable, Iterable, Sequence

from helpdesk_sla.domain.entities.ticket import Ticket
from helpdesk_sla.domain.entities.timeline import Event, Timeline
from helpdesk_sla.domain.value_objects.enums import EventKind
from helpdesk_sla.domain.value_objects.timestamps import (
    LEADING_TIMESTAMP,
    parse_civil_timestamp,
    to_zone,
)

logger = logging.getLogger(__name__)

ASSIGNMENT_PATTERN = re.compile(
    r"\b(?:re)?assigned\s+to\s+(?:technician|tech|agent)\b"
    r"|\bticket\s+(?:has\s+been|was)\s+(?:re)?assigned\b"
    r"|\bhas\s+been\s+(?:re)?assigned\s+to\b"
    r"|\breassigned\s+to\b",
    re.IGNORECASE,
)
ASSIGNEE_PATTERN = re.compile(
    r"assigned\s+to(?:\s+(?:technician|tech|agent))?\s*:?\s*(?P<name>[^\n;,]+)",
    re.IGNORECASE,
)
CREATION_PATTERN = re.compile(
    r"\b(?:ticket|issue|request)\s+(?:was\s+|has\s+been\s+)?(?:created|submitted|opened|logged)\b",
    re.IGNORECASE,
)
FOLLOW_UP_PATTERN = re.compile(
    r"\bany\s+updates?\b"
    r"|\bplease\s+update\b"
    r"|\bstatus\s+update\b"
    r"|\bchecking\s+(?:on|in)\b"
    r"|\bfollow(?:ing)?[\s-]?up\b"
    r"|\bis\s+this\s+complete\b"
    r"|\bstill\s+working\b",
    re.IGNORECASE,
)
TECH_ACTIVITY_PATTERN = re.compile(
    r"\b(?:resolved|completed|fixed|installed|configured|updated|tested|deployed"
    r"|investigating|replaced|reset|rebooted|remoted\s+in)\b",
    re.IGNORECASE,
)

TECHNICIAN_ROLES = frozenset({"technician", "tech", "agent", "admin", "administrator", "support"})
REQUESTER_ROLES = frozenset({"user", "requester", "client", "customer", "end user", "submitter", "system"})

_STRUCTURED = re.compile(r"^(?P<actor>[^:]+?)\s*:\s*(?P<role>[A-Za-z][A-Za-z ]*?)\s*:\s*(?P<message>.*)$", re.DOTALL)
_IDENTITY = re.compile(r"^(?P<actor>[\w.-]+[\\@][\w.-]+)\s*:\s*(?P<message>.*)$", re.DOTALL)
_SEPARATOR = re.compile(r"^\s*[:\-–]?\s*")


@dataclass(frozen=True)
class LogLine:
    """One timestamped entry of the activity log, before classification."""

    position: int
    timestamp: datetime
    actor: str
    role: str | None
    message: str
    body: str
    raw_text: str

    @property
    def role_key(self) -> str | None:
        return self.role.lower() if self.role else None


Predicate = Callable[[LogLine], bool]


@dataclass(frozen=True)
class ClassificationRule:
    name: str
    kind: EventKind
    predicate: Predicate
    exclude: Predicate | None = None

    def matches(self, line: LogLine) -> bool:
        if not self.predicate(line):
            return False
        return not (self.exclude and self.exclude(line))


def _is_assignment(line: LogLine) -> bool:
    return bool(ASSIGNMENT_PATTERN.search(line.message))


def _is_creation(line: LogLine) -> bool:
    return bool(CREATION_PATTERN.search(line.message))


def _is_follow_up(line: LogLine) -> bool:
    return bool(FOLLOW_UP_PATTERN.search(line.message))


def _assignment_or_follow_up(line: LogLine) -> bool:
    return _is_assignment(line) or _is_follow_up(line)


def _has_technician_role(line: LogLine) -> bool:
    return line.role_key in TECHNICIAN_ROLES


def _in_domains(domains: Sequence[str]) -> Predicate:
    prefixes = tuple(d.lower() for d in domains)

    def predicate(line: LogLine) -> bool:
        if not prefixes:
            return False
        return line.actor.lower().startswith(prefixes) or line.body.lower().startswith(prefixes)

    return predicate


def _unstructured_technician_activity(line: LogLine) -> bool:
    return line.role is None and bool(TECH_ACTIVITY_PATTERN.search(line.message))


def default_rules(technician_domains: Sequence[str] = ()) -> tuple[ClassificationRule, ...]:
    """The standard ordered rule table.

    Args:
        technician_domains: account prefixes (e.g. ``"corp\\\\"``) that identify
            technicians when the log has no role column.
    """
    return (
        ClassificationRule("assignment", EventKind.ASSIGNMENT, _is_assignment),
        ClassificationRule("creation", EventKind.CREATION, _is_creation, exclude=_assignment_or_follow_up),
        ClassificationRule("follow_up_question", EventKind.USER_RESPONSE, _is_follow_up),
        ClassificationRule(
            "technician_role", EventKind.TECHNICIAN_RESPONSE, _has_technician_role,
            exclude=_assignment_or_follow_up,
        ),
        ClassificationRule(
            "technician_domain", EventKind.TECHNICIAN_RESPONSE, _in_domains(technician_domains),
            exclude=_assignment_or_follow_up,
        ),
        ClassificationRule(
            "technician_activity", EventKind.TECHNICIAN_RESPONSE, _unstructured_technician_activity,
            exclude=_assignment_or_follow_up,
        ),
        ClassificationRule("requester", EventKind.USER_RESPONSE, lambda line: True),
    )


DEFAULT_RULES = default_rules()


def parse_log_line(text: str, position: int, tz: tzinfo) -> LogLine | None:
    """Split one raw line into timestamp / actor / role / message.

    Returns None for continuation text and for lines whose leading date is
    not a real calendar date.
    """
    match = LEADING_TIMESTAMP.match(text)
    if not match:
        return None
    moment = parse_civil_timestamp(match.group("ts"))
    if moment is None:
        logger.debug("Skipping log line %d with invalid timestamp %r", position, match.group("ts"))
        return None

    body = _SEPARATOR.sub("", text[match.end():], count=1).strip()
    actor, role, message = "", None, body

    structured = _STRUCTURED.match(body)
    if structured and structured.group("role").strip().lower() in TECHNICIAN_ROLES | REQUESTER_ROLES:
        actor = structured.group("actor").strip()
        role = structured.group("role").strip()
        message = structured.group("message").strip()
    else:
        identity = _IDENTITY.match(body)
        if identity:
            actor = identity.group("actor").strip()
            message = identity.group("message").strip()

    return LogLine(
        position=position,
        timestamp=to_zone(moment, tz),
        actor=actor,
        role=role,
        message=message,
        body=body,
        raw_text=text.strip(),
    )


def classify_line(line: LogLine, rules: Iterable[ClassificationRule] = DEFAULT_RULES) -> ClassificationRule:
    for rule in rules:
        if rule.matches(line):
            return rule
    raise LookupError("Rule table has no catch-all rule")


def _assignee(message: str) -> str | None:
    match = ASSIGNEE_PATTERN.search(message)
    if not match:
        return None
    name = match.group("name").strip().rstrip(".")
    return name or None


def extract_events(
    raw_comments: str | None,
    tz: tzinfo,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
) -> Timeline:
    """Parse and classify a raw activity log. Never raises on bad input."""
    if not isinstance(raw_comments, str) or not raw_comments.strip():
        return Timeline()

    events: list[tuple[int, Event]] = []
    for position, text in enumerate(raw_comments.splitlines()):
        try:
            line = parse_log_line(text, position, tz)
        except (ValueError, OverflowError):
            logger.debug("Skipping malformed log line %d", position)
            continue
        if line is None:
            continue

        rule = classify_line(line, rules)
        events.append((
            position,
            Event(
                timestamp=line.timestamp,
                kind=rule.kind,
                actor=line.actor,
                raw_text=line.raw_text,
                rule=rule.name,
                assignee=_assignee(line.message) if rule.kind == EventKind.ASSIGNMENT else None,
            ),
        ))

    events.sort(key=lambda item: (item[1].timestamp, item[0]))
    return Timeline(events=tuple(event for _, event in events))


@dataclass(frozen=True)
class TimelineExtractor:
    """Binds a rule table so callers can extract a ticket's timeline in one call."""

    rules: tuple[ClassificationRule, ...] = field(default=DEFAULT_RULES)

    @classmethod
    def for_domains(cls, technician_domains: Sequence[str]) -> "TimelineExtractor":
        return cls(rules=default_rules(technician_domains))

    def extract(self, ticket: Ticket, tz: tzinfo) -> Timeline:
        return extract_timeline(ticket, tz, self.rules)


def extract_timeline(
    ticket: Ticket,
    tz: tzinfo,
    rules: Sequence[ClassificationRule] = DEFAULT_RULES,
) -> Timeline:
    """Timeline of *ticket*, with naive log times read as civil time in *tz*.

    *tz* is the schedule's zone, not the zone *created_at* was stored in.
    """
    return extract_events(ticket.raw_comments, tz, rules)


def technicians_involved(ticket: Ticket, timeline: Timeline) -> list[str]:
    """Assigned technician first, then everyone who worked or was assigned in the log."""
    names: dict[str, None] = {}
    if ticket.has_technician():
        names[ticket.assigned_technician.strip()] = None
    for name in timeline.technicians():
        names.setdefault(name, None)
    return list(names)
