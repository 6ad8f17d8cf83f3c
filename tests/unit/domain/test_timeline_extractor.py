"""Tests for TimelineExtractor — line parsing and the ordered rule table."""

from datetime import datetime, timezone

import pytest

from helpdesk_sla.domain.entities.ticket import Ticket
from helpdesk_sla.domain.policies.timeline_extractor import (
    DEFAULT_RULES,
    TimelineExtractor,
    classify_line,
    default_rules,
    extract_events,
    extract_timeline,
    parse_log_line,
    technicians_involved,
)
from helpdesk_sla.domain.value_objects.enums import EventKind

ASSIGN = "08/25/2025 09:00 : system : System : Ticket has been assigned to technician: Jane Doe"
CREATED = "08/25/2025 08:45 : jsmith : User : Ticket was created via the portal"
ANY_UPDATES = "08/25/2025 10:00 : jsmith : User : Any updates on this?"
TECH_ASKS = "08/25/2025 10:05 : corp\\jdoe : Technician : Any updates from the vendor?"
TECH_WORK = "08/25/2025 11:00 : corp\\jdoe : Technician : Replaced the toner cartridge"
DOMAIN_ONLY = "08/25/2025 11:30 corp\\jdoe: looked at the printer"
ACTIVITY = "08/25/2025 12:00 Printer fixed and tested"
REQUESTER = "08/25/2025 12:30 : jsmith : User : It is still broken"


def _rule_name(text: str, rules=DEFAULT_RULES, tz=timezone.utc) -> str:
    line = parse_log_line(text, 0, tz)
    assert line is not None
    return classify_line(line, rules).name


# ─── parse_log_line ──────────────────────────────────────────────────


def test_parse_structured_line(tz):
    line = parse_log_line(TECH_WORK, 3, tz)
    assert line.position == 3
    assert line.timestamp == datetime(2025, 8, 25, 11, 0, tzinfo=tz)
    assert line.actor == "corp\\jdoe"
    assert line.role == "Technician"
    assert line.message == "Replaced the toner cartridge"


def test_parse_identity_line_has_no_role(tz):
    line = parse_log_line(DOMAIN_ONLY, 0, tz)
    assert line.actor == "corp\\jdoe"
    assert line.role is None
    assert line.message == "looked at the printer"


def test_parse_twelve_hour_clock(tz):
    line = parse_log_line("08/25/2025 2:15 PM : jsmith : User : hello", 0, tz)
    assert (line.timestamp.hour, line.timestamp.minute) == (14, 15)


def test_parse_continuation_line_is_none(tz):
    assert parse_log_line("   and it also makes a noise", 0, tz) is None


def test_parse_impossible_date_is_none(tz):
    assert parse_log_line("13/45/2025 10:00 : jsmith : User : hello", 0, tz) is None


# ─── Rule table ──────────────────────────────────────────────────────


def test_rule_order():
    assert [r.name for r in DEFAULT_RULES] == [
        "assignment",
        "creation",
        "follow_up_question",
        "technician_role",
        "technician_domain",
        "technician_activity",
        "requester",
    ]


@pytest.mark.parametrize("text,expected", [
    (ASSIGN, "assignment"),
    (CREATED, "creation"),
    (ANY_UPDATES, "follow_up_question"),
    (TECH_ASKS, "follow_up_question"),
    (TECH_WORK, "technician_role"),
    (ACTIVITY, "technician_activity"),
    (REQUESTER, "requester"),
    (DOMAIN_ONLY, "requester"),
])
def test_default_rule_hits(text, expected):
    assert _rule_name(text) == expected


def test_domain_rule_needs_configured_domains():
    assert _rule_name(DOMAIN_ONLY, rules=default_rules(["corp\\"])) == "technician_domain"


def test_domain_match_is_case_insensitive():
    assert _rule_name(DOMAIN_ONLY, rules=default_rules(["CORP\\"])) == "technician_domain"


def test_technician_assignment_line_is_assignment():
    text = "08/25/2025 09:00 : corp\\jdoe : Technician : Reassigned to technician: Bob Lee"
    assert _rule_name(text) == "assignment"


def test_follow_up_with_work_verb_stays_user_response():
    text = "08/25/2025 09:00 Following up - was this fixed?"
    assert _rule_name(text) == "follow_up_question"


@pytest.mark.parametrize("text,kind", [
    (ASSIGN, EventKind.ASSIGNMENT),
    (CREATED, EventKind.CREATION),
    (TECH_ASKS, EventKind.USER_RESPONSE),
    (TECH_WORK, EventKind.TECHNICIAN_RESPONSE),
    (REQUESTER, EventKind.USER_RESPONSE),
])
def test_rule_kinds(text, kind):
    line = parse_log_line(text, 0, timezone.utc)
    assert classify_line(line).kind == kind


# ─── extract_events ──────────────────────────────────────────────────


@pytest.mark.parametrize("raw", [None, "", "   \n  ", 42])
def test_empty_or_absent_log(raw, tz):
    timeline = extract_events(raw, tz)
    assert len(timeline) == 0
    assert not timeline


def test_assignee_recorded(tz):
    timeline = extract_events(ASSIGN, tz)
    event = timeline.first(EventKind.ASSIGNMENT)
    assert event.assignee == "Jane Doe"
    assert event.rule == "assignment"


def test_bad_lines_skipped_not_fatal(tz):
    raw = "\n".join([
        "13/45/2025 10:00 : jsmith : User : broken date",
        "no timestamp at all",
        TECH_WORK,
    ])
    timeline = extract_events(raw, tz)
    assert len(timeline) == 1
    assert timeline.events[0].kind == EventKind.TECHNICIAN_RESPONSE


def test_events_sorted_by_time_ties_keep_log_order(tz):
    raw = "\n".join([
        REQUESTER,
        "08/25/2025 09:00 : corp\\jdoe : Technician : Looking into it",
        ASSIGN,
    ])
    timeline = extract_events(raw, tz)
    assert [e.rule for e in timeline] == ["technician_role", "assignment", "requester"]


def test_assignment_excluded_from_technician_responses(tz):
    timeline = extract_events("\n".join([ASSIGN, ANY_UPDATES]), tz)
    assert timeline.first(EventKind.TECHNICIAN_RESPONSE) is None


def test_extraction_is_repeatable(tz):
    raw = "\n".join([CREATED, ASSIGN, TECH_WORK, ANY_UPDATES])
    assert extract_events(raw, tz) == extract_events(raw, tz)


# ─── Ticket-level helpers ────────────────────────────────────────────


def _ticket(comments: str, tech: str | None = None, tz=None) -> Ticket:
    return Ticket(
        id="100", created_at=datetime(2025, 8, 25, 8, 45, tzinfo=tz or timezone.utc),
        priority="high", status="Open", raw_comments=comments, assigned_technician=tech,
    )


def test_extract_timeline_reads_log_in_civil_zone_not_storage_zone(tz):
    # created_at stored in UTC; the log is written in desk (Chicago) time
    ticket = _ticket(TECH_WORK)
    timeline = extract_timeline(ticket, tz)
    event = timeline.events[0]
    assert event.timestamp == datetime(2025, 8, 25, 11, 0, tzinfo=tz)
    assert event.timestamp.astimezone(timezone.utc) == datetime(2025, 8, 25, 16, 0, tzinfo=timezone.utc)


def test_extractor_with_domains(tz):
    extractor = TimelineExtractor.for_domains(["corp\\"])
    timeline = extractor.extract(_ticket(DOMAIN_ONLY, tz=tz), tz)
    assert timeline.events[0].kind == EventKind.TECHNICIAN_RESPONSE


def test_technicians_involved(tz):
    ticket = _ticket("\n".join([ASSIGN, TECH_WORK, REQUESTER]), tech="Jane Doe", tz=tz)
    names = technicians_involved(ticket, extract_timeline(ticket, tz))
    assert names == ["Jane Doe", "corp\\jdoe"]
