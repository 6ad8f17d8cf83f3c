"""Tests for CSV normalizer functions."""

from helpdesk_sla.adapters.csv_loader.normalizer import (
    clean_string,
    clean_technician_name,
    normalize_column_name,
    normalize_columns,
    strip_invisible,
)

# ─── normalize_column_name ───────────────────────────────────────────


def test_strip_trailing_spaces():
    assert normalize_column_name("  Priority  ") == "priority"


def test_remove_bom():
    assert normalize_column_name("\ufeffIssueID") == "issueid"


def test_remove_zero_width_space():
    assert normalize_column_name("Issue\u200bDate") == "issuedate"


def test_replace_spaces_with_underscore():
    assert normalize_column_name("Current Status") == "current_status"


def test_non_breaking_space():
    assert normalize_column_name("Tech\u00a0Assigned") == "tech_assigned"


def test_multiple_spaces():
    assert normalize_column_name("Submitted   By") == "submitted_by"


def test_punctuation_dropped():
    assert normalize_column_name("Issue #ID") == "issue_id"


def test_normalize_columns_mapping():
    assert normalize_columns(["IssueID", "Current_Status"]) == {
        "IssueID": "issueid",
        "Current_Status": "current_status",
    }


# ─── clean_string ────────────────────────────────────────────────────


def test_clean_string_none():
    assert clean_string(None) is None


def test_clean_string_empty():
    assert clean_string("   ") is None


def test_clean_string_strips_invisible():
    assert clean_string("\u200b Open\u00a0 ") == "Open"


def test_clean_string_keeps_inner_newlines():
    assert clean_string(" line one\nline two ") == "line one\nline two"


def test_strip_invisible_nbsp_becomes_space():
    assert strip_invisible("a\u00a0b") == "a b"


# ─── clean_technician_name ───────────────────────────────────────────


def test_technician_name_collapses_spaces():
    assert clean_technician_name("  Jane    Doe ") == "Jane Doe"


def test_technician_name_drops_symbols():
    assert clean_technician_name("Jane Doe (IT)*") == "Jane Doe IT"


def test_technician_name_keeps_account_characters():
    assert clean_technician_name("corp\\j.doe") == "corp\\j.doe"
    assert clean_technician_name("jane.doe@example.com") == "jane.doe@example.com"


def test_technician_name_capped():
    assert len(clean_technician_name("x" * 80)) == 50


def test_technician_name_empty():
    assert clean_technician_name("") is None
    assert clean_technician_name("***") is None
