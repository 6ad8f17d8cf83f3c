"""Tests for domain enums."""

import pytest

from helpdesk_sla.domain.value_objects.enums import (
    EventKind,
    Priority,
    RecommendedAction,
    RiskTier,
    SLAStatus,
)


@pytest.mark.parametrize("raw,expected", [
    ("critical", Priority.CRITICAL),
    ("  HIGH ", Priority.HIGH),
    ("Normal", Priority.NORMAL),
    ("low", Priority.LOW),
    ("Urgent", Priority.CRITICAL),
    ("medium", Priority.NORMAL),
    ("minor", Priority.LOW),
    ("", Priority.NORMAL),
    (None, Priority.NORMAL),
    ("whenever you can", Priority.NORMAL),
])
def test_priority_parse(raw, expected):
    assert Priority.parse(raw) == expected


def test_str_enum_values():
    assert SLAStatus.AT_RISK.value == "at_risk"
    assert EventKind.TECHNICIAN_RESPONSE.value == "technician_response"
    assert RecommendedAction.SENIOR_REVIEW.value == "senior review"
    assert RecommendedAction.ASSIGN_IMMEDIATELY.value == "assign immediately"


def test_risk_tier_rank_order():
    ranks = [t.rank for t in (RiskTier.LOW, RiskTier.MEDIUM, RiskTier.HIGH, RiskTier.CRITICAL)]
    assert ranks == sorted(ranks)
    assert len(set(ranks)) == 4


def test_enum_from_value():
    assert Priority("critical") == Priority.CRITICAL
    assert RiskTier("high") == RiskTier.HIGH
