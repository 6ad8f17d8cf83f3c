"""Domain enums — pure Python, no external dependencies."""

from enum import Enum


class Priority(str, Enum):
    CRITICAL = "critical"
    HIGH = "high"
    NORMAL = "normal"
    LOW = "low"

    @classmethod
    def parse(cls, raw: str | None) -> "Priority":
        """Map a free-form priority label onto a tier.

        Empty labels default to NORMAL, as do labels nobody recognises.
        """
        if not raw or not raw.strip():
            return cls.NORMAL
        key = raw.strip().lower()
        for member in cls:
            if member.value == key:
                return member
        return PRIORITY_ALIASES.get(key, cls.NORMAL)


PRIORITY_ALIASES: dict[str, Priority] = {
    "urgent": Priority.CRITICAL,
    "emergency": Priority.CRITICAL,
    "medium": Priority.NORMAL,
    "standard": Priority.NORMAL,
    "minor": Priority.LOW,
}


class EventKind(str, Enum):
    CREATION = "creation"
    ASSIGNMENT = "assignment"
    TECHNICIAN_RESPONSE = "technician_response"
    USER_RESPONSE = "user_response"


class Milestone(str, Enum):
    ASSIGNMENT = "assignment"
    FIRST_RESPONSE = "first_response"
    FOLLOW_UP = "follow_up"


class SLAStatus(str, Enum):
    COMPLIANT = "compliant"
    AT_RISK = "at_risk"
    VIOLATED = "violated"
    PENDING = "pending"


class RiskTier(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {
    RiskTier.LOW: 0,
    RiskTier.MEDIUM: 1,
    RiskTier.HIGH: 2,
    RiskTier.CRITICAL: 3,
}


class RecommendedAction(str, Enum):
    ESCALATE = "escalate"
    SENIOR_REVIEW = "senior review"
    FOLLOW_UP = "follow up"
    MONITOR = "monitor"
    ASSIGN_IMMEDIATELY = "assign immediately"


class UpdateCategory(str, Enum):
    NEVER_UPDATED = "never_updated"
    UPDATED_TODAY = "updated_today"
    DUE_FOR_UPDATE = "due_for_update"
    WITHIN_SLA = "within_sla"
    OVERDUE = "overdue"
    SEVERELY_OVERDUE = "severely_overdue"


class Severity(str, Enum):
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"
