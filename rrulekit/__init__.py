"""
rrulekit: parse, validate and generate RFC 5545 recurrence rules.

Supports FREQ (DAILY, WEEKLY), INTERVAL, BYMINUTE, BYHOUR, BYDAY and WKST.
"""

from rrulekit.models.recurrence_rule import Day, Frequency, RecurrenceRule, RuleKey
from rrulekit.services.recurrence import (
    ValidationResult,
    describe_rule,
    parse,
    serialize,
    validate,
)

__all__ = [
    "Day",
    "Frequency",
    "RecurrenceRule",
    "RuleKey",
    "ValidationResult",
    "describe_rule",
    "parse",
    "serialize",
    "validate",
]
