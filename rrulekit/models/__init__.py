"""
Domain models for rrulekit.

This module exports the recurrence rule model and its token tables.
"""

from rrulekit.models.recurrence_rule import (
    Day,
    Frequency,
    RecurrenceRule,
    RuleKey,
    sort_days,
)

__all__ = [
    "Day",
    "Frequency",
    "RecurrenceRule",
    "RuleKey",
    "sort_days",
]
