"""
Service layer for rrulekit.

Provides:
- Recurrence rule parsing, validation and serialization
- Rule editing sessions with change observers
- The recurrence rule error hierarchy
"""

from rrulekit.services.recurrence import (
    ValidationResult,
    parse,
    validate,
    serialize,
    describe_rule,
)

from rrulekit.services.editor import (
    IntervalChoice,
    RuleEditor,
    interval_choices,
)

from rrulekit.services.exceptions import (
    RecurrenceRuleError,
    EmptyInputError,
    MalformedSegmentError,
    InvalidFrequencyError,
    FieldValidationError,
    FrequencyRequiredError,
    InvalidIntervalError,
    InvalidByMinuteError,
    InvalidByHourError,
    AggregateValidationError,
)

__all__ = [
    # Recurrence
    "ValidationResult",
    "parse",
    "validate",
    "serialize",
    "describe_rule",
    # Editor
    "IntervalChoice",
    "RuleEditor",
    "interval_choices",
    # Errors
    "RecurrenceRuleError",
    "EmptyInputError",
    "MalformedSegmentError",
    "InvalidFrequencyError",
    "FieldValidationError",
    "FrequencyRequiredError",
    "InvalidIntervalError",
    "InvalidByMinuteError",
    "InvalidByHourError",
    "AggregateValidationError",
]
