"""
Custom exceptions for recurrence rule operations.

Parsing errors short-circuit on the first structural problem. Validation
errors are per-field and get collected into an AggregateValidationError
when more than one field fails.
"""

from typing import Optional, Sequence

from rrulekit.models.recurrence_rule import Day, Frequency, RuleKey


class RecurrenceRuleError(Exception):
    """Base exception for recurrence rule operations."""

    error_type: str = "recurrence_rule_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EmptyInputError(RecurrenceRuleError):
    """The RRULE string was empty."""

    error_type = "empty_input"

    def __init__(self):
        super().__init__("Empty RRULE string")


class MalformedSegmentError(RecurrenceRuleError):
    """
    A segment was not a KEY=VALUE pair with a supported key.

    Carries the whole original input, not just the offending segment.
    """

    error_type = "malformed_segment"

    def __init__(self, original_input: str):
        super().__init__(f'Please check your RRULE "{original_input}" for correctness')
        self.original_input = original_input


class InvalidFrequencyError(RecurrenceRuleError):
    """FREQ was present but not one of the supported values."""

    error_type = "invalid_frequency"

    def __init__(self, original_input: str):
        allowed = [f.value for f in Frequency]
        super().__init__(
            f"Pursuant to RFC 5545, {RuleKey.FREQUENCY.value} is required "
            f"and MUST be one of {allowed}. Your RRULE: {original_input}"
        )
        self.original_input = original_input


class FieldValidationError(RecurrenceRuleError):
    """Base class for a single field failing validation."""

    error_type = "field_validation_error"
    key: RuleKey

    def __init__(self, message: str, value=None):
        super().__init__(message)
        self.value = value


class FrequencyRequiredError(FieldValidationError):
    """Frequency is unset."""

    error_type = "frequency_required"
    key = RuleKey.FREQUENCY

    def __init__(self):
        allowed = [f.value for f in Frequency]
        super().__init__(
            f"Invalid {self.key.value} input: None - MUST be one of the following: {allowed}"
        )


class InvalidIntervalError(FieldValidationError):
    """Interval is zero or negative."""

    error_type = "invalid_interval"
    key = RuleKey.INTERVAL

    def __init__(self, value: int):
        super().__init__(
            f"Invalid {self.key.value} input: {value} - MUST be a positive integer",
            value,
        )


class InvalidByMinuteError(FieldValidationError):
    """One or more BYMINUTE values fall outside [0, 59]."""

    error_type = "invalid_by_minute"
    key = RuleKey.BY_MINUTE

    def __init__(self, values: Sequence[int]):
        values = list(values)
        super().__init__(
            f"Invalid {self.key.value} input(s): {values} - Allowed inputs interval -> [0,59]",
            values,
        )


class InvalidByHourError(FieldValidationError):
    """One or more BYHOUR values fall outside [0, 23]."""

    error_type = "invalid_by_hour"
    key = RuleKey.BY_HOUR

    def __init__(self, values: Sequence[int]):
        values = list(values)
        super().__init__(
            f"Invalid {self.key.value} input(s): {values} - Allowed inputs interval -> [0,23]",
            values,
        )


class AggregateValidationError(RecurrenceRuleError):
    """
    More than one field failed validation.

    Failures keep the order they were detected in (frequency, interval,
    BYMINUTE, BYHOUR). The message numbers them from 1 for display.
    """

    error_type = "multiple_validation_errors"

    def __init__(self, failures: Sequence[FieldValidationError]):
        self.failures = list(failures)
        lines = [f"{position}. {failure.message}" for position, failure in self.numbered()]
        super().__init__("Multiple failed validations:\n" + "\n".join(lines))

    def numbered(self) -> list[tuple[int, FieldValidationError]]:
        """Return (1-based position, failure) pairs."""
        return list(enumerate(self.failures, start=1))


def allowed_days_hint(value: Optional[str] = None) -> str:
    """Describe the accepted day tokens, optionally quoting a rejected one."""
    allowed = [d.value for d in Day]
    if value is None:
        return f"Allowed inputs: {allowed}"
    return f"Invalid day {value!r} - Allowed inputs: {allowed}"
