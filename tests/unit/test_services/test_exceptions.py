"""
Unit tests for recurrence rule exceptions.

Tests error hierarchy, messages and error_type slugs.
"""

import pytest

from rrulekit.models.recurrence_rule import RuleKey
from rrulekit.services.exceptions import (
    AggregateValidationError,
    EmptyInputError,
    FieldValidationError,
    FrequencyRequiredError,
    InvalidByHourError,
    InvalidByMinuteError,
    InvalidFrequencyError,
    InvalidIntervalError,
    MalformedSegmentError,
    RecurrenceRuleError,
    allowed_days_hint,
)


class TestHierarchy:
    """Test exception inheritance."""

    @pytest.mark.parametrize("error", [
        EmptyInputError(),
        MalformedSegmentError("X"),
        InvalidFrequencyError("FREQ=HOURLY"),
        FrequencyRequiredError(),
        InvalidIntervalError(0),
        InvalidByMinuteError([60]),
        InvalidByHourError([24]),
        AggregateValidationError([FrequencyRequiredError(), InvalidIntervalError(0)]),
    ])
    def test_all_are_recurrence_rule_errors(self, error):
        assert isinstance(error, RecurrenceRuleError)
        assert isinstance(error, Exception)
        assert str(error) == error.message

    def test_field_errors_carry_key(self):
        assert FrequencyRequiredError.key is RuleKey.FREQUENCY
        assert InvalidIntervalError.key is RuleKey.INTERVAL
        assert InvalidByMinuteError.key is RuleKey.BY_MINUTE
        assert InvalidByHourError.key is RuleKey.BY_HOUR

    def test_parse_errors_are_not_field_errors(self):
        assert not isinstance(MalformedSegmentError("X"), FieldValidationError)
        assert not isinstance(InvalidFrequencyError("X"), FieldValidationError)

    def test_error_types_unique(self):
        classes = [
            EmptyInputError,
            MalformedSegmentError,
            InvalidFrequencyError,
            FrequencyRequiredError,
            InvalidIntervalError,
            InvalidByMinuteError,
            InvalidByHourError,
            AggregateValidationError,
        ]
        slugs = [cls.error_type for cls in classes]
        assert len(set(slugs)) == len(slugs)


class TestMessages:
    """Test human-readable messages."""

    def test_empty_input(self):
        assert EmptyInputError().message == "Empty RRULE string"

    def test_malformed_segment_embeds_input(self):
        error = MalformedSegmentError("FREQ=DAILY;BAD")

        assert error.original_input == "FREQ=DAILY;BAD"
        assert '"FREQ=DAILY;BAD"' in error.message

    def test_invalid_frequency_lists_allowed(self):
        error = InvalidFrequencyError("FREQ=HOURLY")

        assert "['DAILY', 'WEEKLY']" in error.message
        assert "FREQ=HOURLY" in error.message

    def test_by_minute_domain(self):
        error = InvalidByMinuteError([60, 75])

        assert error.value == [60, 75]
        assert error.message == "Invalid BYMINUTE input(s): [60, 75] - Allowed inputs interval -> [0,59]"

    def test_by_hour_domain(self):
        error = InvalidByHourError((24,))

        assert error.value == [24]
        assert error.message == "Invalid BYHOUR input(s): [24] - Allowed inputs interval -> [0,23]"

    def test_aggregate_message(self):
        error = AggregateValidationError([InvalidIntervalError(-1), InvalidByMinuteError([75])])

        assert error.message.splitlines() == [
            "Multiple failed validations:",
            "1. Invalid INTERVAL input: -1 - MUST be a positive integer",
            "2. Invalid BYMINUTE input(s): [75] - Allowed inputs interval -> [0,59]",
        ]

    def test_allowed_days_hint(self):
        assert allowed_days_hint() == "Allowed inputs: ['SU', 'MO', 'TU', 'WE', 'TH', 'FR', 'SA']"
        assert allowed_days_hint("XX").startswith("Invalid day 'XX'")
