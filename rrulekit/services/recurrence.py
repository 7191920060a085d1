"""
Recurrence rule parsing, validation and serialization.

Supports the RFC 5545 subset FREQ, INTERVAL, BYMINUTE, BYHOUR, BYDAY, WKST:
- parse(): RRULE string -> RecurrenceRule (lenient on field contents)
- validate(): exhaustive field checks, every failure collected
- serialize(): RecurrenceRule -> RRULE string (validates first)

Occurrence expansion is intentionally not provided.
"""

import logging
import re
from dataclasses import dataclass, field
from typing import Callable, Optional, TypeVar

from rrulekit.config import get_settings
from rrulekit.models.recurrence_rule import (
    Day,
    Frequency,
    RecurrenceRule,
    RuleKey,
    sort_days,
)
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
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

SEGMENT_SEPARATOR = ";"
KEY_VALUE_SEPARATOR = "="
LIST_SEPARATOR = ","

MINUTE_RANGE = range(0, 60)
HOUR_RANGE = range(0, 24)

# ASCII digits with optional sign; int() alone would also accept
# whitespace, underscores and non-ASCII digits
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


# =============================================================================
# Parsing
# =============================================================================


def parse_integer(token: str) -> Optional[int]:
    """
    Parse a signed decimal integer token.

    Args:
        token: Raw token (e.g., '15', '-1')

    Returns:
        Integer value or None if the token is not an integer (or has
        more digits than int() will convert)
    """
    if _INTEGER_PATTERN.fullmatch(token) is None:
        return None
    try:
        return int(token)
    except ValueError:
        return None


def _split_list(value: str, convert: Callable[[str], Optional[T]]) -> tuple[list[T], list[str]]:
    """Split a comma-separated value, returning (converted, dropped tokens)."""
    converted = []
    dropped = []
    for token in value.split(LIST_SEPARATOR):
        result = convert(token)
        if result is None:
            dropped.append(token)
        else:
            converted.append(result)
    return converted, dropped


def _split_segments(text: str) -> list[tuple[RuleKey, str]]:
    pairs = []
    for segment in text.split(SEGMENT_SEPARATOR):
        parts = segment.split(KEY_VALUE_SEPARATOR)
        if len(parts) != 2:
            raise MalformedSegmentError(text)

        key = RuleKey.from_token(parts[0])
        if key is None:
            raise MalformedSegmentError(text)

        pairs.append((key, parts[1]))
    return pairs


def parse(text: str) -> RecurrenceRule:
    """
    Parse an RRULE string into a modifiable RecurrenceRule.

    Segments are applied left to right, so the last occurrence of a key
    wins. A missing FREQ is not an error here; it is reported by
    validate() as FrequencyRequiredError.

    Content errors degrade gracefully:
    - INTERVAL, WKST: unparseable value is ignored (previous value kept)
    - BYMINUTE, BYHOUR, BYDAY: unparseable tokens are dropped

    Args:
        text: RRULE string (e.g., 'FREQ=DAILY;BYMINUTE=15,30,45;BYHOUR=1,2')

    Returns:
        Populated RecurrenceRule

    Raises:
        EmptyInputError: If text is empty
        MalformedSegmentError: If a segment is not KEY=VALUE with a known key
        InvalidFrequencyError: If FREQ is not DAILY or WEEKLY
    """
    if not text:
        raise EmptyInputError()

    rule = RecurrenceRule()

    for key, value in _split_segments(text):
        if key is RuleKey.FREQUENCY:
            frequency = Frequency.from_token(value)
            if frequency is None:
                raise InvalidFrequencyError(text)
            rule.frequency = frequency

        elif key is RuleKey.INTERVAL:
            interval = parse_integer(value)
            if interval is None:
                logger.debug(f"Ignoring non-numeric INTERVAL {value!r}")
            else:
                rule.interval = interval

        elif key is RuleKey.BY_MINUTE:
            minutes, dropped = _split_list(value, parse_integer)
            _log_dropped(key, dropped)
            rule.by_minute = set(minutes)

        elif key is RuleKey.BY_HOUR:
            hours, dropped = _split_list(value, parse_integer)
            _log_dropped(key, dropped)
            rule.by_hour = set(hours)

        elif key is RuleKey.BY_DAY:
            days, dropped = _split_list(value, Day.from_token)
            _log_dropped(key, dropped)
            rule.by_day = set(days)

        elif key is RuleKey.WKST:
            wkst = Day.from_token(value)
            if wkst is None:
                logger.debug(f"Ignoring unknown WKST {value!r}")
            else:
                rule.wkst = wkst

    logger.debug(f"Parsed RRULE {text!r}: {rule.to_dict()}")
    return rule


def _log_dropped(key: RuleKey, dropped: list[str]) -> None:
    if dropped:
        logger.debug(f"Dropped invalid {key.value} token(s): {dropped}")


# =============================================================================
# Validation
# =============================================================================


@dataclass
class ValidationResult:
    """
    Outcome of validating a RecurrenceRule.

    failures keeps detection order: frequency, interval, BYMINUTE, BYHOUR.
    """

    failures: list[FieldValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """Check if no field failed."""
        return not self.failures

    @property
    def error(self) -> Optional[RecurrenceRuleError]:
        """
        Error to surface for this result.

        Returns:
            None when valid, the failure itself when exactly one field
            failed, otherwise an AggregateValidationError
        """
        if not self.failures:
            return None
        if len(self.failures) == 1:
            return self.failures[0]
        return AggregateValidationError(self.failures)

    @property
    def messages(self) -> list[str]:
        """Human-readable message for each failure."""
        return [failure.message for failure in self.failures]

    def raise_for_errors(self) -> None:
        """Raise the surfaced error, if any."""
        error = self.error
        if error is not None:
            raise error


def _out_of_range(values: set[int], allowed: range) -> list[int]:
    return sorted(value for value in values if value not in allowed)


def validate(rule: RecurrenceRule) -> ValidationResult:
    """
    Validate every field of a rule and collect all failures.

    Checks run in RuleKey order. BYDAY and WKST have no checks since the
    model only holds Day members for them.

    Args:
        rule: Rule to validate

    Returns:
        ValidationResult (check is_valid, or call raise_for_errors())
    """
    failures: list[FieldValidationError] = []

    for key in RuleKey:
        if key is RuleKey.FREQUENCY:
            if rule.frequency is None:
                failures.append(FrequencyRequiredError())

        elif key is RuleKey.INTERVAL:
            if rule.interval <= 0:
                failures.append(InvalidIntervalError(rule.interval))

        elif key is RuleKey.BY_MINUTE:
            invalid_minutes = _out_of_range(rule.by_minute, MINUTE_RANGE)
            if invalid_minutes:
                failures.append(InvalidByMinuteError(invalid_minutes))

        elif key is RuleKey.BY_HOUR:
            invalid_hours = _out_of_range(rule.by_hour, HOUR_RANGE)
            if invalid_hours:
                failures.append(InvalidByHourError(invalid_hours))

    if failures:
        logger.debug(f"Validation failed for {len(failures)} field(s): {[f.error_type for f in failures]}")

    return ValidationResult(failures=failures)


# =============================================================================
# Serialization
# =============================================================================


def _should_emit_interval(interval: int, legacy_interval_omission: bool) -> bool:
    if legacy_interval_omission:
        # Legacy clients omitted INTERVAL for every value above 1
        return interval <= 1
    return interval != 1


def _segment(key: RuleKey, values: list[str]) -> Optional[str]:
    if not values:
        return None
    return f"{key.value}{KEY_VALUE_SEPARATOR}{LIST_SEPARATOR.join(values)}"


def serialize(rule: RecurrenceRule, *, legacy_interval_omission: Optional[bool] = None) -> str:
    """
    Generate the RRULE string for a rule.

    Validates first; nothing is returned for an invalid rule. Parts are
    emitted in RuleKey order, with minutes and hours ascending and days
    Sunday first. Empty lists and an unset WKST are omitted.

    Args:
        rule: Rule to serialize
        legacy_interval_omission: Omit INTERVAL whenever it exceeds 1 instead
            of only when it is 1. Defaults to Settings.legacy_interval_omission.

    Returns:
        RRULE string (e.g., 'FREQ=WEEKLY;BYDAY=MO,WE,FR')

    Raises:
        FieldValidationError: If exactly one field is invalid
        AggregateValidationError: If several fields are invalid
    """
    validate(rule).raise_for_errors()

    if legacy_interval_omission is None:
        legacy_interval_omission = get_settings().legacy_interval_omission

    interval_values = []
    if _should_emit_interval(rule.interval, legacy_interval_omission):
        interval_values = [str(rule.interval)]

    segments = [
        _segment(RuleKey.FREQUENCY, [rule.frequency.value]),
        _segment(RuleKey.INTERVAL, interval_values),
        _segment(RuleKey.BY_MINUTE, [str(m) for m in sorted(rule.by_minute)]),
        _segment(RuleKey.BY_HOUR, [str(h) for h in sorted(rule.by_hour)]),
        _segment(RuleKey.BY_DAY, [d.value for d in sort_days(rule.by_day)]),
        _segment(RuleKey.WKST, [rule.wkst.value] if rule.wkst else []),
    ]

    return SEGMENT_SEPARATOR.join(s for s in segments if s is not None)


def describe_rule(rule: RecurrenceRule) -> str:
    """
    Render every field on its own line, in RuleKey order.

    Args:
        rule: Rule to describe (need not be valid)

    Returns:
        Multi-line debug description
    """
    values = rule.to_dict()
    field_names = {
        RuleKey.FREQUENCY: "frequency",
        RuleKey.INTERVAL: "interval",
        RuleKey.BY_MINUTE: "by_minute",
        RuleKey.BY_HOUR: "by_hour",
        RuleKey.BY_DAY: "by_day",
        RuleKey.WKST: "wkst",
    }
    lines = [f"\t{key.value} = {values[name]}" for key, name in field_names.items()]
    return "RecurrenceRule:\n" + "\n".join(lines)
