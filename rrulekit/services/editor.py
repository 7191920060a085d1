"""
Rule editing session.

Holds a single RecurrenceRule and applies field-by-field changes coming from
a form or API client, notifying observers after every change.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Union

from rrulekit.models.recurrence_rule import Day, Frequency, RecurrenceRule
from rrulekit.services.exceptions import allowed_days_hint
from rrulekit.services.recurrence import (
    ValidationResult,
    describe_rule,
    parse,
    parse_integer,
    serialize,
    validate,
)

logger = logging.getLogger(__name__)

RuleObserver = Callable[[RecurrenceRule], None]

# Upper bounds (inclusive) offered for "every N days/weeks"
MAX_INTERVAL_CHOICES = {
    Frequency.DAILY: 84,
    Frequency.WEEKLY: 12,
}

_INTERVAL_UNITS = {
    Frequency.DAILY: "day",
    Frequency.WEEKLY: "week",
}


@dataclass
class IntervalChoice:
    """A selectable interval value with its display label."""

    value: int
    label: str


def interval_choices(frequency: Union[Frequency, str]) -> list[IntervalChoice]:
    """
    List the interval values offered for a frequency.

    Args:
        frequency: Frequency or its token ('DAILY', 'WEEKLY')

    Returns:
        Choices from 1 upwards, labelled '1 day', '2 days', ...

    Raises:
        ValueError: If frequency is not supported
    """
    frequency = _coerce_frequency(frequency)
    unit = _INTERVAL_UNITS[frequency]
    return [
        IntervalChoice(value=n, label=f"{n} {unit}{'s' if n > 1 else ''}")
        for n in range(1, MAX_INTERVAL_CHOICES[frequency] + 1)
    ]


def _coerce_frequency(value: Union[Frequency, str]) -> Frequency:
    if isinstance(value, Frequency):
        return value
    frequency = Frequency.from_token(value)
    if frequency is None:
        raise ValueError(
            f"Unknown frequency {value!r} - MUST be one of {[f.value for f in Frequency]}"
        )
    return frequency


def _coerce_day(value: Union[Day, str]) -> Day:
    if isinstance(value, Day):
        return value
    day = Day.from_token(value)
    if day is None:
        raise ValueError(allowed_days_hint(value))
    return day


class RuleEditor:
    """
    Editing session for a single recurrence rule.

    The rule is permissive while being edited; call validation() to see
    what would block to_string().
    """

    def __init__(
        self,
        rule: Optional[RecurrenceRule] = None,
        observers: Optional[Iterable[RuleObserver]] = None,
    ):
        self.rule = rule if rule is not None else RecurrenceRule(frequency=Frequency.DAILY)
        self._observers: list[RuleObserver] = list(observers or [])

    def subscribe(self, observer: RuleObserver) -> None:
        """Register a callable invoked with the rule after each change."""
        self._observers.append(observer)

    def unsubscribe(self, observer: RuleObserver) -> None:
        """Remove a previously registered observer."""
        self._observers.remove(observer)

    def _changed(self, description: str) -> None:
        logger.debug(f"Rule edited ({description})\n{describe_rule(self.rule)}")
        for observer in self._observers:
            observer(self.rule)

    # -------------------------------------------------------------------------
    # Field operations
    # -------------------------------------------------------------------------

    def set_frequency(self, frequency: Union[Frequency, str]) -> None:
        """Set frequency; interval resets to 1 when the frequency changes."""
        frequency = _coerce_frequency(frequency)
        if frequency != self.rule.frequency:
            self.rule.interval = 1
        self.rule.frequency = frequency
        self._changed(f"frequency={frequency.value}")

    def set_interval(self, interval: int) -> None:
        self.rule.interval = interval
        self._changed(f"interval={interval}")

    def set_interval_index(self, index: int) -> None:
        """Set interval from a 0-based picker index (index 0 means every 1)."""
        self.set_interval(index + 1)

    def add_time(self, time: str) -> bool:
        """
        Add a time of day in 'H:MM' form to BYHOUR and BYMINUTE.

        Values are not range-checked here; validation reports them.

        Args:
            time: Time string (e.g., '8:00', '13:30')

        Returns:
            True if the time was parsed and added, False if ignored
        """
        parts = time.split(":")
        hour = parse_integer(parts[0])
        minute = parse_integer(parts[-1])
        if len(parts) < 2 or hour is None or minute is None:
            logger.debug(f"Ignoring unparseable time {time!r}")
            return False

        self.rule.by_hour.add(hour)
        self.rule.by_minute.add(minute)
        self._changed(f"time={time}")
        return True

    def clear_times(self) -> None:
        self.rule.by_hour.clear()
        self.rule.by_minute.clear()
        self._changed("times cleared")

    def toggle_day(self, day: Union[Day, str]) -> bool:
        """
        Add a day to BYDAY, or remove it if already present.

        Returns:
            True if the day is selected after the toggle
        """
        day = _coerce_day(day)
        if day in self.rule.by_day:
            self.rule.by_day.discard(day)
        else:
            self.rule.by_day.add(day)
        self._changed(f"toggle {day.value}")
        return day in self.rule.by_day

    def set_days(self, days: Iterable[Union[Day, str]]) -> None:
        self.rule.by_day = {_coerce_day(day) for day in days}
        self._changed("days replaced")

    def set_wkst(self, day: Optional[Union[Day, str]]) -> None:
        self.rule.wkst = _coerce_day(day) if day is not None else None
        self._changed(f"wkst={self.rule.wkst.value if self.rule.wkst else None}")

    def load(self, text: str) -> None:
        """Replace the rule with the parsed RRULE string."""
        self.rule = parse(text)
        self._changed("loaded")

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    def validation(self) -> ValidationResult:
        return validate(self.rule)

    def to_string(self) -> str:
        """Serialize the current rule (raises if it does not validate)."""
        return serialize(self.rule)

    def snapshot(self) -> RecurrenceRule:
        """Independent copy of the current rule."""
        return self.rule.copy()
