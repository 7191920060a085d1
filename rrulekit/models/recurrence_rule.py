"""
Recurrence rule model.

Entities:
- RecurrenceRule: Structured form of an RFC 5545 RRULE (restricted subset)
- Frequency, Day, RuleKey: Token tables shared by parsing and serialization

The token values below are the exact strings defined in RFC 5545. Each table
is the single source of truth for both accepted input and emitted output.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class RuleKey(str, Enum):
    """Supported RRULE parts, in serialization order."""

    FREQUENCY = "FREQ"
    INTERVAL = "INTERVAL"
    BY_MINUTE = "BYMINUTE"
    BY_HOUR = "BYHOUR"
    BY_DAY = "BYDAY"
    WKST = "WKST"

    @classmethod
    def from_token(cls, token: str) -> Optional["RuleKey"]:
        """Look up a key by its exact RRULE token."""
        return _lookup(cls, token)


class Frequency(str, Enum):
    """Supported FREQ values."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"

    @classmethod
    def from_token(cls, token: str) -> Optional["Frequency"]:
        """Look up a frequency by its exact RRULE token."""
        return _lookup(cls, token)


class Day(str, Enum):
    """
    Weekday tokens used by BYDAY and WKST.

    Declaration order (Sunday first) is the canonical serialization order.
    """

    SUNDAY = "SU"
    MONDAY = "MO"
    TUESDAY = "TU"
    WEDNESDAY = "WE"
    THURSDAY = "TH"
    FRIDAY = "FR"
    SATURDAY = "SA"

    @classmethod
    def from_token(cls, token: str) -> Optional["Day"]:
        """Look up a day by its exact RRULE token."""
        return _lookup(cls, token)

    @property
    def display_name(self) -> str:
        """Human-readable name (e.g., 'Monday')."""
        return self.name.capitalize()

    @property
    def position(self) -> int:
        """Index in canonical order (0=Sunday, 6=Saturday)."""
        return list(Day).index(self)


def _lookup(enum_cls, token: str):
    # Case-sensitive: "daily" is not a valid FREQ token
    for member in enum_cls:
        if member.value == token:
            return member
    return None


@dataclass
class RecurrenceRule:
    """
    Mutable recurrence rule (FREQ, INTERVAL, BYMINUTE, BYHOUR, BYDAY, WKST).

    Acts as a permissive builder: fields accept any value and nothing is
    checked on assignment. Range checks happen in validate(), which
    serialize() runs before emitting a string.

    BYMINUTE and BYHOUR combine distributively, so
    FREQ=DAILY;BYMINUTE=15,30,45;BYHOUR=1,2 describes six times of day
    (1:15, 1:30, 1:45, 2:15, 2:30, 2:45).

    Attributes:
        frequency: Required by RFC 5545; None means unset (no default)
        interval: Units of frequency between occurrences (must be > 0)
        by_minute: Minutes of the hour, valid domain [0, 59]
        by_hour: Hours of the day, valid domain [0, 23]
        by_day: Weekdays the rule applies to
        wkst: Week start day; left unset rather than defaulting to Monday
    """

    frequency: Optional[Frequency] = None
    interval: int = 1
    by_minute: set[int] = field(default_factory=set)
    by_hour: set[int] = field(default_factory=set)
    by_day: set[Day] = field(default_factory=set)
    wkst: Optional[Day] = None

    @property
    def has_frequency(self) -> bool:
        """Check if frequency has been set."""
        return self.frequency is not None

    def copy(self) -> "RecurrenceRule":
        """Return an independent copy (sets are not shared)."""
        return RecurrenceRule(
            frequency=self.frequency,
            interval=self.interval,
            by_minute=set(self.by_minute),
            by_hour=set(self.by_hour),
            by_day=set(self.by_day),
            wkst=self.wkst,
        )

    def to_dict(self) -> dict:
        """
        Convert to a plain dictionary with canonical ordering.

        Returns:
            Dictionary of token values (sets rendered as sorted lists)
        """
        return {
            "frequency": self.frequency.value if self.frequency else None,
            "interval": self.interval,
            "by_minute": sorted(self.by_minute),
            "by_hour": sorted(self.by_hour),
            "by_day": [day.value for day in sort_days(self.by_day)],
            "wkst": self.wkst.value if self.wkst else None,
        }


def sort_days(days) -> list[Day]:
    """Sort days into canonical order (Sunday first)."""
    return sorted(days, key=lambda day: day.position)
