"""
Pydantic request and response models for the rrulekit API.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from rrulekit.config import get_settings
from rrulekit.models.recurrence_rule import Day, Frequency, RecurrenceRule, sort_days


# =============================================================================
# Shared Models
# =============================================================================


class RuleModel(BaseModel):
    """
    Structured recurrence rule as exchanged over the API.

    Out-of-range minutes, hours and intervals are accepted here so that
    /rrule/validate can report them; serialization rejects them.
    """

    frequency: Optional[Frequency] = Field(
        None,
        description="DAILY or WEEKLY (null means unset)",
        examples=["WEEKLY"],
    )
    interval: int = Field(default=1, description="Units of frequency between occurrences")
    by_minute: list[int] = Field(default_factory=list, description="Minutes of the hour [0,59]")
    by_hour: list[int] = Field(default_factory=list, description="Hours of the day [0,23]")
    by_day: list[Day] = Field(default_factory=list, description="Day tokens (SU..SA)")
    wkst: Optional[Day] = Field(None, description="Week start day token")

    @classmethod
    def from_rule(cls, rule: RecurrenceRule) -> "RuleModel":
        return cls(
            frequency=rule.frequency,
            interval=rule.interval,
            by_minute=sorted(rule.by_minute),
            by_hour=sorted(rule.by_hour),
            by_day=sort_days(rule.by_day),
            wkst=rule.wkst,
        )

    def to_rule(self) -> RecurrenceRule:
        return RecurrenceRule(
            frequency=self.frequency,
            interval=self.interval,
            by_minute=set(self.by_minute),
            by_hour=set(self.by_hour),
            by_day=set(self.by_day),
            wkst=self.wkst,
        )


# Longest accepted add_times entry ('HH:MM' with room for signs or padding)
MAX_TIME_LENGTH = 16


def _check_rrule_length(v: str) -> str:
    max_length = get_settings().max_rrule_length
    if len(v) > max_length:
        raise ValueError(f"RRULE string exceeds {max_length} characters")
    return v


# =============================================================================
# Request Models
# =============================================================================


class ParseRequest(BaseModel):
    """Request to parse an RRULE string."""

    rrule: str = Field(
        ...,
        description="RRULE string",
        examples=["FREQ=DAILY;BYMINUTE=15,30,45;BYHOUR=1,2"],
    )

    @field_validator("rrule")
    @classmethod
    def validate_length(cls, v: str) -> str:
        return _check_rrule_length(v)


class RuleRequest(BaseModel):
    """Request carrying a structured rule (validate / serialize)."""

    rule: RuleModel


class CreateSessionRequest(BaseModel):
    """Request to start an editing session, optionally from an RRULE string."""

    rrule: Optional[str] = Field(None, description="Initial RRULE string")

    @field_validator("rrule")
    @classmethod
    def validate_length(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return _check_rrule_length(v)


class UpdateSessionRequest(BaseModel):
    """
    Field edits applied to an editing session.

    Edits apply in a fixed order (see PATCH /sessions/{session_id});
    omitted fields are untouched.
    """

    model_config = ConfigDict(extra="forbid")

    frequency: Optional[Frequency] = None
    interval: Optional[int] = None
    interval_index: Optional[int] = Field(None, ge=0, description="0-based picker index")
    add_times: list[str] = Field(default_factory=list, examples=[["8:00"]])
    clear_times: bool = False
    toggle_days: list[Day] = Field(default_factory=list)
    days: Optional[list[Day]] = None
    wkst: Optional[Day] = None
    clear_wkst: bool = False

    @field_validator("add_times")
    @classmethod
    def validate_time_lengths(cls, v: list[str]) -> list[str]:
        for time in v:
            if len(time) > MAX_TIME_LENGTH:
                raise ValueError(f"add_times entry exceeds {MAX_TIME_LENGTH} characters")
        return v


# =============================================================================
# Response Models
# =============================================================================


class ErrorDetail(BaseModel):
    """One field-level failure."""

    error_type: str
    field: Optional[str] = None
    position: Optional[int] = Field(None, description="1-based position for display")
    message: str


class ErrorResponse(BaseModel):
    """Error response body."""

    error_type: str
    message: str
    errors: Optional[list[ErrorDetail]] = None
    request_id: Optional[str] = Field(None, description="Matches the X-Request-ID header")


class ParseResponse(BaseModel):
    rule: RuleModel


class ValidateResponse(BaseModel):
    """Validation outcome; errors are empty when valid."""

    valid: bool
    errors: list[ErrorDetail] = Field(default_factory=list)


class SerializeResponse(BaseModel):
    rrule: str


class SessionResponse(BaseModel):
    """Current state of an editing session."""

    session_id: str
    rule: RuleModel
    rrule: Optional[str] = Field(None, description="Serialized rule, null while invalid")
    valid: bool
    errors: list[ErrorDetail] = Field(default_factory=list)


class IntervalChoiceModel(BaseModel):
    value: int
    label: str


class IntervalChoicesResponse(BaseModel):
    frequency: Frequency
    choices: list[IntervalChoiceModel]


class DayModel(BaseModel):
    """A weekday token with its display name."""

    token: Day
    name: str
    position: int = Field(..., description="0=Sunday ... 6=Saturday")


class DaysResponse(BaseModel):
    days: list[DayModel]


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["healthy", "unhealthy"]
    version: str
    active_sessions: int
