"""
Response builder utilities for turning rules and rule errors into API responses.
"""

from typing import Any

from rrulekit.api.models import (
    ErrorDetail,
    ErrorResponse,
    RuleModel,
    SessionResponse,
    ValidateResponse,
)
from rrulekit.services.editor import RuleEditor
from rrulekit.services.exceptions import (
    AggregateValidationError,
    FieldValidationError,
    RecurrenceRuleError,
)
from rrulekit.services.recurrence import ValidationResult, serialize


def build_error_details(failures: list[FieldValidationError]) -> list[ErrorDetail]:
    """Convert field failures to numbered ErrorDetail entries."""
    return [
        ErrorDetail(
            error_type=failure.error_type,
            field=failure.key.value,
            position=position,
            message=failure.message,
        )
        for position, failure in enumerate(failures, start=1)
    ]


def build_rule_error_response(
    error: RecurrenceRuleError,
    request_id: str | None = None,
) -> ErrorResponse:
    """
    Build the error body for a recurrence rule error.

    Aggregates list every failure; a single field failure is listed alone.
    """
    errors = None
    if isinstance(error, AggregateValidationError):
        errors = build_error_details(error.failures)
    elif isinstance(error, FieldValidationError):
        errors = build_error_details([error])

    return ErrorResponse(
        error_type=error.error_type,
        message=error.message,
        errors=errors,
        request_id=request_id,
    )


def build_validate_response(result: ValidationResult) -> ValidateResponse:
    return ValidateResponse(
        valid=result.is_valid,
        errors=build_error_details(result.failures),
    )


def build_session_response(session_id: str, editor: RuleEditor) -> SessionResponse:
    """
    Build the session view: structured rule plus its string form when valid.
    """
    result = editor.validation()
    rrule = serialize(editor.rule) if result.is_valid else None

    return SessionResponse(
        session_id=session_id,
        rule=RuleModel.from_rule(editor.rule),
        rrule=rrule,
        valid=result.is_valid,
        errors=build_error_details(result.failures),
    )


def build_error_response(
    error_type: str,
    message: str,
    request_id: str | None = None,
) -> dict[str, Any]:
    """Build the error body for non-rule failures (HTTP errors, 500s)."""
    return ErrorResponse(
        error_type=error_type,
        message=message,
        request_id=request_id,
    ).model_dump(exclude_none=True)
