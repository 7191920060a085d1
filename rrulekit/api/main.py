"""
FastAPI application for rrulekit.

Provides:
- Stateless RRULE endpoints (parse, validate, serialize)
- Editing session endpoints for form-style, field-by-field rule changes
- Health endpoint
"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.responses import JSONResponse

from rrulekit.api.dependencies import (
    SessionStore,
    get_editor,
    get_session_store,
    init_session_store,
)
from rrulekit.api.middleware import RequestLoggingMiddleware, get_request_id
from rrulekit.api.models import (
    CreateSessionRequest,
    DayModel,
    DaysResponse,
    ErrorResponse,
    HealthResponse,
    IntervalChoiceModel,
    IntervalChoicesResponse,
    ParseRequest,
    ParseResponse,
    RuleModel,
    RuleRequest,
    SerializeResponse,
    SessionResponse,
    UpdateSessionRequest,
    ValidateResponse,
)
from rrulekit.api.response_builder import (
    build_error_response,
    build_rule_error_response,
    build_session_response,
    build_validate_response,
)
from rrulekit.config import get_settings
from rrulekit.models.recurrence_rule import Day, Frequency
from rrulekit.services.editor import RuleEditor, interval_choices
from rrulekit.services.exceptions import RecurrenceRuleError
from rrulekit.services.recurrence import parse, serialize, validate

logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


# =============================================================================
# Application Lifecycle
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    settings = get_settings()
    settings.configure_logging()
    settings.validate_production_config()

    logger.info("Starting rrulekit API")
    init_session_store(settings)
    logger.info("rrulekit API started")

    yield

    logger.info("Shutting down rrulekit API")


# =============================================================================
# FastAPI Application
# =============================================================================


app = FastAPI(
    title="rrulekit API",
    description="""
# rrulekit API

Parse, validate and generate RFC 5545 recurrence rules
(FREQ, INTERVAL, BYMINUTE, BYHOUR, BYDAY, WKST).

## Stateless
- **POST /rrule/parse** - RRULE string to structured rule
- **POST /rrule/validate** - List every invalid field
- **POST /rrule/serialize** - Structured rule to RRULE string
- **GET /days**, **GET /intervals/{frequency}** - Form choices

## Editing sessions
- **POST /sessions** - Start editing (optionally from an RRULE string)
- **PATCH /sessions/{session_id}** - Apply field edits
- **GET /sessions/{session_id}** - Current rule and RRULE string

## Error Handling

- **404** - Session not found
- **422** - Malformed or invalid rule (`error_type` names the failure)
- **503** - Session limit reached
    """,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(RequestLoggingMiddleware)


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(RecurrenceRuleError)
async def rule_exception_handler(request, exc: RecurrenceRuleError):
    """Handle parse and validation errors."""
    request_id = get_request_id()
    logger.info(f"[{request_id}] Rejected rule ({exc.error_type}): {exc.message}")
    return JSONResponse(
        status_code=422,
        content=build_rule_error_response(exc, request_id).model_dump(exclude_none=True),
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc: HTTPException):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=build_error_response("http_error", str(exc.detail), get_request_id()),
    )


@app.exception_handler(Exception)
async def general_exception_handler(request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content=build_error_response(
            "internal_error",
            "An unexpected error occurred",
            get_request_id(),
        ),
    )


# =============================================================================
# Health
# =============================================================================


@app.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    tags=["System"],
)
async def health_check():
    try:
        active_sessions = len(get_session_store())
        status = "healthy"
    except HTTPException:
        active_sessions = 0
        status = "unhealthy"

    return HealthResponse(status=status, version=API_VERSION, active_sessions=active_sessions)


# =============================================================================
# Stateless RRULE Endpoints
# =============================================================================


@app.post(
    "/rrule/parse",
    response_model=ParseResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Parse an RRULE string",
    tags=["RRULE"],
)
async def parse_rrule(request: ParseRequest):
    """
    Parse an RRULE string into its structured form.

    Unknown day tokens and non-numeric list values are dropped rather than
    rejected; a missing FREQ is reported only when serializing.
    """
    rule = parse(request.rrule)
    return ParseResponse(rule=RuleModel.from_rule(rule))


@app.post(
    "/rrule/validate",
    response_model=ValidateResponse,
    summary="Validate a structured rule",
    tags=["RRULE"],
)
async def validate_rule(request: RuleRequest):
    """Report every invalid field; always 200."""
    return build_validate_response(validate(request.rule.to_rule()))


@app.post(
    "/rrule/serialize",
    response_model=SerializeResponse,
    responses={422: {"model": ErrorResponse}},
    summary="Generate the RRULE string for a structured rule",
    tags=["RRULE"],
)
async def serialize_rule(request: RuleRequest):
    return SerializeResponse(rrule=serialize(request.rule.to_rule()))


@app.get(
    "/intervals/{frequency}",
    response_model=IntervalChoicesResponse,
    summary="Interval choices offered for a frequency",
    tags=["RRULE"],
)
async def get_interval_choices(frequency: Frequency):
    return IntervalChoicesResponse(
        frequency=frequency,
        choices=[
            IntervalChoiceModel(value=c.value, label=c.label)
            for c in interval_choices(frequency)
        ],
    )


@app.get(
    "/days",
    response_model=DaysResponse,
    summary="Weekday tokens with display names",
    tags=["RRULE"],
)
async def get_days():
    """Days in serialization order (Sunday first)."""
    return DaysResponse(
        days=[DayModel(token=day, name=day.display_name, position=day.position) for day in Day]
    )


# =============================================================================
# Editing Session Endpoints
# =============================================================================


@app.post(
    "/sessions",
    response_model=SessionResponse,
    status_code=201,
    responses={422: {"model": ErrorResponse}, 503: {"model": ErrorResponse}},
    summary="Start an editing session",
    tags=["Sessions"],
)
async def create_session(
    request: CreateSessionRequest,
    store: SessionStore = Depends(get_session_store),
):
    editor = RuleEditor()
    if request.rrule is not None:
        editor.load(request.rrule)

    session_id = store.create(editor)
    return build_session_response(session_id, editor)


@app.get(
    "/sessions/{session_id}",
    response_model=SessionResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get the current state of an editing session",
    tags=["Sessions"],
)
async def get_session(session_id: str, editor: RuleEditor = Depends(get_editor)):
    return build_session_response(session_id, editor)


@app.patch(
    "/sessions/{session_id}",
    response_model=SessionResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Apply field edits to an editing session",
    tags=["Sessions"],
)
async def update_session(
    session_id: str,
    request: UpdateSessionRequest,
    editor: RuleEditor = Depends(get_editor),
):
    """
    Apply edits in a fixed order: frequency, interval, interval_index,
    clear_times, add_times, days, toggle_days, clear_wkst, wkst.

    The response reports validation errors instead of failing, so a form
    can keep editing an invalid rule.
    """
    if request.frequency is not None:
        editor.set_frequency(request.frequency)
    if request.interval is not None:
        editor.set_interval(request.interval)
    if request.interval_index is not None:
        editor.set_interval_index(request.interval_index)
    if request.clear_times:
        editor.clear_times()
    for time in request.add_times:
        editor.add_time(time)
    if request.days is not None:
        editor.set_days(request.days)
    for day in request.toggle_days:
        editor.toggle_day(day)
    if request.clear_wkst:
        editor.set_wkst(None)
    if request.wkst is not None:
        editor.set_wkst(request.wkst)

    return build_session_response(session_id, editor)


@app.delete(
    "/sessions/{session_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
    summary="End an editing session",
    tags=["Sessions"],
)
async def delete_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
):
    store.delete(session_id)
    return Response(status_code=204)


def run_server(host: str | None = None, port: int | None = None, reload: bool | None = None):
    """Run the API server with Uvicorn (defaults come from Settings)."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "rrulekit.api.main:app",
        host=host if host is not None else settings.api_host,
        port=port if port is not None else settings.api_port,
        reload=reload if reload is not None else settings.api_reload,
    )


if __name__ == "__main__":
    run_server()
