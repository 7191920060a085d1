"""
Request tracking middleware.

Every request gets a short ID that is logged, echoed in the X-Request-ID
header and attached to error bodies so a client report can be matched to
the server log.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"

_current_request_id: ContextVar[str] = ContextVar("request_id", default="")

logger = logging.getLogger(__name__)


def get_request_id() -> str | None:
    """ID of the request being handled, or None outside a request."""
    return _current_request_id.get() or None


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID and logs method, path, status and duration."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = new_request_id()
        _current_request_id.set(request_id)
        started = time.perf_counter()

        logger.info(f"[{request_id}] {request.method} {request.url.path}")

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} failed "
                f"after {_elapsed_ms(started):.1f}ms",
                exc_info=True,
            )
            raise

        logger.info(
            f"[{request_id}] {response.status_code} in {_elapsed_ms(started):.1f}ms",
            extra={"request_id": request_id, "status_code": response.status_code},
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000
