"""
rrulekit API module.

Provides FastAPI HTTP endpoints for parsing, validating and editing RRULEs.
"""

from rrulekit.api.main import app, run_server

__all__ = ["app", "run_server"]
