"""
ASGI entry point for the rrulekit API.

Re-exports the FastAPI app from rrulekit/api/main.py (e.g., `uvicorn rrulekit.app:app`).
"""

from rrulekit.api.main import app

__all__ = ["app"]
