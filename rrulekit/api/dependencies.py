"""
FastAPI dependency injection providers.

Provides the in-memory editing session store.
"""

import logging
import uuid
from typing import Optional

from fastapi import Depends, HTTPException

from rrulekit.config import Settings, get_settings
from rrulekit.services.editor import RuleEditor

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Editing sessions keyed by session ID.

    Process-local; each session has a single owner at a time.
    """

    def __init__(self, max_sessions: int):
        self.max_sessions = max_sessions
        self._sessions: dict[str, RuleEditor] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self, editor: RuleEditor) -> str:
        """
        Register an editor and return its new session ID.

        Raises:
            HTTPException: 503 if the store is full
        """
        if len(self._sessions) >= self.max_sessions:
            logger.warning(f"Session limit reached ({self.max_sessions})")
            raise HTTPException(
                status_code=503,
                detail="Too many active editing sessions",
            )
        session_id = uuid.uuid4().hex
        self._sessions[session_id] = editor
        logger.info(f"Created editing session {session_id}")
        return session_id

    def get(self, session_id: str) -> RuleEditor:
        """
        Raises:
            HTTPException: 404 if the session does not exist
        """
        editor = self._sessions.get(session_id)
        if editor is None:
            raise HTTPException(status_code=404, detail=f"Session {session_id} not found")
        return editor

    def delete(self, session_id: str) -> None:
        self.get(session_id)
        del self._sessions[session_id]
        logger.info(f"Deleted editing session {session_id}")


# Global session store (initialized at startup)
_session_store: Optional[SessionStore] = None


def init_session_store(settings: Optional[Settings] = None) -> SessionStore:
    """Initialize the session store at application startup."""
    global _session_store
    settings = settings or get_settings()
    _session_store = SessionStore(max_sessions=settings.max_sessions)
    logger.info("Session store initialized")
    return _session_store


def get_session_store() -> SessionStore:
    """
    Dependency injection for the session store.

    Raises:
        HTTPException: If the store was not initialized
    """
    if _session_store is None:
        logger.error("Session store not initialized")
        raise HTTPException(
            status_code=503,
            detail="Service temporarily unavailable - session store not initialized",
        )
    return _session_store


def get_editor(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> RuleEditor:
    """Resolve the editor for a path session_id."""
    return store.get(session_id)
