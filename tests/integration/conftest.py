"""
Integration test fixtures for rrulekit.

Provides an API client with a freshly initialized session store.
"""

import pytest
from fastapi.testclient import TestClient

from rrulekit.api.main import app


@pytest.fixture
def integration_api_client():
    """
    Create an API client with application lifespan running.

    Yields:
        TestClient bound to the rrulekit app
    """
    import rrulekit.api.dependencies as deps
    deps._session_store = None

    with TestClient(app) as client:
        yield client

    deps._session_store = None
