"""
Pytest configuration and fixtures for rrulekit tests.

Provides settings isolation and sample recurrence rules.
"""

import pytest

from rrulekit.config import get_settings
from rrulekit.models.recurrence_rule import Day, Frequency, RecurrenceRule


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test"
    )


@pytest.fixture(autouse=True)
def clear_settings_cache(monkeypatch):
    """
    Reset cached settings around each test.

    Tests that set environment variables then see a freshly loaded
    Settings instance, and do not leak it to other tests.
    """
    monkeypatch.delenv("LEGACY_INTERVAL_OMISSION", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def daily_rule() -> RecurrenceRule:
    """
    Daily rule at 1:15, 1:30, 1:45, 2:15, 2:30 and 2:45.

    Returns:
        RecurrenceRule: A valid daily rule
    """
    return RecurrenceRule(
        frequency=Frequency.DAILY,
        by_minute={15, 30, 45},
        by_hour={1, 2},
    )


@pytest.fixture
def weekly_rule() -> RecurrenceRule:
    """
    Every other week on Monday, Wednesday and Friday at 9:00, week starting Monday.

    Returns:
        RecurrenceRule: A valid weekly rule with every field set
    """
    return RecurrenceRule(
        frequency=Frequency.WEEKLY,
        interval=2,
        by_minute={0},
        by_hour={9},
        by_day={Day.MONDAY, Day.WEDNESDAY, Day.FRIDAY},
        wkst=Day.MONDAY,
    )
