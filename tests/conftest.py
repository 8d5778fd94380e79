"""Shared pytest fixtures for all tests."""

from datetime import UTC, datetime

import pytest

from fingerprint_typing.classification.fingerprint import TimestampWindow, get_timestamp_window
from fingerprint_typing.core.config import get_settings
from fingerprint_typing.core.logging import configure_logging

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@pytest.fixture(autouse=True)
def fresh_state():
    """Isolate cached settings, the timestamp window and logging per test.

    Loggers are not cached so structlog.testing.capture_logs sees every event.
    """
    configure_logging(log_level="DEBUG", color=False, cache_logger_on_first_use=False)
    get_settings.cache_clear()
    get_timestamp_window.cache_clear()
    yield
    get_settings.cache_clear()
    get_timestamp_window.cache_clear()


@pytest.fixture
def window() -> TimestampWindow:
    """Twenty-year window around a fixed moment."""
    return TimestampWindow.around(NOW, 20)


@pytest.fixture
def seconds_ago():
    """Epoch seconds for a number of years before the fixed moment."""

    def _seconds_ago(years: int) -> int:
        return int(NOW.replace(year=NOW.year - years).timestamp())

    return _seconds_ago
