"""
Pytest configuration and fixtures.
"""
import logging

import pytest

from taskloop.core.config import get_settings
from taskloop.workers import CancellationToken

WORKER_LOGGER_NAME = "taskloop.tests.worker"


@pytest.fixture
def cancellation() -> CancellationToken:
    return CancellationToken()


@pytest.fixture
def worker_logger(caplog) -> logging.Logger:
    """Logger injected into workers under test; records land in caplog."""
    caplog.set_level(logging.DEBUG, logger=WORKER_LOGGER_NAME)
    return logging.getLogger(WORKER_LOGGER_NAME)


@pytest.fixture(autouse=True)
def fresh_settings():
    """Settings are cached; drop the cache around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
