# tests/conftest.py
"""Shared test setup for project."""

from collections.abc import Generator

import pytest

import buildbake.logs as mod_logs
from tests.utils import DEFAULT_TEST_LOG_LEVEL
from tests.utils.log_fixtures import direct_logger


# Re-exported so pytest can discover them.
__all__ = [
    "direct_logger",
]


# ----------------------------------------------------------------------
# Fixtures
# ----------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_logger_level() -> Generator[None, None, None]:
    """Reset the app logger level before and after each test.

    The app logger is a module-level singleton, and main() changes its
    level; resetting keeps tests from leaking into each other.
    """
    logger = mod_logs.get_app_logger()
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)
    yield
    logger.setLevel(DEFAULT_TEST_LOG_LEVEL)


@pytest.fixture(autouse=True)
def clean_log_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the caller's log-level and color env vars out of tests."""
    for var in ("LOG_LEVEL", "BUILDBAKE_LOG_LEVEL", "NO_COLOR", "FORCE_COLOR"):
        monkeypatch.delenv(var, raising=False)
