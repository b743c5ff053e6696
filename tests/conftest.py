"""Pytest fixtures for skill-belief tests."""

import pytest

from src.config.settings import get_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Ensure environment overrides are re-read by each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
