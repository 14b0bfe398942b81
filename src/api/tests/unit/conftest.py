"""Unit test fixtures with mocked dependencies."""

import pytest

from infrastructure.settings import (
    get_database_settings,
    get_settings,
    get_tenancy_settings,
)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Reload settings from the environment for every test."""
    get_settings.cache_clear()
    get_database_settings.cache_clear()
    get_tenancy_settings.cache_clear()
    yield
    get_settings.cache_clear()
    get_database_settings.cache_clear()
    get_tenancy_settings.cache_clear()
