"""Unit tests for database dependency injection."""

from unittest.mock import patch

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from infrastructure.database import dependencies
from infrastructure.database.dependencies import (
    close_database_connections,
    get_engine,
    get_sessionmaker,
)


@pytest_asyncio.fixture(autouse=True)
async def reset_engine():
    """Dispose the module-level engine between tests."""
    yield
    await close_database_connections()


@pytest.mark.asyncio
async def test_get_engine():
    """get_engine returns an asyncpg engine."""
    engine = get_engine()

    assert isinstance(engine, AsyncEngine)
    assert engine.url.drivername == "postgresql+asyncpg"


@pytest.mark.asyncio
async def test_engine_is_singleton():
    """The engine is created once and reused."""
    with patch.object(dependencies, "_probe") as mock_probe:
        first = get_engine()
        second = get_engine()

    assert first is second
    mock_probe.engine_created.assert_called_once()


@pytest.mark.asyncio
async def test_get_sessionmaker_is_bound_to_engine():
    """The session maker belongs to the shared engine."""
    maker = get_sessionmaker()

    assert isinstance(maker, async_sessionmaker)
    assert maker.kw["bind"] is get_engine()


@pytest.mark.asyncio
async def test_close_database_connections():
    """Closing disposes the engine; the next call creates a new one."""
    engine = get_engine()

    await close_database_connections()

    assert get_engine() is not engine


@pytest.mark.asyncio
async def test_close_without_engine_is_noop():
    """Closing before first use does nothing."""
    await close_database_connections()
    await close_database_connections()
