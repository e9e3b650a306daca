"""Unit tests for database dependency injection."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

import infrastructure.database.dependencies as deps


@pytest.fixture(autouse=True)
def reset_engine():
    """Reset the module-level engine between tests."""
    deps._engine = None
    deps._sessionmaker = None
    yield
    deps._engine = None
    deps._sessionmaker = None


class TestGetEngine:
    """Tests for the lazily created engine singleton."""

    def test_creates_engine_once(self):
        engine = MagicMock()
        with patch.object(
            deps, "create_database_engine", return_value=engine
        ) as create:
            assert deps.get_engine() is engine
            assert deps.get_engine() is engine

        create.assert_called_once()
        assert deps._sessionmaker is not None


class TestCloseDatabaseConnections:
    """Tests for shutdown cleanup."""

    @pytest.mark.asyncio
    async def test_disposes_engine_and_resets(self):
        engine = MagicMock()
        engine.dispose = AsyncMock()
        deps._engine = engine
        deps._sessionmaker = MagicMock()

        await deps.close_database_connections()

        engine.dispose.assert_awaited_once()
        assert deps._engine is None
        assert deps._sessionmaker is None

    @pytest.mark.asyncio
    async def test_noop_when_engine_never_created(self):
        await deps.close_database_connections()

        assert deps._engine is None
