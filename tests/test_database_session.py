"""
Tests for database session management.
"""

from unittest.mock import AsyncMock, Mock, patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from adoption_core.database.session import SessionManager
from adoption_core.models.base import Base


class TestSessionManager:
    """Test cases for SessionManager class."""

    def test_session_manager_initialization(self):
        """Test SessionManager initialization."""
        mock_engine = Mock()
        manager = SessionManager(mock_engine)

        assert manager.engine == mock_engine
        assert manager.session_factory is not None
        assert manager.is_initialized is False

    def test_session_manager_with_custom_config(self):
        mock_engine = Mock()
        manager = SessionManager(mock_engine, {"expire_on_commit": True})

        assert manager.session_factory.kw["expire_on_commit"] is True

    @pytest.mark.asyncio
    async def test_get_session_rolls_back_on_error(self):
        """Errors raised inside the block roll back and close the session."""
        manager = SessionManager(Mock())
        mock_session = AsyncMock()

        with patch.object(manager, "create_session", return_value=mock_session):
            with pytest.raises(ValueError):
                async with manager.get_session():
                    raise ValueError("boom")

        mock_session.rollback.assert_awaited_once()
        mock_session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_health_check_skipped_when_recent(self):
        manager = SessionManager(Mock())
        manager._last_health_check = 10**12

        result = await manager.health_check()

        assert result["status"] == "skipped"

    @pytest.mark.asyncio
    async def test_health_check_operational_error(self):
        manager = SessionManager(Mock())

        with patch.object(manager, "get_session") as mock_get_session:
            mock_get_session.side_effect = OperationalError(
                "SELECT 1", {}, Exception("connection refused")
            )

            result = await manager.health_check(force=True)

        assert result["status"] == "unhealthy"
        assert result["checks"]["connection"]["error_type"] == "OperationalError"

    @pytest.mark.asyncio
    async def test_health_check_failure(self):
        """Test health check failure."""
        manager = SessionManager(Mock())

        with patch.object(manager, "get_session") as mock_get_session:
            mock_get_session.side_effect = Exception("Connection failed")

            result = await manager.health_check(force=True)

        assert result["status"] == "unhealthy"
        assert result["checks"]["general"]["status"] == "fail"

    @pytest.mark.asyncio
    async def test_initialize_database_unhealthy(self):
        manager = SessionManager(Mock())

        with patch.object(
            manager,
            "health_check",
            new_callable=AsyncMock,
            return_value={"status": "unhealthy"},
        ):
            assert await manager.initialize_database(Base.metadata) is False

        assert manager.is_initialized is False


class TestSessionManagerWithDatabase:
    """Session behaviour against a real SQLite database."""

    @pytest.mark.asyncio
    async def test_health_check_success(self, session_manager):
        result = await session_manager.health_check(force=True)

        assert result["status"] == "healthy"
        assert result["checks"]["basic_query"]["status"] == "pass"
        assert result["checks"]["transaction"]["status"] == "pass"

    @pytest.mark.asyncio
    async def test_initialize_database_creates_tables(self, session_manager):
        assert session_manager.is_initialized is True

        async with session_manager.get_session() as session:
            result = await session.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'table'")
            )
            tables = {row[0] for row in result}

        assert {
            "pets",
            "pet_status_change_log",
            "adoption_bookings",
            "categories",
            "users",
            "vendors",
        } <= tables

    @pytest.mark.asyncio
    async def test_get_transaction_commits(self, session_manager):
        async with session_manager.get_transaction() as session:
            await session.execute(
                text("INSERT INTO categories (category_name) VALUES ('Birds')")
            )

        async with session_manager.get_session() as session:
            count = await session.scalar(text("SELECT COUNT(*) FROM categories"))

        assert count == 1

    @pytest.mark.asyncio
    async def test_get_transaction_rolls_back(self, session_manager):
        with pytest.raises(RuntimeError):
            async with session_manager.get_transaction() as session:
                await session.execute(
                    text("INSERT INTO categories (category_name) VALUES ('Birds')")
                )
                raise RuntimeError("abort")

        async with session_manager.get_session() as session:
            count = await session.scalar(text("SELECT COUNT(*) FROM categories"))

        assert count == 0

    @pytest.mark.asyncio
    async def test_cleanup_database_drops_tables(self, session_manager):
        assert await session_manager.cleanup_database(Base.metadata, drop_all=True)

        async with session_manager.get_session() as session:
            result = await session.execute(
                text("SELECT name FROM sqlite_master WHERE type = 'table'")
            )

        assert result.all() == []
