"""
Database session management utilities for the adoption-core package.

This module provides the session manager that owns the async session
factory for one engine. It is created at startup and passed explicitly to
the record store; there is no process-wide connection state.
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, Optional

from sqlalchemy import MetaData, text
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class SessionManager:
    """Manages database sessions and provides transaction utilities."""

    def __init__(
        self, engine: AsyncEngine, session_config: Optional[Dict[str, Any]] = None
    ):
        """
        Initialize session manager with database engine.

        Args:
            engine: SQLAlchemy async engine
            session_config: Optional session configuration overrides
        """
        self.engine = engine
        self._is_initialized = False
        self._health_check_interval = 30.0  # seconds
        self._last_health_check = 0.0

        default_config = {
            "expire_on_commit": False,
            "autoflush": True,
        }

        if session_config:
            default_config.update(session_config)

        self.session_factory = async_sessionmaker(
            bind=engine,
            class_=AsyncSession,
            autoflush=default_config.get("autoflush", True),
            expire_on_commit=default_config.get("expire_on_commit", False),
        )

    async def create_session(self) -> AsyncSession:
        """Create a new database session."""
        return self.session_factory()

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database sessions with automatic cleanup.

        Yields:
            Database session

        Example:
            async with session_manager.get_session() as session:
                result = await session.execute(select(Pet))
        """
        session = await self.create_session()
        try:
            yield session
        except Exception as e:
            await session.rollback()
            logger.error(f"Session error, rolling back: {e}")
            raise
        finally:
            await session.close()

    @asynccontextmanager
    async def get_transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Context manager for database transactions with automatic commit/rollback.

        Yields:
            Database session within a transaction

        Example:
            async with session_manager.get_transaction() as session:
                await session.execute(insert(Pet).values(name="Rex"))
                # Committed when the block exits without an exception
        """
        async with self.get_session() as session:
            async with session.begin():
                try:
                    yield session
                except Exception as e:
                    logger.error(f"Transaction error, rolling back: {e}")
                    raise

    async def health_check(self, force: bool = False) -> Dict[str, Any]:
        """
        Health check for database sessions and connections.

        Args:
            force: Force health check even if recently performed

        Returns:
            Dictionary with health check results
        """
        current_time = time.time()

        if (
            not force
            and (current_time - self._last_health_check) < self._health_check_interval
        ):
            return {"status": "skipped", "reason": "recently_checked"}

        health_status: Dict[str, Any] = {
            "status": "healthy",
            "timestamp": current_time,
            "checks": {},
        }

        try:
            start_time = time.time()
            async with self.get_session() as session:
                await session.execute(text("SELECT 1"))
            query_time = time.time() - start_time

            health_status["checks"]["basic_query"] = {
                "status": "pass",
                "response_time": round(query_time * 1000, 2),  # ms
            }

            start_time = time.time()
            async with self.get_transaction() as session:
                await session.execute(text("SELECT 1"))
            transaction_time = time.time() - start_time

            health_status["checks"]["transaction"] = {
                "status": "pass",
                "response_time": round(transaction_time * 1000, 2),  # ms
            }

            self._last_health_check = current_time

        except OperationalError as e:
            health_status["status"] = "unhealthy"
            health_status["checks"]["connection"] = {
                "status": "fail",
                "error": str(e),
                "error_type": "OperationalError",
            }
            logger.error(f"Database operational error during health check: {e}")

        except SQLAlchemyError as e:
            health_status["status"] = "unhealthy"
            health_status["checks"]["database"] = {
                "status": "fail",
                "error": str(e),
                "error_type": "SQLAlchemyError",
            }
            logger.error(f"Database error during health check: {e}")

        except Exception as e:
            health_status["status"] = "unhealthy"
            health_status["checks"]["general"] = {
                "status": "fail",
                "error": str(e),
                "error_type": type(e).__name__,
            }
            logger.error(f"Unexpected error during health check: {e}")

        return health_status

    async def initialize_database(self, metadata: Optional[MetaData] = None) -> bool:
        """
        Initialize database schema.

        Args:
            metadata: SQLAlchemy metadata object containing table definitions

        Returns:
            True if initialization successful, False otherwise
        """
        try:
            logger.info("Starting database initialization...")

            health = await self.health_check(force=True)
            if health["status"] != "healthy":
                logger.error("Database health check failed during initialization")
                return False

            if metadata is not None:
                async with self.engine.begin() as conn:
                    await conn.run_sync(metadata.create_all)
                logger.info("Database tables created successfully")

            self._is_initialized = True
            return True

        except Exception as e:
            logger.error(f"Database initialization failed: {e}")
            return False

    async def cleanup_database(
        self, metadata: Optional[MetaData] = None, drop_all: bool = False
    ) -> bool:
        """
        Clean up database resources and optionally drop schema.

        Args:
            metadata: SQLAlchemy metadata object containing table definitions
            drop_all: Whether to drop all tables (use with caution)

        Returns:
            True if cleanup successful, False otherwise
        """
        try:
            logger.info("Starting database cleanup...")

            if drop_all and metadata is not None:
                async with self.engine.begin() as conn:
                    await conn.run_sync(metadata.drop_all)
                logger.warning("All database tables dropped")

            await self.close_all_sessions()

            logger.info("Database cleanup completed successfully")
            return True

        except Exception as e:
            logger.error(f"Database cleanup failed: {e}")
            return False

    async def close_all_sessions(self) -> None:
        """Close all active connections by disposing of the engine."""
        try:
            await self.engine.dispose()
            logger.info("All database sessions and connections closed")
        except Exception as e:
            logger.error(f"Error closing database sessions: {e}")

    @property
    def is_initialized(self) -> bool:
        """Check if the database has been initialized."""
        return self._is_initialized
