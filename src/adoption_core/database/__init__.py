"""
Database connection, session management, record store and query utilities.

This module provides async SQLAlchemy engine configuration, the session
manager, the record store used by the lifecycle services, the pet filter
query builder and migration helpers.
"""

from .connection import (
    DatabaseConfig,
    check_connection,
    close_engine,
    create_engine,
    get_database_url,
    wait_for_database,
)
from .migrations import MigrationManager
from .query_builder import PetFilterQuery, build_pet_filter_query, escape_like
from .session import SessionManager
from .store import RecordStore, TransactionalRecordStore

__all__ = [
    # Connection utilities
    "DatabaseConfig",
    "create_engine",
    "get_database_url",
    "check_connection",
    "close_engine",
    "wait_for_database",
    # Session management
    "SessionManager",
    # Record store
    "RecordStore",
    "TransactionalRecordStore",
    # Query composition
    "PetFilterQuery",
    "build_pet_filter_query",
    "escape_like",
    # Migration utilities
    "MigrationManager",
]
