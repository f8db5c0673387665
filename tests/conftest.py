"""
Pytest configuration and fixtures for adoption-core tests.

This module provides common fixtures for all tests in the adoption-core
package: a fresh SQLite file database per test, the record store and
services built on it, and factory classes for test data.
"""

import uuid
from typing import Any, AsyncGenerator, Dict

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine

from adoption_core.database.connection import create_engine
from adoption_core.database.session import SessionManager
from adoption_core.database.store import RecordStore
from adoption_core.models import (
    AdoptionBooking,
    Category,
    Pet,
    PetStatusChangeLog,
    User,
    Vendor,
)
from adoption_core.models.base import Base
from adoption_core.services import (
    AccountService,
    AdoptionAPI,
    BookingService,
    CascadingDeletionCoordinator,
    CategoryService,
    CredentialGate,
    PetService,
    StatusTransitionCoordinator,
)


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """Create an engine over a SQLite file private to the test."""
    engine = create_engine(f"sqlite+aiosqlite:///{tmp_path / 'adoption_test.db'}")
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_manager(
    test_engine: AsyncEngine,
) -> AsyncGenerator[SessionManager, None]:
    """Create a session manager with the schema in place."""
    manager = SessionManager(test_engine)
    initialized = await manager.initialize_database(Base.metadata)
    assert initialized, "Test database schema could not be created"

    yield manager

    await manager.close_all_sessions()


@pytest.fixture
def store(session_manager: SessionManager) -> RecordStore:
    return RecordStore(session_manager)


@pytest.fixture
def pet_service(store: RecordStore) -> PetService:
    return PetService(store)


@pytest.fixture
def status_coordinator(store: RecordStore) -> StatusTransitionCoordinator:
    return StatusTransitionCoordinator(store)


@pytest.fixture
def transactional_coordinator(store: RecordStore) -> StatusTransitionCoordinator:
    return StatusTransitionCoordinator(store, mode="transactional")


@pytest.fixture
def deletion_coordinator(store: RecordStore) -> CascadingDeletionCoordinator:
    return CascadingDeletionCoordinator(store)


@pytest.fixture
def credential_gate(store: RecordStore) -> CredentialGate:
    return CredentialGate(store)


@pytest.fixture
def category_service(store: RecordStore) -> CategoryService:
    return CategoryService(store)


@pytest.fixture
def booking_service(store: RecordStore) -> BookingService:
    return BookingService(store)


@pytest.fixture
def account_service(store: RecordStore) -> AccountService:
    return AccountService(store)


@pytest.fixture
def api(store: RecordStore) -> AdoptionAPI:
    return AdoptionAPI(store)


# Factory classes for test data


class PetFactory:
    """Factory for creating test pet records."""

    @staticmethod
    def build(**kwargs) -> Dict[str, Any]:
        """Build pet fields without saving them."""
        defaults = {
            "name": f"TestPet_{uuid.uuid4().hex[:8]}",
            "category_name": "Dogs",
            "breed": "Golden Retriever",
            "age": 3,
            "gender": "Male",
            "location": "Riverside Park",
            "status": "Available",
        }
        defaults.update(kwargs)
        return defaults

    @staticmethod
    async def create(store: RecordStore, **kwargs) -> Dict[str, Any]:
        """Insert a pet and return the stored record."""
        pet_id = await store.insert(Pet, PetFactory.build(**kwargs))
        return await store.find_by_id(Pet, pet_id)


class StatusLogFactory:
    """Factory for status change log entries written directly to the store."""

    @staticmethod
    async def create(
        store: RecordStore, pet_id: int, new_status: str = "Pending", **kwargs
    ) -> Dict[str, Any]:
        log_id = await store.insert(
            PetStatusChangeLog, {"pet_id": pet_id, "new_status": new_status, **kwargs}
        )
        return await store.find_by_id(PetStatusChangeLog, log_id)


class BookingFactory:
    """Factory for adoption bookings."""

    @staticmethod
    async def create(store: RecordStore, pet_id: int, **kwargs) -> Dict[str, Any]:
        fields = {"pet_id": pet_id, "status": "Requested", **kwargs}
        booking_id = await store.insert(AdoptionBooking, fields)
        return await store.find_by_id(AdoptionBooking, booking_id)


class AccountFactory:
    """Factory for users and vendors."""

    @staticmethod
    async def create_user(store: RecordStore, **kwargs) -> Dict[str, Any]:
        defaults = {
            "first_name": "Test",
            "last_name": "User",
            "email": f"test_{uuid.uuid4().hex[:8]}@example.com",
            "password": "secret-password",
        }
        defaults.update(kwargs)
        user_id = await store.insert(User, defaults)
        return await store.find_by_id(User, user_id)

    @staticmethod
    async def create_vendor(store: RecordStore, **kwargs) -> Dict[str, Any]:
        defaults = {
            "vendor_name": "Happy Tails Shelter",
            "email": f"vendor_{uuid.uuid4().hex[:8]}@example.com",
            "password": "vendor-password",
            "location": "Springfield",
        }
        defaults.update(kwargs)
        vendor_id = await store.insert(Vendor, defaults)
        return await store.find_by_id(Vendor, vendor_id)


class CategoryFactory:
    @staticmethod
    async def create(store: RecordStore, name: str = "Dogs") -> Dict[str, Any]:
        category_id = await store.insert(Category, {"category_name": name})
        return await store.find_by_id(Category, category_id)


@pytest.fixture
def pet_factory():
    return PetFactory


@pytest.fixture
def status_log_factory():
    return StatusLogFactory


@pytest.fixture
def booking_factory():
    return BookingFactory


@pytest.fixture
def account_factory():
    return AccountFactory


@pytest.fixture
def category_factory():
    return CategoryFactory
