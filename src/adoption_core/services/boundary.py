"""
Request/response facade over the lifecycle services.

``AdoptionAPI`` is what a routing layer calls. Each operation returns an
``OperationResult`` carrying an HTTP-style status code and a JSON-ready
body; failures are turned into ``create_error_response`` bodies using the
status code attached to each exception class:

=====================  ======
InvalidRequest         400
Unauthenticated        401
NotFound               404
Conflict               409
Store and other errors 500
=====================  ======

A store failure never produces a 2xx result.
"""

import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Mapping, Optional

from sqlalchemy.ext.asyncio import AsyncEngine

from ..database.connection import close_engine, create_engine, wait_for_database
from ..database.session import SessionManager
from ..database.store import RecordStore
from ..exceptions import (
    AdoptionCoreException,
    create_error_response,
    log_exception_context,
)
from ..utils.config import AdoptionSettings, StatusTransitionMode
from .auth import CredentialGate
from .catalog import AccountService, BookingService, CategoryService
from .deletion import CascadingDeletionCoordinator
from .pets import PetService
from .status import StatusTransitionCoordinator

logger = logging.getLogger(__name__)


@dataclass
class OperationResult:
    """Outcome of one boundary operation."""

    status_code: int
    body: Any

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class AdoptionAPI:
    """Boundary operations of the adoption core."""

    def __init__(
        self,
        store: RecordStore,
        status_mode: StatusTransitionMode = StatusTransitionMode.COMPENSATING,
        include_debug: bool = False,
        engine: Optional[AsyncEngine] = None,
    ):
        """
        Wire the services around one record store.

        Args:
            store: Record store shared by every service
            status_mode: Commit strategy for status changes
            include_debug: Add debug information to error bodies
            engine: Engine to dispose of in ``close()``, when owned by this API
        """
        self.store = store
        self.include_debug = include_debug
        self._engine = engine

        self.deletion = CascadingDeletionCoordinator(store)
        self.pets = PetService(store, self.deletion)
        self.status = StatusTransitionCoordinator(store, status_mode)
        self.credentials = CredentialGate(store)
        self.categories = CategoryService(store)
        self.bookings = BookingService(store)
        self.accounts = AccountService(store)

    @classmethod
    async def from_settings(cls, settings: AdoptionSettings) -> "AdoptionAPI":
        """
        Create the engine described by ``settings`` and wait for the database.

        The returned API owns the engine; call ``close()`` at shutdown.
        """
        engine = create_engine(
            settings.database_url,
            pool_size=settings.pool_size,
            max_overflow=settings.max_overflow,
            pool_timeout=settings.pool_timeout,
            echo=settings.echo,
        )
        try:
            await wait_for_database(engine, timeout=settings.wait_timeout)
        except AdoptionCoreException:
            await close_engine(engine)
            raise

        store = RecordStore(SessionManager(engine))
        logger.info(
            f"Adoption core ready (status transitions: {settings.status_transition_mode.value})"
        )
        return cls(store, settings.status_transition_mode, engine=engine)

    async def close(self) -> None:
        """Dispose of the owned engine, if any."""
        if self._engine is not None:
            await close_engine(self._engine)
            self._engine = None

    async def _call(
        self, operation: str, success_status: int, call: Awaitable[Any]
    ) -> OperationResult:
        try:
            body = await call
        except AdoptionCoreException as e:
            level = logging.ERROR if e.http_status >= 500 else logging.INFO
            log_exception_context(e, {"operation": operation}, logger, level)
            return OperationResult(
                e.http_status, create_error_response(e, self.include_debug)
            )
        except Exception as e:
            logger.exception(f"Unexpected error in {operation}: {e}")
            error = AdoptionCoreException(
                "Internal server error", error_code="INTERNAL_ERROR"
            )
            return OperationResult(500, create_error_response(error))

        return OperationResult(success_status, body)

    # Pets

    async def list_pets(
        self, category: Optional[str] = None, location: Optional[str] = None
    ) -> OperationResult:
        return await self._call("list_pets", 200, self.pets.list_pets(category, location))

    async def get_pet(self, pet_id: Any) -> OperationResult:
        return await self._call("get_pet", 200, self.pets.get_pet(pet_id))

    async def create_pet(self, data: Mapping[str, Any]) -> OperationResult:
        return await self._call("create_pet", 201, self.pets.create_pet(data))

    async def update_pet(self, pet_id: Any, data: Mapping[str, Any]) -> OperationResult:
        return await self._call("update_pet", 200, self.pets.update_pet(pet_id, data))

    async def delete_pet(self, pet_id: Any) -> OperationResult:
        return await self._call("delete_pet", 200, self.pets.delete_pet(pet_id))

    # Status changes

    async def record_status_change(self, data: Mapping[str, Any]) -> OperationResult:
        return await self._call(
            "record_status_change", 201, self.status.record_status_change(data)
        )

    async def list_status_changes(self, pet_id: Any = None) -> OperationResult:
        return await self._call(
            "list_status_changes", 200, self.status.list_status_changes(pet_id)
        )

    # Credential lookup

    async def login_user(self, data: Mapping[str, Any]) -> OperationResult:
        return await self._call(
            "login_user", 200, self.credentials.authenticate_user(data)
        )

    async def login_vendor(self, data: Mapping[str, Any]) -> OperationResult:
        return await self._call(
            "login_vendor", 200, self.credentials.authenticate_vendor(data)
        )

    # Accounts

    async def list_users(self) -> OperationResult:
        return await self._call("list_users", 200, self.accounts.list_users())

    async def create_user(self, data: Mapping[str, Any]) -> OperationResult:
        return await self._call("create_user", 201, self.accounts.create_user(data))

    async def list_vendors(self) -> OperationResult:
        return await self._call("list_vendors", 200, self.accounts.list_vendors())

    async def create_vendor(self, data: Mapping[str, Any]) -> OperationResult:
        return await self._call("create_vendor", 201, self.accounts.create_vendor(data))

    # Categories

    async def list_categories(self) -> OperationResult:
        return await self._call(
            "list_categories", 200, self.categories.list_categories()
        )

    async def create_category(self, data: Mapping[str, Any]) -> OperationResult:
        return await self._call(
            "create_category", 201, self.categories.create_category(data)
        )

    # Bookings

    async def list_bookings(self) -> OperationResult:
        return await self._call("list_bookings", 200, self.bookings.list_bookings())

    async def create_booking(self, data: Mapping[str, Any]) -> OperationResult:
        return await self._call(
            "create_booking", 201, self.bookings.create_booking(data)
        )

    async def get_bookings_for_pet(self, pet_id: Any) -> OperationResult:
        return await self._call(
            "get_bookings_for_pet", 200, self.bookings.find_bookings_for_pet(pet_id)
        )
