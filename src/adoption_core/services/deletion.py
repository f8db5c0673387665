"""
Cascading deletion of pets.

The schema declares no ON DELETE rules, so a pet's dependents are removed
explicitly and always in this order:

1. status change log entries
2. adoption bookings
3. the pet itself

A failing step stops the cascade. Steps that already committed stay
committed; the error names the step that failed.
"""

import logging
from typing import Any, Awaitable, Dict, TypeVar

from ..database.store import RecordStore
from ..exceptions import NotFoundException, StoreException
from ..models import AdoptionBooking, Pet, PetStatusChangeLog
from ..utils.validation import parse_identifier

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CascadingDeletionCoordinator:
    """Deletes a pet together with every record that refers to it."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def _step(self, step: str, operation: Awaitable[T]) -> T:
        try:
            return await operation
        except StoreException as e:
            e.annotate_step(step)
            logger.error(f"Cascading delete stopped at step '{step}': {e.message}")
            raise

    async def delete_pet(self, pet_id: Any) -> Dict[str, Any]:
        """
        Delete a pet after its status log entries and bookings.

        Args:
            pet_id: Identity of the pet

        Returns:
            Acknowledgement with the number of dependents removed

        Raises:
            InvalidRequestException: If the identity is missing or malformed
            NotFoundException: If no such pet exists; nothing is deleted
            StoreException: If a step fails; earlier steps are not undone
        """
        pet_id = parse_identifier(pet_id, "pet_id")

        pet = await self._step("lookup_pet", self.store.find_by_id(Pet, pet_id))
        if pet is None:
            raise NotFoundException("Pet not found", entity="pet", identifier=pet_id)

        logs_removed = await self._step(
            "delete_status_logs",
            self.store.delete_where(
                PetStatusChangeLog, PetStatusChangeLog.__table__.c.pet_id == pet_id
            ),
        )
        bookings_removed = await self._step(
            "delete_bookings",
            self.store.delete_where(
                AdoptionBooking, AdoptionBooking.__table__.c.pet_id == pet_id
            ),
        )
        pets_removed = await self._step("delete_pet", self.store.delete(Pet, pet_id))

        if pets_removed == 0:
            logger.warning(f"Pet {pet_id} disappeared before it could be deleted")
            raise NotFoundException("Pet not found", entity="pet", identifier=pet_id)

        logger.info(
            f"Deleted pet {pet_id} with {logs_removed} status log entries "
            f"and {bookings_removed} bookings"
        )
        return {
            "message": "Pet deleted successfully",
            "pet_id": pet_id,
            "status_logs_deleted": logs_removed,
            "bookings_deleted": bookings_removed,
        }
