"""Pet service: search, lookup, listing and descriptive updates."""

import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from ..database.query_builder import build_pet_filter_query
from ..database.store import RecordStore
from ..exceptions import InvalidRequestException, NotFoundException
from ..models import Pet
from ..schemas import PetCreate, PetResponse, PetSearchFilters, PetUpdate
from ..utils.validation import parse_identifier, validate_payload
from .deletion import CascadingDeletionCoordinator

logger = logging.getLogger(__name__)


def _pet(record: Mapping[str, Any]) -> Dict[str, Any]:
    return PetResponse.model_validate(record).model_dump()


class PetService:
    """Operations on pet records other than status changes."""

    def __init__(
        self,
        store: RecordStore,
        deletion: Optional[CascadingDeletionCoordinator] = None,
    ):
        """
        Initialize the pet service.

        Args:
            store: Record store holding the pets table
            deletion: Coordinator used by ``delete_pet``
        """
        self.store = store
        self.deletion = deletion or CascadingDeletionCoordinator(store)

    async def list_pets(
        self, category: Optional[str] = None, location: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Search pets by exact category and location substring.

        Both criteria are optional; with neither, every pet is returned.
        Results are ordered by ``pet_id``.
        """
        filters = validate_payload(
            PetSearchFilters, {"category": category, "location": location}
        )
        query = build_pet_filter_query(filters.category, filters.location)
        rows = await self.store.find_query(query.statement)
        logger.debug(f"Pet search {query.params} returned {len(rows)} rows")
        return [_pet(row) for row in rows]

    async def get_pet(self, pet_id: Any) -> Dict[str, Any]:
        """
        Get one pet by identity.

        Raises:
            InvalidRequestException: If the identity is missing or malformed
            NotFoundException: If no such pet exists
        """
        pet_id = parse_identifier(pet_id, "pet_id")
        record = await self.store.find_by_id(Pet, pet_id)
        if record is None:
            raise NotFoundException("Pet not found", entity="pet", identifier=pet_id)
        return _pet(record)

    async def create_pet(
        self, data: Union[PetCreate, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """
        List a new pet.

        Returns:
            The created pet including its store-assigned ``pet_id``
        """
        pet = validate_payload(PetCreate, data)
        fields = pet.model_dump(exclude_none=True)
        pet_id = await self.store.insert(Pet, fields)
        logger.info(f"Created pet {pet_id} ({pet.name}) with status '{pet.status}'")
        return _pet({"pet_id": pet_id, **fields})

    async def update_pet(
        self, pet_id: Any, data: Union[PetUpdate, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """
        Update a pet's descriptive fields.

        Status is not accepted here; see ``StatusTransitionCoordinator``.

        Raises:
            InvalidRequestException: If the payload is empty or invalid
            NotFoundException: If no row matched
        """
        pet_id = parse_identifier(pet_id, "pet_id")
        fields = validate_payload(PetUpdate, data).to_fields()
        if not fields:
            raise InvalidRequestException("No fields to update")

        updated = await self.store.update(Pet, pet_id, fields)
        if updated == 0:
            raise NotFoundException("Pet not found", entity="pet", identifier=pet_id)

        logger.info(f"Updated pet {pet_id}: {', '.join(sorted(fields))}")
        return {"message": "Pet updated successfully", "pet_id": pet_id}

    async def delete_pet(self, pet_id: Any) -> Dict[str, Any]:
        """Delete a pet and its dependents."""
        return await self.deletion.delete_pet(pet_id)
