"""
Status transition coordinator.

A pet's status always mirrors the newest committed entry of its status
change log. Recording a change therefore touches two tables: the log entry
is appended first, then the pet row is updated. The log entry's
``old_status`` is read from the pet row, never taken from the caller. Two
commit strategies are available:

* ``compensating``: each write commits on its own. If the pet update
  fails, or matches no row, the freshly inserted log entry is deleted
  again. A failed deletion is recorded as a ``CompensationFailure`` and
  logged at CRITICAL; the caller still receives the update failure.
* ``transactional``: both writes share one database transaction and are
  rolled back together.

Neither mode serializes concurrent changes to the same pet. Two requests
racing on one pet can commit their log entries in one order and their pet
updates in the other.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ..database.store import RecordStore
from ..exceptions import CompensationFailure, StoreException
from ..models import Pet, PetStatusChangeLog
from ..schemas import StatusChangeCreate, StatusChangeResponse
from ..utils.config import StatusTransitionMode
from ..utils.validation import parse_identifier, validate_payload

logger = logging.getLogger(__name__)

LOOKUP_PET_STEP = "lookup_pet"
INSERT_LOG_STEP = "insert_status_log"
UPDATE_PET_STEP = "update_pet_status"


class StatusTransitionCoordinator:
    """Moves pets between statuses while keeping the change log consistent."""

    def __init__(
        self,
        store: RecordStore,
        mode: Union[StatusTransitionMode, str] = StatusTransitionMode.COMPENSATING,
    ):
        """
        Initialize the coordinator.

        Args:
            store: Record store used for both writes
            mode: Commit strategy, ``compensating`` or ``transactional``
        """
        self.store = store
        self.mode = StatusTransitionMode(mode)

    async def record_status_change(
        self, data: Union[StatusChangeCreate, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """
        Append a status change log entry and apply it to the pet.

        Args:
            data: ``pet_id``, ``new_status`` and optional log fields

        Returns:
            The created log entry, including its ``log_id``

        Raises:
            InvalidRequestException: If the payload is invalid
            StoreException: If a write fails; ``step`` names the failing write
        """
        change = validate_payload(StatusChangeCreate, data)

        if self.mode is StatusTransitionMode.TRANSACTIONAL:
            log_id, fields = await self._record_in_transaction(change)
        else:
            log_id, fields = await self._record_with_compensation(change)

        logger.info(
            f"Pet {change.pet_id} moved to status '{change.new_status}' (log entry {log_id})"
        )
        return StatusChangeResponse.model_validate(
            {"log_id": log_id, **fields}
        ).model_dump()

    async def _record_with_compensation(
        self, change: StatusChangeCreate
    ) -> Tuple[int, Dict[str, Any]]:
        try:
            pet = await self.store.find_by_id(Pet, change.pet_id)
        except StoreException as e:
            e.annotate_step(LOOKUP_PET_STEP)
            logger.error(f"Could not read pet {change.pet_id}: {e.message}")
            raise

        fields = self._log_fields(change, pet)
        try:
            log_id = await self.store.insert(PetStatusChangeLog, fields)
        except StoreException as e:
            e.annotate_step(INSERT_LOG_STEP)
            logger.error(
                f"Could not record status change for pet {change.pet_id}: {e.message}"
            )
            raise

        try:
            updated = await self.store.update(
                Pet, change.pet_id, {"status": change.new_status}
            )
        except StoreException as e:
            e.annotate_step(UPDATE_PET_STEP)
            logger.error(
                f"Status update for pet {change.pet_id} failed: {e.message}"
            )
            await self._compensate(log_id, e)
            raise

        if updated == 0:
            error = self._not_applied(change.pet_id)
            logger.error(f"Status update for pet {change.pet_id} matched no rows")
            await self._compensate(log_id, error)
            raise error

        return log_id, fields

    async def _compensate(
        self, log_id: int, primary: StoreException
    ) -> Optional[CompensationFailure]:
        """
        Remove the log entry written for a status change that did not apply.

        A failure here is attached to ``primary`` and logged; it is never
        raised in place of it.
        """
        logger.warning(
            f"Removing status log entry {log_id} after failed step '{primary.step}'"
        )
        try:
            removed = await self.store.delete(PetStatusChangeLog, log_id)
        except StoreException as e:
            failure = CompensationFailure(
                f"Could not remove status log entry {log_id}; it has no matching pet status",
                log_id=log_id,
                original_error=e,
            )
            failure.log_error(logger, logging.CRITICAL)
            primary.details["compensation"] = failure.to_dict()
            return failure

        if removed == 0:
            logger.warning(f"Status log entry {log_id} was already gone")
        primary.details["compensation"] = {"log_id": log_id, "removed": removed}
        return None

    async def _record_in_transaction(
        self, change: StatusChangeCreate
    ) -> Tuple[int, Dict[str, Any]]:
        try:
            async with self.store.transaction() as tx:
                try:
                    pet = await tx.find_by_id(Pet, change.pet_id)
                except StoreException as e:
                    e.annotate_step(LOOKUP_PET_STEP)
                    raise

                fields = self._log_fields(change, pet)
                try:
                    log_id = await tx.insert(PetStatusChangeLog, fields)
                except StoreException as e:
                    e.annotate_step(INSERT_LOG_STEP)
                    raise

                try:
                    updated = await tx.update(
                        Pet, change.pet_id, {"status": change.new_status}
                    )
                except StoreException as e:
                    e.annotate_step(UPDATE_PET_STEP)
                    raise

                if updated == 0:
                    raise self._not_applied(change.pet_id)
        except StoreException as e:
            logger.error(
                f"Status change for pet {change.pet_id} rolled back at step '{e.step}': {e.message}"
            )
            raise

        return log_id, fields

    @staticmethod
    def _log_fields(
        change: StatusChangeCreate, pet: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Log columns for ``change``; ``old_status`` is the pet's current status."""
        fields = change.to_log_fields()
        if pet is not None:
            fields["old_status"] = pet["status"]
        return fields

    @staticmethod
    def _not_applied(pet_id: int) -> StoreException:
        return StoreException(
            f"Status of pet {pet_id} was not updated",
            error_code="PET_STATUS_NOT_APPLIED",
            details={"pet_id": pet_id},
            step=UPDATE_PET_STEP,
        )

    async def list_status_changes(self, pet_id: Any = None) -> List[Dict[str, Any]]:
        """
        Return status change history ordered by ``log_id``.

        Args:
            pet_id: Restrict the history to one pet
        """
        if pet_id is None:
            rows = await self.store.find_all(PetStatusChangeLog)
        else:
            pet_id = parse_identifier(pet_id, "pet_id")
            rows = await self.store.find_by(PetStatusChangeLog, pet_id=pet_id)

        return [StatusChangeResponse.model_validate(row).model_dump() for row in rows]
