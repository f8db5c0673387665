"""
Tests for cascading pet deletion.
"""

from unittest.mock import patch

import pytest

from adoption_core.exceptions import (
    InvalidRequestException,
    NotFoundException,
    StoreException,
)
from adoption_core.models import AdoptionBooking, Pet, PetStatusChangeLog


class TestCascadingDelete:
    """Deleting a pet removes its status log entries and bookings first."""

    @pytest.mark.asyncio
    async def test_delete_pet_with_dependents(
        self,
        store,
        deletion_coordinator,
        pet_factory,
        status_log_factory,
        booking_factory,
    ):
        pet = await pet_factory.create(store)
        other = await pet_factory.create(store)
        for status in ("Pending", "On Hold", "Adopted"):
            await status_log_factory.create(store, pet["pet_id"], status)
        await booking_factory.create(store, pet["pet_id"])
        await booking_factory.create(store, pet["pet_id"])
        await status_log_factory.create(store, other["pet_id"])
        await booking_factory.create(store, other["pet_id"])

        result = await deletion_coordinator.delete_pet(pet["pet_id"])

        assert result == {
            "message": "Pet deleted successfully",
            "pet_id": pet["pet_id"],
            "status_logs_deleted": 3,
            "bookings_deleted": 2,
        }
        assert await store.find_by_id(Pet, pet["pet_id"]) is None
        assert await store.find_by(PetStatusChangeLog, pet_id=pet["pet_id"]) == []
        assert await store.find_by(AdoptionBooking, pet_id=pet["pet_id"]) == []

        assert await store.find_by_id(Pet, other["pet_id"]) is not None
        assert len(await store.find_by(PetStatusChangeLog, pet_id=other["pet_id"])) == 1
        assert len(await store.find_by(AdoptionBooking, pet_id=other["pet_id"])) == 1

    @pytest.mark.asyncio
    async def test_delete_pet_without_dependents(
        self, store, deletion_coordinator, pet_factory
    ):
        pet = await pet_factory.create(store)

        result = await deletion_coordinator.delete_pet(str(pet["pet_id"]))

        assert result["status_logs_deleted"] == 0
        assert result["bookings_deleted"] == 0

    @pytest.mark.asyncio
    async def test_nonexistent_pet_deletes_nothing(
        self, store, deletion_coordinator, status_log_factory
    ):
        """Orphaned log entries for a missing pet are left untouched."""
        await status_log_factory.create(store, 999)

        with pytest.raises(NotFoundException) as exc_info:
            await deletion_coordinator.delete_pet(999)

        assert exc_info.value.http_status == 404
        assert len(await store.find_all(PetStatusChangeLog)) == 1

    @pytest.mark.asyncio
    async def test_invalid_identifier(self, deletion_coordinator):
        with pytest.raises(InvalidRequestException):
            await deletion_coordinator.delete_pet("rex")

    @pytest.mark.asyncio
    async def test_failure_stops_cascade(
        self,
        store,
        deletion_coordinator,
        pet_factory,
        status_log_factory,
        booking_factory,
    ):
        """Completed steps stay committed; the error names the failing step."""
        pet = await pet_factory.create(store)
        await status_log_factory.create(store, pet["pet_id"])
        await booking_factory.create(store, pet["pet_id"])

        original_delete_where = store.delete_where

        async def failing_delete_where(model, *criteria):
            if model is AdoptionBooking:
                raise StoreException("bookings table locked")
            return await original_delete_where(model, *criteria)

        with patch.object(store, "delete_where", side_effect=failing_delete_where):
            with pytest.raises(StoreException) as exc_info:
                await deletion_coordinator.delete_pet(pet["pet_id"])

        assert exc_info.value.step == "delete_bookings"
        assert await store.find_by(PetStatusChangeLog, pet_id=pet["pet_id"]) == []
        assert len(await store.find_by(AdoptionBooking, pet_id=pet["pet_id"])) == 1
        assert await store.find_by_id(Pet, pet["pet_id"]) is not None

    @pytest.mark.asyncio
    async def test_pet_vanishing_mid_cascade(
        self, store, deletion_coordinator, pet_factory
    ):
        pet = await pet_factory.create(store)

        with patch.object(store, "delete", return_value=0):
            with pytest.raises(NotFoundException):
                await deletion_coordinator.delete_pet(pet["pet_id"])
