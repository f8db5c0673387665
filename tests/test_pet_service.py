"""
Tests for the pet service.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from adoption_core.exceptions import InvalidRequestException, NotFoundException
from adoption_core.models import Pet
from adoption_core.services import PetService


class TestListPets:
    @pytest.mark.asyncio
    async def test_list_all(self, store, pet_service, pet_factory):
        for name in ("Rex", "Tom", "Max"):
            await pet_factory.create(store, name=name)

        pets = await pet_service.list_pets()

        assert [pet["name"] for pet in pets] == ["Rex", "Tom", "Max"]

    @pytest.mark.asyncio
    async def test_listing_is_repeatable(self, store, pet_service, pet_factory):
        await pet_factory.create(store)
        await pet_factory.create(store)

        first = await pet_service.list_pets(category="Dogs")
        second = await pet_service.list_pets(category="Dogs")

        assert first == second

    @pytest.mark.asyncio
    async def test_filters(self, store, pet_service, pet_factory):
        await pet_factory.create(store, name="Rex", category_name="Dogs")
        await pet_factory.create(
            store, name="Tom", category_name="Cats", location="Harbor Shelter"
        )

        assert [p["name"] for p in await pet_service.list_pets(category="Cats")] == [
            "Tom"
        ]
        assert [p["name"] for p in await pet_service.list_pets(location="RIVERSIDE")] == [
            "Rex"
        ]
        assert await pet_service.list_pets(category="Birds") == []

    @pytest.mark.asyncio
    async def test_blank_filters_are_ignored(self, store, pet_service, pet_factory):
        await pet_factory.create(store)

        assert len(await pet_service.list_pets(category="  ", location="")) == 1


class TestGetAndCreatePet:
    @pytest.mark.asyncio
    async def test_get_pet(self, store, pet_service, pet_factory):
        pet = await pet_factory.create(store, name="Rex")

        found = await pet_service.get_pet(str(pet["pet_id"]))

        assert found["pet_id"] == pet["pet_id"]
        assert found["name"] == "Rex"

    @pytest.mark.asyncio
    async def test_get_missing_pet(self, pet_service):
        with pytest.raises(NotFoundException) as exc_info:
            await pet_service.get_pet(42)

        assert exc_info.value.details == {"entity": "pet", "identifier": "42"}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("pet_id", [None, "", "abc", 0, -3, True])
    async def test_get_invalid_identifier(self, pet_service, pet_id):
        with pytest.raises(InvalidRequestException):
            await pet_service.get_pet(pet_id)

    @pytest.mark.asyncio
    async def test_create_pet_defaults_status(self, store, pet_service):
        created = await pet_service.create_pet(
            {"name": "  Rex ", "category_name": "Dogs", "age": 2}
        )

        assert created["name"] == "Rex"
        assert created["status"] == "Available"
        stored = await store.find_by_id(Pet, created["pet_id"])
        assert stored["status"] == "Available"

    @pytest.mark.asyncio
    async def test_create_pet_with_original_status(self, pet_service):
        created = await pet_service.create_pet({"name": "Rex", "status": "On Hold"})

        assert created["status"] == "On Hold"

    @pytest.mark.asyncio
    async def test_create_pet_rejects_unknown_fields(self, store, pet_service):
        with pytest.raises(InvalidRequestException):
            await pet_service.create_pet({"name": "Rex", "pet_id": 9})

        assert await store.find_all(Pet) == []


class TestUpdatePet:
    @pytest.mark.asyncio
    async def test_update_descriptive_fields(self, store, pet_service, pet_factory):
        pet = await pet_factory.create(store)

        result = await pet_service.update_pet(
            pet["pet_id"], {"location": "Harbor", "age": 4}
        )

        assert result == {"message": "Pet updated successfully", "pet_id": pet["pet_id"]}
        stored = await store.find_by_id(Pet, pet["pet_id"])
        assert stored["location"] == "Harbor"
        assert stored["age"] == 4
        assert stored["name"] == pet["name"]

    @pytest.mark.asyncio
    async def test_status_cannot_be_updated_directly(
        self, store, pet_service, pet_factory
    ):
        pet = await pet_factory.create(store)

        with pytest.raises(InvalidRequestException):
            await pet_service.update_pet(pet["pet_id"], {"status": "Adopted"})

        assert (await store.find_by_id(Pet, pet["pet_id"]))["status"] == "Available"

    @pytest.mark.asyncio
    async def test_empty_update(self, store, pet_service, pet_factory):
        pet = await pet_factory.create(store)

        with pytest.raises(InvalidRequestException, match="No fields to update"):
            await pet_service.update_pet(pet["pet_id"], {})

    @pytest.mark.asyncio
    async def test_update_missing_pet(self, pet_service):
        with pytest.raises(NotFoundException):
            await pet_service.update_pet(77, {"location": "Harbor"})


class TestDeletePet:
    @pytest.mark.asyncio
    async def test_delete_delegates_to_coordinator(self, store):
        deletion = Mock()
        deletion.delete_pet = AsyncMock(return_value={"pet_id": 3})
        service = PetService(store, deletion)

        result = await service.delete_pet(3)

        assert result == {"pet_id": 3}
        deletion.delete_pet.assert_awaited_once_with(3)

    @pytest.mark.asyncio
    async def test_delete_pet(self, store, pet_service, pet_factory):
        pet = await pet_factory.create(store)

        result = await pet_service.delete_pet(pet["pet_id"])

        assert result["message"] == "Pet deleted successfully"
        assert await store.find_by_id(Pet, pet["pet_id"]) is None
