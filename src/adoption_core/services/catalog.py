"""Categories, adoption bookings and account registration."""

import logging
from typing import Any, Dict, List, Mapping, Union

from ..database.store import RecordStore
from ..exceptions import ConflictException, NotFoundException
from ..models import AdoptionBooking, Category, User, Vendor
from ..schemas import (
    BookingCreate,
    BookingResponse,
    CategoryCreate,
    CategoryResponse,
    UserCreate,
    UserResponse,
    VendorCreate,
    VendorResponse,
)
from ..utils.validation import parse_identifier, validate_payload

logger = logging.getLogger(__name__)


class CategoryService:
    """Category listing and creation. Names are unique."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_categories(self) -> List[Dict[str, Any]]:
        rows = await self.store.find_all(Category)
        return [CategoryResponse.model_validate(row).model_dump() for row in rows]

    async def create_category(
        self, data: Union[CategoryCreate, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """
        Create a category.

        Raises:
            InvalidRequestException: If the name is missing, empty or not a string
            ConflictException: If a category with that name already exists
        """
        category = validate_payload(CategoryCreate, data)
        try:
            category_id = await self.store.insert(Category, category.model_dump())
        except ConflictException as e:
            e.message = f"Category '{category.category_name}' already exists"
            e.annotate_step("insert_category")
            logger.info(e.message)
            raise

        logger.info(f"Created category {category_id} ({category.category_name})")
        return CategoryResponse(
            category_id=category_id, category_name=category.category_name
        ).model_dump()


class BookingService:
    """Adoption bookings. Bookings are only removed when their pet is deleted."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_bookings(self) -> List[Dict[str, Any]]:
        rows = await self.store.find_all(AdoptionBooking)
        return [BookingResponse.model_validate(row).model_dump() for row in rows]

    async def create_booking(
        self, data: Union[BookingCreate, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        booking = validate_payload(BookingCreate, data)
        fields = booking.to_fields()
        booking_id = await self.store.insert(AdoptionBooking, fields)
        logger.info(f"Created booking {booking_id} for pet {booking.pet_id}")
        return BookingResponse.model_validate(
            {"booking_id": booking_id, **fields}
        ).model_dump()

    async def find_bookings_for_pet(self, pet_id: Any) -> List[Dict[str, Any]]:
        """
        Return every booking on a pet.

        Raises:
            NotFoundException: If the pet has no bookings
        """
        pet_id = parse_identifier(pet_id, "pet_id")
        rows = await self.store.find_by(AdoptionBooking, pet_id=pet_id)
        if not rows:
            raise NotFoundException(
                "No bookings found for this pet", entity="booking", identifier=pet_id
            )
        return [BookingResponse.model_validate(row).model_dump() for row in rows]


class AccountService:
    """Registration and listing of adopters and vendors."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def list_users(self) -> List[Dict[str, Any]]:
        rows = await self.store.find_all(User)
        return [UserResponse.model_validate(row).model_dump() for row in rows]

    async def create_user(
        self, data: Union[UserCreate, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        user = validate_payload(UserCreate, data)
        fields = user.to_fields()
        user_id = await self.store.insert(User, fields)
        logger.info(f"Registered user {user_id}")
        return UserResponse.model_validate({"user_id": user_id, **fields}).model_dump()

    async def list_vendors(self) -> List[Dict[str, Any]]:
        rows = await self.store.find_all(Vendor)
        return [VendorResponse.model_validate(row).model_dump() for row in rows]

    async def create_vendor(
        self, data: Union[VendorCreate, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        vendor = validate_payload(VendorCreate, data)
        fields = vendor.to_fields()
        vendor_id = await self.store.insert(Vendor, fields)
        logger.info(f"Registered vendor {vendor_id} ({vendor.vendor_name})")
        return VendorResponse.model_validate(
            {"vendor_id": vendor_id, **fields}
        ).model_dump()
