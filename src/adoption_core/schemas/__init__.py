"""
Pydantic schemas for data validation and serialization.

This module contains the request and response schemas used by the
lifecycle services at the boundary of the adoption core.
"""

from .account import (
    Credentials,
    UserCreate,
    UserResponse,
    VendorCreate,
    VendorResponse,
)
from .catalog import BookingCreate, BookingResponse, CategoryCreate, CategoryResponse
from .pet import (
    PetCreate,
    PetResponse,
    PetSearchFilters,
    PetUpdate,
)
from .status_log import StatusChangeCreate, StatusChangeResponse

__all__ = [
    # Pet schemas
    "PetCreate",
    "PetUpdate",
    "PetResponse",
    "PetSearchFilters",
    # Status change schemas
    "StatusChangeCreate",
    "StatusChangeResponse",
    # Catalog schemas
    "CategoryCreate",
    "CategoryResponse",
    "BookingCreate",
    "BookingResponse",
    # Account schemas
    "Credentials",
    "UserCreate",
    "UserResponse",
    "VendorCreate",
    "VendorResponse",
]
