"""Schemas for categories and adoption bookings."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class CategoryCreate(BaseModel):
    """Schema for creating a category; the name must be a non-empty string."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    category_name: StrictStr = Field(..., min_length=1, max_length=100)


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category_id: int
    category_name: str


class BookingCreate(BaseModel):
    """Schema for an adopter's booking on a pet."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    pet_id: int = Field(..., description="Pet being booked", gt=0)
    user_id: Optional[int] = Field(None, description="Adopter making the booking", gt=0)
    booking_date: Optional[datetime] = Field(None, description="Requested visit date")
    status: Optional[str] = Field(None, max_length=50)
    notes: Optional[str] = None

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    booking_id: int
    pet_id: int
    user_id: Optional[int] = None
    booking_date: Optional[datetime] = None
    status: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
