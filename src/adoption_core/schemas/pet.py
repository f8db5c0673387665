"""
Pet Pydantic schemas for request validation and serialization.

Create and update payloads use explicit field sets; unknown keys are
rejected instead of being written through to the pets table. A pet's
status is never part of a plain update: it only changes through a recorded
status change.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from ..models.pet import DEFAULT_PET_STATUS
from ..utils.validation import sanitize_string


class PetBase(BaseModel):
    """Base Pet schema with common descriptive fields."""

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
    )

    name: str = Field(..., description="Pet's name", min_length=1, max_length=100)
    category_name: Optional[str] = Field(
        None, description="Category name, e.g. Dogs", max_length=100
    )
    breed: Optional[str] = Field(None, description="Pet's breed", max_length=100)
    age: Optional[int] = Field(None, description="Age in years", ge=0, le=50)
    gender: Optional[str] = Field(None, description="Pet's gender", max_length=20)
    location: Optional[str] = Field(
        None, description="Where the pet can be visited", max_length=255
    )
    description: Optional[str] = Field(None, description="Free-text description")
    image_url: Optional[str] = Field(
        None, description="URL to the pet's photo", max_length=500
    )
    vendor_id: Optional[int] = Field(
        None, description="Vendor that listed the pet", gt=0
    )


class PetCreate(PetBase):
    """Schema for listing a new pet. ``status`` is the pet's original status."""

    status: str = Field(
        DEFAULT_PET_STATUS,
        description="Initial adoption status",
        min_length=1,
        max_length=50,
    )


class PetUpdate(BaseModel):
    """Schema for a partial update of a pet's descriptive fields."""

    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
    )

    name: Optional[str] = Field(None, min_length=1, max_length=100)
    category_name: Optional[str] = Field(None, max_length=100)
    breed: Optional[str] = Field(None, max_length=100)
    age: Optional[int] = Field(None, ge=0, le=50)
    gender: Optional[str] = Field(None, max_length=20)
    location: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    vendor_id: Optional[int] = Field(None, gt=0)

    @model_validator(mode="before")
    @classmethod
    def reject_status(cls, data: Any) -> Any:
        """Status must go through the status change log."""
        if isinstance(data, dict) and "status" in data:
            raise ValueError(
                "Pet status cannot be updated directly; record a status change instead"
            )
        return data

    @field_validator("name")
    @classmethod
    def name_not_null(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            raise ValueError("name cannot be null")
        return v

    def to_fields(self) -> Dict[str, Any]:
        """Return only the fields the caller actually set."""
        return self.model_dump(exclude_unset=True)


class PetResponse(BaseModel):
    """Schema for pet response data."""

    model_config = ConfigDict(from_attributes=True)

    pet_id: int = Field(..., description="Pet's store-assigned identifier")
    name: str
    category_name: Optional[str] = None
    breed: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    location: Optional[str] = None
    status: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    vendor_id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PetSearchFilters(BaseModel):
    """Optional criteria for the filtered pet search."""

    model_config = ConfigDict(str_strip_whitespace=True)

    category: Optional[str] = Field(None, description="Exact category name")
    location: Optional[str] = Field(None, description="Location substring")

    @field_validator("category", "location")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat empty criteria as absent."""
        return sanitize_string(v) if v else None
