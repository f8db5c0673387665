"""
Pet model for the adoption-core package.

This module contains the Pet SQLAlchemy model. A pet's ``status`` is kept
consistent with its status change log by the status transition coordinator;
other attributes are written through plain field updates.
"""

import enum
from typing import Optional

from sqlalchemy import Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class PetStatus(str, enum.Enum):
    """
    Well-known adoption status labels.

    The status column itself is an open string; these are the labels the
    platform uses out of the box.
    """

    AVAILABLE = "Available"
    PENDING = "Pending"
    ADOPTED = "Adopted"
    ON_HOLD = "On Hold"


DEFAULT_PET_STATUS = PetStatus.AVAILABLE.value


class Pet(BaseModel):
    """Pet listed for adoption by a vendor."""

    __tablename__ = "pets"

    pet_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    name: Mapped[str] = mapped_column(String(100), nullable=False, comment="Pet's name")

    # Soft reference to categories.category_name
    category_name: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, index=True, comment="Category name, e.g. Dog"
    )

    breed: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    age: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True, comment="Age in years"
    )

    gender: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    location: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="Where the pet can be visited"
    )

    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        default=DEFAULT_PET_STATUS,
        server_default=DEFAULT_PET_STATUS,
        index=True,
        comment="Current adoption status",
    )

    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    image_url: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)

    # Soft reference to vendors.vendor_id
    vendor_id: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True, index=True, comment="Vendor that listed the pet"
    )

    __table_args__ = (
        Index("idx_pets_category_location", "category_name", "location"),
    )
