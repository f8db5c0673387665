"""
Adoption booking model.

Bookings have no independent delete path; they are removed only when the
pet they refer to is deleted.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class AdoptionBooking(BaseModel):
    """An adopter's claim on a pet."""

    __tablename__ = "adoption_bookings"

    booking_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Soft reference to pets.pet_id; removed explicitly before the pet
    pet_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)

    user_id: Mapped[Optional[int]] = mapped_column(
        Integer, nullable=True, index=True, comment="Adopter that made the booking"
    )

    booking_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="Requested visit date"
    )

    status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
