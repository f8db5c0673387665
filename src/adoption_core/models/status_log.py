"""
Pet status change log model.

The log is append-only: rows are written by the status transition
coordinator and removed only by its compensating action or by a pet's
cascading deletion. ``log_id`` order is the order of changes.
"""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import BaseModel


class PetStatusChangeLog(BaseModel):
    """One recorded status change of a pet."""

    __tablename__ = "pet_status_change_log"

    log_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    # Soft reference to pets.pet_id
    pet_id: Mapped[int] = mapped_column(Integer, nullable=False)

    old_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)

    new_status: Mapped[str] = mapped_column(String(50), nullable=False)

    changed_by: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="Who requested the change"
    )

    reason: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    changed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    __table_args__ = (Index("idx_status_log_pet_log", "pet_id", "log_id"),)
