"""Schemas for recording and reading pet status changes."""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class StatusChangeCreate(BaseModel):
    """
    A requested status change together with its log fields.

    The previous status is not accepted from the caller; it is read from the
    pet row when the change is recorded.
    """

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    pet_id: int = Field(..., description="Pet whose status changes", gt=0)
    new_status: str = Field(..., description="Status to apply", min_length=1, max_length=50)
    changed_by: Optional[str] = Field(None, max_length=255)
    reason: Optional[str] = None

    def to_log_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class StatusChangeResponse(BaseModel):
    """A committed status change log entry."""

    model_config = ConfigDict(from_attributes=True)

    log_id: int
    pet_id: int
    new_status: str
    old_status: Optional[str] = None
    changed_by: Optional[str] = None
    reason: Optional[str] = None
    changed_at: Optional[datetime] = None
