"""
Account Pydantic schemas for users and vendors.

Responses never include the stored credential.
"""

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class Credentials(BaseModel):
    """
    Email and password presented for a lookup.

    The email is trimmed; the password is kept exactly as sent. Neither
    may be blank.
    """

    model_config = ConfigDict(extra="forbid")

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=255)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("email cannot be blank")
        return v

    @field_validator("password")
    @classmethod
    def password_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("password cannot be blank")
        return v


class AccountCreateBase(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    email: EmailStr = Field(..., max_length=255)
    password: str = Field(..., min_length=1, max_length=255)
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = Field(None, max_length=255)

    def to_fields(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class UserCreate(AccountCreateBase):
    """Schema for registering an adopter."""

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)


class VendorCreate(AccountCreateBase):
    """Schema for registering a vendor."""

    vendor_name: str = Field(..., min_length=1, max_length=150)
    location: Optional[str] = Field(None, max_length=255)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    email: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None


class VendorResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    vendor_id: int
    vendor_name: str
    email: str
    phone: Optional[str] = None
    address: Optional[str] = None
    location: Optional[str] = None
    created_at: Optional[datetime] = None
