"""
Account models for the adoption-core package.

Users are adopters; vendors list pets. Both are looked up by email and
password. The password column holds an opaque credential compared by
equality, and email is indexed but deliberately not unique.
"""

from typing import Optional

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class User(BaseModel):
    """Adopter account."""

    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    first_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    last_name: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)


class Vendor(BaseModel):
    """Shelter, rescue or breeder that lists pets for adoption."""

    __tablename__ = "vendors"

    vendor_id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )

    vendor_name: Mapped[str] = mapped_column(String(150), nullable=False)

    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)

    password: Mapped[str] = mapped_column(String(255), nullable=False)

    phone: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    location: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
