"""
Database models for the adoption core package.

This module contains SQLAlchemy models for the entities tracked by the
pet adoption platform.
"""

from .account import User, Vendor

# Base model will be imported by all other models
from .base import Base, BaseModel
from .booking import AdoptionBooking
from .category import Category
from .pet import DEFAULT_PET_STATUS, Pet, PetStatus
from .status_log import PetStatusChangeLog

__all__ = [
    "Base",
    "BaseModel",
    "Pet",
    "PetStatus",
    "DEFAULT_PET_STATUS",
    "Category",
    "User",
    "Vendor",
    "AdoptionBooking",
    "PetStatusChangeLog",
]
