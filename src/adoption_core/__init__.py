"""
Adoption Core Package

The consistency core of a pet-adoption service: it keeps a pet's current
status, its append-only status change history and its dependent bookings
consistent across create, update and delete operations, and composes the
filtered pet search.

It includes:

- SQLAlchemy models for pets, categories, users, vendors, bookings and the
  status change log
- Pydantic schemas for request/response validation and serialization
- An async record store over SQLAlchemy Core with a typed error taxonomy
- Status transition and cascading deletion coordinators
- A request/response facade mapping failures to HTTP-style status codes
- Migration support through Alembic integration

Quick Start:
    >>> from adoption_core import AdoptionAPI, AdoptionSettings
    >>> api = await AdoptionAPI.from_settings(AdoptionSettings.from_env())
    >>> result = await api.record_status_change({"pet_id": 1, "new_status": "Pending"})
    >>> result.status_code
    201
    >>> await api.close()

Requirements:
    - Python 3.11+
    - PostgreSQL 13+ (SQLite for tests and local development)
    - SQLAlchemy 2.0+
    - Pydantic 2.5+
"""

__version__ = "0.1.0"
__author__ = "Pet Adoption Platform Team"
__license__ = "MIT"

from . import database, exceptions, models, schemas, services, utils

# Convenience imports for common usage patterns
from .database import RecordStore, SessionManager, create_engine
from .exceptions import (
    AdoptionCoreException,
    ConflictException,
    InvalidRequestException,
    NotFoundException,
    StoreException,
    UnauthenticatedException,
)
from .models import AdoptionBooking, Category, Pet, PetStatusChangeLog, User, Vendor
from .services import AdoptionAPI, OperationResult
from .utils import AdoptionSettings, StatusTransitionMode

__all__ = [
    # Version and metadata
    "__version__",
    "__author__",
    "__license__",
    # Core modules
    "database",
    "exceptions",
    "models",
    "schemas",
    "services",
    "utils",
    # Convenience imports
    "AdoptionAPI",
    "OperationResult",
    "AdoptionSettings",
    "StatusTransitionMode",
    "RecordStore",
    "SessionManager",
    "create_engine",
    "AdoptionCoreException",
    "StoreException",
    "ConflictException",
    "InvalidRequestException",
    "NotFoundException",
    "UnauthenticatedException",
    "Pet",
    "Category",
    "User",
    "Vendor",
    "AdoptionBooking",
    "PetStatusChangeLog",
]
