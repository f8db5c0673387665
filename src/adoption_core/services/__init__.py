"""
Pet lifecycle services.

The coordinators in this package issue ordered operations against the
record store; ``AdoptionAPI`` exposes them as request/response operations.
"""

from .auth import CredentialGate
from .boundary import AdoptionAPI, OperationResult
from .catalog import AccountService, BookingService, CategoryService
from .deletion import CascadingDeletionCoordinator
from .pets import PetService
from .status import StatusTransitionCoordinator

__all__ = [
    "AdoptionAPI",
    "OperationResult",
    "PetService",
    "StatusTransitionCoordinator",
    "CascadingDeletionCoordinator",
    "CredentialGate",
    "CategoryService",
    "BookingService",
    "AccountService",
]
