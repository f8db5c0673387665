"""
Custom exceptions for the adoption core package.

This module defines the exception hierarchy and custom exceptions
used by the record store and the pet lifecycle coordinators.
"""

from .core_exceptions import (
    AdoptionCoreException,
    CompensationFailure,
    ConfigurationException,
    ConflictException,
    ConnectionException,
    DatabaseConfigException,
    EnvironmentException,
    InvalidRequestException,
    MigrationException,
    NotFoundException,
    StoreException,
    UnauthenticatedException,
    ValidationException,
    create_error_response,
    format_validation_errors,
    log_exception_context,
    translate_store_error,
)

__all__ = [
    # Exception classes
    "AdoptionCoreException",
    "StoreException",
    "ConnectionException",
    "ConflictException",
    "MigrationException",
    "CompensationFailure",
    "ValidationException",
    "InvalidRequestException",
    "NotFoundException",
    "UnauthenticatedException",
    "ConfigurationException",
    "DatabaseConfigException",
    "EnvironmentException",
    # Utility functions
    "translate_store_error",
    "format_validation_errors",
    "create_error_response",
    "log_exception_context",
]
