"""
Core exceptions for the adoption-core package.

This module defines the exception hierarchy used by the record store and
the pet lifecycle coordinators, together with helpers that turn exceptions
into structured error responses.
"""

import logging
import time
import traceback
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse, urlunparse

from sqlalchemy.exc import (
    DBAPIError,
    DisconnectionError,
    IntegrityError,
    InterfaceError,
    ProgrammingError,
    SQLAlchemyError,
)


class AdoptionCoreException(Exception):
    """
    Base exception class for all adoption-core package exceptions.

    Provides a consistent interface for error handling across the package.
    The ``http_status`` attribute is the external representation used by the
    boundary layer.
    """

    http_status = 500

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize the exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert exception to dictionary format.

        Returns:
            Dictionary representation of the exception
        """
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
            "timestamp": time.time(),
        }

    def get_debug_info(self) -> Dict[str, Any]:
        """Get debug information for the exception, including traceback."""
        debug_info = self.to_dict()
        formatted = traceback.format_exc()
        debug_info.update(
            {
                "traceback": (
                    formatted if formatted.strip() != "NoneType: None" else None
                ),
                "module": self.__class__.__module__,
                "class_name": self.__class__.__name__,
            }
        )
        return debug_info

    def log_error(
        self, logger: Optional[logging.Logger] = None, level: int = logging.ERROR
    ) -> None:
        """
        Log the exception with appropriate level and context.

        Args:
            logger: Logger instance to use (creates default if None)
            level: Logging level to use
        """
        if logger is None:
            logger = logging.getLogger(__name__)

        log_data = {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

        logger.log(
            level,
            f"Exception occurred: {self.message}",
            extra={"exception_data": log_data},
        )

    def __str__(self) -> str:
        """String representation of the exception."""
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message


class StoreException(AdoptionCoreException):
    """
    Base exception for record store failures.

    Every failure coming out of the store carries a machine-readable
    ``error_code`` and, once it passes through a coordinator, the name of
    the step that produced it.
    """

    def __init__(
        self,
        message: str = "Record store operation failed",
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
        original_error: Optional[Exception] = None,
        step: Optional[str] = None,
    ):
        """
        Initialize store exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Additional error details
            original_error: Original exception that caused this error
            step: Name of the operation step that failed
        """
        super().__init__(message, error_code or "STORE_ERROR", details)
        self.original_error = original_error
        self.step = step

        if original_error and "original_error" not in self.details:
            self.details["original_error"] = str(original_error)
        if step:
            self.details["step"] = step

    def annotate_step(self, step: str) -> "StoreException":
        """
        Record which step produced this failure.

        The first annotation wins so that the innermost step is preserved.
        """
        if self.step is None:
            self.step = step
            self.details["step"] = step
        return self


class ConnectionException(StoreException):
    """Exception raised when the database connection fails."""

    def __init__(
        self,
        message: str = "Database connection failed",
        database_url: Optional[str] = None,
        original_error: Optional[Exception] = None,
        step: Optional[str] = None,
    ):
        """
        Initialize connection exception.

        Args:
            message: Error message
            database_url: Database URL (will be sanitized)
            original_error: Original exception
            step: Name of the operation step that failed
        """
        details = {}
        if database_url:
            details["database_url"] = self._sanitize_url(database_url)

        super().__init__(
            message=message,
            error_code="DATABASE_CONNECTION_ERROR",
            details=details,
            original_error=original_error,
            step=step,
        )

    @staticmethod
    def _sanitize_url(url: str) -> str:
        """Remove credentials from database URL for logging."""
        try:
            parsed = urlparse(url)
            if not parsed.hostname:
                return urlunparse(parsed._replace(netloc=""))
            netloc = parsed.hostname
            if parsed.port:
                netloc = f"{netloc}:{parsed.port}"
            return urlunparse(parsed._replace(netloc=netloc))
        except (ValueError, AttributeError) as e:
            return f"[URL_PARSE_ERROR: {e}]"


class ConflictException(StoreException):
    """Exception raised when a write violates a uniqueness constraint."""

    http_status = 409

    def __init__(
        self,
        message: str = "Record already exists",
        entity: Optional[str] = None,
        original_error: Optional[Exception] = None,
        step: Optional[str] = None,
    ):
        details = {}
        if entity:
            details["entity"] = entity

        super().__init__(
            message=message,
            error_code="DUPLICATE_KEY",
            details=details,
            original_error=original_error,
            step=step,
        )


class MigrationException(StoreException):
    """Exception raised when a schema migration fails."""

    def __init__(
        self,
        message: str = "Database migration failed",
        migration_version: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if migration_version:
            details["migration_version"] = migration_version

        super().__init__(
            message=message,
            error_code="DATABASE_MIGRATION_ERROR",
            details=details,
            original_error=original_error,
        )


class CompensationFailure(StoreException):
    """
    Recorded when a compensating action itself fails.

    This is never raised to the caller. It is attached to the primary
    failure and logged, because the store is left with a log entry that has
    no confirmed status write behind it.
    """

    def __init__(
        self,
        message: str = "Compensating action failed",
        log_id: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        details = {}
        if log_id is not None:
            details["log_id"] = log_id

        super().__init__(
            message=message,
            error_code="COMPENSATION_FAILED",
            details=details,
            original_error=original_error,
            step="compensate_status_log",
        )


class ValidationException(AdoptionCoreException):
    """Base exception for data validation errors."""

    http_status = 400

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Optional[Any] = None,
        validation_errors: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize validation exception.

        Args:
            message: Error message
            field: Field that failed validation
            value: Value that failed validation
            validation_errors: Detailed validation errors
        """
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        if validation_errors:
            details["validation_errors"] = validation_errors

        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            details=details,
        )


class InvalidRequestException(ValidationException):
    """Raised when required request fields are missing or malformed."""

    def __init__(
        self,
        message: str = "Invalid request",
        field: Optional[str] = None,
        validation_errors: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(
            message=message,
            field=field,
            validation_errors=validation_errors,
        )
        self.error_code = "INVALID_REQUEST"


class NotFoundException(AdoptionCoreException):
    """Raised when a referenced record does not exist."""

    http_status = 404

    def __init__(
        self,
        message: str = "Record not found",
        entity: Optional[str] = None,
        identifier: Optional[Any] = None,
    ):
        details: Dict[str, Any] = {}
        if entity:
            details["entity"] = entity
        if identifier is not None:
            details["identifier"] = str(identifier)

        super().__init__(message=message, error_code="NOT_FOUND", details=details)


class UnauthenticatedException(AdoptionCoreException):
    """Raised when a credential lookup finds no matching account."""

    http_status = 401

    def __init__(
        self,
        message: str = "Invalid email or password",
        account_type: Optional[str] = None,
    ):
        details = {}
        if account_type:
            details["account_type"] = account_type

        super().__init__(
            message=message, error_code="UNAUTHENTICATED", details=details
        )


class ConfigurationException(AdoptionCoreException):
    """Base exception for configuration-related errors."""

    def __init__(
        self,
        message: str = "Configuration error",
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
    ):
        """
        Initialize configuration exception.

        Args:
            message: Error message
            config_key: Configuration key that caused the error
            config_value: Configuration value (will be sanitized)
        """
        details = {}
        if config_key:
            details["config_key"] = config_key
        if config_value:
            details["config_value"] = self._sanitize_config_value(
                config_key, config_value
            )

        super().__init__(
            message=message,
            error_code="CONFIGURATION_ERROR",
            details=details,
        )

    @staticmethod
    def _sanitize_config_value(key: Optional[str], value: str) -> str:
        """Sanitize configuration values to avoid exposing secrets."""
        if not key:
            return "[REDACTED]"

        sensitive_keys = ["password", "secret", "key", "token", "credential", "url"]
        if any(sensitive in key.lower() for sensitive in sensitive_keys):
            return "[REDACTED]"

        return value


class DatabaseConfigException(ConfigurationException):
    """Exception raised when database configuration is invalid."""

    def __init__(
        self,
        message: str = "Database configuration error",
        config_key: Optional[str] = None,
        config_value: Optional[str] = None,
    ):
        super().__init__(message, config_key, config_value)
        self.error_code = "DATABASE_CONFIG_ERROR"


class EnvironmentException(ConfigurationException):
    """Exception raised when environment configuration is invalid."""

    def __init__(
        self,
        message: str = "Environment configuration error",
        env_var: Optional[str] = None,
        env_value: Optional[str] = None,
    ):
        super().__init__(message, env_var, env_value)
        self.error_code = "ENVIRONMENT_ERROR"


# Utility functions for exception handling and error formatting

_UNIQUE_VIOLATION_MARKERS = (
    "unique constraint",
    "duplicate key",
    "unique violation",
)


def _is_unique_violation(error: IntegrityError) -> bool:
    """Check whether an integrity error was caused by a uniqueness constraint."""
    orig = getattr(error, "orig", None)
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code == "23505":
        return True
    message = str(orig if orig is not None else error).lower()
    return any(marker in message for marker in _UNIQUE_VIOLATION_MARKERS)


def translate_store_error(
    error: Exception, step: Optional[str] = None, entity: Optional[str] = None
) -> StoreException:
    """
    Map a driver or SQLAlchemy error onto the store error taxonomy.

    Args:
        error: The exception raised while executing a statement
        step: Name of the step that was running
        entity: Table the statement targeted

    Returns:
        StoreException subclass carrying a machine-readable error code
    """
    if isinstance(error, StoreException):
        return error.annotate_step(step) if step else error

    if isinstance(error, IntegrityError):
        if _is_unique_violation(error):
            return ConflictException(
                f"Duplicate record in {entity}" if entity else "Duplicate record",
                entity=entity,
                original_error=error,
                step=step,
            )
        return StoreException(
            "Constraint violation",
            error_code="CONSTRAINT_VIOLATION",
            details={"entity": entity} if entity else None,
            original_error=error,
            step=step,
        )

    if isinstance(error, (DisconnectionError, InterfaceError)) or (
        isinstance(error, DBAPIError) and error.connection_invalidated
    ):
        return ConnectionException(original_error=error, step=step)

    if isinstance(error, ProgrammingError):
        return StoreException(
            "Malformed statement",
            error_code="MALFORMED_STATEMENT",
            original_error=error,
            step=step,
        )

    if isinstance(error, (SQLAlchemyError, OSError)):
        return StoreException(
            "Record store operation failed",
            error_code="STORE_ERROR",
            details={"entity": entity} if entity else None,
            original_error=error,
            step=step,
        )

    return StoreException(
        "Unexpected record store error",
        error_code="STORE_ERROR",
        original_error=error,
        step=step,
    )


def format_validation_errors(errors: List[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Format Pydantic validation errors into a user-friendly structure.

    Args:
        errors: List of Pydantic validation errors

    Returns:
        Dictionary mapping field names to lists of error messages
    """
    formatted_errors: Dict[str, List[str]] = {}

    for error in errors:
        field_path = ".".join(str(loc) for loc in error.get("loc", []))
        if not field_path:
            field_path = "root"

        message = error.get("msg", "Validation error")
        error_type = error.get("type", "unknown")

        if error_type == "value_error":
            formatted_message = message
        elif error_type == "missing":
            formatted_message = "This field is required"
        elif error_type == "extra_forbidden":
            formatted_message = "Unknown field"
        else:
            formatted_message = f"{message} (type: {error_type})"

        formatted_errors.setdefault(field_path, []).append(formatted_message)

    return formatted_errors


def create_error_response(
    exception: AdoptionCoreException,
    include_debug: bool = False,
) -> Dict[str, Any]:
    """
    Create a standardized error response from an exception.

    Args:
        exception: The exception to format
        include_debug: Whether to include debug information

    Returns:
        Standardized error response dictionary
    """
    response: Dict[str, Any] = {
        "success": False,
        "error": {
            "type": exception.__class__.__name__,
            "code": exception.error_code,
            "message": exception.message,
        },
    }

    if exception.details:
        response["error"]["details"] = exception.details

    if include_debug:
        debug_info = exception.get_debug_info()
        response["debug"] = {
            "timestamp": debug_info["timestamp"],
            "module": debug_info["module"],
            "class_name": debug_info["class_name"],
        }

    return response


def log_exception_context(
    exception: Exception,
    context: Dict[str, Any],
    logger: Optional[logging.Logger] = None,
    level: int = logging.ERROR,
) -> None:
    """
    Log an exception with additional context information.

    Args:
        exception: The exception to log
        context: Additional context information
        logger: Logger instance to use
        level: Logging level
    """
    if logger is None:
        logger = logging.getLogger(__name__)

    if isinstance(exception, AdoptionCoreException):
        log_data = exception.to_dict()
        log_data["context"] = context
        logger.log(
            level,
            f"Exception with context: {exception.message}",
            extra={"exception_data": log_data},
        )
    else:
        logger.log(
            level,
            f"Unhandled exception: {str(exception)}",
            extra={
                "exception_type": exception.__class__.__name__,
                "exception_message": str(exception),
                "context": context,
            },
        )
