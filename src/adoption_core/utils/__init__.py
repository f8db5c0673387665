"""
Utility functions and helper modules.

This module provides configuration management and request validation
helpers shared by the adoption core.
"""

from .config import (
    AdoptionSettings,
    ConfigError,
    DatabaseURLValidator,
    EnvironmentConfig,
    LoggingConfigurator,
    LogLevel,
    StatusTransitionMode,
)
from .validation import parse_identifier, sanitize_string, validate_payload

__all__ = [
    # Configuration
    "AdoptionSettings",
    "ConfigError",
    "DatabaseURLValidator",
    "EnvironmentConfig",
    "LoggingConfigurator",
    "LogLevel",
    "StatusTransitionMode",
    # Validation
    "parse_identifier",
    "sanitize_string",
    "validate_payload",
]
