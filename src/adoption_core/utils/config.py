"""
Configuration management utilities.

This module provides environment variable handling with type conversion,
database URL validation, logging configuration utilities, and the
settings object the adoption core is built from at startup.
"""

import logging
import logging.config
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union
from urllib.parse import parse_qs, quote_plus, urlparse

from ..database.connection import get_database_url
from ..exceptions import DatabaseConfigException, EnvironmentException


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class LogLevel(Enum):
    """Enumeration for log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class StatusTransitionMode(str, Enum):
    """How a status change and its log entry are committed."""

    COMPENSATING = "compensating"
    TRANSACTIONAL = "transactional"


class EnvironmentConfig:
    """Utility class for handling environment variables with type conversion."""

    @staticmethod
    def get_str(
        key: str, default: Optional[str] = None, required: bool = False
    ) -> Optional[str]:
        """
        Get a string environment variable.

        Args:
            key: Environment variable key
            default: Default value if not found
            required: Whether the variable is required

        Returns:
            String value or default

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key, default)

        if required and value is None:
            raise ConfigError(f"Required environment variable '{key}' is not set", key)

        return value

    @staticmethod
    def get_int(
        key: str, default: Optional[int] = None, required: bool = False
    ) -> Optional[int]:
        """
        Get an integer environment variable.

        Raises:
            ConfigError: If required variable is missing or invalid
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(
                    f"Required environment variable '{key}' is not set", key
                )
            return default

        try:
            return int(value)
        except ValueError:
            raise ConfigError(
                f"Environment variable '{key}' must be an integer, got: {value}", key
            )

    @staticmethod
    def get_float(
        key: str, default: Optional[float] = None, required: bool = False
    ) -> Optional[float]:
        """
        Get a float environment variable.

        Raises:
            ConfigError: If required variable is missing or invalid
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(
                    f"Required environment variable '{key}' is not set", key
                )
            return default

        try:
            return float(value)
        except ValueError:
            raise ConfigError(
                f"Environment variable '{key}' must be a float, got: {value}", key
            )

    @staticmethod
    def get_bool(
        key: str, default: Optional[bool] = None, required: bool = False
    ) -> Optional[bool]:
        """
        Get a boolean environment variable.

        Raises:
            ConfigError: If required variable is missing
        """
        value = os.getenv(key)

        if value is None:
            if required:
                raise ConfigError(
                    f"Required environment variable '{key}' is not set", key
                )
            return default

        return value.lower() in ("true", "1", "yes", "on", "enabled")


class DatabaseURLValidator:
    """Utility class for validating database URLs."""

    SUPPORTED_DRIVERS = {
        "postgresql": ["postgresql", "postgresql+asyncpg"],
        "sqlite": ["sqlite", "sqlite+aiosqlite"],
    }

    @classmethod
    def validate_url(cls, url: str) -> Dict[str, Any]:
        """
        Validate a database URL and return parsed components.

        Args:
            url: Database URL to validate

        Returns:
            Dictionary with validation results and parsed components

        Raises:
            ConfigError: If URL is invalid
        """
        if not url:
            raise ConfigError("Database URL cannot be empty")

        try:
            parsed = urlparse(url)
        except ValueError as e:
            raise ConfigError(f"Invalid URL format: {e}")

        if not parsed.scheme:
            raise ConfigError(
                "Database URL must include a scheme (e.g., postgresql://)"
            )

        backend = None
        for db_type, drivers in cls.SUPPORTED_DRIVERS.items():
            if parsed.scheme in drivers:
                backend = db_type
                break

        if backend is None:
            supported_list = []
            for drivers in cls.SUPPORTED_DRIVERS.values():
                supported_list.extend(drivers)
            raise ConfigError(
                f"Unsupported database driver '{parsed.scheme}'. Supported: {', '.join(supported_list)}"
            )

        if backend != "sqlite":
            if not parsed.hostname:
                raise ConfigError("Database URL must include a hostname")
            if not parsed.path.lstrip("/"):
                raise ConfigError("Database URL must include a database name")

        return {
            "valid": True,
            "backend": backend,
            "scheme": parsed.scheme,
            "hostname": parsed.hostname,
            "port": parsed.port,
            "database": parsed.path.lstrip("/") if parsed.path else "",
            "username": parsed.username,
            "password": parsed.password,
            "query": dict(parse_qs(parsed.query)),
        }


class LoggingConfigurator:
    """Utility class for configuring logging."""

    DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @staticmethod
    def configure_basic_logging(
        level: Union[str, LogLevel] = LogLevel.INFO,
        format_string: Optional[str] = None,
        log_file: Optional[str] = None,
    ) -> None:
        """
        Configure basic logging for the application.

        Args:
            level: Logging level
            format_string: Custom format string
            log_file: Optional log file path
        """
        if isinstance(level, LogLevel):
            level = level.value

        basic_config_args: Dict[str, Any] = {
            "level": level,
            "format": format_string or LoggingConfigurator.DEFAULT_FORMAT,
            "datefmt": "%Y-%m-%d %H:%M:%S",
        }

        if log_file:
            basic_config_args["filename"] = log_file
            basic_config_args["filemode"] = "a"

        logging.basicConfig(**basic_config_args)

    @staticmethod
    def default_config(level: Union[str, LogLevel] = LogLevel.INFO) -> Dict[str, Any]:
        """Dictionary config routing the ``adoption_core`` logger to stdout."""
        if isinstance(level, LogLevel):
            level = level.value

        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": LoggingConfigurator.DEFAULT_FORMAT},
                "detailed": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(module)s - %(funcName)s - %(message)s"
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "standard",
                    "stream": "ext://sys.stdout",
                }
            },
            "loggers": {
                "adoption_core": {
                    "level": level,
                    "handlers": ["console"],
                    "propagate": False,
                }
            },
            "root": {"level": "WARNING", "handlers": ["console"]},
        }

    @staticmethod
    def configure_structured_logging(
        config_dict: Optional[Dict[str, Any]] = None,
        config_file: Optional[str] = None,
        level: Union[str, LogLevel] = LogLevel.INFO,
    ) -> None:
        """
        Configure structured logging using a dictionary or file.

        Args:
            config_dict: Logging configuration dictionary
            config_file: Path to logging configuration file
            level: Level for the default configuration
        """
        if config_file and Path(config_file).exists():
            logging.config.fileConfig(config_file)
        elif config_dict:
            logging.config.dictConfig(config_dict)
        else:
            logging.config.dictConfig(LoggingConfigurator.default_config(level))


@dataclass
class AdoptionSettings:
    """Runtime settings for the adoption core."""

    database_url: str
    pool_size: int = 10
    max_overflow: int = 20
    pool_timeout: int = 30
    echo: bool = False
    log_level: LogLevel = LogLevel.INFO
    status_transition_mode: StatusTransitionMode = StatusTransitionMode.COMPENSATING
    wait_timeout: float = 30.0

    @classmethod
    def from_env(cls) -> "AdoptionSettings":
        """
        Load settings from environment variables.

        ``DATABASE_URL`` wins; otherwise the URL is assembled from
        ``DB_HOST``, ``DB_PORT``, ``DB_NAME``, ``DB_USER`` and ``DB_PASSWORD``.

        Raises:
            EnvironmentException: If a variable is missing or malformed
            DatabaseConfigException: If the database URL is not usable
        """
        try:
            database_url = EnvironmentConfig.get_str("DATABASE_URL")
            if not database_url:
                database_url = cls._url_from_parts()

            settings = cls(
                database_url=database_url,
                pool_size=EnvironmentConfig.get_int("DB_POOL_SIZE", 10),
                max_overflow=EnvironmentConfig.get_int("DB_MAX_OVERFLOW", 20),
                pool_timeout=EnvironmentConfig.get_int("DB_POOL_TIMEOUT", 30),
                echo=EnvironmentConfig.get_bool("DB_ECHO", False),
                log_level=cls._parse_log_level(
                    EnvironmentConfig.get_str("LOG_LEVEL", "INFO")
                ),
                status_transition_mode=cls._parse_mode(
                    EnvironmentConfig.get_str("STATUS_TRANSITION_MODE", "compensating")
                ),
                wait_timeout=EnvironmentConfig.get_float("DB_WAIT_TIMEOUT", 30.0),
            )
        except ConfigError as e:
            raise EnvironmentException(
                str(e), env_var=e.key, env_value=os.getenv(e.key) if e.key else None
            ) from e

        try:
            DatabaseURLValidator.validate_url(settings.database_url)
        except ConfigError as e:
            raise DatabaseConfigException(
                str(e), config_key="DATABASE_URL", config_value=settings.database_url
            ) from e

        return settings

    @staticmethod
    def _url_from_parts() -> str:
        host = EnvironmentConfig.get_str("DB_HOST", required=True)
        port = EnvironmentConfig.get_int("DB_PORT", 5432)
        name = EnvironmentConfig.get_str("DB_NAME", "adoption")
        user = EnvironmentConfig.get_str("DB_USER", "postgres")
        password = EnvironmentConfig.get_str("DB_PASSWORD", "")
        return get_database_url(
            host=host,
            port=port,
            database=name,
            username=quote_plus(user),
            password=quote_plus(password),
        )

    @staticmethod
    def _parse_log_level(value: str) -> LogLevel:
        try:
            return LogLevel(value.upper())
        except ValueError:
            raise ConfigError(f"Unknown log level: {value}", "LOG_LEVEL")

    @staticmethod
    def _parse_mode(value: str) -> StatusTransitionMode:
        try:
            return StatusTransitionMode(value.lower())
        except ValueError:
            raise ConfigError(
                f"STATUS_TRANSITION_MODE must be 'compensating' or 'transactional', got: {value}",
                "STATUS_TRANSITION_MODE",
            )

    def configure_logging(self) -> None:
        """Install the default logging configuration at the configured level."""
        LoggingConfigurator.configure_structured_logging(level=self.log_level)
