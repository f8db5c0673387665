"""
Validation helpers used at the boundary of the lifecycle services.

Incoming payloads are validated against the Pydantic schemas here and
schema failures are converted into ``InvalidRequestException`` so the
services only ever raise the package's own exception taxonomy.
"""

import re
import unicodedata
from typing import Any, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from ..exceptions import InvalidRequestException, format_validation_errors

SchemaType = TypeVar("SchemaType", bound=BaseModel)


def sanitize_string(value: str, max_length: Optional[int] = None) -> str:
    """
    Sanitize a string by normalizing unicode and trimming whitespace.

    Args:
        value: The string to sanitize
        max_length: Maximum allowed length

    Returns:
        Sanitized string
    """
    normalized = unicodedata.normalize("NFKC", value)
    sanitized = re.sub(r"\s+", " ", normalized.strip())

    if max_length and len(sanitized) > max_length:
        sanitized = sanitized[:max_length].rstrip()

    return sanitized


def validate_payload(
    schema: Type[SchemaType], data: Union[SchemaType, Mapping[str, Any], None]
) -> SchemaType:
    """
    Validate request data against a schema.

    Args:
        schema: Pydantic model class describing the payload
        data: Raw mapping, or an already validated schema instance

    Returns:
        Validated schema instance

    Raises:
        InvalidRequestException: If the payload is missing or does not validate
    """
    if isinstance(data, schema):
        return data

    if data is None:
        raise InvalidRequestException("Request body is required")

    if not isinstance(data, Mapping):
        raise InvalidRequestException(
            f"Request body must be an object, got {type(data).__name__}"
        )

    try:
        return schema.model_validate(dict(data))
    except ValidationError as e:
        errors = format_validation_errors(e.errors())
        first_field = next(iter(errors), None)
        raise InvalidRequestException(
            f"Invalid {schema.__name__} payload",
            field=first_field,
            validation_errors=errors,
        ) from e


def parse_identifier(value: Any, field: str = "id") -> int:
    """
    Coerce a record identity taken from a request into an integer.

    Raises:
        InvalidRequestException: If the identity is missing or not a positive integer
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise InvalidRequestException(f"{field} is required", field=field)

    if isinstance(value, bool):
        raise InvalidRequestException(f"{field} must be an integer", field=field)

    try:
        identifier = int(value)
    except (TypeError, ValueError):
        raise InvalidRequestException(f"{field} must be an integer", field=field)

    if identifier <= 0:
        raise InvalidRequestException(f"{field} must be positive", field=field)

    return identifier
