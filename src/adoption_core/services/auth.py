"""
Credential lookup for users and vendors.

Credentials are compared by plain equality against the stored values.
Email is not unique in either table; when several accounts share the same
email and password the one with the lowest identity is returned.
"""

import logging
from typing import Any, Dict, Mapping, Type, Union

from pydantic import BaseModel as Schema

from ..database.store import RecordStore
from ..exceptions import UnauthenticatedException
from ..models import User, Vendor
from ..models.base import BaseModel
from ..schemas import Credentials, UserResponse, VendorResponse
from ..utils.validation import validate_payload

logger = logging.getLogger(__name__)


class CredentialGate:
    """Pass/fail account lookup by email and password."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def authenticate_user(
        self, data: Union[Credentials, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """
        Look up the user matching the given email and password.

        Raises:
            InvalidRequestException: If email or password is missing or empty
            UnauthenticatedException: If no user matches
        """
        return await self._authenticate(User, UserResponse, "user", data)

    async def authenticate_vendor(
        self, data: Union[Credentials, Mapping[str, Any]]
    ) -> Dict[str, Any]:
        """
        Look up the vendor matching the given email and password.

        Raises:
            InvalidRequestException: If email or password is missing or empty
            UnauthenticatedException: If no vendor matches
        """
        return await self._authenticate(Vendor, VendorResponse, "vendor", data)

    async def _authenticate(
        self,
        model: Type[BaseModel],
        response: Type[Schema],
        account_type: str,
        data: Union[Credentials, Mapping[str, Any]],
    ) -> Dict[str, Any]:
        credentials = validate_payload(Credentials, data)

        matches = await self.store.find_by(
            model, limit=1, email=credentials.email, password=credentials.password
        )
        if not matches:
            logger.info(f"Rejected {account_type} login for {credentials.email}")
            raise UnauthenticatedException(account_type=account_type)

        logger.info(f"Authenticated {account_type} {credentials.email}")
        return response.model_validate(matches[0]).model_dump()
