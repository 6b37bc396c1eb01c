"""
This module provides an asynchronous AuthManager class responsible for:
- exchanging the ClientSuccess username/password for a session token
- handing that token to the API caller until it is invalidated
- translating auth endpoint failures into SDK errors.

It never retries on its own: deciding when to authenticate again belongs to
the API caller, which invalidates the token after a 401.
"""

import asyncio
import logging
from typing import Optional

from clientsuccess_sdk.config import ClientSuccessSettings
from clientsuccess_sdk.exceptions import AuthenticationError
from clientsuccess_sdk.exceptions import BadRequestError
from clientsuccess_sdk.transport.base import BaseTransport

logger = logging.getLogger("clientsuccess_sdk.auth")


class AuthManager:
    """
    Holds the credential and the single live session token of one client.

    The token is None until the first authentication, is cleared by
    invalidate() when the API answers 401, and is set again by the next
    authentication. Token acquisition is serialized with a lock so concurrent
    first calls authenticate once; a 401 on one call can still clear a token
    another concurrent call has just fetched. Use one client per logical caller.

    Attributes:
        settings (ClientSuccessSettings): Configuration with credentials and base_url.
        transport (BaseTransport): HTTP transport shared with the client.
        _access_token (Optional[str]): The currently active session token.
    """

    def __init__(
        self,
        settings: ClientSuccessSettings,
        transport: BaseTransport,
    ):
        self.settings = settings
        self.transport = transport
        self._username = settings.username
        self._password = settings.password
        self._access_token: Optional[str] = None
        self._lock = asyncio.Lock()

    @property
    def access_token(self) -> Optional[str]:
        return self._access_token

    @property
    def auth_url(self) -> str:
        return f"{self.settings.base_url.rstrip('/')}/auth"

    def invalidate(self) -> None:
        """Forget the current token; the next call authenticates again."""
        if self._access_token is not None:
            logger.debug("Session token invalidated")
        self._access_token = None

    async def get_access_token(self) -> str:
        """
        Returns the live token, authenticating first if there is none.
        """
        if self._access_token:
            return self._access_token

        async with self._lock:
            if not self._access_token:
                logger.debug("No session token. Authenticating...")
                await self.authenticate()
        return self._access_token

    async def authenticate(self) -> str:
        """
        POST the credentials to the auth endpoint and store the returned token.

        Raises:
            AuthenticationError: (401) the credentials were rejected.
            BadRequestError: (400) any other failure; the upstream status and
                body are kept in ``details``.
        """
        response = await self.transport.request(
            method="POST",
            url=self.auth_url,
            json={"username": self._username, "password": self._password},
        )

        if response.ok:
            try:
                data = await response.json() or {}
            except ValueError:
                data = {}
            token = data.get("access_token") if isinstance(data, dict) else None
            if not token:
                logger.error("Auth response did not include an access_token")
                raise BadRequestError(
                    "Invalid Request",
                    details={"status": response.status_code, "message": response.text},
                )
            self._access_token = token
            logger.debug("New session token acquired")
            return token

        if response.status_code == 401:
            logger.error("ClientSuccess rejected the credentials.")
            raise AuthenticationError("Authentication Error")

        logger.error(f"Auth error: {response.status_code} - {response.text}")
        raise BadRequestError(
            "Invalid Request",
            details={"status": response.status_code, "message": response.text},
        )
