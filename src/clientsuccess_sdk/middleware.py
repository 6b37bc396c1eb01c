"""
Middleware interface for ClientSuccessClient.

This module defines the `Middleware` protocol used in ClientSuccess SDK.
It allows users to hook into the request/response lifecycle of every API
round trip performed by the `ClientSuccessClient`, including the repeated
attempts made after a 401 forces re-authentication.

Any class that implements this interface can be passed to the client as a middleware.

Current implementations:
- Logging (see: LoggingMiddleware) - logs requests/responses with timing
"""

from typing import Any
from typing import Protocol

from clientsuccess_sdk.transport.base import UnifiedResponse


class Middleware(Protocol):
    async def on_request(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, Any] | None,
        json: Any,
        data: Any,
    ) -> None:
        """
        Called before the HTTP request is executed.

        Headers may be modified in place; raising aborts the call.

        Args:
            method (str): HTTP method, e.g., 'GET', 'PUT'
            url (str): Full URL of the request
            headers (dict): Request headers (modifiable)
            params (dict | None): Query parameters
            json (Any): JSON body payload
            data (Any): Alternative body (e.g., for form-data)
        """

    async def on_response(self, response: UnifiedResponse) -> None:
        """
        Called after the HTTP response is received (but before it's parsed).

        Args:
            response (UnifiedResponse): Unified response object from transport layer
        """
