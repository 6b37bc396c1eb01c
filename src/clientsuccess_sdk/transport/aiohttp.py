"""
Aiohttp transport implementation for ClientSuccess SDK.

This module provides AiohttpTransport, an alternative async HTTP client for the SDK.
The response body is read while the connection is still open and handed back as a
BufferedResponse, so callers can parse it after the request context has exited.
"""

from typing import Any

import aiohttp

from .base import DEFAULT_HEADERS
from .base import BaseTransport
from .base import BufferedResponse
from .base import UnifiedResponse


class AiohttpTransport(BaseTransport):
    """
    Async transport implementation using aiohttp.ClientSession.
    """

    def __init__(self, timeout: float = 30.0):
        self._timeout = timeout
        self._session: aiohttp.ClientSession | None = None

    async def request(
        self,
        method: str,
        url: str,
        headers: dict[str, str] | None = None,
        params: dict[str, Any] | None = None,
        json: Any = None,
        data: Any = None,
        timeout: float | None = None,
    ) -> UnifiedResponse:
        # Session must be created inside the running loop
        if self._session is None:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self._timeout),
                headers=DEFAULT_HEADERS,
            )

        timeout_obj = aiohttp.ClientTimeout(total=timeout or self._timeout)
        async with self._session.request(
            method=method,
            url=url,
            headers=headers,
            params=params,
            json=json,
            data=data,
            timeout=timeout_obj,
        ) as response:
            text = await response.text()
            return UnifiedResponse(
                BufferedResponse(response.status, text, dict(response.headers))
            )

    async def close(self):
        if self._session:
            await self._session.close()
            self._session = None
