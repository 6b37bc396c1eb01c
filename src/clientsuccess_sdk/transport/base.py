import inspect
import json as jsonlib
from typing import Any

DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "clientsuccess-sdk-python",
}


class BufferedResponse:
    """
    Fully-read response for clients whose body cannot be read after the
    connection is released (aiohttp).
    """

    def __init__(self, status_code: int, text: str, headers=None):
        self.status_code = status_code
        self.text = text
        self.headers = headers or {}

    def json(self):
        return jsonlib.loads(self.text)


class UnifiedResponse:
    """
    Unified response wrapper that handles differences between HTTP clients.
    Provides consistent async interface regardless of the underlying transport.
    """

    def __init__(self, response):
        self._response = response
        self.status_code = response.status_code
        self.text = (
            response.text if hasattr(response, "text") else str(response.content)
        )
        self.headers = response.headers if hasattr(response, "headers") else {}

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    async def json(self):
        """
        Unified JSON parsing that works with both sync and async HTTP clients.

        Returns None for an empty body; ClientSuccess answers some DELETE
        calls with no content. A body that is not JSON raises ValueError.
        """
        if not self.text or not self.text.strip():
            return None
        if hasattr(self._response, "json") and callable(self._response.json):
            data = self._response.json()
            if inspect.isawaitable(data):
                data = await data
            return data
        raise NotImplementedError("Response doesn't support .json()")


class BaseTransport:
    """
    Abstract transport layer interface for ClientSuccess SDK.
    All HTTP client backends should inherit from this class.

    Supported transports:
    - httpx: Native async HTTP client
    - aiohttp: Native async HTTP client
    - requests: Sync HTTP client wrapped in async interface
    """

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
        """
        Async request method for all transports.
        Override this method in transport implementations.
        """
        raise NotImplementedError(
            "Transport implementations must override this method."
        )

    async def close(self):
        """Release connections held by the transport."""
