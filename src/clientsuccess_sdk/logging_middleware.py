"""
Logging middleware for ClientSuccess SDK.

This module provides LoggingMiddleware, a built-in middleware that logs
all HTTP requests and responses with timing information. The session token
and the usage collector API key are masked before anything is logged.
"""

import logging
import time

from clientsuccess_sdk.transport.base import UnifiedResponse

logger = logging.getLogger("clientsuccess_sdk.middleware.logging")

REDACTED_KEYS = frozenset({"authorization", "api_key"})


def redact(values: dict | None) -> dict | None:
    if values is None:
        return None
    return {
        key: ("***" if key.lower() in REDACTED_KEYS else value)
        for key, value in values.items()
    }


class LoggingMiddleware:
    """
    Middleware for logging HTTP requests and responses in ClientSuccessClient.
    Uses standard Python logging.
    """

    def __init__(self, level: int = logging.INFO):
        self.level = level
        self._start_time = None

    async def on_request(
        self,
        method: str,
        url: str,
        headers: dict,
        params,
        json,
        data,
    ):
        self._start_time = time.monotonic()
        logger.log(
            self.level,
            f"Request: {method} {url} | headers={redact(headers)} | params={redact(params)} | json={json}",
        )

    async def on_response(self, response: UnifiedResponse):
        elapsed = (time.monotonic() - self._start_time) if self._start_time else None
        logger.log(
            self.level,
            f"Response: {response.status_code}"
            + (f" | elapsed={elapsed:.3f}s" if elapsed is not None else ""),
        )
