"""
Transport layer for ClientSuccess SDK.

This module provides a unified transport interface that abstracts different HTTP clients.
The SDK supports multiple transport backends:

- httpx: Modern async HTTP client (default, recommended)
- aiohttp: Async HTTP client
- requests: Sync HTTP client wrapped in async interface

All transports implement the same interface, making them interchangeable.
The transport owns timeouts; the client never cancels a request itself.
"""

from .base import BaseTransport
from .base import UnifiedResponse
from .httpx import HttpxTransport

TRANSPORTS = ("httpx", "aiohttp", "requests")


def get_transport(name: str, timeout: float = 30.0) -> BaseTransport:
    """
    Get transport instance by name.

    Available transports:
    - httpx: Async HTTP client (default)
    - aiohttp: Async HTTP client
    - requests: Sync HTTP client (wrapped in async interface)
    """
    name = name.lower()
    if name == "httpx":
        return HttpxTransport(timeout)
    elif name == "aiohttp":
        try:
            from .aiohttp import AiohttpTransport

            return AiohttpTransport(timeout)
        except ImportError as err:
            raise ImportError(
                "aiohttp transport requires aiohttp package. Install with: pip install 'clientsuccess-sdk[aiohttp]'"
            ) from err
    elif name == "requests":
        try:
            from .requests import RequestsTransport

            return RequestsTransport(timeout)
        except ImportError as err:
            raise ImportError(
                "requests transport requires requests package. Install with: pip install 'clientsuccess-sdk[requests]'"
            ) from err
    else:
        raise ValueError(
            f"Unknown transport: {name}. Available: {', '.join(TRANSPORTS)}"
        )


__all__ = ["BaseTransport", "UnifiedResponse", "HttpxTransport", "get_transport"]
