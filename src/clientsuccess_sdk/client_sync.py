"""
Synchronous wrapper for ClientSuccessClient.

This module provides a synchronous interface on top of the async ClientSuccessClient
to support users who need sync operations. The wrapper owns a private event loop
so the transport's connection pool survives between calls.
"""

import asyncio
from typing import Any

from .client import ClientSuccessClient
from .config import ClientSuccessSettings
from .middleware import Middleware
from .models import ActivityEvent
from .models import ClientUpsert
from .models import ContactUpsert
from .transport.base import BaseTransport
from .transport.base import UnifiedResponse


class ClientSuccessClientSync:
    """
    Synchronous wrapper for ClientSuccessClient.

    Every method mirrors the async method of the same name and raises the
    same ClientSuccessError subclasses. Do not call it from inside a running
    event loop; await ClientSuccessClient there instead.

    Example:
        with ClientSuccessClientSync(settings) as client:
            record = client.get_client(42)
            client.upsert_contact(client_id=42, attributes={"email": "ada@example.com"})
    """

    def __init__(
        self,
        settings: ClientSuccessSettings,
        transport_name: str | None = None,
        middlewares: list[Middleware] | None = None,
        transport: BaseTransport | None = None,
    ):
        """
        Initialize the synchronous client.

        Args:
            settings: API configuration settings
            transport_name: HTTP transport to use (httpx, aiohttp, requests)
            middlewares: Request/response hooks
            transport: Ready-made transport; overrides transport_name
        """
        self._loop = asyncio.new_event_loop()
        self._async_client = ClientSuccessClient(
            settings=settings,
            transport_name=transport_name,
            middlewares=middlewares,
            transport=transport,
        )

    @property
    def async_client(self) -> ClientSuccessClient:
        return self._async_client

    def _run(self, coro):
        return self._loop.run_until_complete(coro)

    def authenticate(self) -> str:
        return self._run(self._async_client.authenticate())

    def call_api(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Raw API call with the same retry and error handling as the async client."""
        return self._run(self._async_client.call_api(method, path, json, params))

    # Clients

    def get_client(self, client_id: Any) -> dict:
        return self._run(self._async_client.get_client(client_id))

    def get_client_by_external_id(self, external_id: str) -> dict:
        return self._run(self._async_client.get_client_by_external_id(external_id))

    def create_client(self, attributes: dict, custom_attributes: dict | None = None) -> dict:
        return self._run(
            self._async_client.create_client(attributes, custom_attributes)
        )

    def update_client(
        self, client_id: Any, attributes: dict, custom_attributes: dict | None = None
    ) -> dict:
        return self._run(
            self._async_client.update_client(client_id, attributes, custom_attributes)
        )

    def upsert_client(self, options: ClientUpsert | None = None, **fields: Any) -> dict:
        """
        Synchronous client upsert.

        Returns:
            dict: The freshly read client record.
        """
        return self._run(self._async_client.upsert_client(options, **fields))

    def close_client(self, client_id: Any) -> dict:
        return self._run(self._async_client.close_client(client_id))

    def delete_client(self, client_id: Any = None) -> Any:
        return self._run(self._async_client.delete_client(client_id))

    # Contacts

    def get_contact(self, client_id: Any, contact_id: Any) -> dict:
        return self._run(self._async_client.get_contact(client_id, contact_id))

    def get_contact_by_email(self, client_external_id: str, email: str) -> dict:
        return self._run(
            self._async_client.get_contact_by_email(client_external_id, email)
        )

    def create_contact(
        self, client_id: Any, attributes: dict, custom_attributes: dict | None = None
    ) -> dict:
        return self._run(
            self._async_client.create_contact(client_id, attributes, custom_attributes)
        )

    def update_contact(
        self,
        client_id: Any,
        contact_id: Any,
        attributes: dict,
        custom_attributes: dict | None = None,
    ) -> dict:
        return self._run(
            self._async_client.update_contact(
                client_id, contact_id, attributes, custom_attributes
            )
        )

    def upsert_contact(
        self, options: ContactUpsert | None = None, **fields: Any
    ) -> dict:
        """
        Synchronous contact upsert.

        Returns:
            dict: The freshly read contact record.
        """
        return self._run(self._async_client.upsert_contact(options, **fields))

    def delete_contact(self, client_id: Any = None, contact_id: Any = None) -> Any:
        return self._run(self._async_client.delete_contact(client_id, contact_id))

    # Lookups, usage, products, subscriptions

    def get_client_type_id(self, title: str) -> int:
        return self._run(self._async_client.get_client_type_id(title))

    def refresh_client_types(self) -> list[dict]:
        return self._run(self._async_client.refresh_client_types())

    def track_activity(
        self, event: ActivityEvent | None = None, **fields: Any
    ) -> UnifiedResponse:
        return self._run(self._async_client.track_activity(event, **fields))

    def get_product_id(self, name: str) -> int:
        return self._run(self._async_client.get_product_id(name))

    def create_product_type(self, name: str | None = None, recurring: bool = True) -> dict:
        return self._run(self._async_client.create_product_type(name, recurring))

    def delete_product(self, product_id: Any = None) -> Any:
        return self._run(self._async_client.delete_product(product_id))

    def get_client_active_subscriptions(self, client_id: Any) -> list[dict]:
        return self._run(self._async_client.get_client_active_subscriptions(client_id))

    def create_client_subscription(self, client_id: Any, attributes: dict) -> dict:
        return self._run(
            self._async_client.create_client_subscription(client_id, attributes)
        )

    def update_client_subscription(self, subscription: dict, attributes: dict) -> dict:
        return self._run(
            self._async_client.update_client_subscription(subscription, attributes)
        )

    def delete_client_subscription(self, subscription_id: Any) -> Any:
        return self._run(
            self._async_client.delete_client_subscription(subscription_id)
        )

    def close(self):
        """
        Synchronous cleanup of client resources.
        """
        if self._loop.is_closed():
            return
        try:
            self._run(self._async_client.aclose())
        finally:
            self._loop.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
