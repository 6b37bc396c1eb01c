"""
Async-first ClientSuccess API SDK Client.

This module provides the main ClientSuccessClient class that handles all interactions
with the ClientSuccess REST API. Features include:

- Async-first design with async/await for all API operations
- Lazy authentication and transparent re-authentication after a 401
- Multiple HTTP transport backends (httpx, aiohttp, requests)
- Pluggable middleware system for request/response processing
- Create-or-update (upsert) for Clients and Contacts that skips no-op writes
- Label-keyed custom field updates
- Uniform errors: every failure is a ClientSuccessError carrying a status code

Example usage:
    from clientsuccess_sdk import ClientSuccessClient, ClientSuccessSettings

    settings = ClientSuccessSettings(username="api@example.com", password="secret")

    async with ClientSuccessClient(settings) as client:
        record = await client.upsert_client(
            attributes={"name": "Acme", "externalId": "acme-1"},
            custom_attributes={"Account Notes": "Enterprise trial"},
        )
"""

import copy
import logging
from collections.abc import Mapping
from datetime import datetime
from http import HTTPStatus
from typing import Any
from urllib.parse import quote

from tenacity import AsyncRetrying
from tenacity import retry_if_result
from tenacity import stop_after_attempt

from clientsuccess_sdk.auth import AuthManager
from clientsuccess_sdk.config import ClientSuccessSettings
from clientsuccess_sdk.custom_fields import patch_custom_fields
from clientsuccess_sdk.exceptions import BadRequestError
from clientsuccess_sdk.exceptions import ClientSuccessError
from clientsuccess_sdk.exceptions import ExpectationFailedError
from clientsuccess_sdk.exceptions import NotFoundError
from clientsuccess_sdk.exceptions import ServiceUnavailableError
from clientsuccess_sdk.exceptions import TooManyAttemptsError
from clientsuccess_sdk.exceptions import ValidationError
from clientsuccess_sdk.middleware import Middleware
from clientsuccess_sdk.models import ActivityEvent
from clientsuccess_sdk.models import ClientUpsert
from clientsuccess_sdk.models import ContactUpsert
from clientsuccess_sdk.transport import get_transport
from clientsuccess_sdk.transport.base import BaseTransport
from clientsuccess_sdk.transport.base import UnifiedResponse
from clientsuccess_sdk.validation import is_blank
from clientsuccess_sdk.validation import validate_id

logger = logging.getLogger("clientsuccess_sdk.client")

# statusId that marks a client as "Terminated" and hides it in the UI
CLIENT_STATUS_TERMINATED = 4

_STATUS_ERRORS = {
    HTTPStatus.SERVICE_UNAVAILABLE: (
        ServiceUnavailableError,
        "Service Temporarily Unavailable",
    ),
    HTTPStatus.EXPECTATION_FAILED: (ExpectationFailedError, "Expectation Failed"),
    HTTPStatus.NOT_FOUND: (NotFoundError, "Not Found"),
    HTTPStatus.BAD_REQUEST: (BadRequestError, "Bad Request"),
}


def _is_unauthorized(response: UnifiedResponse) -> bool:
    return response.status_code == HTTPStatus.UNAUTHORIZED


def _raise_too_many_attempts(retry_state) -> None:
    raise TooManyAttemptsError(
        "Too Many Requests",
        details={"attempts": retry_state.attempt_number},
    )


def _first(found: Any) -> Any:
    """Search endpoints may answer with a single record or a list of them."""
    if isinstance(found, list):
        return found[0] if found else None
    return found


async def _error_from_response(response: UnifiedResponse) -> ClientSuccessError:
    """Translate a non-2xx, non-401 response into the matching SDK error."""
    mapped = _STATUS_ERRORS.get(response.status_code)
    if mapped is None:
        return ClientSuccessError(
            response.text or f"HTTP {response.status_code}",
            status=response.status_code,
        )

    error_cls, message = mapped
    try:
        body = await response.json()
    except ValueError:
        body = response.text
    user_message = body.get("userMessage") if isinstance(body, dict) else None
    return error_cls(message, user_message=user_message, details=body)


class ClientSuccessClient:
    """
    Async-first client for the ClientSuccess API.

    One instance owns one session token and one client-type lookup table.
    Calls are meant to be awaited one after another by a single logical
    caller; see AuthManager for what happens when they are not.

    Args:
        settings (ClientSuccessSettings): SDK configuration with support for environment variables
        transport_name (str | None): Transport backend ('httpx', 'aiohttp', 'requests').
                                   Defaults to settings.transport
        middlewares (list[Middleware] | None): Optional list of middleware hooks for
                                             request/response processing
        transport (BaseTransport | None): Ready-made transport; overrides transport_name

    Example:
        from clientsuccess_sdk import ClientSuccessClient, ClientSuccessSettings
        from clientsuccess_sdk.logging_middleware import LoggingMiddleware

        settings = ClientSuccessSettings()
        client = ClientSuccessClient(settings, middlewares=[LoggingMiddleware()])

        contact = await client.upsert_contact(
            client_id=42,
            attributes={"firstName": "Ada", "lastName": "Lovelace", "email": "ada@example.com"},
        )

        await client.aclose()
    """

    def __init__(
        self,
        settings: ClientSuccessSettings,
        transport_name: str | None = None,
        middlewares: list[Middleware] | None = None,
        transport: BaseTransport | None = None,
    ):
        self.settings = settings
        self.transport = transport or get_transport(
            transport_name or settings.transport, timeout=settings.timeout
        )
        self.auth = AuthManager(settings=self.settings, transport=self.transport)
        self.middlewares = middlewares or []
        self._retry_limit = settings.retry_limit
        self._client_types: list[dict[str, Any]] | None = None

    async def __aenter__(self) -> "ClientSuccessClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    # ------------------------------------------------------------------
    # Core request loop
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return f"{self.settings.base_url.rstrip('/')}/{path.lstrip('/')}"

    async def _dispatch(
        self,
        method: str,
        url: str,
        headers: dict[str, str],
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> UnifiedResponse:
        # === MIDDLEWARE: before request ===
        for mw in self.middlewares:
            await mw.on_request(
                method=method,
                url=url,
                headers=headers,
                params=params,
                json=json,
                data=None,
            )

        response = await self.transport.request(
            method=method,
            url=url,
            headers=headers,
            params=params,
            json=json,
        )

        # === MIDDLEWARE: after response ===
        for mw in self.middlewares:
            await mw.on_response(response)

        return response

    async def _attempt(
        self,
        method: str,
        url: str,
        params: dict[str, Any] | None,
        json: Any,
    ) -> UnifiedResponse:
        """One authenticated round trip. A 401 is returned, not raised."""
        token = await self.auth.get_access_token()
        response = await self._dispatch(
            method, url, headers={"Authorization": token}, params=params, json=json
        )
        if _is_unauthorized(response):
            logger.warning(f"{method} {url} answered 401; re-authenticating")
            self.auth.invalidate()
        return response

    async def call_api(
        self,
        method: str,
        path: str,
        json: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """
        Execute one logical API call and return the parsed response body.

        The session token is acquired on demand. A 401 clears it and the call
        is attempted again, up to ``settings.retry_limit`` attempts in total.
        Every other failure is raised immediately: retrying a 4xx would not fix
        the input, and retrying a 503 could duplicate a write.

        Args:
            method (str): HTTP method, e.g. 'GET', 'PUT'
            path (str): Path relative to settings.base_url, e.g. 'clients/42'
            json (Any): Request body
            params (dict | None): Query parameters

        Returns:
            Any: The decoded JSON body, or None for an empty body.

        Raises:
            ValidationError: (400) no method given; nothing is sent.
            AuthenticationError / BadRequestError: authentication failed.
            BadRequestError, NotFoundError, ExpectationFailedError,
            ServiceUnavailableError: the matching provider status.
            TooManyAttemptsError: (429) every attempt answered 401.
            ClientSuccessError: any other non-2xx status, or a 2xx body that
                is not JSON.
        """
        if not method:
            raise ValidationError("API Method Required")

        method = method.upper()
        url = self._url(path)
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self._retry_limit),
            retry=retry_if_result(_is_unauthorized),
            retry_error_callback=_raise_too_many_attempts,
        )
        response = await retrying(self._attempt, method, url, params, json)

        if not response.ok:
            raise await _error_from_response(response)
        try:
            return await response.json()
        except ValueError as err:
            raise ClientSuccessError(
                "Invalid JSON in response body",
                status=response.status_code,
                details={"body": response.text},
            ) from err

    async def authenticate(self) -> str:
        """Force a fresh authentication and return the new session token."""
        return await self.auth.authenticate()

    async def _reconcile(
        self,
        path: str,
        attributes: Mapping[str, Any],
        custom_attributes: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        """
        Merge attributes and custom attributes onto the stored record at ``path``.

        The update endpoints only take complete records, so the record is read,
        merged on a copy and compared with what was read. An identical result
        returns the stored record without writing; otherwise the whole record
        is written back and read again.
        """
        current = await self.call_api("GET", path)
        merged = copy.deepcopy(current)
        merged.update(attributes)
        patch_custom_fields(merged, custom_attributes)

        if merged == current:
            logger.debug(f"{path} already up to date; no write issued")
            return current

        await self.call_api("PUT", path, json=merged)
        return await self.call_api("GET", path)

    # ------------------------------------------------------------------
    # Clients
    # ------------------------------------------------------------------

    async def get_client(self, client_id: Any) -> dict[str, Any]:
        """
        Get a client record by its ClientSuccess ID.

        Args:
            client_id: Positive integer ID, as int or digit string

        Returns:
            dict: The client record, including ``customFieldValues``.

        Raises:
            ValidationError: (400) client_id is malformed; nothing is sent.
            NotFoundError: (404) no such client.
        """
        client_id = validate_id(client_id)
        return await self.call_api("GET", f"clients/{client_id}")

    async def get_client_by_external_id(self, external_id: str) -> dict[str, Any]:
        """
        Find a client by the ID it has in the caller's own system.

        Raises:
            ValidationError: (400) external_id is not a non-empty string.
            NotFoundError: (404) no client carries that external ID.
        """
        if not isinstance(external_id, str) or is_blank(external_id):
            raise ValidationError("Invalid externalId for getClientByExternalId.")

        found = _first(
            await self.call_api("GET", "clients", params={"externalId": external_id})
        )
        if not found:
            raise NotFoundError("Client not found")
        return found

    async def _find_client_by_external_id(
        self, external_id: Any
    ) -> dict[str, Any] | None:
        if is_blank(external_id):
            return None
        try:
            return await self.get_client_by_external_id(str(external_id))
        except NotFoundError:
            return None

    async def _create_client_record(
        self,
        attributes: Mapping[str, Any],
        custom_attributes: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        created = await self.call_api("POST", "clients", json=dict(attributes))
        logger.info(f"Created client {created.get('id')}")
        if not custom_attributes:
            return created

        # The create endpoint ignores custom fields; they need a full update.
        return await self.update_client(created["id"], attributes, custom_attributes)

    async def create_client(
        self,
        attributes: Mapping[str, Any],
        custom_attributes: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Create a client.

        When ``attributes["externalId"]`` already belongs to a client, that
        client is updated instead, so an external ID never maps to two clients.

        Args:
            attributes: Native client attributes, e.g. {"name": "Acme", "externalId": "acme-1"}
            custom_attributes: Custom field values keyed by label

        Returns:
            dict: The created (or updated) client record. Custom field values in
            a bare create response are placeholders; re-fetch for real values.
        """
        existing = await self._find_client_by_external_id(attributes.get("externalId"))
        if existing is not None:
            logger.info(
                f"Client with externalId {attributes.get('externalId')!r} exists "
                f"({existing.get('id')}); updating instead"
            )
            return await self.update_client(
                existing["id"], attributes, custom_attributes
            )

        return await self._create_client_record(attributes, custom_attributes)

    async def update_client(
        self,
        client_id: Any,
        attributes: Mapping[str, Any],
        custom_attributes: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Update a client: read it, merge the changes and write the whole record.

        Always writes; use upsert_client to skip writes that change nothing.
        """
        client_id = validate_id(client_id)
        record = await self.get_client(client_id)
        record.update(attributes or {})
        patch_custom_fields(record, custom_attributes)
        return await self.call_api("PUT", f"clients/{client_id}", json=record)

    async def upsert_client(
        self, options: ClientUpsert | None = None, **fields: Any
    ) -> dict[str, Any]:
        """
        Create or update a client and return its freshly read record.

        Accepts a ClientUpsert or its fields as keyword arguments:

            await client.upsert_client(client_id=42, attributes={"name": "Acme"})

        Without a client_id (None or ""), a client whose externalId matches
        ``attributes["externalId"]`` is updated; if there is none, a new client
        is created. With a client_id, the client is updated, and nothing is
        written when the merged record equals the stored one.
        """
        options = options or ClientUpsert(**fields)
        attributes = options.attributes
        custom_attributes = options.custom_attributes
        client_id = options.client_id

        if is_blank(client_id):
            existing = await self._find_client_by_external_id(
                attributes.get("externalId")
            )
            if existing is None:
                created = await self._create_client_record(
                    attributes, custom_attributes
                )
                # re-read: the create response carries null custom field values
                return await self.get_client(created["id"])
            client_id = existing["id"]

        client_id = validate_id(client_id)
        return await self._reconcile(
            f"clients/{client_id}", attributes, custom_attributes
        )

    async def close_client(self, client_id: Any) -> dict[str, Any]:
        """Mark a client as Terminated, which hides it in the ClientSuccess UI."""
        return await self.update_client(
            client_id, {"statusId": CLIENT_STATUS_TERMINATED}
        )

    async def delete_client(self, client_id: Any = None) -> Any:
        """
        Permanently delete a client. Use close_client to only hide it.

        Raises:
            ValidationError: (400) client_id is missing or malformed.
            NotFoundError: (404) no such client.
        """
        if is_blank(client_id):
            raise ValidationError("Client ID Required for Deletion")
        client_id = validate_id(client_id)
        return await self.call_api("DELETE", f"clients/{client_id}")

    # ------------------------------------------------------------------
    # Contacts
    # ------------------------------------------------------------------

    @staticmethod
    def _contact_path(client_id: int, contact_id: int) -> str:
        return f"clients/{client_id}/contacts/{contact_id}/details"

    async def get_contact(self, client_id: Any, contact_id: Any) -> dict[str, Any]:
        """Get the detailed record of a contact of the given client."""
        client_id = validate_id(client_id)
        contact_id = validate_id(contact_id)
        return await self.call_api("GET", self._contact_path(client_id, contact_id))

    async def get_contact_by_email(
        self, client_external_id: str, email: str
    ) -> dict[str, Any]:
        """
        Find a contact by its email within the client with the given external ID.

        Raises:
            ValidationError: (400) either argument is missing.
            NotFoundError: (404) no such contact.
        """
        if is_blank(client_external_id) or is_blank(email):
            raise ValidationError(
                "Invalid clientExternalId or contactEmail for getContactByEmail"
            )

        found = await self.call_api(
            "GET",
            "contacts",
            params={"clientExternalId": client_external_id, "email": email},
        )
        found = _first(found)
        if not found:
            raise NotFoundError("Contact not found")
        return found

    async def _find_contact(
        self, client_id: int, email: Any
    ) -> dict[str, Any] | None:
        if is_blank(email):
            return None
        client = await self.get_client(client_id)
        external_id = client.get("externalId")
        if is_blank(external_id):
            return None
        try:
            return await self.get_contact_by_email(str(external_id), email)
        except NotFoundError:
            return None

    async def _create_contact_record(
        self,
        client_id: int,
        attributes: Mapping[str, Any],
        custom_attributes: Mapping[str, Any] | None,
    ) -> dict[str, Any]:
        created = await self.call_api(
            "POST", f"clients/{client_id}/contacts", json=dict(attributes)
        )
        logger.info(f"Created contact {created.get('id')} under client {client_id}")
        if not custom_attributes:
            return created

        return await self.update_contact(
            client_id, created["id"], attributes, custom_attributes
        )

    async def create_contact(
        self,
        client_id: Any,
        attributes: Mapping[str, Any],
        custom_attributes: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Create a contact under a client.

        Custom attributes are applied by a follow-up update, as the create
        endpoint does not set them.
        """
        client_id = validate_id(client_id)
        return await self._create_contact_record(
            client_id, attributes, custom_attributes
        )

    async def update_contact(
        self,
        client_id: Any,
        contact_id: Any,
        attributes: Mapping[str, Any],
        custom_attributes: Mapping[str, Any] | None = None,
    ) -> dict[str, Any]:
        """
        Update a contact: read its details, merge the changes and write the
        whole record. Always writes.

        Args:
            client_id: Client that owns the contact
            contact_id: Contact to update
            attributes: Native contact attributes to change
            custom_attributes: Custom field values keyed by label

        Returns:
            dict: The record as written.

        Raises:
            ValidationError: (400) an ID is malformed; nothing is sent.
            NotFoundError: (404) no such contact.
        """
        client_id = validate_id(client_id)
        contact_id = validate_id(contact_id)
        record = await self.get_contact(client_id, contact_id)
        record.update(attributes or {})
        patch_custom_fields(record, custom_attributes)
        return await self.call_api(
            "PUT", self._contact_path(client_id, contact_id), json=record
        )

    async def upsert_contact(
        self, options: ContactUpsert | None = None, **fields: Any
    ) -> dict[str, Any]:
        """
        Create or update a contact of a client and return its freshly read record.

        Accepts a ContactUpsert or its fields as keyword arguments. client_id is
        required. Without a contact_id (None or ""), the contact is looked up by
        ``attributes["email"]`` within the client (when the client has an
        externalId) and created if not found. The contact is then reconciled
        like upsert_client: no write when nothing would change.

        Raises:
            ValidationError: (400) client_id is missing or malformed.
            NotFoundError: (404) contact_id does not exist under the client.
        """
        options = options or ContactUpsert(**fields)
        attributes = options.attributes
        custom_attributes = options.custom_attributes
        client_id = validate_id(options.client_id)
        contact_id = options.contact_id

        if is_blank(contact_id):
            contact = await self._find_contact(client_id, attributes.get("email"))
            if contact is None:
                contact = await self._create_contact_record(
                    client_id, attributes, custom_attributes
                )
            contact_id = contact["id"]

        contact_id = validate_id(contact_id)
        return await self._reconcile(
            self._contact_path(client_id, contact_id), attributes, custom_attributes
        )

    async def delete_contact(self, client_id: Any = None, contact_id: Any = None) -> Any:
        """
        Delete a contact of a client.

        The contact is read first, and must belong to ``client_id``: a valid
        contact ID of another client, or a record that does not name its
        client, raises NotFoundError.

        Raises:
            ValidationError: (400) either ID is missing or malformed.
            NotFoundError: (404) the contact does not exist or belongs elsewhere.
        """
        if is_blank(client_id) or is_blank(contact_id):
            raise ValidationError("Client ID and Contact ID Required for Deletion")
        client_id = validate_id(client_id)
        contact_id = validate_id(contact_id)

        try:
            contact = await self.get_contact(client_id, contact_id)
        except NotFoundError as err:
            raise NotFoundError(
                "Client not found for contact with that id",
                user_message=err.user_message,
                details=err.details,
            ) from err

        owner = contact.get("clientId") if isinstance(contact, Mapping) else None
        if owner is None or str(owner) != str(client_id):
            raise NotFoundError("Client not found for contact with that id")

        return await self.call_api(
            "DELETE", f"clients/{client_id}/contacts/{contact_id}"
        )

    # ------------------------------------------------------------------
    # Client types
    # ------------------------------------------------------------------

    async def refresh_client_types(self) -> list[dict[str, Any]]:
        """Reload the client type list used by get_client_type_id."""
        self._client_types = await self.call_api("GET", "client-segments") or []
        return self._client_types

    async def get_client_type_id(self, title: str) -> int:
        """
        Return the ID of the client type with the given title.

        The list of client types is fetched once per client instance and then
        reused; call refresh_client_types() to pick up changes made since.
        """
        if is_blank(title):
            raise ValidationError("No clientTypeString provided in getClientTypeId")

        if self._client_types is None:
            await self.refresh_client_types()

        for client_type in self._client_types:
            if client_type.get("title") == title:
                return client_type["id"]

        raise NotFoundError(f"Requested client type {title} was not found")

    # ------------------------------------------------------------------
    # Usage events
    # ------------------------------------------------------------------

    async def track_activity(
        self, event: ActivityEvent | None = None, **fields: Any
    ) -> UnifiedResponse:
        """
        Record a usage event in the ClientSuccess usage module.

        Accepts an ActivityEvent or its fields as keyword arguments:

            await client.track_activity(client_id=42, contact_id=7, activity="Login")

        The event goes to the usage collector host, authenticated by the
        events API key rather than the session token.

        Returns:
            UnifiedResponse: The collector's response (201 on success).

        Raises:
            ValidationError: (400) events settings, activity or IDs are missing.
            NotFoundError: (404) the client or contact does not exist.
            ClientSuccessError: the collector rejected the event.
        """
        event = event or ActivityEvent(**fields)
        project_id = self.settings.events_project_id
        api_key = self.settings.events_api_key
        if not project_id or not api_key:
            raise ValidationError(
                "events_project_id and events_api_key are required for activity tracking"
            )
        if is_blank(event.activity):
            raise ValidationError("Activity Name Required")

        client_id = validate_id(event.client_id)
        contact_id = None if is_blank(event.contact_id) else validate_id(event.contact_id)

        client = await self.get_client(client_id)
        identity: dict[str, Any] = {
            "organization": {"id": client.get("id"), "name": client.get("name")},
        }

        if contact_id is not None:
            contact = await self.get_contact(client_id, contact_id)
            identity["user"] = {
                "id": contact.get("id"),
                "name": f"{contact.get('firstName')} {contact.get('lastName')}",
                "email": contact.get("email"),
            }

        payload: dict[str, Any] = {"identity": identity, "value": event.occurrences}
        if event.timestamp:
            timestamp = event.timestamp
            if isinstance(timestamp, datetime):
                timestamp = timestamp.isoformat()
            payload["keen"] = {"timestamp": timestamp}

        url = (
            f"{self.settings.usage_url.rstrip('/')}/projects/{quote(project_id, safe='')}"
            f"/events/{quote(event.activity, safe='')}"
        )
        response = await self._dispatch(
            "POST",
            url,
            headers={"Content-Type": "application/json"},
            params={"api_key": api_key},
            json=payload,
        )
        if not response.ok:
            raise ClientSuccessError(
                f"Activity tracking failed: {response.text}",
                status=response.status_code,
            )
        return response

    # ------------------------------------------------------------------
    # Products and subscriptions
    # ------------------------------------------------------------------

    async def get_product_id(self, name: str) -> int:
        """Return the ID of the active product with the given name."""
        if is_blank(name):
            raise ValidationError("Product Name Required")

        products = await self.call_api("GET", "products") or []
        for product in products:
            if product.get("active") is True and product.get("name") == name:
                return product["id"]
        raise NotFoundError("Product not found")

    async def create_product_type(
        self, name: str | None = None, recurring: bool = True
    ) -> dict[str, Any]:
        """
        Create an active product type.

        Args:
            name: Product name
            recurring: Whether subscriptions to it recur (default True)

        Raises:
            ValidationError: (400) name is missing.
        """
        if is_blank(name):
            raise ValidationError("Product Name Required")

        product = {"name": name, "recurring": recurring, "active": True}
        return await self.call_api("POST", "products", json=product)

    async def delete_product(self, product_id: Any = None) -> Any:
        """
        Delete a product type.

        Raises:
            ValidationError: (400) product_id is missing or malformed.
        """
        if is_blank(product_id):
            raise ValidationError("Product ID Required for Deletion")
        product_id = validate_id(product_id)
        return await self.call_api("DELETE", f"products/{product_id}")

    async def get_client_active_subscriptions(
        self, client_id: Any
    ) -> list[dict[str, Any]]:
        """
        Return the active subscriptions of a client.

        ClientSuccess considers a subscription active when ``isPotential`` is
        false.

        Raises:
            NotFoundError: (404) the client has no subscriptions at all, or a
                subscription lacks the isPotential attribute.
        """
        client_id = validate_id(client_id)
        subscriptions = await self.call_api(
            "GET", "subscriptions", params={"clientId": client_id}
        )
        if not subscriptions:
            raise NotFoundError("No subscriptions found for client")

        active = []
        for subscription in subscriptions:
            if "isPotential" not in subscription:
                raise NotFoundError("Subscription isPotential attribute does not exist.")
            if subscription["isPotential"] is False:
                active.append(subscription)
        return active

    async def create_client_subscription(
        self, client_id: Any, attributes: Mapping[str, Any]
    ) -> dict[str, Any]:
        """
        Create a subscription for a client.

        The caller's attributes are copied; ``clientId`` is set on the copy.

        Raises:
            ValidationError: (400) client_id is malformed; nothing is sent.
            NotFoundError: (404) no such client.
        """
        client_id = validate_id(client_id)
        subscription = {**attributes, "clientId": client_id}
        return await self.call_api("POST", "subscriptions", json=subscription)

    async def update_client_subscription(
        self, subscription: Mapping[str, Any], attributes: Mapping[str, Any]
    ) -> dict[str, Any]:
        """
        Update a subscription record, e.g. its amount or terminationDate.

        Takes the subscription as returned by the API; the merged record is
        written back whole.
        """
        if not isinstance(subscription, Mapping):
            raise ValidationError("Subscription record required for update")
        subscription_id = validate_id(subscription.get("id"))

        record = copy.deepcopy(dict(subscription))
        record.update(attributes or {})
        return await self.call_api(
            "PUT", f"subscriptions/{subscription_id}", json=record
        )

    async def delete_client_subscription(self, subscription_id: Any) -> Any:
        """
        Delete a subscription.

        ClientSuccess answers 200 even for unknown IDs; the body then carries
        an ``error`` key, and it is returned as is.
        """
        subscription_id = validate_id(subscription_id)
        return await self.call_api("DELETE", f"subscriptions/{subscription_id}")

    async def aclose(self):
        """
        Close the transport and release its connections.

        Prefer using the client as an async context manager:

            async with ClientSuccessClient(settings) as client:
                await client.get_client(42)
        """
        await self.transport.close()
