"""
Test utilities and fake objects for ClientSuccess SDK.

This module provides mock transport implementations, fake response objects
and an in-memory stand-in for the ClientSuccess API, so the SDK's business
logic can be tested without making real HTTP requests.
"""

import copy
import itertools
import json as jsonlib
import uuid
from urllib.parse import urlsplit

from clientsuccess_sdk.transport.base import BaseTransport
from clientsuccess_sdk.transport.base import UnifiedResponse

API_BASE = "https://api.test/v1/"
USAGE_BASE = "https://usage.test/collector/1.0.0"


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text=None):
        self.status_code = status_code
        if text is None:
            text = "" if json_data is None else jsonlib.dumps(json_data)
        self._text = text

    @property
    def text(self):
        return self._text

    def json(self):
        return jsonlib.loads(self._text)


class MockTransport(BaseTransport):
    """Mock transport for testing."""

    def __init__(self, handler=None):
        """
        Initialize mock transport.

        Args:
            handler: Optional async function that takes the recorded call and returns
                   a FakeResponse. If not provided, every call answers 200 with {}.
        """
        self.handler = handler
        self.request_calls = []
        self.closed = False

    @property
    def request_count(self):
        """Number of requests made to this transport."""
        return len(self.request_calls)

    def calls_to(self, suffix):
        return [c for c in self.request_calls if c["url"].endswith(suffix)]

    async def request(
        self,
        method,
        url,
        headers=None,
        params=None,
        json=None,
        data=None,
        timeout=None,
    ) -> UnifiedResponse:
        call = {
            "method": method,
            "url": url,
            "headers": dict(headers or {}),
            "params": params,
            "json": copy.deepcopy(json),
        }
        self.request_calls.append(call)

        if self.handler:
            return UnifiedResponse(await self.handler(call))
        return UnifiedResponse(FakeResponse(200, {}))

    async def close(self):
        self.closed = True


def auth_ok(token="token-1"):
    return FakeResponse(200, {"access_token": token})


class FakeClientSuccessAPI(BaseTransport):
    """
    In-memory ClientSuccess provider used as a transport.

    Implements the endpoints the SDK talks to with the provider's quirks:
    - tokens issued by POST auth; unknown tokens get 401
    - create responses carry null custom field values
    - an unknown statusId is rejected with 417
    - contact details are served regardless of the client in the path
    - deleting an unknown subscription answers 200 with an "error" key
    """

    CLIENT_FIELDS = ("Account Notes", "Tier")
    CONTACT_FIELDS = ("Nickname", "External ID")
    STATUS_IDS = {1, 2, 3, 4}

    def __init__(self, username="user", password="pass"):
        self.username = username
        self.password = password
        self.tokens = set()
        self.clients = {}
        self.contacts = {}
        self.products = {}
        self.subscriptions = {}
        self.client_types = [
            {"id": 3600, "title": "Business"},
            {"id": 3601, "title": "Enterprise"},
        ]
        self.usage_events = []
        self.calls = []
        self.closed = False
        self._ids = itertools.count(1001)

    # -- helpers used by tests -------------------------------------------

    def expire_tokens(self):
        self.tokens.clear()

    @property
    def auth_calls(self):
        return sum(1 for method, path in self.calls if path == "auth")

    def writes(self):
        return [
            (method, path)
            for method, path in self.calls
            if method in ("POST", "PUT", "DELETE") and path != "auth"
        ]

    def add_client(self, **attributes):
        client_id = next(self._ids)
        record = {
            "id": client_id,
            "name": None,
            "externalId": None,
            "statusId": 1,
            "customFieldValues": [
                {"label": label, "value": None} for label in self.CLIENT_FIELDS
            ],
        }
        record.update(attributes)
        self.clients[client_id] = record
        return copy.deepcopy(record)

    def add_contact(self, client_id, **attributes):
        contact_id = next(self._ids)
        record = {
            "id": contact_id,
            "clientId": client_id,
            "firstName": None,
            "lastName": None,
            "email": None,
            "customFieldValues": [
                {"label": label, "value": None} for label in self.CONTACT_FIELDS
            ],
        }
        record.update(attributes)
        self.contacts[contact_id] = record
        return copy.deepcopy(record)

    # -- transport ---------------------------------------------------------

    async def request(
        self,
        method,
        url,
        headers=None,
        params=None,
        json=None,
        data=None,
        timeout=None,
    ) -> UnifiedResponse:
        return UnifiedResponse(
            self._handle(method, url, headers or {}, params or {}, copy.deepcopy(json))
        )

    async def close(self):
        self.closed = True

    def _handle(self, method, url, headers, params, body):
        if url.startswith(USAGE_BASE):
            return self._usage(url, params, body)

        path = url[len(API_BASE):] if url.startswith(API_BASE) else urlsplit(url).path
        self.calls.append((method, path))

        if path == "auth":
            if body == {"username": self.username, "password": self.password}:
                token = str(uuid.uuid4())
                self.tokens.add(token)
                return FakeResponse(200, {"access_token": token})
            return FakeResponse(401, {"userMessage": "Bad credentials"})

        if headers.get("Authorization") not in self.tokens:
            return FakeResponse(401, {"userMessage": "Token expired"})

        parts = path.split("/")
        try:
            return self._route(method, parts, params, body)
        except KeyError:
            return _not_found()

    def _route(self, method, parts, params, body):
        head = parts[0]
        if head == "clients" and len(parts) == 1:
            if method == "GET":
                return self._find_client(params)
            if method == "POST":
                return self._create_client(body)
        if head == "clients" and len(parts) == 2:
            return self._client(method, int(parts[1]), body)
        if head == "clients" and len(parts) == 3 and method == "POST":
            return self._create_contact(int(parts[1]), body)
        if head == "clients" and len(parts) >= 4:
            return self._contact(method, int(parts[1]), int(parts[3]), body)
        if head == "contacts" and method == "GET":
            return self._find_contact(params)
        if head == "client-segments" and method == "GET":
            return FakeResponse(200, self.client_types)
        if head == "products":
            return self._product(method, parts, body)
        if head == "subscriptions":
            return self._subscription(method, parts, params, body)
        return _not_found()

    # -- clients -----------------------------------------------------------

    def _find_client(self, params):
        external_id = params.get("externalId")
        for record in self.clients.values():
            if external_id and record.get("externalId") == external_id:
                return FakeResponse(200, record)
        return _not_found()

    def _create_client(self, body):
        if not self._valid_status(body):
            return _expectation_failed()
        attributes = {k: v for k, v in body.items() if k != "customFieldValues"}
        record = self.add_client(**attributes)
        return FakeResponse(200, record)

    def _client(self, method, client_id, body):
        record = self.clients[client_id]
        if method == "GET":
            return FakeResponse(200, record)
        if method == "PUT":
            if not self._valid_status(body):
                return _expectation_failed()
            body["id"] = client_id
            self.clients[client_id] = body
            return FakeResponse(200, body)
        if method == "DELETE":
            del self.clients[client_id]
            return FakeResponse(204)
        return _not_found()

    def _valid_status(self, body):
        return "statusId" not in body or body["statusId"] in self.STATUS_IDS

    # -- contacts ----------------------------------------------------------

    def _create_contact(self, client_id, body):
        if client_id not in self.clients:
            return _not_found()
        attributes = {k: v for k, v in body.items() if k != "customFieldValues"}
        record = self.add_contact(client_id, **attributes)
        return FakeResponse(200, record)

    def _contact(self, method, client_id, contact_id, body):
        record = self.contacts[contact_id]
        if method == "GET":
            return FakeResponse(200, record)
        if method == "PUT":
            body["id"] = contact_id
            self.contacts[contact_id] = body
            return FakeResponse(200, body)
        if method == "DELETE":
            if record["clientId"] != client_id:
                return _not_found()
            del self.contacts[contact_id]
            return FakeResponse(200, {})
        return _not_found()

    def _find_contact(self, params):
        external_id = params.get("clientExternalId")
        email = params.get("email")
        for client in self.clients.values():
            if client.get("externalId") != external_id:
                continue
            for contact in self.contacts.values():
                if contact["clientId"] == client["id"] and contact.get("email") == email:
                    return FakeResponse(200, contact)
        return FakeResponse(200, text="")

    # -- products and subscriptions -----------------------------------------

    def _product(self, method, parts, body):
        if method == "GET" and len(parts) == 1:
            return FakeResponse(200, list(self.products.values()))
        if method == "POST" and len(parts) == 1:
            product_id = next(self._ids)
            self.products[product_id] = dict(body, id=product_id)
            return FakeResponse(200, self.products[product_id])
        if method == "DELETE" and len(parts) == 2:
            del self.products[int(parts[1])]
            return FakeResponse(204)
        return _not_found()

    def _subscription(self, method, parts, params, body):
        if method == "GET" and len(parts) == 1:
            client_id = str(params.get("clientId"))
            return FakeResponse(
                200,
                [
                    s
                    for s in self.subscriptions.values()
                    if str(s.get("clientId")) == client_id
                ],
            )
        if method == "POST" and len(parts) == 1:
            if body.get("clientId") not in self.clients:
                return _not_found()
            subscription_id = next(self._ids)
            self.subscriptions[subscription_id] = dict(body, id=subscription_id)
            return FakeResponse(200, self.subscriptions[subscription_id])
        subscription_id = int(parts[1])
        if method == "PUT":
            self.subscriptions[subscription_id] = body
            return FakeResponse(200, body)
        if method == "DELETE":
            if self.subscriptions.pop(subscription_id, None) is None:
                return FakeResponse(200, {"error": "Subscription not found"})
            return FakeResponse(200, {})
        return _not_found()

    # -- usage collector ----------------------------------------------------

    def _usage(self, url, params, body):
        if params.get("api_key") != "events-key":
            return FakeResponse(401, text="Invalid API key")
        self.usage_events.append({"url": url, "body": body})
        return FakeResponse(201, {"created": True})


def _not_found():
    return FakeResponse(404, {"userMessage": "The requested resource was not found"})


def _expectation_failed():
    return FakeResponse(417, {"userMessage": "Invalid statusId"})
