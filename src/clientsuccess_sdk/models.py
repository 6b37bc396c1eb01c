"""
Option models for the multi-argument ClientSuccess operations.

Records returned by the API stay plain dicts: update endpoints need the whole
object written back, including attributes the SDK does not model. These models
only describe what a caller passes in. Fields accept both snake_case and the
API's camelCase spelling, e.g. ``ClientUpsert(clientId=42)``.

IDs are left untyped here; ``validate_id`` checks them and raises the SDK's
400 ``ValidationError``.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic.alias_generators import to_camel


class _Options(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ClientUpsert(_Options):
    """
    Arguments of ClientSuccessClient.upsert_client.

    Attributes:
        client_id: Existing client to update. None or "" creates, unless
            ``attributes["externalId"]`` matches an existing client.
        attributes: Native client attributes (name, externalId, statusId, ...).
        custom_attributes: Custom field values keyed by custom field label.
    """

    client_id: Any = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    custom_attributes: dict[str, Any] = Field(default_factory=dict)


class ContactUpsert(_Options):
    """
    Arguments of ClientSuccessClient.upsert_contact.

    Attributes:
        client_id: Client that owns the contact (required).
        contact_id: Existing contact to update. None or "" creates, unless
            ``attributes["email"]`` matches a contact of the client.
        attributes: Native contact attributes (firstName, lastName, email, ...).
        custom_attributes: Custom field values keyed by custom field label.
    """

    client_id: Any = None
    contact_id: Any = None
    attributes: dict[str, Any] = Field(default_factory=dict)
    custom_attributes: dict[str, Any] = Field(default_factory=dict)


class ActivityEvent(_Options):
    """
    One usage event for ClientSuccessClient.track_activity.

    Attributes:
        client_id: Client the usage is logged under.
        contact_id: Contact the activity originated from (optional).
        activity: Event name, e.g. "Login".
        occurrences: How many times the activity happened (default 1).
        timestamp: When it happened; sent as the collector's keen timestamp.
    """

    client_id: Any = None
    contact_id: Any = None
    activity: str | None = None
    occurrences: int = 1
    timestamp: str | datetime | None = None
