"""
ClientSuccess SDK - Async-first SDK for the ClientSuccess REST API.

This SDK provides:
- Async client for Clients, Contacts, subscriptions, products and usage events
- Synchronous wrapper for sync operations
- Create-or-update (upsert) that skips writes which change nothing
- Transparent re-authentication when the session token expires
- Multiple HTTP transport support
- Middleware support
"""

from .auth import AuthManager
from .client import ClientSuccessClient
from .client_sync import ClientSuccessClientSync
from .config import ClientSuccessSettings
from .custom_fields import patch_custom_fields
from .exceptions import AuthenticationError
from .exceptions import BadRequestError
from .exceptions import ClientSuccessError
from .exceptions import ExpectationFailedError
from .exceptions import NotFoundError
from .exceptions import ServiceUnavailableError
from .exceptions import TooManyAttemptsError
from .exceptions import ValidationError
from .middleware import Middleware
from .models import ActivityEvent
from .models import ClientUpsert
from .models import ContactUpsert
from .validation import validate_id

__version__ = "1.0.0"

__all__ = [
    "ClientSuccessClient",
    "ClientSuccessClientSync",
    "ClientSuccessSettings",
    "AuthManager",
    "ClientSuccessError",
    "ValidationError",
    "BadRequestError",
    "AuthenticationError",
    "NotFoundError",
    "ExpectationFailedError",
    "TooManyAttemptsError",
    "ServiceUnavailableError",
    "Middleware",
    "ClientUpsert",
    "ContactUpsert",
    "ActivityEvent",
    "patch_custom_fields",
    "validate_id",
]
