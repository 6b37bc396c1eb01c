"""
Custom exceptions for the ClientSuccess SDK.
Every failure surfaced to a caller carries an HTTP-style status code,
a short message and, when the provider sent one, its user-facing message.
"""

from typing import Any, Optional


class ClientSuccessError(Exception):
    """
    Base exception for all SDK-level API failures.

    Args:
        message (str): Short explanation of the error.
        status (int): HTTP status code (provider-supplied or synthetic).
        user_message (str | None): The provider's ``userMessage``, if any.
        details (Any | None): Optional structured details (e.g., upstream status).
    """

    status: int = 500

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        user_message: Optional[str] = None,
        details: Optional[Any] = None,
    ):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        self.user_message = user_message
        self.details = details

    def __repr__(self) -> str:
        return f"{type(self).__name__}(status={self.status}, message={self.message!r})"


class ValidationError(ClientSuccessError):
    """Raised locally, before any network call, for malformed arguments."""

    status = 400


class BadRequestError(ClientSuccessError):
    """The provider rejected the request (400)."""

    status = 400


class AuthenticationError(ClientSuccessError):
    """The auth endpoint rejected the credentials."""

    status = 401


class NotFoundError(ClientSuccessError):
    status = 404


class ExpectationFailedError(ClientSuccessError):
    """Provider-side semantic validation failure, e.g. an invalid enum value."""

    status = 417


class TooManyAttemptsError(ClientSuccessError):
    """The retry ceiling was exhausted by repeated 401 responses."""

    status = 429


class ServiceUnavailableError(ClientSuccessError):
    status = 503
