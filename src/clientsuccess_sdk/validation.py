"""
Argument checks that run before any request is issued.
"""

from typing import Any

from clientsuccess_sdk.exceptions import ValidationError

INVALID_ID_MESSAGE = "Invalid ClientSuccess ID"


def validate_id(value: Any, message: str = INVALID_ID_MESSAGE) -> int:
    """
    Check that ``value`` is a usable ClientSuccess resource ID.

    The API returns integer IDs, but callers commonly hold them as strings,
    so both ``42`` and ``"42"`` are accepted. Integral floats (``42.0``) pass;
    fractional values, non-numeric strings, booleans, zero and negatives do not.

    Returns:
        int: The normalized ID.

    Raises:
        ValidationError: (400) if the value is missing or not a positive integer.
    """
    if value is None or isinstance(value, bool):
        raise ValidationError(message)

    if isinstance(value, int):
        parsed = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(message)
        parsed = int(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if not stripped.isdigit() or not stripped.isascii():
            raise ValidationError(message)
        parsed = int(stripped)
    else:
        raise ValidationError(message)

    if parsed <= 0:
        raise ValidationError(message)
    return parsed


def is_blank(value: Any) -> bool:
    """True for ``None`` and empty or whitespace-only strings."""
    return value is None or (isinstance(value, str) and not value.strip())
