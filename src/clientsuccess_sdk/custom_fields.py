"""
Custom-field patching for Client and Contact records.

ClientSuccess stores provider-configured extension fields as an ordered array
under ``customFieldValues``; each entry carries a ``label`` and a ``value``.
Callers address them by label, e.g. ``{"Account Notes": "VIP"}``.

Labels that match no entry are ignored rather than rejected: the set of valid
labels is configured per ClientSuccess account and is not known locally. This
also means a misspelled label is silently dropped, so the miss is logged at
DEBUG on the ``clientsuccess_sdk.custom_fields`` logger.
"""

import logging
from collections.abc import Mapping
from typing import Any

logger = logging.getLogger("clientsuccess_sdk.custom_fields")

CUSTOM_FIELDS_KEY = "customFieldValues"


def patch_custom_fields(
    record: dict[str, Any],
    custom_attributes: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """
    Overwrite the value of every custom field entry whose label matches a key.

    The record is modified in place and returned. Applying the same mapping
    twice yields the same record.
    """
    if not custom_attributes:
        return record

    entries = record.get(CUSTOM_FIELDS_KEY) or []
    for label, value in custom_attributes.items():
        matched = False
        for entry in entries:
            if entry.get("label") == label:
                entry["value"] = value
                matched = True
        if not matched:
            logger.debug(f"No custom field labelled {label!r}; value ignored")

    return record
