"""
Cache key derivation for listing reads.

Search keys embed the canonical JSON form of the filter document, so two
requests that resolve to the same filter share an entry regardless of
parameter order.
"""

import json
import uuid
from datetime import date, datetime
from typing import Any, Dict

PROPERTIES_PREFIX = "properties:"
MY_PROPERTIES_PREFIX = "myProperties:"

# Every search entry, used for broad invalidation after writes
PROPERTIES_PATTERN = f"{PROPERTIES_PREFIX}*"
MY_PROPERTIES_PATTERN = f"{MY_PROPERTIES_PREFIX}*"

CITIES_KEY = "cities"
STATES_KEY = "states"
PROPERTY_TYPES_KEY = "propertyTypes"
PROPERTY_TAGS_KEY = "propertyTags"
AMENITIES_KEY = "amenities"

REFERENCE_KEYS = (CITIES_KEY, STATES_KEY, PROPERTY_TYPES_KEY, PROPERTY_TAGS_KEY, AMENITIES_KEY)


def _encode(value: Any) -> str:
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    raise TypeError(f"Cannot encode {type(value).__name__} in a cache key")


def canonical_filter(filter_doc: Dict[str, Any]) -> str:
    """Serialize a filter document deterministically."""
    return json.dumps(filter_doc, sort_keys=True, separators=(",", ":"), default=_encode)


def properties_key(filter_doc: Dict[str, Any]) -> str:
    return f"{PROPERTIES_PREFIX}{canonical_filter(filter_doc)}"


def my_properties_key(lister_id: uuid.UUID) -> str:
    return f"{MY_PROPERTIES_PREFIX}{lister_id}"
