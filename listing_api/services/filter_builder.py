"""
Translation of property search parameters into a persistence filter document.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional
import re
import uuid
import logging

from listing_api.schemas.property import PropertyQueryParams
from listing_api.utils.exceptions import InvalidReference, InvalidDate

logger = logging.getLogger(__name__)


def parse_identifier(field: str, value: Any) -> uuid.UUID:
    """
    Parse an identifier into the persistence layer's UUID type.

    Raises:
        InvalidReference: If the value is not a well-formed UUID
    """
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value).strip())
    except (ValueError, AttributeError, TypeError):
        raise InvalidReference(field, value)


def parse_date(field: str, value: str) -> date:
    """
    Parse an ISO-8601 date (or datetime, truncated to its date).

    Raises:
        InvalidDate: If the value cannot be parsed
    """
    text = value.strip()
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        raise InvalidDate(field, value)


class FilterBuilder:
    """
    Builds property filter documents from search parameters.

    The result contains exactly one entry per constrained dimension and
    nothing else, so an empty parameter set yields ``{}`` (match all).
    """

    def build(self, params: PropertyQueryParams) -> Dict[str, Any]:
        filter_doc: Dict[str, Any] = {}

        for field, alias in (("type_id", "typeId"), ("state_id", "stateId"), ("city_id", "cityId")):
            value = getattr(params, field)
            if value is not None:
                filter_doc[field] = parse_identifier(alias, value)

        if params.title:
            filter_doc["title"] = {"$regex": re.escape(params.title), "$options": "i"}

        if params.available_from:
            filter_doc["available_from"] = {"$lte": parse_date("availableFrom", params.available_from)}

        price = self._range(params.min_price, params.max_price)
        if price:
            filter_doc["price"] = price

        for field, minimum in (
            ("bedrooms", params.min_bedrooms),
            ("bathrooms", params.min_bathrooms),
            ("rating", params.min_rating),
        ):
            if minimum is not None:
                filter_doc[field] = {"$gte": minimum}

        if params.listing_type:
            filter_doc["listing_type"] = params.listing_type
        if params.furnished:
            filter_doc["furnished"] = params.furnished

        amenity_ids = self._identifier_list("amenityIds", params.amenity_ids)
        if amenity_ids:
            filter_doc["amenity_ids"] = {"$all": amenity_ids}

        tag_ids = self._identifier_list("tagIds", params.tag_ids)
        if tag_ids:
            filter_doc["tag_ids"] = {"$all": tag_ids}

        logger.debug(f"Built property filter: {filter_doc}")
        return filter_doc

    @staticmethod
    def _range(minimum: Optional[float], maximum: Optional[float]) -> Dict[str, float]:
        bounds: Dict[str, float] = {}
        if minimum is not None:
            bounds["$gte"] = minimum
        if maximum is not None:
            bounds["$lte"] = maximum
        return bounds

    @staticmethod
    def _identifier_list(field: str, values: Optional[List[str]]) -> List[uuid.UUID]:
        if not values:
            return []
        return [parse_identifier(field, value) for value in values if value and value.strip()]


def build_property_filter(params: PropertyQueryParams) -> Dict[str, Any]:
    """Build the filter document for a property search."""
    return FilterBuilder().build(params)
