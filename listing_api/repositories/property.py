"""
Property repository: the persistence interface behind the listing service.
Reads and owner-scoped writes are expressed as filter documents.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, desc
from sqlalchemy.exc import SQLAlchemyError
from listing_api.repositories.base import BaseRepository
from listing_api.repositories.filters import FilterCompiler
from listing_api.models.property import Property
from listing_api.models.reference import Amenity, PropertyTag
from listing_api.utils.exceptions import InvalidReference
from typing import Optional, List, Dict, Any, Type
import uuid
import logging

logger = logging.getLogger(__name__)


property_filter = FilterCompiler(
    columns={
        "id": Property.id,
        "reference": Property.reference,
        "title": Property.title,
        "price": Property.price,
        "bedrooms": Property.bedrooms,
        "bathrooms": Property.bathrooms,
        "rating": Property.rating,
        "listing_type": Property.listing_type,
        "furnished": Property.furnished,
        "available_from": Property.available_from,
        "type_id": Property.type_id,
        "state_id": Property.state_id,
        "city_id": Property.city_id,
        "lister_id": Property.lister_id,
        "is_verified": Property.is_verified,
    },
    sets={
        "amenity_ids": (Property.amenities, Amenity.id),
        "tag_ids": (Property.tags, PropertyTag.id),
    },
)


class PropertyRepository(BaseRepository[Property]):
    """
    Repository for property listings.

    ``find``/``find_one`` return empty results for no match; ``update_one`` and
    ``delete_one`` return None when the filter matches nothing.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Property, db)

    def _select(self, filter_doc: Dict[str, Any]):
        query = select(Property)
        conditions = property_filter.compile(filter_doc)
        if conditions:
            query = query.where(*conditions)
        return query

    async def find(self, filter_doc: Dict[str, Any]) -> List[Property]:
        """
        Find every property matching the filter, newest first.

        Args:
            filter_doc: Filter document, e.g. ``{"price": {"$gte": 1000}}``

        Returns:
            Matching properties (possibly empty)
        """
        try:
            query = self._select(filter_doc).order_by(desc(Property.created_at), Property.id)
            result = await self.db.execute(query)
            properties = list(result.scalars().all())
            logger.debug(f"Found {len(properties)} properties for filter {filter_doc}")
            return properties
        except SQLAlchemyError as e:
            await self._fail("find", e)

    async def find_one(self, filter_doc: Dict[str, Any]) -> Optional[Property]:
        try:
            query = self._select(filter_doc).limit(1).execution_options(populate_existing=True)
            result = await self.db.execute(query)
            return result.scalars().first()
        except SQLAlchemyError as e:
            await self._fail("find", e)

    async def create_property(self, property_data: Dict[str, Any]) -> Property:
        """
        Persist a new property.

        Args:
            property_data: Column values plus optional ``amenity_ids``/``tag_ids`` lists

        Returns:
            The stored property with its sets loaded

        Raises:
            InvalidReference: If an amenity or tag id does not exist
        """
        data = dict(property_data)
        amenity_ids = data.pop("amenity_ids", None) or []
        tag_ids = data.pop("tag_ids", None) or []

        property_obj = Property(**data)
        property_obj.amenities = await self._resolve(Amenity, amenity_ids, "amenityIds")
        property_obj.tags = await self._resolve(PropertyTag, tag_ids, "tagIds")

        try:
            self.db.add(property_obj)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("create", e)

        logger.info(f"Created property: {property_obj.title} (ID: {property_obj.id})")
        return await self.find_one({"id": property_obj.id})

    async def update_one(self, filter_doc: Dict[str, Any], changes: Dict[str, Any]) -> Optional[Property]:
        """
        Apply ``changes`` to the first property matching the filter.

        Returns:
            The updated property, or None if nothing matched
        """
        property_obj = await self.find_one(filter_doc)
        if property_obj is None:
            logger.debug(f"No property matched update filter {filter_doc}")
            return None

        data = dict(changes)
        if "amenity_ids" in data:
            property_obj.amenities = await self._resolve(Amenity, data.pop("amenity_ids") or [], "amenityIds")
        if "tag_ids" in data:
            property_obj.tags = await self._resolve(PropertyTag, data.pop("tag_ids") or [], "tagIds")
        for field, value in data.items():
            setattr(property_obj, field, value)

        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("update", e)

        logger.info(f"Updated property {property_obj.id} fields: {sorted(changes)}")
        return await self.find_one({"id": property_obj.id})

    async def delete_one(self, filter_doc: Dict[str, Any]) -> Optional[Property]:
        """
        Delete the first property matching the filter.

        Returns:
            The deleted property as it was before deletion, or None if nothing matched
        """
        property_obj = await self.find_one(filter_doc)
        if property_obj is None:
            logger.debug(f"No property matched delete filter {filter_doc}")
            return None

        try:
            await self.db.delete(property_obj)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self._fail("delete", e)

        logger.info(f"Deleted property {property_obj.id}")
        return property_obj

    async def _resolve(self, model: Type, ids: List[uuid.UUID], field: str) -> List[Any]:
        """Load reference rows for a set field; every id must exist."""
        unique_ids = list(dict.fromkeys(ids))
        rows = await BaseRepository(model, self.db).get_many_by_ids(unique_ids)
        found = {row.id for row in rows}
        missing = [str(i) for i in unique_ids if i not in found]
        if missing:
            raise InvalidReference(field, ", ".join(missing))
        return rows
