"""
Repository for the reference lookup tables.
Each read is a fixed, unfiltered list ordered by name.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from listing_api.repositories.base import handle_store_failure
from listing_api.models.reference import State, City, PropertyType, PropertyTag, Amenity
from typing import List, Type, Sequence, Dict, Any
import logging

logger = logging.getLogger(__name__)


class ReferenceRepository:
    """Read access to states, cities, property types, tags and amenities."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _list(self, model: Type) -> List[Any]:
        try:
            result = await self.db.execute(select(model).order_by(model.name, model.id))
            rows = list(result.scalars().all())
            logger.debug(f"Loaded {len(rows)} {model.__tablename__}")
            return rows
        except SQLAlchemyError as e:
            await handle_store_failure(self.db, model.__tablename__, "list", e)

    async def list_states(self) -> List[State]:
        return await self._list(State)

    async def list_cities(self) -> List[City]:
        return await self._list(City)

    async def list_property_types(self) -> List[PropertyType]:
        return await self._list(PropertyType)

    async def list_property_tags(self) -> List[PropertyTag]:
        return await self._list(PropertyTag)

    async def list_amenities(self) -> List[Amenity]:
        return await self._list(Amenity)

    async def ensure(self, model: Type, rows: Sequence[Dict[str, Any]]) -> int:
        """
        Insert rows that are not present yet, matching on ``name``.
        Used by the seed command; returns the number of rows inserted.
        """
        try:
            existing = await self.db.execute(select(model.name))
            known = set(existing.scalars().all())
            new_rows = [model(**row) for row in rows if row["name"] not in known]
            self.db.add_all(new_rows)
            await self.db.commit()
            return len(new_rows)
        except SQLAlchemyError as e:
            await handle_store_failure(self.db, model.__tablename__, "seed", e)
