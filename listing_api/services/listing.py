"""
Listing service: cache-aside reads and invalidating writes for properties
and the reference lists.

Reads check the cache first and fall back to persistence on a miss, storing
the serialized result with a TTL. Writes go straight to persistence and then
evict every cache family they can make stale.
"""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Type
from pydantic import BaseModel
import json
import time
import uuid
import logging

from listing_api.cache.base import CacheStore
from listing_api.cache import keys
from listing_api.models.user import User
from listing_api.repositories.property import PropertyRepository
from listing_api.repositories.reference import ReferenceRepository
from listing_api.schemas.property import PropertyCreate, PropertyUpdate, PropertyQueryParams, PropertyResponse
from listing_api.schemas.reference import ReferenceResponse, CityResponse
from listing_api.services.filter_builder import FilterBuilder
from listing_api.utils.exceptions import NotFoundOrForbidden, ValidationError

logger = logging.getLogger(__name__)

# Columns a client may clear by sending an explicit null
NULLABLE_UPDATE_FIELDS = frozenset(
    {"description", "furnished", "available_from", "type_id", "state_id", "city_id"}
)


@dataclass
class CachedRead:
    """Result of a cache-aside read; ``cached`` is True when served from the cache."""

    data: List[Dict[str, Any]]
    cached: bool


@dataclass
class WriteResult:
    """Serialized property after a create, update or delete."""

    property: Dict[str, Any]


def serialize(rows: Sequence[Any], schema: Type[BaseModel]) -> List[Dict[str, Any]]:
    """Convert ORM rows into JSON-ready dicts through a response schema."""
    return [schema.model_validate(row).model_dump(mode="json") for row in rows]


def make_reference(now: Optional[float] = None) -> str:
    """Human-facing listing reference derived from the creation time (epoch ms)."""
    return str(int((time.time() if now is None else now) * 1000))


class ListingService:
    """
    Gateway in front of the property and reference repositories.

    Args:
        property_repo: Persistence for property listings
        reference_repo: Persistence for reference lookup tables
        cache: Cache store shared by every request
        property_ttl: TTL in seconds for search and my-properties entries
        reference_ttl: TTL in seconds for reference list entries
    """

    def __init__(
        self,
        property_repo: PropertyRepository,
        reference_repo: ReferenceRepository,
        cache: CacheStore,
        property_ttl: int,
        reference_ttl: int,
        filter_builder: Optional[FilterBuilder] = None,
    ):
        self.property_repo = property_repo
        self.reference_repo = reference_repo
        self.cache = cache
        self.property_ttl = property_ttl
        self.reference_ttl = reference_ttl
        self.filter_builder = filter_builder or FilterBuilder()

    async def _read_through(
        self,
        key: str,
        ttl: int,
        load: Callable[[], Awaitable[Sequence[Any]]],
        schema: Type[BaseModel],
    ) -> CachedRead:
        cached_value = await self.cache.get(key)
        if cached_value is not None:
            logger.debug(f"Cache hit: {key}")
            return CachedRead(data=json.loads(cached_value), cached=True)

        logger.debug(f"Cache miss: {key}")
        data = serialize(await load(), schema)
        await self.cache.set_with_expiry(key, ttl, json.dumps(data))
        return CachedRead(data=data, cached=False)

    async def _invalidate(self, lister_id: uuid.UUID) -> None:
        removed = await self.cache.delete(keys.PROPERTIES_PATTERN)
        removed += await self.cache.delete(keys.my_properties_key(lister_id))
        logger.info(f"Evicted {removed} cache entries after write by lister {lister_id}")

    # Property reads

    async def search_properties(self, params: PropertyQueryParams) -> CachedRead:
        """
        Search properties by the given parameters.

        Raises:
            InvalidReference: If an identifier parameter is malformed
            InvalidDate: If ``availableFrom`` cannot be parsed
            StoreError: If the cache or persistence is unavailable
        """
        filter_doc = self.filter_builder.build(params)
        return await self._read_through(
            keys.properties_key(filter_doc),
            self.property_ttl,
            lambda: self.property_repo.find(filter_doc),
            PropertyResponse,
        )

    async def get_my_properties(self, current_user: User) -> CachedRead:
        """Every property listed by the caller."""
        return await self._read_through(
            keys.my_properties_key(current_user.id),
            self.property_ttl,
            lambda: self.property_repo.find({"lister_id": current_user.id}),
            PropertyResponse,
        )

    # Reference reads

    async def list_cities(self) -> CachedRead:
        return await self._read_through(
            keys.CITIES_KEY, self.reference_ttl, self.reference_repo.list_cities, CityResponse
        )

    async def list_states(self) -> CachedRead:
        return await self._read_through(
            keys.STATES_KEY, self.reference_ttl, self.reference_repo.list_states, ReferenceResponse
        )

    async def list_property_types(self) -> CachedRead:
        return await self._read_through(
            keys.PROPERTY_TYPES_KEY, self.reference_ttl, self.reference_repo.list_property_types, ReferenceResponse
        )

    async def list_property_tags(self) -> CachedRead:
        return await self._read_through(
            keys.PROPERTY_TAGS_KEY, self.reference_ttl, self.reference_repo.list_property_tags, ReferenceResponse
        )

    async def list_amenities(self) -> CachedRead:
        return await self._read_through(
            keys.AMENITIES_KEY, self.reference_ttl, self.reference_repo.list_amenities, ReferenceResponse
        )

    # Writes

    async def create_property(self, property_data: PropertyCreate, current_user: User) -> WriteResult:
        """
        Create a listing owned by the caller.

        The listing starts unverified and gets a time-based reference.

        Raises:
            InvalidReference: If an amenity or tag id does not exist
            StoreError: If persistence or the cache is unavailable
        """
        create_data = property_data.model_dump()
        create_data["reference"] = make_reference()
        create_data["lister_id"] = current_user.id
        create_data["is_verified"] = False

        property_obj = await self.property_repo.create_property(create_data)
        result = WriteResult(property=serialize([property_obj], PropertyResponse)[0])

        await self._invalidate(current_user.id)
        logger.info(f"Property created by {current_user.email}: {property_obj.id}")
        return result

    async def update_property(
        self,
        property_id: Any,
        property_data: PropertyUpdate,
        current_user: User,
    ) -> WriteResult:
        """
        Update a listing owned by the caller. Only supplied fields change.

        Raises:
            NotFoundOrForbidden: If no listing with this id belongs to the caller
            ValidationError: If the payload changes nothing
        """
        owner_filter = self._owner_filter(property_id, current_user, "update")

        changes = {
            field: value
            for field, value in property_data.model_dump(exclude_unset=True).items()
            if value is not None or field in NULLABLE_UPDATE_FIELDS
        }
        if not changes:
            raise ValidationError("No valid fields provided for update")

        property_obj = await self.property_repo.update_one(owner_filter, changes)
        if property_obj is None:
            raise NotFoundOrForbidden("update")

        result = WriteResult(property=serialize([property_obj], PropertyResponse)[0])
        await self._invalidate(current_user.id)
        return result

    async def delete_property(self, property_id: Any, current_user: User) -> WriteResult:
        """
        Delete a listing owned by the caller and return it as it was.

        Raises:
            NotFoundOrForbidden: If no listing with this id belongs to the caller
        """
        owner_filter = self._owner_filter(property_id, current_user, "delete")

        # Serialize before deletion; the instance is detached afterwards
        existing = await self.property_repo.find_one(owner_filter)
        if existing is None:
            raise NotFoundOrForbidden("delete")
        snapshot = serialize([existing], PropertyResponse)[0]

        deleted = await self.property_repo.delete_one(owner_filter)
        if deleted is None:
            raise NotFoundOrForbidden("delete")

        await self._invalidate(current_user.id)
        return WriteResult(property=snapshot)

    @staticmethod
    def _owner_filter(property_id: Any, current_user: User, action: str) -> Dict[str, Any]:
        """Scope a mutation to the caller's own listing; malformed ids look missing."""
        try:
            parsed = property_id if isinstance(property_id, uuid.UUID) else uuid.UUID(str(property_id))
        except ValueError:
            raise NotFoundOrForbidden(action)
        return {"id": parsed, "lister_id": current_user.id}
