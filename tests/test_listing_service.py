"""
Tests for the listing gateway: cache-aside reads, write invalidation and
owner-scoped mutations.
"""

import json
import pytest
import uuid
from unittest.mock import AsyncMock

from listing_api.cache import keys
from listing_api.cache.memory_store import InMemoryCacheStore
from listing_api.models.user import User
from listing_api.repositories.property import PropertyRepository
from listing_api.repositories.reference import ReferenceRepository
from listing_api.schemas.property import PropertyCreate, PropertyUpdate, PropertyQueryParams
from listing_api.services.listing import ListingService, make_reference
from listing_api.utils.exceptions import NotFoundOrForbidden, StoreError, ValidationError, InvalidReference
from tests.conftest import PropertyFactory, PROPERTY_TTL, REFERENCE_TTL


def new_listing(**overrides) -> PropertyCreate:
    data = {
        "title": "Two bedroom flat",
        "price": 1500,
        "bedrooms": 2,
        "bathrooms": 1,
        "listing_type": "rent",
        "furnished": "furnished",
    }
    data.update(overrides)
    return PropertyCreate(**data)


class TestCacheAsideReads:

    @pytest.mark.asyncio
    async def test_second_search_is_served_from_cache(
        self, listing_service: ListingService, property_repository: PropertyRepository, lister: User
    ):
        await PropertyFactory.create_property(property_repository, lister.id, price=1200)
        property_repository.find = AsyncMock(wraps=property_repository.find)
        params = PropertyQueryParams(minPrice=1000)

        first = await listing_service.search_properties(params)
        second = await listing_service.search_properties(params)

        assert first.cached is False
        assert second.cached is True
        assert first.data == second.data
        assert property_repository.find.await_count == 1

    @pytest.mark.asyncio
    async def test_miss_populates_cache_with_property_ttl(
        self, property_repository: PropertyRepository, reference_repository: ReferenceRepository, lister: User
    ):
        cache = InMemoryCacheStore()
        cache.set_with_expiry = AsyncMock(wraps=cache.set_with_expiry)
        service = ListingService(property_repository, reference_repository, cache, PROPERTY_TTL, REFERENCE_TTL)

        await service.search_properties(PropertyQueryParams(minBedrooms=2))

        key, ttl, value = cache.set_with_expiry.await_args.args
        assert key == keys.properties_key({"bedrooms": {"$gte": 2}})
        assert ttl == PROPERTY_TTL
        assert json.loads(value) == []

    @pytest.mark.asyncio
    async def test_cached_payload_is_returned_without_persistence(
        self, listing_service: ListingService, cache: InMemoryCacheStore, property_repository: PropertyRepository
    ):
        payload = [{"id": str(uuid.uuid4()), "title": "Cached listing"}]
        await cache.set_with_expiry(keys.properties_key({}), 60, json.dumps(payload))
        property_repository.find = AsyncMock()

        result = await listing_service.search_properties(PropertyQueryParams())

        assert result.cached is True
        assert result.data == payload
        property_repository.find.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_cached_list_is_a_hit(
        self, listing_service: ListingService, cache: InMemoryCacheStore, reference_repository: ReferenceRepository
    ):
        await cache.set_with_expiry(keys.STATES_KEY, 60, "[]")
        reference_repository.list_states = AsyncMock()

        result = await listing_service.list_states()

        assert result.cached is True
        assert result.data == []
        reference_repository.list_states.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_reference_lists_use_reference_ttl(
        self, property_repository: PropertyRepository, reference_repository: ReferenceRepository, reference_data
    ):
        cache = InMemoryCacheStore()
        cache.set_with_expiry = AsyncMock(wraps=cache.set_with_expiry)
        service = ListingService(property_repository, reference_repository, cache, PROPERTY_TTL, REFERENCE_TTL)

        cities = await service.list_cities()

        key, ttl, _ = cache.set_with_expiry.await_args.args
        assert (key, ttl) == (keys.CITIES_KEY, REFERENCE_TTL)
        assert cities.data == [
            {"id": str(reference_data.city.id), "name": "Bengaluru", "state_id": str(reference_data.state.id)}
        ]

    @pytest.mark.asyncio
    async def test_every_reference_list_has_its_own_key(
        self, listing_service: ListingService, cache: InMemoryCacheStore, reference_data
    ):
        await listing_service.list_cities()
        await listing_service.list_states()
        await listing_service.list_property_types()
        await listing_service.list_property_tags()
        await listing_service.list_amenities()

        assert sorted(cache.keys()) == sorted(keys.REFERENCE_KEYS)

        amenities = await listing_service.list_amenities()
        assert amenities.cached is True
        assert [a["name"] for a in amenities.data] == ["Gym", "Parking", "Swimming Pool"]

    @pytest.mark.asyncio
    async def test_my_properties_are_cached_per_lister(
        self, listing_service: ListingService, cache: InMemoryCacheStore, property_repository: PropertyRepository,
        lister: User, other_lister: User
    ):
        await PropertyFactory.create_property(property_repository, lister.id, title="Mine")
        await PropertyFactory.create_property(property_repository, other_lister.id, title="Theirs")

        mine = await listing_service.get_my_properties(lister)
        theirs = await listing_service.get_my_properties(other_lister)

        assert [p["title"] for p in mine.data] == ["Mine"]
        assert [p["title"] for p in theirs.data] == ["Theirs"]
        assert keys.my_properties_key(lister.id) in cache.keys()
        assert keys.my_properties_key(other_lister.id) in cache.keys()

    @pytest.mark.asyncio
    async def test_cache_failure_propagates(self, listing_service: ListingService, cache: InMemoryCacheStore):
        cache.get = AsyncMock(side_effect=StoreError("cache"))

        with pytest.raises(StoreError):
            await listing_service.list_states()


class TestCreate:

    @pytest.mark.asyncio
    async def test_create_assigns_owner_and_unverified(self, listing_service: ListingService, lister: User):
        result = await listing_service.create_property(new_listing(), lister)

        assert result.property["lister_id"] == str(lister.id)
        assert result.property["is_verified"] is False
        assert result.property["reference"].isdigit()

    @pytest.mark.asyncio
    async def test_create_then_read_by_owner(self, listing_service: ListingService, lister: User):
        # Warm the owner's cache entry first so a stale read would show up
        assert (await listing_service.get_my_properties(lister)).data == []

        created = await listing_service.create_property(new_listing(), lister)
        mine = await listing_service.get_my_properties(lister)

        assert mine.cached is False
        assert mine.data == [created.property]

    @pytest.mark.asyncio
    async def test_create_evicts_search_results(self, listing_service: ListingService, lister: User):
        before = await listing_service.search_properties(PropertyQueryParams())
        assert before.data == []

        await listing_service.create_property(new_listing(title="Fresh listing"), lister)
        after = await listing_service.search_properties(PropertyQueryParams())

        assert after.cached is False
        assert [p["title"] for p in after.data] == ["Fresh listing"]

    @pytest.mark.asyncio
    async def test_create_keeps_reference_lists_cached(
        self, listing_service: ListingService, cache: InMemoryCacheStore, lister: User, reference_data
    ):
        await listing_service.list_amenities()

        await listing_service.create_property(new_listing(amenity_ids=[reference_data.gym.id]), lister)

        assert keys.AMENITIES_KEY in cache.keys()

    @pytest.mark.asyncio
    async def test_create_with_unknown_tag(self, listing_service: ListingService, lister: User):
        with pytest.raises(InvalidReference):
            await listing_service.create_property(new_listing(tag_ids=[uuid.uuid4()]), lister)

    def test_reference_is_epoch_milliseconds(self):
        assert make_reference(1700000000.1234) == "1700000000123"


class TestOwnerScopedWrites:

    @pytest.mark.asyncio
    async def test_update_changes_only_supplied_fields(self, listing_service: ListingService, lister: User):
        created = await listing_service.create_property(new_listing(), lister)

        result = await listing_service.update_property(
            created.property["id"], PropertyUpdate(price=1800), lister
        )

        assert result.property["price"] == 1800
        assert result.property["title"] == created.property["title"]
        assert result.property["reference"] == created.property["reference"]

    @pytest.mark.asyncio
    async def test_update_can_clear_optional_field(self, listing_service: ListingService, lister: User):
        created = await listing_service.create_property(new_listing(), lister)

        result = await listing_service.update_property(
            created.property["id"], PropertyUpdate(furnished=None), lister
        )

        assert result.property["furnished"] is None

    @pytest.mark.asyncio
    async def test_update_without_changes_is_rejected(self, listing_service: ListingService, lister: User):
        created = await listing_service.create_property(new_listing(), lister)

        with pytest.raises(ValidationError):
            await listing_service.update_property(created.property["id"], PropertyUpdate(), lister)

    @pytest.mark.asyncio
    async def test_non_owner_and_missing_look_identical(
        self, listing_service: ListingService, lister: User, other_lister: User
    ):
        created = await listing_service.create_property(new_listing(), lister)

        with pytest.raises(NotFoundOrForbidden) as not_owner:
            await listing_service.update_property(created.property["id"], PropertyUpdate(price=1), other_lister)
        with pytest.raises(NotFoundOrForbidden) as missing:
            await listing_service.update_property(str(uuid.uuid4()), PropertyUpdate(price=1), lister)
        with pytest.raises(NotFoundOrForbidden) as malformed:
            await listing_service.update_property("not-an-id", PropertyUpdate(price=1), lister)

        for exc_info in (not_owner, missing, malformed):
            assert exc_info.value.status_code == 404
            assert exc_info.value.detail == (
                "Property not found or you don't have permission to update it"
            )

    @pytest.mark.asyncio
    async def test_update_evicts_stale_search(self, listing_service: ListingService, lister: User):
        created = await listing_service.create_property(new_listing(price=1000), lister)
        params = PropertyQueryParams(maxPrice=1200)
        assert len((await listing_service.search_properties(params)).data) == 1

        await listing_service.update_property(created.property["id"], PropertyUpdate(price=5000), lister)

        assert (await listing_service.search_properties(params)).data == []

    @pytest.mark.asyncio
    async def test_delete_returns_deleted_record(self, listing_service: ListingService, lister: User):
        created = await listing_service.create_property(new_listing(), lister)
        await listing_service.get_my_properties(lister)

        deleted = await listing_service.delete_property(created.property["id"], lister)

        assert deleted.property == created.property
        assert (await listing_service.get_my_properties(lister)).data == []

    @pytest.mark.asyncio
    async def test_delete_by_non_owner(self, listing_service: ListingService, lister: User, other_lister: User):
        created = await listing_service.create_property(new_listing(), lister)

        with pytest.raises(NotFoundOrForbidden) as exc_info:
            await listing_service.delete_property(created.property["id"], other_lister)

        assert exc_info.value.detail.endswith("permission to delete it")
        assert len((await listing_service.get_my_properties(lister)).data) == 1

    @pytest.mark.asyncio
    async def test_failed_write_does_not_evict(
        self, listing_service: ListingService, cache: InMemoryCacheStore, lister: User, other_lister: User
    ):
        created = await listing_service.create_property(new_listing(), lister)
        await listing_service.search_properties(PropertyQueryParams())

        with pytest.raises(NotFoundOrForbidden):
            await listing_service.delete_property(created.property["id"], other_lister)

        assert keys.properties_key({}) in cache.keys()
