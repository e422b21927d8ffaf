"""
Tests for settings validation and the reference data seed.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from listing_api.config import Settings
from listing_api.models.reference import City
from listing_api.repositories.reference import ReferenceRepository
from listing_api.seed import seed_reference_data, STATES, CITIES_BY_STATE, AMENITIES


class TestSettings:

    def test_defaults(self):
        settings = Settings()

        assert settings.property_cache_ttl == 300
        assert settings.cache_ttl == 3600
        assert settings.api_v1_prefix == "/api/v1"

    def test_sync_postgres_url_is_rewritten(self):
        settings = Settings(database_url="postgresql://user:pw@db:5432/listings")

        assert settings.database_url == "postgresql+asyncpg://user:pw@db:5432/listings"

    def test_environment_must_be_known(self):
        with pytest.raises(PydanticValidationError):
            Settings(environment="qa")

    def test_cache_backend_must_be_known(self):
        with pytest.raises(PydanticValidationError):
            Settings(cache_backend="memcached")

    @pytest.mark.parametrize("field", ["property_cache_ttl", "cache_ttl"])
    def test_ttl_must_be_positive(self, field):
        with pytest.raises(PydanticValidationError):
            Settings(**{field: 0})

    def test_environment_variables_are_read(self, monkeypatch):
        monkeypatch.setenv("PROPERTY_CACHE_TTL", "60")
        monkeypatch.setenv("CACHE_BACKEND", "memory")

        settings = Settings()

        assert settings.property_cache_ttl == 60
        assert settings.cache_backend == "memory"


class TestSeed:

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, db_session):
        first = await seed_reference_data(db_session)
        second = await seed_reference_data(db_session)

        assert first["states"] == len(STATES)
        assert first["cities"] == sum(len(cities) for cities in CITIES_BY_STATE.values())
        assert all(count == 0 for count in second.values())

    @pytest.mark.asyncio
    async def test_seeded_cities_belong_to_states(self, db_session):
        await seed_reference_data(db_session)
        repo = ReferenceRepository(db_session)

        states = {s.id: s.name for s in await repo.list_states()}
        cities = await repo.list_cities()

        mumbai = next(c for c in cities if c.name == "Mumbai")
        assert isinstance(mumbai, City)
        assert states[mumbai.state_id] == "Maharashtra"
        assert len(await repo.list_amenities()) == len(AMENITIES)
