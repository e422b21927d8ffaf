"""
Test configuration and fixtures for the property listing API.
Provides database fixtures, an in-memory cache, test data factories and an HTTP client.
"""

import pytest
import uuid
from datetime import date
from types import SimpleNamespace
from typing import AsyncGenerator, List, Optional
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from listing_api.main import app
from listing_api.database import Base, create_tables, get_db
from listing_api.cache.memory_store import InMemoryCacheStore
from listing_api.models.user import User
from listing_api.models.property import Property
from listing_api.models.reference import State, City, PropertyType, PropertyTag, Amenity
from listing_api.repositories.user import UserRepository
from listing_api.repositories.property import PropertyRepository
from listing_api.repositories.reference import ReferenceRepository
from listing_api.services.auth import AuthService
from listing_api.services.listing import ListingService
from listing_api.utils.auth import create_access_token


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

PROPERTY_TTL = 300
REFERENCE_TTL = 3600


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """A fresh in-memory database per test."""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await create_tables(test_engine)
    yield test_engine
    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    session_factory = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def cache() -> InMemoryCacheStore:
    return InMemoryCacheStore()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def reference_repository(db_session: AsyncSession) -> ReferenceRepository:
    return ReferenceRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


@pytest.fixture
def listing_service(
    property_repository: PropertyRepository,
    reference_repository: ReferenceRepository,
    cache: InMemoryCacheStore,
) -> ListingService:
    """Listing gateway over the test database and the in-memory cache."""
    return ListingService(
        property_repo=property_repository,
        reference_repo=reference_repository,
        cache=cache,
        property_ttl=PROPERTY_TTL,
        reference_ttl=REFERENCE_TTL,
    )


@pytest.fixture
async def async_client(db_session: AsyncSession, cache: InMemoryCacheStore) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client sharing the test session and cache."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.state.cache = cache

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = "testpassword123",
        full_name: str = "Test Lister",
        is_active: bool = True
    ) -> dict:
        """Create user data dictionary."""
        return {
            "email": email or f"lister{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "full_name": full_name,
            "is_active": is_active
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **overrides) -> User:
        """Create a user with a real bcrypt hash, for login tests."""
        return await user_repo.create_user(UserFactory.create_user_data(**overrides))

    @staticmethod
    async def create_lister(
        db_session: AsyncSession,
        email: Optional[str] = None,
        is_active: bool = True
    ) -> User:
        """Create a user without hashing a password."""
        user = User(
            email=email or f"lister{uuid.uuid4().hex[:8]}@example.com",
            hashed_password="unused",
            full_name="Test Lister",
            is_active=is_active,
        )
        db_session.add(user)
        await db_session.commit()
        await db_session.refresh(user)
        return user


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(
        lister_id: uuid.UUID,
        title: str = "Test Property",
        price: float = 1000.0,
        bedrooms: int = 2,
        bathrooms: int = 1,
        rating: float = 4.0,
        listing_type: str = "rent",
        furnished: Optional[str] = "furnished",
        available_from: Optional[date] = date(2024, 1, 1),
        amenity_ids: Optional[List[uuid.UUID]] = None,
        tag_ids: Optional[List[uuid.UUID]] = None,
        **extra
    ) -> dict:
        data = {
            "reference": str(uuid.uuid4().int)[:13],
            "title": title,
            "description": "A test property",
            "price": price,
            "bedrooms": bedrooms,
            "bathrooms": bathrooms,
            "rating": rating,
            "listing_type": listing_type,
            "furnished": furnished,
            "available_from": available_from,
            "lister_id": lister_id,
            "is_verified": False,
            "amenity_ids": amenity_ids or [],
            "tag_ids": tag_ids or [],
        }
        data.update(extra)
        return data

    @staticmethod
    async def create_property(property_repo: PropertyRepository, lister_id: uuid.UUID, **overrides) -> Property:
        """Create a test property in the database."""
        return await property_repo.create_property(
            PropertyFactory.create_property_data(lister_id, **overrides)
        )


def auth_headers(user: User) -> dict:
    """Bearer authorization header for the given user."""
    token = create_access_token(user_id=user.id, email=user.email)
    return {"Authorization": f"Bearer {token}"}


# Common test fixtures
@pytest.fixture
async def lister(db_session: AsyncSession) -> User:
    return await UserFactory.create_lister(db_session, email="lister@example.com")


@pytest.fixture
async def other_lister(db_session: AsyncSession) -> User:
    return await UserFactory.create_lister(db_session, email="other@example.com")


@pytest.fixture
async def reference_data(db_session: AsyncSession) -> SimpleNamespace:
    """A small set of reference rows: one state and city, two types, tags and amenities."""
    state = State(name="Karnataka")
    db_session.add(state)
    await db_session.flush()

    city = City(name="Bengaluru", state_id=state.id)
    apartment = PropertyType(name="Apartment")
    villa = PropertyType(name="Villa")
    family = PropertyTag(name="Family")
    pets = PropertyTag(name="Pet Friendly")
    parking = Amenity(name="Parking")
    gym = Amenity(name="Gym")
    pool = Amenity(name="Swimming Pool")

    db_session.add_all([city, apartment, villa, family, pets, parking, gym, pool])
    await db_session.commit()

    return SimpleNamespace(
        state=state,
        city=city,
        apartment=apartment,
        villa=villa,
        family=family,
        pets=pets,
        parking=parking,
        gym=gym,
        pool=pool,
    )
