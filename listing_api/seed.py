"""
Reference data seeding for fresh databases.
Seeding is idempotent: rows are matched by name and only missing ones are inserted.
"""

from typing import Dict, List
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from listing_api.models.reference import State, City, PropertyType, PropertyTag, Amenity
from listing_api.repositories.reference import ReferenceRepository
import logging

logger = logging.getLogger(__name__)

STATES = ["Maharashtra", "Karnataka", "Tamil Nadu", "Delhi", "Telangana"]

CITIES_BY_STATE: Dict[str, List[str]] = {
    "Maharashtra": ["Mumbai", "Pune", "Nagpur"],
    "Karnataka": ["Bengaluru", "Mysuru"],
    "Tamil Nadu": ["Chennai", "Coimbatore"],
    "Delhi": ["New Delhi"],
    "Telangana": ["Hyderabad"],
}

PROPERTY_TYPES = ["Apartment", "Independent House", "Villa", "Studio", "Penthouse"]

PROPERTY_TAGS = ["Family", "Bachelors", "Pet Friendly", "Near Metro", "Newly Built"]

AMENITIES = ["Parking", "Gym", "Swimming Pool", "Power Backup", "Lift", "Security", "Garden"]


async def seed_reference_data(session: AsyncSession) -> Dict[str, int]:
    """
    Insert the default reference rows that are not present yet.

    Returns:
        Number of rows inserted per table
    """
    repo = ReferenceRepository(session)
    inserted = {
        "states": await repo.ensure(State, [{"name": name} for name in STATES]),
        "property_types": await repo.ensure(PropertyType, [{"name": name} for name in PROPERTY_TYPES]),
        "property_tags": await repo.ensure(PropertyTag, [{"name": name} for name in PROPERTY_TAGS]),
        "amenities": await repo.ensure(Amenity, [{"name": name} for name in AMENITIES]),
    }

    result = await session.execute(select(State.id, State.name))
    state_ids = {name: state_id for state_id, name in result.all()}
    city_rows = [
        {"name": city, "state_id": state_ids[state]}
        for state, cities in CITIES_BY_STATE.items()
        for city in cities
    ]
    inserted["cities"] = await repo.ensure(City, city_rows)

    logger.info(f"Seeded reference data: {inserted}")
    return inserted
