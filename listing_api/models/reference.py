"""
Reference lookup tables: states, cities, property types, tags and amenities.
These change rarely and are served from a long-lived cache.
"""

from sqlalchemy import String, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from listing_api.database import Base
import uuid


class NamedReference:
    """Mixin for lookup rows identified by a unique display name."""

    name: Mapped[str] = mapped_column(
        String(120),
        unique=True,
        nullable=False,
        index=True
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id}, name={self.name})>"


class State(NamedReference, Base):
    __tablename__ = "states"


class City(NamedReference, Base):
    __tablename__ = "cities"
    __table_args__ = (
        UniqueConstraint("state_id", "name", name="uq_cities_state_name"),
    )

    # City names only need to be unique within their state
    name: Mapped[str] = mapped_column(
        String(120),
        nullable=False,
        index=True
    )

    state_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("states.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="State the city belongs to"
    )


class PropertyType(NamedReference, Base):
    """Kind of dwelling, e.g. apartment or villa."""

    __tablename__ = "property_types"


class PropertyTag(NamedReference, Base):
    __tablename__ = "property_tags"


class Amenity(NamedReference, Base):
    __tablename__ = "amenities"
