"""
Property model for rental and sale listings.
Handles listing data, reference links, and amenity/tag sets.
"""

from sqlalchemy import (
    String, Text, Integer, Float, Numeric, Boolean, Date, ForeignKey, Table, Column, Uuid
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from listing_api.database import Base
from listing_api.models.reference import Amenity, PropertyTag
from datetime import date
import uuid
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from listing_api.models.user import User


property_amenities = Table(
    "property_amenities",
    Base.metadata,
    Column("property_id", Uuid(as_uuid=True), ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
    Column("amenity_id", Uuid(as_uuid=True), ForeignKey("amenities.id", ondelete="CASCADE"), primary_key=True),
)

property_tags = Table(
    "property_tags_link",
    Base.metadata,
    Column("property_id", Uuid(as_uuid=True), ForeignKey("properties.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", Uuid(as_uuid=True), ForeignKey("property_tags.id", ondelete="CASCADE"), primary_key=True),
)


class Property(Base):
    """
    Property listing owned by exactly one lister.
    Amenities and tags are sets; search filters can require a superset of them.
    """

    __tablename__ = "properties"

    # Creation timestamp in epoch milliseconds, kept as a public listing reference
    reference: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        index=True,
        comment="Creation-time derived listing reference"
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Property listing title"
    )

    description: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Detailed property description"
    )

    price: Mapped[float] = mapped_column(
        Numeric(precision=12, scale=2, asdecimal=False),
        nullable=False,
        index=True,
        comment="Property price in local currency"
    )

    bedrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        index=True
    )

    bathrooms: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0
    )

    rating: Mapped[float] = mapped_column(
        Float,
        nullable=False,
        default=0.0,
        comment="Average listing rating"
    )

    listing_type: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        index=True,
        comment="Listing type, e.g. rent or sale"
    )

    furnished: Mapped[Optional[str]] = mapped_column(
        String(32),
        nullable=True,
        comment="Furnishing status, e.g. furnished or unfurnished"
    )

    available_from: Mapped[Optional[date]] = mapped_column(
        Date,
        nullable=True,
        index=True,
        comment="Date from which the property can be occupied"
    )

    type_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("property_types.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    state_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("states.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    city_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("cities.id", ondelete="SET NULL"),
        nullable=True,
        index=True
    )

    lister_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="ID of the lister who owns this property"
    )

    is_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        index=True
    )

    lister: Mapped["User"] = relationship(
        "User",
        back_populates="properties",
        lazy="noload"
    )

    amenities: Mapped[List[Amenity]] = relationship(
        Amenity,
        secondary=property_amenities,
        lazy="selectin",
        order_by=Amenity.name
    )

    tags: Mapped[List[PropertyTag]] = relationship(
        PropertyTag,
        secondary=property_tags,
        lazy="selectin",
        order_by=PropertyTag.name
    )

    def __repr__(self) -> str:
        """String representation of the property."""
        return f"<Property(id={self.id}, title={self.title[:30]}..., price={self.price})>"

    @property
    def amenity_ids(self) -> List[uuid.UUID]:
        return [amenity.id for amenity in self.amenities]

    @property
    def tag_ids(self) -> List[uuid.UUID]:
        return [tag.id for tag in self.tags]
