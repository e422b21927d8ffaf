"""
Pydantic schemas for property requests and responses.
Handles search query parameters, property create/update payloads and envelopes.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List, Union
from datetime import date, datetime
import uuid

# Largest value a 32-bit INTEGER column comparison accepts
MAX_INTEGER_FILTER = 2**31 - 1


class PropertyQueryParams(BaseModel):
    """
    Search parameters as received on the query string.

    Every field is optional. Numeric fields are coerced here; identifier and
    date fields stay as raw strings and are converted by the filter builder.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    type_id: Optional[str] = Field(None, alias="typeId")
    state_id: Optional[str] = Field(None, alias="stateId")
    city_id: Optional[str] = Field(None, alias="cityId")
    title: Optional[str] = None
    available_from: Optional[str] = Field(None, alias="availableFrom")
    min_price: Optional[float] = Field(None, alias="minPrice", allow_inf_nan=False)
    max_price: Optional[float] = Field(None, alias="maxPrice", allow_inf_nan=False)
    min_bedrooms: Optional[int] = Field(None, alias="minBedrooms", ge=0, le=MAX_INTEGER_FILTER)
    min_bathrooms: Optional[int] = Field(None, alias="minBathrooms", ge=0, le=MAX_INTEGER_FILTER)
    min_rating: Optional[float] = Field(None, alias="minRating", allow_inf_nan=False)
    listing_type: Optional[str] = Field(None, alias="listingType")
    furnished: Optional[str] = None
    amenity_ids: Optional[List[str]] = Field(None, alias="amenityIds")
    tag_ids: Optional[List[str]] = Field(None, alias="tagIds")

    @field_validator("amenity_ids", "tag_ids", mode="before")
    @classmethod
    def normalize_id_list(cls, v: Union[None, str, List[str]]):
        """Accept a single identifier or a list of them."""
        if v is None:
            return None
        if isinstance(v, str):
            return [v] if v.strip() else None
        return v

    @field_validator("type_id", "state_id", "city_id", "title", "available_from", "listing_type", "furnished")
    @classmethod
    def blank_as_absent(cls, v):
        """Empty strings impose no constraint."""
        return v or None


class PropertyBase(BaseModel):
    """Base property schema with common fields."""

    title: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="Property listing title",
        examples=["Sunny 2BR apartment near the park"]
    )

    description: Optional[str] = Field(
        None,
        max_length=5000,
        description="Detailed property description"
    )

    price: float = Field(
        ..., gt=0, allow_inf_nan=False, description="Property price in local currency", examples=[1500]
    )
    bedrooms: int = Field(0, ge=0, le=50)
    bathrooms: int = Field(0, ge=0, le=50)
    rating: float = Field(0.0, ge=0, le=5, allow_inf_nan=False)
    listing_type: str = Field(..., min_length=1, max_length=32, examples=["rent"])
    furnished: Optional[str] = Field(None, max_length=32, examples=["furnished"])
    available_from: Optional[date] = None
    type_id: Optional[uuid.UUID] = None
    state_id: Optional[uuid.UUID] = None
    city_id: Optional[uuid.UUID] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        """Validate and clean title."""
        if not v or not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()


class PropertyCreate(PropertyBase):
    """Schema for creating a new property. Owner and verification are server-assigned."""

    amenity_ids: List[uuid.UUID] = Field(default_factory=list)
    tag_ids: List[uuid.UUID] = Field(default_factory=list)


class PropertyUpdate(BaseModel):
    """Schema for updating a property. Only fields that are sent are changed."""

    title: Optional[str] = Field(None, min_length=3, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    price: Optional[float] = Field(None, gt=0, allow_inf_nan=False)
    bedrooms: Optional[int] = Field(None, ge=0, le=50)
    bathrooms: Optional[int] = Field(None, ge=0, le=50)
    rating: Optional[float] = Field(None, ge=0, le=5, allow_inf_nan=False)
    listing_type: Optional[str] = Field(None, min_length=1, max_length=32)
    furnished: Optional[str] = Field(None, max_length=32)
    available_from: Optional[date] = None
    type_id: Optional[uuid.UUID] = None
    state_id: Optional[uuid.UUID] = None
    city_id: Optional[uuid.UUID] = None
    amenity_ids: Optional[List[uuid.UUID]] = None
    tag_ids: Optional[List[uuid.UUID]] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v):
        """Reject blank titles; absent titles are left unchanged."""
        if v is None:
            return v
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()


class PropertyResponse(BaseModel):
    """Serialized property, as returned to clients and stored in the cache."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    reference: str
    title: str
    description: Optional[str] = None
    price: float
    bedrooms: int
    bathrooms: int
    rating: float
    listing_type: str
    furnished: Optional[str] = None
    available_from: Optional[date] = None
    type_id: Optional[uuid.UUID] = None
    state_id: Optional[uuid.UUID] = None
    city_id: Optional[uuid.UUID] = None
    amenity_ids: List[uuid.UUID] = Field(default_factory=list)
    tag_ids: List[uuid.UUID] = Field(default_factory=list)
    lister_id: uuid.UUID
    is_verified: bool
    created_at: datetime
    updated_at: datetime


class PropertyListEnvelope(BaseModel):
    message: str
    properties: List[PropertyResponse]


class PropertyEnvelope(BaseModel):
    message: str
    property: PropertyResponse
