"""
Pydantic schemas for reference lookup lists.
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
import uuid


class ReferenceResponse(BaseModel):
    """A lookup row: state, property type, tag or amenity."""

    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    name: str


class CityResponse(ReferenceResponse):
    state_id: Optional[uuid.UUID] = None


class CityListEnvelope(BaseModel):
    message: str
    cities: List[CityResponse]


class StateListEnvelope(BaseModel):
    message: str
    states: List[ReferenceResponse]


class PropertyTypeListEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    property_types: List[ReferenceResponse] = Field(alias="propertyTypes")


class PropertyTagListEnvelope(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    message: str
    property_tags: List[ReferenceResponse] = Field(alias="propertyTags")


class AmenityListEnvelope(BaseModel):
    message: str
    amenities: List[ReferenceResponse]
