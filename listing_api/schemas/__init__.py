"""
Pydantic schemas for request/response validation.
"""

from listing_api.schemas.property import (
    PropertyQueryParams,
    PropertyCreate,
    PropertyUpdate,
    PropertyResponse,
    PropertyListEnvelope,
    PropertyEnvelope,
)
from listing_api.schemas.reference import (
    ReferenceResponse,
    CityResponse,
    CityListEnvelope,
    StateListEnvelope,
    PropertyTypeListEnvelope,
    PropertyTagListEnvelope,
    AmenityListEnvelope,
)
from listing_api.schemas.auth import RegisterRequest, LoginRequest, LoginResponse, UserResponse
from listing_api.schemas.error import ErrorDetail, ErrorResponse, APIErrorResponse

__all__ = [
    "PropertyQueryParams",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertyResponse",
    "PropertyListEnvelope",
    "PropertyEnvelope",
    "ReferenceResponse",
    "CityResponse",
    "CityListEnvelope",
    "StateListEnvelope",
    "PropertyTypeListEnvelope",
    "PropertyTagListEnvelope",
    "AmenityListEnvelope",
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    "UserResponse",
    "ErrorDetail",
    "ErrorResponse",
    "APIErrorResponse",
]
