"""
Property listing endpoints: public search plus owner-scoped create, update and delete.
Reads are served through the listing cache; writes evict the affected cache entries.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional, List

from listing_api.models.user import User
from listing_api.services.listing import ListingService, CachedRead
from listing_api.schemas.property import (
    PropertyCreate,
    PropertyUpdate,
    PropertyQueryParams,
    PropertyEnvelope,
    PropertyListEnvelope,
    MAX_INTEGER_FILTER,
)
from listing_api.schemas.error import get_read_error_responses, get_write_error_responses
from listing_api.utils.dependencies import get_current_user, get_listing_service


router = APIRouter(prefix="/properties", tags=["Properties"])


def fetched_message(label: str, result: CachedRead) -> str:
    """Response message telling the client whether the cache served the read."""
    if result.cached:
        return f"{label} fetched successfully from cache"
    return f"{label} fetched successfully"


@router.get(
    "",
    response_model=PropertyListEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Search properties",
    description="Search listings. Every parameter is optional; absent parameters impose no constraint.",
    responses=get_read_error_responses()
)
async def search_properties(
    type_id: Optional[str] = Query(None, alias="typeId", description="Property type id"),
    state_id: Optional[str] = Query(None, alias="stateId", description="State id"),
    city_id: Optional[str] = Query(None, alias="cityId", description="City id"),
    title: Optional[str] = Query(None, description="Case-insensitive substring of the title"),
    available_from: Optional[str] = Query(
        None, alias="availableFrom", description="Listings available on or before this date"
    ),
    min_price: Optional[float] = Query(None, alias="minPrice", allow_inf_nan=False),
    max_price: Optional[float] = Query(None, alias="maxPrice", allow_inf_nan=False),
    min_bedrooms: Optional[int] = Query(None, alias="minBedrooms", ge=0, le=MAX_INTEGER_FILTER),
    min_bathrooms: Optional[int] = Query(None, alias="minBathrooms", ge=0, le=MAX_INTEGER_FILTER),
    min_rating: Optional[float] = Query(None, alias="minRating", allow_inf_nan=False),
    listing_type: Optional[str] = Query(None, alias="listingType"),
    furnished: Optional[str] = Query(None),
    amenity_ids: Optional[List[str]] = Query(
        None, alias="amenityIds", description="Listings must have every one of these amenities"
    ),
    tag_ids: Optional[List[str]] = Query(
        None, alias="tagIds", description="Listings must carry every one of these tags"
    ),
    listing_service: ListingService = Depends(get_listing_service)
) -> PropertyListEnvelope:
    """
    Search properties through the cache.

    Raises:
        InvalidReference: If an identifier parameter is malformed
        InvalidDate: If availableFrom cannot be parsed
        StoreError: If the cache or database is unavailable
    """
    params = PropertyQueryParams(
        type_id=type_id,
        state_id=state_id,
        city_id=city_id,
        title=title,
        available_from=available_from,
        min_price=min_price,
        max_price=max_price,
        min_bedrooms=min_bedrooms,
        min_bathrooms=min_bathrooms,
        min_rating=min_rating,
        listing_type=listing_type,
        furnished=furnished,
        amenity_ids=amenity_ids,
        tag_ids=tag_ids,
    )
    result = await listing_service.search_properties(params)
    return PropertyListEnvelope(message=fetched_message("Properties", result), properties=result.data)


@router.post(
    "",
    response_model=PropertyEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create property",
    description="List a new property owned by the caller. New listings start unverified.",
    responses=get_write_error_responses()
)
async def create_property(
    property_data: PropertyCreate,
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
) -> PropertyEnvelope:
    result = await listing_service.create_property(property_data, current_user)
    return PropertyEnvelope(message="Property listed successfully", property=result.property)


@router.get(
    "/mine",
    response_model=PropertyListEnvelope,
    status_code=status.HTTP_200_OK,
    summary="List my properties",
    description="Every listing owned by the caller",
    responses=get_write_error_responses()
)
async def get_my_properties(
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
) -> PropertyListEnvelope:
    result = await listing_service.get_my_properties(current_user)
    return PropertyListEnvelope(message=fetched_message("My properties", result), properties=result.data)


@router.put(
    "/{property_id}",
    response_model=PropertyEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Update property",
    description="Update a listing owned by the caller. Only supplied fields change.",
    responses=get_write_error_responses()
)
async def update_property(
    property_data: PropertyUpdate,
    property_id: str = Path(..., description="Property ID"),
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
) -> PropertyEnvelope:
    """
    Update a listing.

    Raises:
        NotFoundOrForbidden: If the listing does not exist or belongs to someone else
    """
    result = await listing_service.update_property(property_id, property_data, current_user)
    return PropertyEnvelope(message="Property updated successfully", property=result.property)


@router.delete(
    "/{property_id}",
    response_model=PropertyEnvelope,
    status_code=status.HTTP_200_OK,
    summary="Delete property",
    description="Delete a listing owned by the caller and return it",
    responses=get_write_error_responses()
)
async def delete_property(
    property_id: str = Path(..., description="Property ID"),
    current_user: User = Depends(get_current_user),
    listing_service: ListingService = Depends(get_listing_service)
) -> PropertyEnvelope:
    result = await listing_service.delete_property(property_id, current_user)
    return PropertyEnvelope(message="Property deleted successfully", property=result.property)
