"""
Reference lookup endpoints: cities, states, property types, tags and amenities.
"""

from fastapi import APIRouter, Depends, status

from listing_api.routers.properties import fetched_message
from listing_api.services.listing import ListingService
from listing_api.schemas.reference import (
    CityListEnvelope,
    StateListEnvelope,
    PropertyTypeListEnvelope,
    PropertyTagListEnvelope,
    AmenityListEnvelope,
)
from listing_api.schemas.error import get_error_responses
from listing_api.utils.dependencies import get_listing_service


router = APIRouter(tags=["Reference Data"])


@router.get(
    "/cities",
    response_model=CityListEnvelope,
    status_code=status.HTTP_200_OK,
    summary="List cities",
    responses=get_error_responses(500, 503)
)
async def list_cities(listing_service: ListingService = Depends(get_listing_service)) -> CityListEnvelope:
    result = await listing_service.list_cities()
    return CityListEnvelope(message=fetched_message("Cities", result), cities=result.data)


@router.get(
    "/states",
    response_model=StateListEnvelope,
    status_code=status.HTTP_200_OK,
    summary="List states",
    responses=get_error_responses(500, 503)
)
async def list_states(listing_service: ListingService = Depends(get_listing_service)) -> StateListEnvelope:
    result = await listing_service.list_states()
    return StateListEnvelope(message=fetched_message("States", result), states=result.data)


@router.get(
    "/property-types",
    response_model=PropertyTypeListEnvelope,
    status_code=status.HTTP_200_OK,
    summary="List property types",
    responses=get_error_responses(500, 503)
)
async def list_property_types(
    listing_service: ListingService = Depends(get_listing_service)
) -> PropertyTypeListEnvelope:
    result = await listing_service.list_property_types()
    return PropertyTypeListEnvelope(
        message=fetched_message("Property Types", result), property_types=result.data
    )


@router.get(
    "/property-tags",
    response_model=PropertyTagListEnvelope,
    status_code=status.HTTP_200_OK,
    summary="List property tags",
    responses=get_error_responses(500, 503)
)
async def list_property_tags(
    listing_service: ListingService = Depends(get_listing_service)
) -> PropertyTagListEnvelope:
    result = await listing_service.list_property_tags()
    return PropertyTagListEnvelope(
        message=fetched_message("Property Tags", result), property_tags=result.data
    )


@router.get(
    "/amenities",
    response_model=AmenityListEnvelope,
    status_code=status.HTTP_200_OK,
    summary="List amenities",
    responses=get_error_responses(500, 503)
)
async def list_amenities(listing_service: ListingService = Depends(get_listing_service)) -> AmenityListEnvelope:
    result = await listing_service.list_amenities()
    return AmenityListEnvelope(message=fetched_message("Amenities", result), amenities=result.data)
