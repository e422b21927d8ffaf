"""
Database models for the Property Listing API.
Includes User, Property and the reference lookup tables.
"""

from listing_api.models.user import User
from listing_api.models.reference import State, City, PropertyType, PropertyTag, Amenity
from listing_api.models.property import Property, property_amenities, property_tags

# Export all models for easy importing
__all__ = [
    "User",
    "State",
    "City",
    "PropertyType",
    "PropertyTag",
    "Amenity",
    "Property",
    "property_amenities",
    "property_tags",
]
