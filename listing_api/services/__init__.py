"""
Service layer for business logic implementation.
Contains the listing gateway, authentication and error handling services.
"""

from .auth import AuthService
from .error_handler import ErrorHandlerService
from .filter_builder import FilterBuilder, build_property_filter
from .listing import ListingService, CachedRead, WriteResult

__all__ = [
    "AuthService",
    "ErrorHandlerService",
    "FilterBuilder",
    "build_property_filter",
    "ListingService",
    "CachedRead",
    "WriteResult",
]
