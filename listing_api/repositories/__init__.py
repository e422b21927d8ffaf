"""
Repository layer for data access operations.
"""

from listing_api.repositories.base import BaseRepository, handle_store_failure
from listing_api.repositories.filters import FilterCompiler, FilterCompileError
from listing_api.repositories.property import PropertyRepository
from listing_api.repositories.reference import ReferenceRepository
from listing_api.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "handle_store_failure",
    "FilterCompiler",
    "FilterCompileError",
    "PropertyRepository",
    "ReferenceRepository",
    "UserRepository",
]
