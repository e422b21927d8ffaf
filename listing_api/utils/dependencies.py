"""
FastAPI dependency injection utilities for authentication, sessions and the cache.
"""

from typing import Optional
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from listing_api.cache.base import CacheStore
from listing_api.config import Settings, get_settings
from listing_api.database import get_db
from listing_api.models.user import User
from listing_api.repositories.property import PropertyRepository
from listing_api.repositories.reference import ReferenceRepository
from listing_api.services.auth import AuthService
from listing_api.services.listing import ListingService
from listing_api.utils.exceptions import UnauthorizedError


# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_cache_store(request: Request) -> CacheStore:
    """The application-wide cache store created at startup."""
    return request.app.state.cache


async def get_auth_service(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


async def get_listing_service(
    db: AsyncSession = Depends(get_db),
    cache: CacheStore = Depends(get_cache_store),
    settings: Settings = Depends(get_settings),
) -> ListingService:
    """
    Build the listing gateway for this request.

    Args:
        db: Request-scoped database session
        cache: Shared cache store
        settings: Application settings supplying the TTLs

    Returns:
        ListingService instance
    """
    return ListingService(
        property_repo=PropertyRepository(db),
        reference_repo=ReferenceRepository(db),
        cache=cache,
        property_ttl=settings.property_cache_ttl,
        reference_ttl=settings.cache_ttl,
    )


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> User:
    """
    Get current authenticated lister from the bearer token.

    Raises:
        UnauthorizedError: If no token was provided
        InvalidTokenError: If the token is invalid
        TokenExpiredError: If the token is expired
        InactiveUserError: If the account is inactive
    """
    if not credentials:
        raise UnauthorizedError("Authentication token required")

    return await auth_service.get_current_user(credentials.credentials)
