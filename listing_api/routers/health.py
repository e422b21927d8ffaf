"""
Health check endpoint reporting database and cache connectivity.
Used by Docker health checks and load balancers.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from listing_api.cache.base import CacheStore
from listing_api.config import Settings, get_settings
from listing_api.database import get_db
from listing_api.utils.dependencies import get_cache_store
import logging

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", summary="Health check")
async def health_check(
    db: AsyncSession = Depends(get_db),
    cache: CacheStore = Depends(get_cache_store),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """
    Report connectivity to both backing stores.
    Responds 200 when both answer and 503 otherwise.
    """
    try:
        await db.execute(text("SELECT 1"))
        db_healthy = True
    except SQLAlchemyError as e:
        logger.error(f"Health check database probe failed: {e}")
        db_healthy = False

    cache_healthy = await cache.ping()
    if not cache_healthy:
        logger.error("Health check cache probe failed")

    healthy = db_healthy and cache_healthy
    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "service": settings.app_name,
            "version": settings.app_version,
            "environment": settings.environment,
            "database": "connected" if db_healthy else "unavailable",
            "cache": "connected" if cache_healthy else "unavailable",
        },
    )
