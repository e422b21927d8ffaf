"""
FastAPI application entry point.
Main application setup and configuration.
"""

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from contextlib import asynccontextmanager
from sqlalchemy.exc import SQLAlchemyError
from pydantic import ValidationError as PydanticValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from listing_api.config import settings
from listing_api.cache import build_cache_store
from listing_api.database import test_database_connection, close_db_connection
from listing_api.routers import auth_router, health_router, properties_router, references_router
from listing_api.utils.exceptions import APIException
from listing_api.services.error_handler import ErrorHandlerService
from listing_api.middleware import RequestTimingMiddleware

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Opens the shared cache store and checks both backing stores on startup.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Environment: {settings.environment}, cache backend: {settings.cache_backend}")

    app.state.cache = build_cache_store(settings)

    if not await app.state.cache.ping():
        logger.error("Failed to reach the cache store on startup")

    if not await test_database_connection():
        logger.error("Failed to connect to database on startup")

    yield

    logger.info("Shutting down application")
    await app.state.cache.close()
    await close_db_connection()


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    Property listing API with a cache-aside read path.

    ## Features

    * **Search**: Filter listings by location, price, bedrooms, amenities, tags and more
    * **Listings**: Listers create, update and delete their own properties
    * **Reference data**: Cities, states, property types, tags and amenities
    * **Caching**: Reads are served from Redis with TTLs; writes evict stale entries

    ## Authentication

    Write endpoints require a bearer token from `/api/v1/auth/login`.
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Authentication", "description": "Lister registration and login"},
        {"name": "Properties", "description": "Property search and listing management"},
        {"name": "Reference Data", "description": "Lookup lists used to filter and describe properties"},
        {"name": "Health", "description": "Backing store connectivity"},
    ],
    lifespan=lifespan,
)

app.add_middleware(
    RequestTimingMiddleware,
    slow_request_threshold=settings.slow_request_threshold,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID", "X-Processing-Time"],
)

app.include_router(auth_router, prefix=settings.api_v1_prefix)
app.include_router(properties_router, prefix=settings.api_v1_prefix)
app.include_router(references_router, prefix=settings.api_v1_prefix)
app.include_router(health_router, prefix=settings.api_v1_prefix)


# Global exception handlers using ErrorHandlerService
@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException):
    """Handle custom API exceptions with structured error responses."""
    return ErrorHandlerService.handle_api_exception(exc, request)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors with detailed field information."""
    return ErrorHandlerService.handle_validation_error(exc.errors(), request)


@app.exception_handler(PydanticValidationError)
async def pydantic_validation_exception_handler(request: Request, exc: PydanticValidationError):
    return ErrorHandlerService.handle_validation_error(exc.errors(), request)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database errors with appropriate error responses."""
    return ErrorHandlerService.handle_database_error(exc, request)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    """Handle HTTP exceptions such as unknown routes."""
    if isinstance(exc, APIException):
        return ErrorHandlerService.handle_api_exception(exc, request)
    return ErrorHandlerService.handle_http_exception(exc, request)


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions with secure error responses."""
    return ErrorHandlerService.handle_unexpected_error(exc, request)


@app.get("/", tags=["Health"])
async def root():
    """Basic API information."""
    return {
        "message": f"Welcome to {settings.app_name}",
        "version": settings.app_version,
        "environment": settings.environment,
        "documentation": {
            "swagger_ui": "/docs",
            "redoc": "/redoc",
            "openapi_json": "/openapi.json"
        },
        "api_prefix": settings.api_v1_prefix
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "listing_api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
