"""
API route handlers for the Property Listing API.
"""

from .auth import router as auth_router
from .health import router as health_router
from .properties import router as properties_router
from .references import router as references_router

__all__ = ["auth_router", "health_router", "properties_router", "references_router"]
