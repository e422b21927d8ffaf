"""
Utility modules for the Property Listing API.
"""

from .auth import create_access_token, verify_token, TokenPayload, TokenExpired

from .exceptions import (
    APIException,
    ValidationError,
    UnauthorizedError,
    ConflictError,
    BadRequestError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    InactiveUserError,
    InvalidReference,
    InvalidDate,
    NotFoundOrForbidden,
    StoreError,
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    "create_access_token",
    "verify_token",
    "TokenPayload",
    "TokenExpired",
    "APIException",
    "ValidationError",
    "UnauthorizedError",
    "ConflictError",
    "BadRequestError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InactiveUserError",
    "InvalidReference",
    "InvalidDate",
    "NotFoundOrForbidden",
    "StoreError",
]
