"""
Custom exception classes for the Property Listing API.
Provides structured error handling with appropriate HTTP status codes.
"""

from typing import Any, Dict, Optional, List
from fastapi import HTTPException, status


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class ValidationError(APIException):
    """Validation error exception."""

    def __init__(
        self,
        detail: str,
        field_errors: Optional[List[Dict[str, str]]] = None
    ):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code="VALIDATION_ERROR"
        )
        self.field_errors = field_errors or []


class BadRequestError(APIException):
    """Bad request exception."""

    def __init__(self, detail: str, error_code: str = "BAD_REQUEST"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            error_code=error_code
        )


class UnauthorizedError(APIException):
    """Authentication required exception."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            error_code="UNAUTHORIZED",
            headers={"WWW-Authenticate": "Bearer"}
        )


class ConflictError(APIException):
    """Resource conflict exception."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT"
        )


# Authentication specific exceptions
class InvalidCredentialsError(UnauthorizedError):
    """Invalid login credentials exception."""

    def __init__(self, detail: str = "Invalid email or password"):
        super().__init__(detail)


class TokenExpiredError(UnauthorizedError):
    """JWT token expired exception."""

    def __init__(self, detail: str = "Token has expired"):
        super().__init__(detail)


class InvalidTokenError(UnauthorizedError):
    """Invalid JWT token exception."""

    def __init__(self, detail: str = "Invalid token"):
        super().__init__(detail)


class InactiveUserError(UnauthorizedError):
    """Inactive user account exception."""

    def __init__(self, detail: str = "User account is inactive"):
        super().__init__(detail)


# Listing specific exceptions
class InvalidReference(BadRequestError):
    """An identifier parameter is not a well-formed persistence identifier."""

    def __init__(self, field: str, value: Any):
        super().__init__(
            f"Invalid identifier for '{field}': {value!r}",
            error_code="INVALID_REFERENCE"
        )
        self.field = field
        self.value = value


class InvalidDate(BadRequestError):
    """A date parameter could not be parsed."""

    def __init__(self, field: str, value: Any):
        super().__init__(
            f"Invalid date for '{field}': {value!r}. Expected ISO-8601 (YYYY-MM-DD)",
            error_code="INVALID_DATE"
        )
        self.field = field
        self.value = value


class NotFoundOrForbidden(APIException):
    """
    Raised when an owner-scoped mutation matches nothing.
    Missing and not-owned resources are reported identically.
    """

    def __init__(self, action: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Property not found or you don't have permission to {action} it",
            error_code="NOT_FOUND"
        )
        self.action = action


class StoreError(APIException):
    """Persistence or cache backend failure."""

    def __init__(self, store: str, detail: str = "Backing store unavailable"):
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"{store.capitalize()} store error: {detail}",
            error_code="STORE_ERROR"
        )
        self.store = store
