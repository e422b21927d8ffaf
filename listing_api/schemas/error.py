"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional, Any, Dict


class ErrorDetail(BaseModel):
    """Schema for individual error detail."""

    field: Optional[str] = Field(None, description="Field name that caused the error", examples=["minPrice"])
    message: str = Field(..., description="Human-readable error message")
    type: Optional[str] = Field(None, description="Error type identifier", examples=["float_parsing"])
    input: Optional[Any] = Field(None, description="Input value that caused the error")


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    code: str = Field(..., description="Error code identifier", examples=["INVALID_REFERENCE"])
    message: str = Field(..., description="Human-readable error message")
    timestamp: str = Field(..., description="Error timestamp in ISO format", examples=["2023-01-01T00:00:00Z"])
    request_id: Optional[str] = Field(None, description="Unique request identifier for tracking", examples=["abc12345"])
    details: Optional[List[ErrorDetail]] = Field(None, description="Detailed error information for validation errors")


class APIErrorResponse(BaseModel):
    """Schema for API error response wrapper."""

    error: ErrorResponse


def _example(code: str, message: str) -> Dict[str, Any]:
    return {
        "error": {
            "code": code,
            "message": message,
            "timestamp": "2023-01-01T00:00:00Z",
            "request_id": "abc12345"
        }
    }


# Common error response examples for documentation
COMMON_ERROR_RESPONSES: Dict[int, Dict[str, Any]] = {
    400: {
        "description": "Bad Request - Malformed identifier or date",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("INVALID_REFERENCE", "Invalid identifier for 'cityId': 'abc'")}},
    },
    401: {
        "description": "Unauthorized - Authentication required",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("UNAUTHORIZED", "Authentication token required")}},
    },
    404: {
        "description": "Not Found - Missing or not owned by the caller",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "NOT_FOUND", "Property not found or you don't have permission to update it"
        )}},
    },
    409: {
        "description": "Conflict - Resource already exists",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("CONFLICT", "User with this email already exists")}},
    },
    422: {
        "description": "Validation Error - Request validation failed",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("VALIDATION_ERROR", "Request validation failed")}},
    },
    500: {
        "description": "Internal Server Error",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example(
            "INTERNAL_SERVER_ERROR", "An unexpected error occurred. Please try again later."
        )}},
    },
    503: {
        "description": "Service Unavailable - Persistence or cache store failure",
        "model": APIErrorResponse,
        "content": {"application/json": {"example": _example("STORE_ERROR", "Cache store error: Backing store unavailable")}},
    },
}


def get_error_responses(*status_codes: int) -> Dict[int, Dict[str, Any]]:
    """
    Get error response schemas for specific status codes.

    Args:
        status_codes: HTTP status codes to include

    Returns:
        Dictionary of error response schemas
    """
    return {
        code: COMMON_ERROR_RESPONSES[code]
        for code in status_codes
        if code in COMMON_ERROR_RESPONSES
    }


def get_read_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses for cached read endpoints."""
    return get_error_responses(400, 422, 500, 503)


def get_write_error_responses() -> Dict[int, Dict[str, Any]]:
    """Error responses for owner-scoped write endpoints."""
    return get_error_responses(400, 401, 404, 422, 500, 503)
