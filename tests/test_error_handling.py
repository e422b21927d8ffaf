"""
Tests for the exception hierarchy and error response formatting.
"""

import json
import pytest
from fastapi import HTTPException
from sqlalchemy.exc import IntegrityError, OperationalError

from listing_api.services.error_handler import ErrorHandlerService
from listing_api.utils.exceptions import (
    ValidationError,
    InvalidReference,
    InvalidDate,
    NotFoundOrForbidden,
    StoreError,
    InvalidTokenError,
)


class TestExceptions:

    @pytest.mark.parametrize(
        "exception, status_code, error_code",
        [
            (InvalidReference("cityId", "abc"), 400, "INVALID_REFERENCE"),
            (InvalidDate("availableFrom", "soon"), 400, "INVALID_DATE"),
            (NotFoundOrForbidden("update"), 404, "NOT_FOUND"),
            (StoreError("persistence"), 503, "STORE_ERROR"),
            (InvalidTokenError(), 401, "UNAUTHORIZED"),
        ],
    )
    def test_status_and_code(self, exception, status_code, error_code):
        assert exception.status_code == status_code
        assert exception.error_code == error_code

    def test_store_error_names_the_store(self):
        assert StoreError("cache").detail == "Cache store error: Backing store unavailable"


class TestErrorHandlerService:

    def test_format_error_response(self):
        response = ErrorHandlerService.format_error_response(
            error_code="TEST_ERROR",
            message="Test error message",
            details=[{"field": "test", "message": "Test field error"}],
            request_id="test123"
        )

        assert response["error"]["code"] == "TEST_ERROR"
        assert response["error"]["message"] == "Test error message"
        assert response["error"]["request_id"] == "test123"
        assert response["error"]["details"][0]["field"] == "test"
        assert response["error"]["timestamp"].endswith("Z")

    def test_request_id_is_generated_without_request(self):
        response = ErrorHandlerService.format_error_response("X", "y")

        assert len(response["error"]["request_id"]) == 8
        assert "details" not in response["error"]

    def test_handle_api_exception(self):
        response = ErrorHandlerService.handle_api_exception(InvalidDate("availableFrom", "soon"))

        assert response.status_code == 400
        body = json.loads(response.body)
        assert body["error"]["code"] == "INVALID_DATE"
        assert "availableFrom" in body["error"]["message"]

    def test_validation_error_field_errors_become_details(self):
        exception = ValidationError("Bad payload", field_errors=[{"field": "price", "message": "too low"}])

        body = json.loads(ErrorHandlerService.handle_api_exception(exception).body)

        assert body["error"]["details"] == [{"field": "price", "message": "too low"}]

    def test_handle_validation_error(self):
        errors = [
            {"loc": ("body", "price"), "msg": "Input should be greater than 0", "type": "greater_than", "input": -1},
            {"loc": ("query", "minPrice"), "msg": "Input should be a valid number", "type": "float_parsing"},
        ]

        response = ErrorHandlerService.handle_validation_error(errors)

        assert response.status_code == 422
        details = json.loads(response.body)["error"]["details"]
        assert [d["field"] for d in details] == ["body -> price", "query -> minPrice"]
        assert details[1]["input"] is None

    def test_integrity_error_is_conflict(self):
        error = IntegrityError("INSERT", {}, Exception("UNIQUE constraint failed: users.email"))

        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 409
        body = json.loads(response.body)
        assert body["error"]["code"] == "INTEGRITY_ERROR"
        assert body["error"]["message"] == "Constraint violation: Duplicate value for unique field"

    def test_other_database_error_is_internal(self):
        error = OperationalError("SELECT", {}, Exception("no such table"))

        response = ErrorHandlerService.handle_database_error(error)

        assert response.status_code == 500
        assert json.loads(response.body)["error"]["code"] == "DATABASE_ERROR"

    def test_http_exception(self):
        response = ErrorHandlerService.handle_http_exception(HTTPException(status_code=405, detail="Method Not Allowed"))

        assert response.status_code == 405
        assert json.loads(response.body)["error"]["code"] == "HTTP_405"

    def test_unexpected_error_hides_details(self):
        response = ErrorHandlerService.handle_unexpected_error(RuntimeError("secret internals"))

        body = json.loads(response.body)
        assert response.status_code == 500
        assert "secret" not in body["error"]["message"]
