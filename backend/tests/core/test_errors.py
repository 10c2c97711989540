"""Error Hierarchy — verifies codes, statuses and the failure envelope."""

from uuid import uuid4

import pytest

from storefront.core.errors import (
    ConflictError, DatabaseError, ErrorCategory, ExternalServiceError,
    InternalError, NotFoundError, StorefrontError, ValidationError, envelope,
)


@pytest.mark.parametrize("error, code, status", [
    (ValidationError("name is required", field="name"), "VALIDATION_ERROR", 400),
    (NotFoundError("Brand", uuid4()), "RESOURCE_NOT_FOUND", 404),
    (ConflictError("in use"), "CONFLICT", 400),
    (DatabaseError("boom", "create"), "DATABASE_ERROR", 500),
    (ExternalServiceError("Stripe", "declined"), "EXTERNAL_SERVICE_ERROR", 500),
    (InternalError(), "INTERNAL_ERROR", 500),
])
def test_error_codes_and_statuses(error, code, status):
    assert isinstance(error, StorefrontError)
    assert error.code == code
    assert error.http_status == status


def test_to_response_is_failure_envelope():
    error = ConflictError("Cannot delete brand. Products are referencing it.")
    assert error.to_response() == {
        "success": False,
        "message": "Cannot delete brand. Products are referencing it.",
        "data": None,
    }


def test_not_found_records_context():
    record_id = uuid4()
    error = NotFoundError("Category", record_id)
    assert error.message == "Category not found."
    assert error.category is ErrorCategory.RESOURCE_NOT_FOUND
    assert error.context.record_id == str(record_id)


def test_external_error_names_service():
    error = ExternalServiceError("OneSignal", "timeout", status_code=504)
    assert error.message == "OneSignal request failed: timeout"
    assert error.status_code == 504


def test_envelope():
    assert envelope(True, "ok", [1]) == {"success": True, "message": "ok", "data": [1]}
