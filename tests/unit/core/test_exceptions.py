"""Unit tests for application exceptions."""

import pytest

from notekeeper.core.exceptions import (
    ApplicationError,
    AuthenticationFailed,
    CacheError,
    NotFoundError,
    RemoteUnavailable,
    UploadFailed,
    ValidationError,
)


class TestApplicationErrors:
    """Tests for error codes and messages."""

    @pytest.mark.parametrize(
        "error,code",
        [
            (NotFoundError(), "RES_NOT_FOUND"),
            (ValidationError(), "VAL_VALIDATION_ERROR"),
            (RemoteUnavailable("list"), "SYS_REMOTE_UNAVAILABLE"),
            (UploadFailed(), "SYS_UPLOAD_FAILED"),
            (AuthenticationFailed(), "AUTH_FAILED"),
            (CacheError(), "SYS_CACHE_ERROR"),
        ],
    )
    def test_codes(self, error, code):
        assert isinstance(error, ApplicationError)
        assert error.code == code

    def test_base_error_default_code(self):
        error = ApplicationError("boom")
        assert error.code == "SYS_INTERNAL_ERROR"
        assert str(error) == "boom"

    def test_validation_error_details(self):
        error = ValidationError("Title and content are both required", {"missing_fields": ["title"]})
        assert error.details == {"missing_fields": ["title"]}
        assert ValidationError().details == {}

    def test_remote_unavailable_names_operation(self):
        error = RemoteUnavailable("update", status_code=503)
        assert error.operation == "update"
        assert error.status_code == 503
        assert "operation: update" in error.message
