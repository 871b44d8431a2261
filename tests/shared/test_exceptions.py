"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    NoteshareError,
    NotFoundError,
    ValidationError,
)


class TestNoteshareError:
    def test_defaults_code_to_class_name(self):
        error = NoteshareError("Something broke")
        assert error.message == "Something broke"
        assert error.code == "NoteshareError"
        assert error.details == {}
        assert str(error) == "Something broke"

    def test_to_dict(self):
        error = NoteshareError("Bad", code="BAD", details={"id": 1})
        assert error.to_dict() == {
            "error": "BAD",
            "status": 500,
            "message": "Bad",
            "details": {"id": 1},
        }

    @pytest.mark.parametrize(
        "cls,status",
        [
            (NoteshareError, 500),
            (ValidationError, 400),
            (AuthenticationError, 401),
            (AuthorizationError, 403),
            (NotFoundError, 404),
        ],
    )
    def test_status_code_per_class(self, cls, status):
        error = cls("x")
        assert error.status_code == status
        assert error.is_server_error is (status >= 500)


class TestExternalServiceError:
    def test_records_service(self):
        error = ExternalServiceError("down", service="identity_provider", code="DOWN")
        assert error.service == "identity_provider"
        assert error.details["service"] == "identity_provider"
        assert error.code == "DOWN"
        assert error.status_code == 503
        assert error.is_server_error
