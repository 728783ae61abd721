"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    TesseraError,
    NotFoundError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    ExternalServiceError,
    InternalError,
)


class TestTesseraError:
    def test_tessera_error_message(self):
        """TesseraError should store message."""
        error = TesseraError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_tessera_error_default_code(self):
        """TesseraError should default code to class name."""
        error = TesseraError("Test error")
        assert error.code == "TesseraError"

    def test_tessera_error_custom_code(self):
        """TesseraError should accept custom code."""
        error = TesseraError("Test error", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_tessera_error_default_details(self):
        """TesseraError should default details to empty dict."""
        error = TesseraError("Test error")
        assert error.details == {}

    def test_tessera_error_custom_details(self):
        """TesseraError should accept custom details."""
        error = TesseraError("Test error", details={"key": "value"})
        assert error.details == {"key": "value"}

    def test_tessera_error_to_dict(self):
        """TesseraError should convert to dict."""
        error = TesseraError("Test error", code="TEST_ERROR", details={"key": "value"})
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"]["key"] == "value"

    def test_tessera_error_to_dict_minimal(self):
        """TesseraError.to_dict should work with minimal args."""
        error = TesseraError("Test error")
        result = error.to_dict()

        assert result["error"] == "TesseraError"
        assert result["message"] == "Test error"
        assert result["details"] == {}


class TestNotFoundError:
    def test_not_found_error_inherits_tessera_error(self):
        """NotFoundError should inherit from TesseraError."""
        error = NotFoundError("Resource not found")
        assert isinstance(error, TesseraError)

    def test_not_found_error_default_code(self):
        """NotFoundError should default code to class name."""
        error = NotFoundError("Resource not found")
        assert error.code == "NotFoundError"


class TestValidationError:
    def test_validation_error_inherits_tessera_error(self):
        """ValidationError should inherit from TesseraError."""
        error = ValidationError("Invalid input")
        assert isinstance(error, TesseraError)

    def test_validation_error_with_details(self):
        """ValidationError should support field-level details."""
        error = ValidationError(
            "Validation failed",
            details={"fields": {"email": "Invalid format"}}
        )
        assert error.details["fields"]["email"] == "Invalid format"


class TestAuthenticationError:
    def test_authentication_error_inherits_tessera_error(self):
        """AuthenticationError should inherit from TesseraError."""
        error = AuthenticationError("Invalid token")
        assert isinstance(error, TesseraError)


class TestAuthorizationError:
    def test_authorization_error_inherits_tessera_error(self):
        """AuthorizationError should inherit from TesseraError."""
        error = AuthorizationError("Insufficient permissions")
        assert isinstance(error, TesseraError)


class TestExternalServiceError:
    def test_external_service_error_inherits_tessera_error(self):
        """ExternalServiceError should inherit from TesseraError."""
        error = ExternalServiceError("Connection failed", service="supabase")
        assert isinstance(error, TesseraError)

    def test_external_service_error_stores_service(self):
        """ExternalServiceError should store service name."""
        error = ExternalServiceError("Connection failed", service="supabase")
        assert error.service == "supabase"

    def test_external_service_error_includes_service_in_details(self):
        """ExternalServiceError should include service in details."""
        error = ExternalServiceError("Connection failed", service="supabase")
        result = error.to_dict()

        assert result["details"]["service"] == "supabase"

    def test_external_service_error_preserves_other_details(self):
        """ExternalServiceError should preserve other details."""
        error = ExternalServiceError(
            "Connection failed",
            service="supabase",
            details={"status_code": 500}
        )
        result = error.to_dict()

        assert result["details"]["service"] == "supabase"
        assert result["details"]["status_code"] == 500


class TestConflictError:
    def test_conflict_error_inherits_tessera_error(self):
        error = ConflictError("Email already exists", code="EMAIL_EXISTS")
        assert isinstance(error, TesseraError)
        assert error.code == "EMAIL_EXISTS"


class TestInternalError:
    def test_internal_error_code(self):
        """InternalError should always use the INTERNAL_ERROR code."""
        error = InternalError("Failed to register user: boom")
        assert error.code == "INTERNAL_ERROR"
        assert error.message == "Failed to register user: boom"

    def test_internal_error_keeps_cause(self):
        try:
            try:
                raise ConnectionError("connection refused")
            except ConnectionError as e:
                raise InternalError("Failed to login user: connection refused") from e
        except InternalError as error:
            assert isinstance(error.__cause__, ConnectionError)
