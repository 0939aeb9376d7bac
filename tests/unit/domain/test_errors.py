"""Tests for domain errors."""

from fieldops.domain.errors import (
    AppError,
    AuthError,
    DatabaseUnavailableError,
    DirectoryUnavailableError,
    ForbiddenError,
    InvalidCredentialError,
    MissingCredentialError,
    NotFoundError,
    ProviderUnavailableError,
    UserNotFoundError,
    ValidationError,
)


class TestAppError:
    """Test base AppError."""

    def test_error_creation(self):
        """Test creating an error."""
        error = AppError(
            code="TEST_ERROR",
            message="Test error message",
            details={"key": "value"},
            retryable=True,
        )

        assert error.code == "TEST_ERROR"
        assert error.message == "Test error message"
        assert error.details == {"key": "value"}
        assert error.retryable is True
        assert error.timestamp is not None

    def test_error_str(self):
        """Test error string representation."""
        error = AppError(code="TEST", message="Test message")
        assert str(error) == "[TEST] Test message"

    def test_error_to_dict(self):
        """Test error serialization."""
        data = AppError(code="TEST_ERROR", message="Test message").to_dict()

        assert data["code"] == "TEST_ERROR"
        assert data["message"] == "Test message"
        assert data["details"] == {}
        assert data["retryable"] is False
        assert "timestamp" in data


class TestErrorFamilies:
    """Subclasses carry the right codes and families."""

    def test_credential_errors_are_auth_errors(self):
        assert isinstance(MissingCredentialError(), AuthError)
        assert isinstance(InvalidCredentialError(), AuthError)
        assert MissingCredentialError().message == "Access token required"
        assert InvalidCredentialError().code == "INVALID_CREDENTIAL"

    def test_forbidden_is_not_auth_error(self):
        """403 and 401 stay distinct."""
        assert not isinstance(ForbiddenError(), AuthError)

    def test_user_not_found(self):
        error = UserNotFoundError(message="User not found")
        assert isinstance(error, NotFoundError)
        assert error.code == "USER_NOT_FOUND"

    def test_unavailable_errors_are_retryable(self):
        assert ProviderUnavailableError().retryable is True
        directory_error = DirectoryUnavailableError()
        assert isinstance(directory_error, DatabaseUnavailableError)
        assert directory_error.code == "DIRECTORY_UNAVAILABLE"
        assert directory_error.retryable is True


class TestValidationError:
    def test_for_fields(self):
        error = ValidationError.for_fields({"clientName": "Client name is required"})

        assert error.code == "VALIDATION_ERROR"
        assert "clientName" in error.message
        assert error.field_errors == {"clientName": "Client name is required"}
        assert error.retryable is False
