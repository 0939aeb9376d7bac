"""Typed error hierarchy for the field operations API.

All application errors inherit from AppError and provide:
- code: Machine-readable error code
- message: Human-readable description
- details: Additional context as dict
- retryable: Whether the operation can be retried

The HTTP layer maps each family to a stable status code
(see ``infrastructure/middleware/error_handler.py``).
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass
class AppError(Exception):
    """Base application error with full context."""

    code: str = "APP_ERROR"
    message: str = "An unexpected error occurred"
    details: dict[str, Any] = field(default_factory=dict)
    retryable: bool = False
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def __post_init__(self) -> None:
        super().__init__(str(self))

    def to_dict(self) -> dict[str, Any]:
        """Serialize error for API responses and logging."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "retryable": self.retryable,
            "timestamp": self.timestamp.isoformat(),
        }


# --- Configuration Errors ---


@dataclass
class ConfigurationError(AppError):
    """Required configuration is missing or invalid."""

    code: str = "CONFIGURATION_ERROR"


# --- Not Found Errors ---


@dataclass
class NotFoundError(AppError):
    """Resource not found."""

    code: str = "NOT_FOUND"
    retryable: bool = False


@dataclass
class UserNotFoundError(NotFoundError):
    """User not found."""

    code: str = "USER_NOT_FOUND"


# --- Validation Errors ---


@dataclass
class ValidationError(AppError):
    """Input validation failed.

    Field-level messages live in ``details["fields"]`` keyed by the
    wire name of the offending field.
    """

    code: str = "VALIDATION_ERROR"
    message: str = "Validation error"
    retryable: bool = False

    @classmethod
    def for_fields(cls, fields: dict[str, str]) -> "ValidationError":
        names = ", ".join(fields)
        return cls(message=f"Invalid fields: {names}", details={"fields": fields})

    @property
    def field_errors(self) -> dict[str, str]:
        return dict(self.details.get("fields", {}))


@dataclass
class DuplicateError(AppError):
    """Duplicate resource."""

    code: str = "DUPLICATE_ERROR"


# --- Auth Errors ---


@dataclass
class AuthError(AppError):
    """Authentication failed."""

    code: str = "AUTH_ERROR"
    retryable: bool = False


@dataclass
class MissingCredentialError(AuthError):
    """No bearer token (or a malformed Authorization header) was supplied."""

    code: str = "MISSING_CREDENTIAL"
    message: str = "Access token required"


@dataclass
class InvalidCredentialError(AuthError):
    """The identity provider rejected the credential."""

    code: str = "INVALID_CREDENTIAL"
    message: str = "Invalid token"


@dataclass
class ForbiddenError(AppError):
    """Authenticated user lacks the required role."""

    code: str = "FORBIDDEN"
    message: str = "Insufficient role"
    required_role: str = ""


# --- Unavailable Errors ---


@dataclass
class ProviderUnavailableError(AppError):
    """Identity provider could not be reached or answered with a server error."""

    code: str = "PROVIDER_UNAVAILABLE"
    message: str = "Identity provider temporarily unavailable"
    retryable: bool = True
    provider: str = ""
    operation: str = ""


@dataclass
class DatabaseUnavailableError(AppError):
    """Database could not be reached or timed out."""

    code: str = "DATABASE_UNAVAILABLE"
    message: str = "Service temporarily unavailable"
    retryable: bool = True
    operation: str = ""


@dataclass
class DirectoryUnavailableError(DatabaseUnavailableError):
    """User directory lookup failed; the request fails closed."""

    code: str = "DIRECTORY_UNAVAILABLE"
