"""Domain exceptions for the accounts service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class AccountsException(Exception):
    """Base exception for all accounts service errors.

    All custom exceptions should inherit from this class to allow
    consistent error handling and logging. Presentation layer maps
    these to HTTP responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for JSON error responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(AccountsException):
    """Raised when input validation fails (e.g. invalid format or range)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field or attribute that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class AuthenticationException(AccountsException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        """Initialize with optional message.

        Args:
            message: Description of the authentication failure.
        """
        super().__init__(message, "AUTHENTICATION_ERROR")


class InvalidCredentialsException(AuthenticationException):
    """Raised on a failed password login.

    The message never says whether the email exists, the account has no
    password, or the password was wrong.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class InvalidSessionTokenException(AuthenticationException):
    """Raised when a session token has a bad signature, bad shape, or has expired."""

    def __init__(self) -> None:
        super().__init__("Invalid or expired session token")


class ConflictException(AccountsException):
    """Base for uniqueness conflicts surfaced to the caller."""


class EmailAlreadyRegisteredException(ConflictException):
    """Raised when registering an email that already belongs to an account."""

    def __init__(self) -> None:
        super().__init__(
            "Email is already registered",
            "EMAIL_ALREADY_REGISTERED",
            {},
        )


class IdentityConflictException(ConflictException):
    """Raised when an external login claims the email of an existing, unlinked account."""

    def __init__(self, provider: str = "google") -> None:
        """Initialize with the provider that asserted the email.

        Args:
            provider: External identity provider name (e.g. 'google').
        """
        super().__init__(
            "A user with this email already exists. Please log in with your password.",
            "IDENTITY_CONFLICT",
            {"provider": provider},
        )


class InvalidOrExpiredTokenException(AccountsException):
    """Raised when a password reset token is unknown, expired, or already used."""

    def __init__(self) -> None:
        super().__init__(
            "Invalid or expired password reset token",
            "INVALID_OR_EXPIRED_TOKEN",
        )


class ResourceNotFoundException(AccountsException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'user').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ServiceUnavailableException(AccountsException):
    """Raised when the credential store or token signer fails. Never carries driver detail."""

    def __init__(self, component: str = "service") -> None:
        """Initialize with the failing component name (e.g. 'credential_store').

        Args:
            component: Logical name of the dependency that failed.
        """
        super().__init__(
            "Service temporarily unavailable",
            "SERVICE_UNAVAILABLE",
            {"component": component},
        )


class DuplicateRecordException(AccountsException):
    """Raised by the credential store when a unique constraint rejects a write.

    Internal to the core: services translate it into a ConflictException
    (or retry) before it reaches the boundary.
    """

    def __init__(self, field: str) -> None:
        """Initialize with the field whose uniqueness was violated.

        Args:
            field: Column or logical field (e.g. 'email', 'google_id', 'token_hash').
        """
        super().__init__(
            f"Duplicate value for {field}",
            "DUPLICATE_RECORD",
            {"field": field},
        )
        self.field = field
