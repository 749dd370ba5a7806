"""Tests for domain exceptions (error_code, message, details)."""

from app.domain.exceptions import (
    AccountsException,
    AuthenticationException,
    ConflictException,
    DuplicateRecordException,
    EmailAlreadyRegisteredException,
    IdentityConflictException,
    InvalidCredentialsException,
    InvalidOrExpiredTokenException,
    InvalidSessionTokenException,
    ResourceNotFoundException,
    ServiceUnavailableException,
    ValidationException,
)


def test_accounts_exception_default_error_code() -> None:
    """Base AccountsException uses class name as error_code when not provided."""
    exc = AccountsException("Something failed")
    assert exc.message == "Something failed"
    assert exc.error_code == "AccountsException"
    assert exc.details == {}


def test_accounts_exception_to_dict() -> None:
    exc = AccountsException("Oops", error_code="CUSTOM", details={"key": "value"})
    assert exc.to_dict() == {
        "error": "CUSTOM",
        "message": "Oops",
        "details": {"key": "value"},
    }


def test_validation_exception_with_field() -> None:
    exc = ValidationException("Invalid format", field="email")
    assert exc.error_code == "VALIDATION_ERROR"
    assert exc.details == {"field": "email"}


def test_validation_exception_without_field() -> None:
    exc = ValidationException("Invalid")
    assert exc.details == {}


def test_authentication_exception_default_message() -> None:
    exc = AuthenticationException()
    assert exc.message == "Authentication failed"
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_invalid_credentials_is_generic() -> None:
    """Same message whatever the cause, so callers cannot enumerate accounts."""
    exc = InvalidCredentialsException()
    assert isinstance(exc, AuthenticationException)
    assert exc.message == "Invalid credentials"
    assert exc.details == {}


def test_invalid_session_token() -> None:
    exc = InvalidSessionTokenException()
    assert exc.error_code == "AUTHENTICATION_ERROR"


def test_conflicts_share_base() -> None:
    assert isinstance(EmailAlreadyRegisteredException(), ConflictException)
    assert isinstance(IdentityConflictException(), ConflictException)


def test_email_already_registered() -> None:
    exc = EmailAlreadyRegisteredException()
    assert exc.error_code == "EMAIL_ALREADY_REGISTERED"
    assert exc.message == "Email is already registered"


def test_identity_conflict_message_and_provider() -> None:
    exc = IdentityConflictException("google")
    assert exc.error_code == "IDENTITY_CONFLICT"
    assert exc.message == (
        "A user with this email already exists. Please log in with your password."
    )
    assert exc.details == {"provider": "google"}


def test_invalid_or_expired_token() -> None:
    exc = InvalidOrExpiredTokenException()
    assert exc.error_code == "INVALID_OR_EXPIRED_TOKEN"


def test_resource_not_found() -> None:
    exc = ResourceNotFoundException("user", "u1")
    assert exc.message == "user not found: u1"
    assert exc.details == {"resource_type": "user", "resource_id": "u1"}


def test_service_unavailable_hides_driver_detail() -> None:
    exc = ServiceUnavailableException("credential_store")
    assert exc.error_code == "SERVICE_UNAVAILABLE"
    assert exc.message == "Service temporarily unavailable"
    assert exc.details == {"component": "credential_store"}


def test_duplicate_record_exposes_field() -> None:
    exc = DuplicateRecordException("google_id")
    assert exc.field == "google_id"
    assert exc.error_code == "DUPLICATE_RECORD"
