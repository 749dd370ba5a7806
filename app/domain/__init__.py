"""Domain layer: value objects, enums, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from app.domain.enums import IdentityProvider, RedeemOutcome
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
from app.domain.value_objects import EmailAddress, ProviderSubject, normalize_email

__all__ = [
    "AccountsException",
    "AuthenticationException",
    "ConflictException",
    "DuplicateRecordException",
    "EmailAddress",
    "EmailAlreadyRegisteredException",
    "IdentityConflictException",
    "IdentityProvider",
    "InvalidCredentialsException",
    "InvalidOrExpiredTokenException",
    "InvalidSessionTokenException",
    "ProviderSubject",
    "RedeemOutcome",
    "ResourceNotFoundException",
    "ServiceUnavailableException",
    "ValidationException",
    "normalize_email",
]
