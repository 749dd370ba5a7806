"""DTOs for authentication: results, session claims, and login intents."""

from dataclasses import dataclass
from datetime import datetime

from app.application.dtos.user import UserResult


@dataclass(frozen=True)
class AuthResult:
    """Successful authentication: a session token plus the public user view."""

    access_token: str
    user: UserResult
    token_type: str = "bearer"


@dataclass(frozen=True)
class SessionClaims:
    """Verified contents of a session token."""

    subject_id: str
    email: str
    name: str | None
    expires_at: datetime


# Login intents: one tag per way a caller can prove who they are.


@dataclass(frozen=True)
class PasswordLogin:
    """Email + password credentials."""

    email: str
    password: str


@dataclass(frozen=True)
class OAuthLogin:
    """Identity asserted by an external provider (already verified upstream)."""

    provider_id: str
    email: str
    display_name: str | None = None


@dataclass(frozen=True)
class TokenBearer:
    """A previously issued session token."""

    token: str


LoginIntent = PasswordLogin | OAuthLogin | TokenBearer
