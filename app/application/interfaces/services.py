"""Service interfaces (ports) for the application layer.

Protocols define contracts for collaborators the auth services depend on
(DIP). Implementations live in app.infrastructure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.auth import SessionClaims
    from app.application.dtos.password_reset import PasswordResetGrant


class IPasswordHasher(Protocol):
    """Protocol for salted one-way password hashing."""

    async def hash_async(self, password: str) -> str:
        """Return a new salted digest (differs on every call)."""

    async def verify_async(self, password: str, hashed_password: str | None) -> bool:
        """Return True on match; False (never raises) on mismatch or bad digest."""

    async def dummy_verify(self, password: str) -> None:
        """Spend the same time as a real verify without a stored digest."""


class ITokenIssuer(Protocol):
    """Protocol for session token and reset token issuance."""

    def issue_session(self, subject_id: str, email: str, name: str | None) -> str:
        """Return a signed session token."""

    def verify_session(self, token: str) -> SessionClaims:
        """Return verified claims or raise InvalidSessionTokenException."""

    def issue_reset_token(self) -> str:
        """Return a fresh opaque reset token."""

    def hash_reset_token(self, token: str) -> str:
        """Return the stored lookup digest for a reset token."""


class IPasswordResetNotifier(Protocol):
    """Protocol for delivering a reset link to the account owner."""

    async def send_password_reset(self, grant: PasswordResetGrant) -> None:
        """Deliver the reset link. Must not log grant.token or grant.reset_url."""
