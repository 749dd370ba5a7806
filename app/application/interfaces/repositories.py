"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.

Every method is a single atomic unit: implementations run each call in its
own transaction and enforce uniqueness (email, google_id, token_hash, one
reset token per user) with storage constraints, raising
DuplicateRecordException(field) when one rejects a write. Any other
storage failure is raised as ServiceUnavailableException.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from app.application.dtos.password_reset import ResetTokenRecord
    from app.application.dtos.user import UserRecord
    from app.domain.enums import RedeemOutcome


class ICredentialStore(Protocol):
    """Protocol for user and password-reset-token persistence (DIP)."""

    async def get_user_by_id(self, user_id: str) -> UserRecord | None:
        """Return user by ID."""

    async def get_user_by_email(self, email: str) -> UserRecord | None:
        """Return user by canonical email."""

    async def get_user_by_google_id(self, google_id: str) -> UserRecord | None:
        """Return user linked to the given Google subject."""

    async def create_user(
        self,
        email: str,
        *,
        hashed_password: str | None = None,
        name: str | None = None,
        google_id: str | None = None,
    ) -> UserRecord:
        """Insert a user. Raises DuplicateRecordException('email' | 'google_id')."""

    async def delete_user(self, user_id: str) -> bool:
        """Delete user and (by cascade) their reset tokens. False if absent."""

    async def replace_reset_token(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> ResetTokenRecord:
        """Upsert the user's single reset token under a fresh id.

        Raises DuplicateRecordException('token_hash') on digest collision and
        ResourceNotFoundException when the user no longer exists.
        """

    async def get_reset_token(self, token_hash: str) -> ResetTokenRecord | None:
        """Return reset token by digest."""

    async def delete_reset_token(self, token_id: str) -> None:
        """Delete a reset token by id (no-op if already gone)."""

    async def redeem_reset_token(
        self, token_id: str, user_id: str, hashed_password: str
    ) -> RedeemOutcome:
        """Atomically delete the token and set its owner's password hash.

        TOKEN_GONE when the token was already consumed or replaced;
        USER_GONE when the owner no longer exists (token left deleted).
        """

    async def delete_expired_reset_tokens(self, now: datetime) -> int:
        """Delete tokens with expires_at <= now; return count."""
