"""DTOs for the password reset flow."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ResetTokenRecord:
    """Stored reset token row. token_hash is the SHA-256 of the raw token."""

    id: str
    user_id: str
    token_hash: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now


@dataclass(frozen=True)
class PasswordResetGrant:
    """What forgot-password hands to the notification collaborator.

    token and reset_url are secrets: deliver them, never log them.
    """

    user_id: str
    email: str
    token: str
    reset_url: str
    expires_at: datetime
