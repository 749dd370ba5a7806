"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class UserRecord:
    """Stored user as returned by the credential store.

    Carries the password hash and provider link; never leaves the
    application layer. Convert with to_result() before returning upward.
    """

    id: str
    email: str
    name: str | None
    hashed_password: str | None
    google_id: str | None
    created_at: datetime

    @property
    def has_password(self) -> bool:
        return bool(self.hashed_password)

    def to_result(self) -> "UserResult":
        return UserResult(
            id=self.id,
            email=self.email,
            name=self.name,
            created_at=self.created_at,
        )


@dataclass(frozen=True)
class UserResult:
    """User read-model (profile, auth responses). No password or provider id."""

    id: str
    email: str
    name: str | None
    created_at: datetime
