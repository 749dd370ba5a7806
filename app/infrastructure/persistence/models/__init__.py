"""Persistence models: ORM entities and mixins."""

from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampMixin
from app.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken,
)
from app.infrastructure.persistence.models.user import User

__all__ = [
    "CuidMixin",
    "PasswordResetToken",
    "TimestampMixin",
    "User",
]
