"""Password reset delivery."""

from app.infrastructure.external.notifications.password_reset import (
    LoggingPasswordResetNotifier,
)

__all__ = [
    "LoggingPasswordResetNotifier",
]
