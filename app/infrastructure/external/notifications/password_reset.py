"""Password reset notifier that records the hand-off without sending mail.

Email delivery is a separate service; this implementation only logs that a
link was produced, with the address masked and no token or URL.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.shared.telemetry.logging import get_logger, mask_email

if TYPE_CHECKING:
    from app.application.dtos.password_reset import PasswordResetGrant

logger = get_logger(__name__)


class LoggingPasswordResetNotifier:
    """IPasswordResetNotifier that logs the delivery request."""

    async def send_password_reset(self, grant: PasswordResetGrant) -> None:
        logger.info(
            "Password reset link ready for %s (user_id=%s, expires_at=%s)",
            mask_email(grant.email),
            grant.user_id,
            grant.expires_at.isoformat(),
        )
