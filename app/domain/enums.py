"""Domain enumerations for the accounts service.

Enums represent fixed sets of domain values (e.g. identity providers).
"""

from enum import Enum


class IdentityProvider(str, Enum):
    """External identity providers an account can be linked to."""

    GOOGLE = "google"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid provider values as strings.

        Returns:
            List of enum value strings (e.g. for validation or serialization).
        """
        return [provider.value for provider in cls]


class RedeemOutcome(str, Enum):
    """Result of atomically consuming a password reset token.

    REDEEMED: token deleted and owner's password updated.
    TOKEN_GONE: token was already consumed or purged by another request.
    USER_GONE: token deleted but its owner no longer exists.
    """

    REDEEMED = "redeemed"
    TOKEN_GONE = "token_gone"
    USER_GONE = "user_gone"
