"""Google OAuth: authorization URL, code exchange, userinfo, signed state."""

from app.infrastructure.external.google.oauth_client import (
    GoogleOAuthClient,
    GoogleUserInfo,
)
from app.infrastructure.external.google.state import OAuthStateManager

__all__ = [
    "GoogleOAuthClient",
    "GoogleUserInfo",
    "OAuthStateManager",
]
