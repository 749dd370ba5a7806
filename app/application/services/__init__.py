"""Application services: identity resolution and authentication flows."""

from app.application.services.auth_service import (
    AuthService,
    check_oauth_login,
    check_password_login,
    check_token_bearer,
)
from app.application.services.identity_resolver import IdentityResolver

__all__ = [
    "AuthService",
    "IdentityResolver",
    "check_oauth_login",
    "check_password_login",
    "check_token_bearer",
]
