"""Application DTOs (no ORM dependency)."""

from app.application.dtos.auth import (
    AuthResult,
    LoginIntent,
    OAuthLogin,
    PasswordLogin,
    SessionClaims,
    TokenBearer,
)
from app.application.dtos.password_reset import PasswordResetGrant, ResetTokenRecord
from app.application.dtos.user import UserRecord, UserResult

__all__ = [
    "AuthResult",
    "LoginIntent",
    "OAuthLogin",
    "PasswordLogin",
    "PasswordResetGrant",
    "ResetTokenRecord",
    "SessionClaims",
    "TokenBearer",
    "UserRecord",
    "UserResult",
]
