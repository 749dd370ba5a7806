"""API request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    SessionResponse,
)
from app.schemas.health import HealthResponse
from app.schemas.user import UserProfileResponse

__all__ = [
    "AuthResponse",
    "ForgotPasswordRequest",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "ResetPasswordRequest",
    "SessionResponse",
    "UserProfileResponse",
]
