"""Auth API schemas."""

from datetime import datetime

from pydantic import BaseModel, EmailStr, Field

from app.application.dtos.auth import AuthResult
from app.schemas.user import UserProfileResponse


class RegisterRequest(BaseModel):
    """Request body for POST /auth/register."""

    email: EmailStr
    password: str = Field(..., description="Password (min 8 characters)")
    name: str | None = Field(default=None, max_length=255)


class LoginRequest(BaseModel):
    """Request body for POST /auth/login.

    No format rules beyond presence: a wrong or malformed email fails as
    invalid credentials, not as a validation error.
    """

    email: str
    password: str


class ForgotPasswordRequest(BaseModel):
    """Request body for POST /auth/forgot-password.

    Any string is accepted; the response is the same whether or not it
    names an account.
    """

    email: str = Field(..., max_length=320)


class ResetPasswordRequest(BaseModel):
    """Request body for PATCH /auth/reset-password."""

    token: str = Field(..., min_length=1, description="Token from the reset link")
    new_password: str = Field(..., description="New password (min 8 characters)")


class AuthResponse(BaseModel):
    """Session token plus the authenticated user's profile."""

    access_token: str
    token_type: str = "bearer"
    user: UserProfileResponse

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        return cls(
            access_token=result.access_token,
            token_type=result.token_type,
            user=UserProfileResponse.model_validate(result.user),
        )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class SessionResponse(BaseModel):
    """Claims of the caller's session token (GET /auth/session)."""

    user_id: str
    email: str
    name: str | None = None
    expires_at: datetime
