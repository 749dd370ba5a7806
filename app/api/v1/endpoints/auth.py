"""Auth API: register, login, Google login, logout, password reset.

Routes only translate between HTTP and AuthService; every rule lives in
the service. Errors propagate as domain exceptions and are mapped to
status codes by app.core.exception_handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.dependencies import (
    get_auth_service,
    get_current_user,
    get_google_oauth_client,
    get_oauth_state_manager,
)
from app.application.dtos.auth import PasswordLogin, TokenBearer
from app.application.dtos.user import UserResult
from app.application.services.auth_service import AuthService
from app.core.limiter import limit_auth, limit_password_reset, limit_register
from app.domain.exceptions import (
    AuthenticationException,
    InvalidSessionTokenException,
    ValidationException,
)
from app.infrastructure.external.google import GoogleOAuthClient, OAuthStateManager
from app.schemas.auth import (
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    ResetPasswordRequest,
    SessionResponse,
)
from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()

_session_bearer = HTTPBearer(auto_error=False)

FORGOT_PASSWORD_MESSAGE = (
    "If an account exists for that email, a password reset link has been sent."
)
RESET_PASSWORD_MESSAGE = "Password has been reset successfully."


@router.post("/register", response_model=AuthResponse, status_code=201)
@limit_register
async def register(
    request: Request,
    body: RegisterRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Create an account with email and password; returns a session token."""
    result = await auth_service.register(body.email, body.password, body.name)
    return AuthResponse.from_result(result)


@router.post("/login", response_model=AuthResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Authenticate with email and password; return a session token.

    Unknown email and wrong password give the same 401.
    """
    result = await auth_service.authenticate(
        PasswordLogin(email=body.email, password=body.password)
    )
    return AuthResponse.from_result(result)


@router.get("/google", status_code=307)
async def google_login(
    google: Annotated[GoogleOAuthClient, Depends(get_google_oauth_client)],
    state_manager: Annotated[OAuthStateManager, Depends(get_oauth_state_manager)],
) -> RedirectResponse:
    """Redirect to Google's consent screen with a signed state."""
    state = state_manager.create_signed_state()
    return RedirectResponse(google.build_authorization_url(state), status_code=307)


@router.get("/google/callback", response_model=AuthResponse)
@limit_auth
async def google_callback(
    request: Request,
    google: Annotated[GoogleOAuthClient, Depends(get_google_oauth_client)],
    state_manager: Annotated[OAuthStateManager, Depends(get_oauth_state_manager)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
    code: Annotated[str | None, Query()] = None,
    state: Annotated[str | None, Query()] = None,
    error: Annotated[str | None, Query()] = None,
):
    """Finish Google login: verify state, exchange code, log in or sign up.

    409 when the Google email already belongs to a password account.
    """
    if error:
        raise AuthenticationException("Google sign-in was cancelled")
    if not code or not state:
        raise ValidationException("Missing code or state", field="code")
    try:
        state_manager.verify(state)
    except ValueError as e:
        logger.warning("Google callback rejected: %s", e)
        raise ValidationException("Invalid OAuth state", field="state") from None

    google_user = await google.authenticate(code)
    result = await auth_service.oauth_login(
        google_user.subject, google_user.email, google_user.name
    )
    return AuthResponse.from_result(result)


@router.get("/session", response_model=SessionResponse)
async def get_session(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_session_bearer)
    ],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Return the verified claims of the caller's session token."""
    if credentials is None:
        raise InvalidSessionTokenException()
    claims = await auth_service.authenticate(TokenBearer(token=credentials.credentials))
    return SessionResponse(
        user_id=claims.subject_id,
        email=claims.email,
        name=claims.name,
        expires_at=claims.expires_at,
    )


@router.post("/logout", status_code=204)
async def logout(
    current_user: Annotated[UserResult, Depends(get_current_user)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> None:
    """End the session. Tokens are stateless; the client discards its copy."""
    auth_service.logout()


@router.post("/forgot-password", response_model=MessageResponse)
@limit_password_reset
async def forgot_password(
    request: Request,
    body: ForgotPasswordRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Send a reset link if the email has an account; the reply never says which."""
    await auth_service.forgot_password(body.email)
    return MessageResponse(message=FORGOT_PASSWORD_MESSAGE)


@router.patch("/reset-password", response_model=MessageResponse)
@limit_password_reset
async def reset_password(
    request: Request,
    body: ResetPasswordRequest,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Set a new password with a single-use reset token."""
    await auth_service.reset_password(body.token, body.new_password)
    return MessageResponse(message=RESET_PASSWORD_MESSAGE)
