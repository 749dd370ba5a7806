"""Presentation-layer dependency injection (composition root).

build_auth_service() wires infrastructure into the AuthService once per
process (called from the lifespan). Routes reach it through
get_auth_service(), which tests override with an in-memory graph.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Annotated

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.user import UserResult
from app.application.services.auth_service import AuthService
from app.core.config import Settings, get_settings
from app.domain.exceptions import (
    InvalidSessionTokenException,
    ResourceNotFoundException,
    ServiceUnavailableException,
)
from app.infrastructure.external.google import GoogleOAuthClient, OAuthStateManager
from app.infrastructure.external.notifications import LoggingPasswordResetNotifier
from app.infrastructure.persistence.repositories import SqlCredentialStore
from app.infrastructure.security.jwt import TokenIssuer
from app.infrastructure.security.password import PasswordHasher

_http_bearer = HTTPBearer(auto_error=False)


def build_auth_service(
    settings: Settings,
    session_factory: async_sessionmaker[AsyncSession],
) -> AuthService:
    """Build the AuthService graph from settings and a session factory."""
    store = SqlCredentialStore(session_factory)
    return AuthService(
        store=store,
        hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
        token_issuer=TokenIssuer(
            secret_key=settings.secret_key.get_secret_value(),
            algorithm=settings.algorithm,
            session_ttl=timedelta(minutes=settings.access_token_expire_minutes),
        ),
        notifier=LoggingPasswordResetNotifier(),
        frontend_url=settings.frontend_url,
        reset_token_ttl=timedelta(minutes=settings.password_reset_token_expire_minutes),
    )


def get_auth_service(request: Request) -> AuthService:
    """AuthService built at startup (app.state.auth_service)."""
    service = getattr(request.app.state, "auth_service", None)
    if service is None:
        raise ServiceUnavailableException("credential_store")
    return service


def get_oauth_state_manager() -> OAuthStateManager:
    """OAuth state signing/verification keyed from SECRET_KEY."""
    return OAuthStateManager(get_settings().secret_key.get_secret_value())


def get_google_oauth_client(request: Request) -> GoogleOAuthClient:
    """Google OAuth client with the shared HTTP client; 404 when not configured."""
    settings = get_settings()
    if not settings.google_oauth_enabled:
        raise HTTPException(status_code=404, detail="Google login is not configured")
    return GoogleOAuthClient(
        client_id=settings.google_client_id or "",
        client_secret=settings.google_client_secret.get_secret_value()
        if settings.google_client_secret
        else "",
        redirect_uri=settings.google_redirect_uri,
        http_client=getattr(request.app.state, "oauth_http_client", None),
    )


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResult:
    """Return the user behind the bearer token; 401 if missing, invalid or deleted."""
    if credentials is None:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    claims = auth_service.verify_session(credentials.credentials)
    try:
        return await auth_service.get_profile(claims.subject_id)
    except ResourceNotFoundException:
        raise InvalidSessionTokenException() from None
