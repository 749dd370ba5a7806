"""Pytest configuration and fixtures for the accounts service.

Settings come from the environment; a test SECRET_KEY is set before the app
is imported. API tests replace the AuthService dependency with one backed by
the in-memory store, so no database is needed unless a test is marked
requires_db.
"""

import os
from datetime import UTC, datetime, timedelta

os.environ.setdefault("SECRET_KEY", "test-secret-key-not-for-production-0123456789")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.v1.dependencies import get_auth_service
from app.application.services.auth_service import AuthService
from app.core.config import get_settings
from app.core.limiter import limiter
from app.infrastructure.security.jwt import TokenIssuer
from app.infrastructure.security.password import PasswordHasher
from tests.fakes import (
    FRONTEND_URL,
    TEST_SECRET,
    InMemoryCredentialStore,
    MutableClock,
    RecordingNotifier,
)

get_settings.cache_clear()

from app.main import app  # noqa: E402


@pytest.fixture
def clock() -> MutableClock:
    return MutableClock(datetime(2026, 1, 5, 12, 0, tzinfo=UTC))


@pytest.fixture
def store(clock: MutableClock) -> InMemoryCredentialStore:
    return InMemoryCredentialStore(clock=clock)


@pytest.fixture(scope="session")
def hasher() -> PasswordHasher:
    """Minimum bcrypt cost keeps tests fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def token_issuer(clock: MutableClock) -> TokenIssuer:
    return TokenIssuer(TEST_SECRET, session_ttl=timedelta(hours=1), clock=clock)


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def auth_service(
    store: InMemoryCredentialStore,
    hasher: PasswordHasher,
    token_issuer: TokenIssuer,
    notifier: RecordingNotifier,
    clock: MutableClock,
) -> AuthService:
    return AuthService(
        store=store,
        hasher=hasher,
        token_issuer=token_issuer,
        notifier=notifier,
        frontend_url=FRONTEND_URL,
        reset_token_ttl=timedelta(minutes=60),
        clock=clock,
    )


@pytest.fixture
async def client(auth_service: AuthService) -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), rate limits off."""
    app.dependency_overrides[get_auth_service] = lambda: auth_service
    limiter.enabled = False
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()
        limiter.enabled = True


@pytest.fixture
async def registered(client: AsyncClient) -> dict:
    """Register alice@example.com via the API; return the response body."""
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "alice@example.com", "password": "s3cretpw", "name": "Alice"},
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def auth_headers(registered: dict) -> dict[str, str]:
    return {"Authorization": f"Bearer {registered['access_token']}"}
