"""Tests for /api/v1/auth endpoints against an in-memory AuthService."""

from httpx import AsyncClient

from app.api.v1.endpoints.auth import FORGOT_PASSWORD_MESSAGE, RESET_PASSWORD_MESSAGE
from tests.fakes import InMemoryCredentialStore, MutableClock, RecordingNotifier


async def test_register_returns_token_and_profile(
    client: AsyncClient, registered: dict
) -> None:
    assert registered["token_type"] == "bearer"
    assert registered["access_token"]
    user = registered["user"]
    assert user["email"] == "alice@example.com"
    assert user["name"] == "Alice"
    assert set(user) == {"id", "email", "name", "created_at"}


async def test_register_duplicate_email_returns_409(
    client: AsyncClient, registered: dict
) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "ALICE@example.com", "password": "another-pw"},
    )
    assert response.status_code == 409
    assert response.json()["error"] == "EMAIL_ALREADY_REGISTERED"


async def test_register_short_password_returns_400(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "bob@example.com", "password": "short"},
    )
    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "VALIDATION_ERROR"
    assert body["details"] == {"field": "password"}


async def test_register_invalid_email_returns_422(client: AsyncClient) -> None:
    response = await client.post(
        "/api/v1/auth/register",
        json={"email": "not-an-email", "password": "password123"},
    )
    assert response.status_code == 422


async def test_register_missing_body_returns_422(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/register", json={})
    assert response.status_code == 422


async def test_login_success(client: AsyncClient, registered: dict) -> None:
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "alice@example.com", "password": "s3cretpw"},
    )
    assert response.status_code == 200
    assert response.json()["user"]["id"] == registered["user"]["id"]


async def test_login_failures_are_indistinguishable(
    client: AsyncClient, registered: dict
) -> None:
    wrong_password = await client.post(
        "/api/v1/auth/login",
        json={"email": "alice@example.com", "password": "wrong-password"},
    )
    unknown_email = await client.post(
        "/api/v1/auth/login",
        json={"email": "nobody@example.com", "password": "s3cretpw"},
    )
    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json()
    assert wrong_password.json()["message"] == "Invalid credentials"


async def test_session_endpoint_returns_claims(
    client: AsyncClient, registered: dict, auth_headers: dict[str, str]
) -> None:
    response = await client.get("/api/v1/auth/session", headers=auth_headers)
    assert response.status_code == 200
    body = response.json()
    assert body["user_id"] == registered["user"]["id"]
    assert body["email"] == "alice@example.com"


async def test_session_endpoint_rejects_bad_token(client: AsyncClient) -> None:
    response = await client.get(
        "/api/v1/auth/session", headers={"Authorization": "Bearer not.a.token"}
    )
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"


async def test_logout_requires_auth(client: AsyncClient) -> None:
    response = await client.post("/api/v1/auth/logout")
    assert response.status_code == 401


async def test_logout_returns_204(client: AsyncClient, auth_headers: dict[str, str]) -> None:
    response = await client.post("/api/v1/auth/logout", headers=auth_headers)
    assert response.status_code == 204


async def test_forgot_password_same_reply_for_known_and_unknown(
    client: AsyncClient,
    registered: dict,
    notifier: RecordingNotifier,
    store: InMemoryCredentialStore,
) -> None:
    known = await client.post(
        "/api/v1/auth/forgot-password", json={"email": "alice@example.com"}
    )
    unknown = await client.post(
        "/api/v1/auth/forgot-password", json={"email": "nobody@example.com"}
    )
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"message": FORGOT_PASSWORD_MESSAGE}
    assert len(notifier.grants) == 1
    assert len(store.tokens) == 1


async def test_reset_password_flow(
    client: AsyncClient, registered: dict, notifier: RecordingNotifier
) -> None:
    await client.post("/api/v1/auth/forgot-password", json={"email": "alice@example.com"})
    token = notifier.last.token

    response = await client.patch(
        "/api/v1/auth/reset-password", json={"token": token, "new_password": "newpass1"}
    )
    assert response.status_code == 200
    assert response.json() == {"message": RESET_PASSWORD_MESSAGE}

    replay = await client.patch(
        "/api/v1/auth/reset-password", json={"token": token, "new_password": "newpass2"}
    )
    assert replay.status_code == 400
    assert replay.json()["error"] == "INVALID_OR_EXPIRED_TOKEN"

    old = await client.post(
        "/api/v1/auth/login", json={"email": "alice@example.com", "password": "s3cretpw"}
    )
    new = await client.post(
        "/api/v1/auth/login", json={"email": "alice@example.com", "password": "newpass1"}
    )
    assert old.status_code == 401
    assert new.status_code == 200


async def test_reset_password_expired_token(
    client: AsyncClient,
    registered: dict,
    notifier: RecordingNotifier,
    clock: MutableClock,
) -> None:
    await client.post("/api/v1/auth/forgot-password", json={"email": "alice@example.com"})
    clock.advance(minutes=61)
    response = await client.patch(
        "/api/v1/auth/reset-password",
        json={"token": notifier.last.token, "new_password": "newpass1"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "INVALID_OR_EXPIRED_TOKEN"


async def test_reset_password_short_password_returns_400(client: AsyncClient) -> None:
    response = await client.patch(
        "/api/v1/auth/reset-password", json={"token": "whatever", "new_password": "short"}
    )
    assert response.status_code == 400
    assert response.json()["details"] == {"field": "new_password"}


async def test_unencodable_password_returns_400(client: AsyncClient) -> None:
    headers = {"Content-Type": "application/json"}
    register = await client.post(
        "/api/v1/auth/register",
        content=b'{"email": "bob@example.com", "password": "abcdefgh\\ud800"}',
        headers=headers,
    )
    assert register.status_code == 400
    assert register.json()["details"] == {"field": "password"}

    reset = await client.patch(
        "/api/v1/auth/reset-password",
        content=b'{"token": "whatever", "new_password": "abcdefgh\\ud800"}',
        headers=headers,
    )
    assert reset.status_code == 400
    assert reset.json()["details"] == {"field": "new_password"}
