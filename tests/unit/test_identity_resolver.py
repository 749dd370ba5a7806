"""Tests for IdentityResolver (Google login reconciliation)."""

from unittest.mock import AsyncMock

import pytest

from app.application.dtos.user import UserRecord
from app.application.services.identity_resolver import IdentityResolver
from app.domain.exceptions import (
    DuplicateRecordException,
    IdentityConflictException,
    ValidationException,
)
from app.shared.utils.datetime import utc_now
from tests.fakes import InMemoryCredentialStore


@pytest.fixture
def resolver(store: InMemoryCredentialStore) -> IdentityResolver:
    return IdentityResolver(store)


async def test_first_login_creates_linked_account(
    resolver: IdentityResolver, store: InMemoryCredentialStore
) -> None:
    user = await resolver.resolve_external_login("g-123", "Bob@Example.com", "Bob")
    assert user.email == "bob@example.com"
    assert user.google_id == "g-123"
    assert user.name == "Bob"
    assert user.hashed_password is None
    assert len(store.users) == 1


async def test_login_is_idempotent_per_provider_id(
    resolver: IdentityResolver, store: InMemoryCredentialStore
) -> None:
    first = await resolver.resolve_external_login("g-123", "bob@example.com", "Bob")
    second = await resolver.resolve_external_login("g-123", "bob@example.com", "Robert")
    assert first.id == second.id
    assert len(store.users) == 1


async def test_linked_account_found_even_if_provider_email_changed(
    resolver: IdentityResolver,
) -> None:
    first = await resolver.resolve_external_login("g-123", "bob@example.com")
    again = await resolver.resolve_external_login("g-123", "bob@new.example.com")
    assert again.id == first.id


async def test_email_of_local_account_is_a_conflict(
    resolver: IdentityResolver, store: InMemoryCredentialStore
) -> None:
    local = await store.create_user("alice@example.com", hashed_password="$2b$hash")
    with pytest.raises(IdentityConflictException):
        await resolver.resolve_external_login("g-999", "ALICE@example.com", "Alice")
    assert store.users == {local.id: local}


@pytest.mark.parametrize(
    "provider_id,email", [("", "a@b.io"), ("   ", "a@b.io"), ("g-1", "not-an-email")]
)
async def test_invalid_input_is_validation_error(
    resolver: IdentityResolver, provider_id: str, email: str
) -> None:
    with pytest.raises(ValidationException):
        await resolver.resolve_external_login(provider_id, email)


async def test_find_helpers(resolver: IdentityResolver) -> None:
    created = await resolver.resolve_external_login("g-1", "carol@example.com")
    assert (await resolver.find_by_email("CAROL@example.com")).id == created.id
    assert (await resolver.find_by_external_id("g-1")).id == created.id
    assert await resolver.find_by_external_id("") is None


async def test_lost_race_on_google_id_returns_winner() -> None:
    winner = UserRecord(
        id="u-1",
        email="dan@example.com",
        name=None,
        hashed_password=None,
        google_id="g-7",
        created_at=utc_now(),
    )
    store = AsyncMock()
    store.get_user_by_google_id.side_effect = [None, winner]
    store.get_user_by_email.return_value = None
    store.create_user.side_effect = DuplicateRecordException("google_id")

    result = await IdentityResolver(store).resolve_external_login("g-7", "dan@example.com")
    assert result is winner


async def test_lost_race_on_email_is_conflict() -> None:
    store = AsyncMock()
    store.get_user_by_google_id.return_value = None
    store.get_user_by_email.return_value = None
    store.create_user.side_effect = DuplicateRecordException("email")

    with pytest.raises(IdentityConflictException):
        await IdentityResolver(store).resolve_external_login("g-8", "erin@example.com")
