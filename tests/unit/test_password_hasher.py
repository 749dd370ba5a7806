"""Tests for bcrypt password hashing."""

import pytest

from app.infrastructure.security.password import (
    PasswordHasher,
    get_password_hash,
    verify_password,
)


def test_hash_is_salted() -> None:
    """Same plaintext gives different digests."""
    first = get_password_hash("s3cretpw", rounds=4)
    second = get_password_hash("s3cretpw", rounds=4)
    assert first != second
    assert verify_password("s3cretpw", first)
    assert verify_password("s3cretpw", second)


def test_verify_rejects_wrong_password() -> None:
    digest = get_password_hash("s3cretpw", rounds=4)
    assert not verify_password("s3cretpx", digest)


@pytest.mark.parametrize("digest", [None, "", "not-a-bcrypt-hash", "$2b$04$short"])
def test_verify_malformed_digest_returns_false(digest: str | None) -> None:
    assert verify_password("s3cretpw", digest) is False


def test_long_passwords_are_not_truncated() -> None:
    """Passwords sharing their first 72 bytes must not verify against each other."""
    base = "x" * 72
    digest = get_password_hash(base + "a", rounds=4)
    assert verify_password(base + "a", digest)
    assert not verify_password(base + "b", digest)


def test_cost_factor_is_applied() -> None:
    hasher = PasswordHasher(rounds=5)
    assert hasher.rounds == 5
    assert hasher.hash("s3cretpw").startswith("$2b$05$")


async def test_async_hash_and_verify(hasher: PasswordHasher) -> None:
    digest = await hasher.hash_async("s3cretpw")
    assert await hasher.verify_async("s3cretpw", digest)
    assert not await hasher.verify_async("wrong-password", digest)


async def test_dummy_verify_returns_none(hasher: PasswordHasher) -> None:
    assert await hasher.dummy_verify("anything") is None
    assert await hasher.dummy_verify("anything") is None
