"""Password hashing (bcrypt with SHA-256 pre-hash).

Bcrypt truncates inputs at 72 bytes; pre-hashing with SHA-256 yields a fixed-length
input so long passwords are not silently truncated.
"""

import asyncio
import base64
import hashlib

import bcrypt

DEFAULT_BCRYPT_ROUNDS = 10


def _prehash(password: str) -> bytes:
    """SHA-256 pre-hash to avoid bcrypt's 72-byte truncation."""
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Return True if plain_password matches hashed_password.

    Malformed, empty, or missing digests return False instead of raising.
    """
    if not hashed_password:
        return False
    try:
        result = bcrypt.checkpw(
            _prehash(plain_password),
            hashed_password.encode("utf-8"),
        )
        return bool(result)
    except (ValueError, TypeError):
        return False


def get_password_hash(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    """Return bcrypt hash of password (SHA-256 pre-hashed before bcrypt)."""
    salt = bcrypt.gensalt(rounds=rounds)
    hashed = bcrypt.hashpw(_prehash(password), salt)
    return hashed.decode("utf-8")


class PasswordHasher:
    """Salted one-way hashing with a tunable cost factor.

    The async methods run bcrypt in a worker thread so the event loop keeps
    serving other requests while a hash is computed.
    """

    def __init__(self, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> None:
        self._rounds = rounds
        self._dummy_hash: str | None = None

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        return get_password_hash(password, rounds=self._rounds)

    def verify(self, password: str, hashed_password: str | None) -> bool:
        return verify_password(password, hashed_password)

    async def hash_async(self, password: str) -> str:
        return await asyncio.to_thread(self.hash, password)

    async def verify_async(self, password: str, hashed_password: str | None) -> bool:
        return await asyncio.to_thread(self.verify, password, hashed_password)

    async def dummy_verify(self, password: str) -> None:
        """Burn one verify against a real digest of the same cost.

        Used when there is no stored hash to check (unknown email or OAuth-only
        account) so failed logins take the same time whatever the cause. The
        dummy digest is computed once, in a thread, on first use.
        """
        if self._dummy_hash is None:
            self._dummy_hash = await self.hash_async("not-a-real-password")
        await self.verify_async(password, self._dummy_hash)
