"""Security: session JWTs, password hashing, and reset tokens."""

from app.infrastructure.security.jwt import (
    TokenIssuer,
    create_access_token,
    verify_token,
)
from app.infrastructure.security.password import (
    PasswordHasher,
    get_password_hash,
    verify_password,
)
from app.infrastructure.security.tokens import generate_reset_token, hash_reset_token

__all__ = [
    "PasswordHasher",
    "TokenIssuer",
    "create_access_token",
    "generate_reset_token",
    "get_password_hash",
    "hash_reset_token",
    "verify_password",
    "verify_token",
]
