"""Opaque password-reset tokens.

The raw token only ever leaves the process inside the reset link; the
database stores its SHA-256 digest so a leaked table cannot be replayed.
"""

import hashlib
import secrets

RESET_TOKEN_BYTES = 32


def generate_reset_token(nbytes: int = RESET_TOKEN_BYTES) -> str:
    """Return nbytes of CSPRNG output as lowercase hex (2 * nbytes chars)."""
    return secrets.token_hex(nbytes)


def hash_reset_token(token: str) -> str:
    """Return the SHA-256 hex digest used to look a reset token up."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()
