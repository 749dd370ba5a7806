"""Signed OAuth state (nonce.issued_at:signature) for CSRF protection."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from app.shared.utils.datetime import Clock, utc_now

_OAUTH_STATE_KEY_INFO = b"accounts-oauth-state-v1"
DEFAULT_STATE_TTL_SECONDS = 600


class OAuthStateManager:
    """Create and verify HMAC-signed OAuth state values.

    The signing key is derived from the session secret with HKDF so the
    two never share key material directly.
    """

    def __init__(
        self,
        secret_key: str,
        ttl_seconds: int = DEFAULT_STATE_TTL_SECONDS,
        clock: Clock = utc_now,
    ) -> None:
        self._signing_key = self._derive_signing_key(secret_key)
        self._ttl_seconds = ttl_seconds
        self._clock = clock

    @staticmethod
    def _derive_signing_key(secret_key: str) -> bytes:
        """Derive a purpose-specific HMAC key from the master secret (domain separation)."""
        hkdf = HKDF(
            algorithm=hashes.SHA256(),
            length=32,
            salt=None,
            info=_OAUTH_STATE_KEY_INFO,
        )
        return hkdf.derive(secret_key.encode())

    def _sign(self, state_id: str) -> str:
        return hmac.new(self._signing_key, state_id.encode(), hashlib.sha256).hexdigest()

    def create_signed_state(self) -> str:
        """Return nonce.issued_at:signature."""
        issued_at = int(self._clock().timestamp())
        state_id = f"{secrets.token_urlsafe(16)}.{issued_at}"
        return f"{state_id}:{self._sign(state_id)}"

    def verify(self, signed_state: str) -> None:
        """Check signature and age of a state value.

        Raises:
            ValueError: Invalid format, signature, or expired state.
        """
        parts = (signed_state or "").rsplit(":", 1)
        if len(parts) != 2:
            raise ValueError("Invalid state format")
        state_id, signature = parts
        if not hmac.compare_digest(self._sign(state_id), signature):
            raise ValueError("Invalid state signature - possible CSRF attack")
        _, _, issued_raw = state_id.rpartition(".")
        try:
            issued_at = int(issued_raw)
        except ValueError:
            raise ValueError("Invalid state format") from None
        age = int(self._clock().timestamp()) - issued_at
        if age < 0 or age > self._ttl_seconds:
            raise ValueError("OAuth state expired")
