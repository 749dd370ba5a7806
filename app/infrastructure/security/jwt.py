"""JWT session token creation and verification.

TokenIssuer is the only component that mints or verifies signed session
payloads. It reads the signing secret once, at construction, and never
touches user data.
"""

from datetime import datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from app.application.dtos.auth import SessionClaims
from app.domain.exceptions import (
    InvalidSessionTokenException,
    ServiceUnavailableException,
)
from app.infrastructure.security.tokens import generate_reset_token, hash_reset_token
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import Clock, from_timestamp_utc, utc_now

logger = get_logger(__name__)

_REQUIRED_CLAIMS = ("sub", "email", "exp")


def create_access_token(
    data: dict[str, Any],
    secret_key: str,
    algorithm: str,
    expires_delta: timedelta,
    now: datetime | None = None,
) -> str:
    """Create a JWT with the given claims plus iat and exp.

    Args:
        data: Claims to encode (e.g. sub, email, name).
        secret_key: HMAC signing secret.
        algorithm: JWS algorithm (e.g. HS256).
        expires_delta: Lifetime of the token.
        now: Issue time; defaults to the current UTC time.

    Returns:
        Encoded JWT string.
    """
    issued_at = now or utc_now()
    to_encode = data.copy()
    to_encode["iat"] = int(issued_at.timestamp())
    to_encode["exp"] = int((issued_at + expires_delta).timestamp())
    encoded = jwt.encode(to_encode, secret_key, algorithm=algorithm)
    return cast(str, encoded)


def verify_token(
    token: str,
    secret_key: str,
    algorithm: str,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Verify and decode a JWT. Returns the payload.

    Signature and structure are checked by python-jose. Expiry is checked
    here against `now` only (python-jose would use the wall clock), so
    callers can pin the clock. Enforces presence of sub, email and exp.

    Raises:
        ValueError: If token is invalid, expired, or missing required claims.
    """
    try:
        payload = jwt.decode(
            token,
            secret_key,
            algorithms=[algorithm],
            options={"verify_exp": False},
        )
    except JWTError as e:
        raise ValueError(f"Invalid token: {e!s}") from e
    for claim in _REQUIRED_CLAIMS:
        if claim not in payload:
            raise ValueError(f"Token missing required claim: {claim}")
    exp = payload["exp"]
    if not isinstance(exp, int | float):
        raise ValueError("Token exp claim is not numeric")
    if from_timestamp_utc(exp) <= (now or utc_now()):
        raise ValueError("Token has expired")
    return payload


class TokenIssuer:
    """Issues and verifies session tokens; issues opaque reset tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        session_ttl: timedelta = timedelta(hours=1),
        clock: Clock = utc_now,
    ) -> None:
        if not secret_key:
            raise ValueError("TokenIssuer requires a non-empty signing secret")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._session_ttl = session_ttl
        self._clock = clock

    @property
    def session_ttl(self) -> timedelta:
        return self._session_ttl

    def issue_session(self, subject_id: str, email: str, name: str | None) -> str:
        """Sign {sub, email, name, iat, exp} with the process-wide secret."""
        try:
            return create_access_token(
                {"sub": subject_id, "email": email, "name": name},
                self._secret_key,
                self._algorithm,
                self._session_ttl,
                now=self._clock(),
            )
        except JWTError as e:
            logger.error("Session token signing failed: %s", type(e).__name__)
            raise ServiceUnavailableException("token_signer") from e

    def verify_session(self, token: str) -> SessionClaims:
        """Return the verified claims or raise InvalidSessionTokenException.

        Fails closed: any signature mismatch, malformed structure, missing
        claim, or expiry is Invalid. No part of an unverified payload is
        returned.
        """
        if not token:
            raise InvalidSessionTokenException()
        try:
            payload = verify_token(
                token, self._secret_key, self._algorithm, now=self._clock()
            )
        except ValueError as e:
            logger.debug("Session token rejected: %s", e)
            raise InvalidSessionTokenException() from None
        subject_id = payload["sub"]
        email = payload["email"]
        name = payload.get("name")
        if not isinstance(subject_id, str) or not subject_id or not isinstance(email, str):
            raise InvalidSessionTokenException()
        return SessionClaims(
            subject_id=subject_id,
            email=email,
            name=name if isinstance(name, str) else None,
            expires_at=from_timestamp_utc(payload["exp"]),
        )

    def issue_reset_token(self) -> str:
        """Return a fresh opaque reset token (256 bits of entropy, hex)."""
        return generate_reset_token()

    def hash_reset_token(self, token: str) -> str:
        """Return the lookup digest stored in place of the raw reset token."""
        return hash_reset_token(token)
