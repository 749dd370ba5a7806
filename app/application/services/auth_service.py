"""Authentication orchestration: register, login, OAuth login, password reset.

AuthService is built once per process and holds its collaborators directly
(store, hasher, token issuer, identity resolver, notifier). It keeps no
state between calls; everything lives in the credential store.
"""

from __future__ import annotations

from datetime import timedelta
from typing import TYPE_CHECKING

from app.application.dtos.auth import (
    AuthResult,
    LoginIntent,
    OAuthLogin,
    PasswordLogin,
    SessionClaims,
    TokenBearer,
)
from app.application.dtos.password_reset import PasswordResetGrant
from app.application.services.identity_resolver import IdentityResolver
from app.domain.enums import RedeemOutcome
from app.domain.exceptions import (
    DuplicateRecordException,
    EmailAlreadyRegisteredException,
    InvalidCredentialsException,
    InvalidOrExpiredTokenException,
    InvalidSessionTokenException,
    ResourceNotFoundException,
    ServiceUnavailableException,
    ValidationException,
)
from app.domain.value_objects import EmailAddress
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import Clock, utc_now

if TYPE_CHECKING:
    from app.application.dtos.user import UserRecord, UserResult
    from app.application.interfaces.repositories import ICredentialStore
    from app.application.interfaces.services import (
        IPasswordHasher,
        IPasswordResetNotifier,
        ITokenIssuer,
    )

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 8
DEFAULT_RESET_TOKEN_TTL = timedelta(hours=1)
# Attempts at storing a fresh reset token when its digest collides.
_RESET_TOKEN_ATTEMPTS = 2


def _check_new_password(password: str, field: str = "password") -> str:
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationException(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            field=field,
        )
    try:
        password.encode("utf-8")
    except UnicodeEncodeError:
        raise ValidationException(
            "Password contains characters that cannot be encoded", field=field
        ) from None
    return password


def _check_email(email: str) -> EmailAddress:
    try:
        return EmailAddress(email)
    except ValueError as e:
        raise ValidationException(str(e), field="email") from None


def check_password_login(intent: PasswordLogin) -> PasswordLogin:
    """Return the intent with a canonical email.

    A malformed email cannot belong to any account, so it fails as bad
    credentials rather than as a validation error.
    """
    if not intent.email or not intent.password:
        raise InvalidCredentialsException()
    try:
        email = EmailAddress(intent.email).value
    except ValueError:
        raise InvalidCredentialsException() from None
    return PasswordLogin(email=email, password=intent.password)


def check_oauth_login(intent: OAuthLogin) -> OAuthLogin:
    """Return the intent with a canonical email; provider id must be present."""
    if not intent.provider_id or not intent.provider_id.strip():
        raise ValidationException("Provider id is required", field="provider_id")
    return OAuthLogin(
        provider_id=intent.provider_id.strip(),
        email=_check_email(intent.email).value,
        display_name=intent.display_name,
    )


def check_token_bearer(intent: TokenBearer) -> TokenBearer:
    """Reject empty bearer tokens before they reach the verifier."""
    token = (intent.token or "").strip()
    if not token:
        raise InvalidSessionTokenException()
    return TokenBearer(token=token)


class AuthService:
    """Compose store, hasher, issuer and resolver into the auth flows."""

    def __init__(
        self,
        store: ICredentialStore,
        hasher: IPasswordHasher,
        token_issuer: ITokenIssuer,
        notifier: IPasswordResetNotifier,
        *,
        frontend_url: str,
        reset_token_ttl: timedelta = DEFAULT_RESET_TOKEN_TTL,
        identity_resolver: IdentityResolver | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._store = store
        self._hasher = hasher
        self._tokens = token_issuer
        self._notifier = notifier
        self._frontend_url = frontend_url.rstrip("/")
        self._reset_token_ttl = reset_token_ttl
        self._resolver = identity_resolver or IdentityResolver(store)
        self._clock = clock

    def _session_for(self, user: UserRecord) -> AuthResult:
        token = self._tokens.issue_session(user.id, user.email, user.name)
        return AuthResult(access_token=token, user=user.to_result())

    async def register(
        self, email: str, password: str, name: str | None = None
    ) -> AuthResult:
        """Create a password account and log it in.

        Raises:
            ValidationException: malformed email or short password.
            EmailAlreadyRegisteredException: email taken, including when a
                concurrent registration wins the insert.
        """
        address = _check_email(email)
        _check_new_password(password)
        if await self._store.get_user_by_email(address.value) is not None:
            raise EmailAlreadyRegisteredException()

        hashed = await self._hasher.hash_async(password)
        display_name = name.strip() if name and name.strip() else None
        try:
            user = await self._store.create_user(
                address.value, hashed_password=hashed, name=display_name
            )
        except DuplicateRecordException:
            raise EmailAlreadyRegisteredException() from None
        logger.info("User registered: user_id=%s email=%s", user.id, address.masked())
        return self._session_for(user)

    async def login(self, email: str, password: str) -> AuthResult:
        """Verify email + password and issue a session token.

        Every failure raises the same InvalidCredentialsException, and every
        failure path runs exactly one bcrypt verify so timing does not reveal
        whether the email exists.
        """
        try:
            intent = check_password_login(PasswordLogin(email=email, password=password))
        except InvalidCredentialsException:
            await self._hasher.dummy_verify(password or "")
            raise
        user = await self._store.get_user_by_email(intent.email)
        if user is None or not user.has_password:
            await self._hasher.dummy_verify(intent.password)
            logger.info("Login failed for email=%s", EmailAddress(intent.email).masked())
            raise InvalidCredentialsException()
        if not await self._hasher.verify_async(intent.password, user.hashed_password):
            logger.info("Login failed for email=%s", EmailAddress(intent.email).masked())
            raise InvalidCredentialsException()
        return self._session_for(user)

    async def oauth_login(
        self, provider_id: str, email: str, display_name: str | None = None
    ) -> AuthResult:
        """Log in (or sign up) with a Google identity.

        Raises:
            IdentityConflictException: email belongs to an unlinked account.
        """
        intent = check_oauth_login(
            OAuthLogin(provider_id=provider_id, email=email, display_name=display_name)
        )
        user = await self._resolver.resolve_external_login(
            intent.provider_id, intent.email, intent.display_name
        )
        return self._session_for(user)

    def verify_session(self, token: str) -> SessionClaims:
        """Return claims of a valid session token or raise InvalidSessionTokenException."""
        intent = check_token_bearer(TokenBearer(token=token))
        return self._tokens.verify_session(intent.token)

    async def authenticate(self, intent: LoginIntent) -> AuthResult | SessionClaims:
        """Dispatch a login intent to its flow."""
        match intent:
            case PasswordLogin(email=email, password=password):
                return await self.login(email, password)
            case OAuthLogin(provider_id=provider_id, email=email, display_name=name):
                return await self.oauth_login(provider_id, email, name)
            case TokenBearer(token=token):
                return self.verify_session(token)
        raise ValidationException("Unsupported login intent")

    def logout(self) -> None:
        """Session tokens are self-verifying; there is nothing to revoke server-side."""
        return None

    async def forgot_password(self, email: str) -> None:
        """Issue a reset token for the account, if there is one.

        Unknown (or malformed) emails succeed silently and create nothing.
        A known account ends up with exactly one live token; any previous
        token for it stops working.
        """
        try:
            address = EmailAddress(email)
        except ValueError:
            return None
        user = await self._store.get_user_by_email(address.value)
        if user is None:
            logger.info("Password reset requested for unknown email=%s", address.masked())
            return None

        expires_at = self._clock() + self._reset_token_ttl
        for attempt in range(1, _RESET_TOKEN_ATTEMPTS + 1):
            token = self._tokens.issue_reset_token()
            try:
                await self._store.replace_reset_token(
                    user.id, self._tokens.hash_reset_token(token), expires_at
                )
                break
            except DuplicateRecordException:
                logger.warning("Reset token digest collision (attempt %d)", attempt)
            except ResourceNotFoundException:
                # Account deleted since the lookup; same answer as an unknown email.
                return None
        else:
            raise ServiceUnavailableException("credential_store")

        grant = PasswordResetGrant(
            user_id=user.id,
            email=user.email,
            token=token,
            reset_url=f"{self._frontend_url}/reset-password?token={token}",
            expires_at=expires_at,
        )
        await self._notifier.send_password_reset(grant)
        logger.info("Password reset token issued: user_id=%s", user.id)
        return None

    async def reset_password(self, token: str, new_password: str) -> None:
        """Set a new password using a single-use reset token.

        Raises:
            ValidationException: new password too short.
            InvalidOrExpiredTokenException: token unknown, expired, or used.
            ResourceNotFoundException: the token's owner was deleted.
        """
        _check_new_password(new_password, field="new_password")
        if not token:
            raise InvalidOrExpiredTokenException()
        record = await self._store.get_reset_token(self._tokens.hash_reset_token(token))
        if record is None:
            raise InvalidOrExpiredTokenException()
        if record.is_expired(self._clock()):
            await self._store.delete_reset_token(record.id)
            raise InvalidOrExpiredTokenException()

        hashed = await self._hasher.hash_async(new_password)
        outcome = await self._store.redeem_reset_token(record.id, record.user_id, hashed)
        if outcome is RedeemOutcome.TOKEN_GONE:
            raise InvalidOrExpiredTokenException()
        if outcome is RedeemOutcome.USER_GONE:
            raise ResourceNotFoundException("user", record.user_id)
        logger.info("Password reset completed: user_id=%s", record.user_id)

    async def get_profile(self, user_id: str) -> UserResult:
        """Return the public profile of a user."""
        user = await self._store.get_user_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user.to_result()

    async def delete_account(self, user_id: str) -> None:
        """Delete a user and their reset tokens."""
        if not await self._store.delete_user(user_id):
            raise ResourceNotFoundException("user", user_id)
        logger.info("Account deleted: user_id=%s", user_id)
