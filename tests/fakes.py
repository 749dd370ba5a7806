"""In-memory test doubles for the credential store and reset notifier.

InMemoryCredentialStore enforces the same constraints as the SQL schema
(unique email, google_id, token_hash, one reset token per user, cascade on
user delete) so service tests exercise the real conflict paths.
"""

from dataclasses import replace
from datetime import datetime, timedelta

from app.application.dtos.password_reset import PasswordResetGrant, ResetTokenRecord
from app.application.dtos.user import UserRecord
from app.domain.enums import RedeemOutcome
from app.domain.exceptions import DuplicateRecordException, ResourceNotFoundException
from app.shared.utils.datetime import utc_now
from app.shared.utils.generators import generate_cuid

TEST_SECRET = "unit-test-signing-secret"
FRONTEND_URL = "http://localhost:3001"


class MutableClock:
    """Callable clock tests can move forward."""

    def __init__(self, now: datetime | None = None) -> None:
        self.now = now or utc_now()

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now = self.now + timedelta(**kwargs)


class InMemoryCredentialStore:
    """ICredentialStore backed by dicts."""

    def __init__(self, clock=utc_now) -> None:
        self._clock = clock
        self.users: dict[str, UserRecord] = {}
        self.tokens: dict[str, ResetTokenRecord] = {}

    async def get_user_by_id(self, user_id: str) -> UserRecord | None:
        return self.users.get(user_id)

    async def get_user_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.email == email), None)

    async def get_user_by_google_id(self, google_id: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.google_id == google_id), None)

    async def create_user(
        self,
        email: str,
        *,
        hashed_password: str | None = None,
        name: str | None = None,
        google_id: str | None = None,
    ) -> UserRecord:
        if await self.get_user_by_email(email) is not None:
            raise DuplicateRecordException("email")
        if google_id is not None and await self.get_user_by_google_id(google_id):
            raise DuplicateRecordException("google_id")
        user = UserRecord(
            id=generate_cuid(),
            email=email,
            name=name,
            hashed_password=hashed_password,
            google_id=google_id,
            created_at=self._clock(),
        )
        self.users[user.id] = user
        return user

    async def delete_user(self, user_id: str) -> bool:
        if self.users.pop(user_id, None) is None:
            return False
        self.tokens = {k: t for k, t in self.tokens.items() if t.user_id != user_id}
        return True

    def token_for_user(self, user_id: str) -> ResetTokenRecord | None:
        return next((t for t in self.tokens.values() if t.user_id == user_id), None)

    async def replace_reset_token(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> ResetTokenRecord:
        if user_id not in self.users:
            raise ResourceNotFoundException("user", user_id)
        if any(
            t.token_hash == token_hash and t.user_id != user_id
            for t in self.tokens.values()
        ):
            raise DuplicateRecordException("token_hash")
        previous = self.token_for_user(user_id)
        if previous is not None:
            del self.tokens[previous.id]
        record = ResetTokenRecord(
            id=generate_cuid(),
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
        )
        self.tokens[record.id] = record
        return record

    async def get_reset_token(self, token_hash: str) -> ResetTokenRecord | None:
        return next(
            (t for t in self.tokens.values() if t.token_hash == token_hash), None
        )

    async def delete_reset_token(self, token_id: str) -> None:
        self.tokens.pop(token_id, None)

    async def redeem_reset_token(
        self, token_id: str, user_id: str, hashed_password: str
    ) -> RedeemOutcome:
        token = self.tokens.pop(token_id, None)
        if token is None:
            if user_id not in self.users:
                return RedeemOutcome.USER_GONE
            return RedeemOutcome.TOKEN_GONE
        user = self.users.get(token.user_id)
        if user is None:
            return RedeemOutcome.USER_GONE
        self.users[user.id] = replace(user, hashed_password=hashed_password)
        return RedeemOutcome.REDEEMED

    async def delete_expired_reset_tokens(self, now: datetime) -> int:
        expired = [k for k, t in self.tokens.items() if t.expires_at <= now]
        for key in expired:
            del self.tokens[key]
        return len(expired)


class RecordingNotifier:
    """IPasswordResetNotifier that keeps every grant it is handed."""

    def __init__(self) -> None:
        self.grants: list[PasswordResetGrant] = []

    async def send_password_reset(self, grant: PasswordResetGrant) -> None:
        self.grants.append(grant)

    @property
    def last(self) -> PasswordResetGrant:
        return self.grants[-1]
