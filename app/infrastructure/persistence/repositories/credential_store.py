"""Credential store (Postgres): users and password reset tokens.

Implements ICredentialStore. Each method runs in its own short transaction
taken from the session factory and returns application DTOs, never ORM
objects. Uniqueness is enforced by database constraints; IntegrityError is
translated to DuplicateRecordException naming the violated field, and every
other driver error to ServiceUnavailableException.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime

from sqlalchemy import delete, func, select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.application.dtos.password_reset import ResetTokenRecord
from app.application.dtos.user import UserRecord
from app.domain.enums import RedeemOutcome
from app.domain.exceptions import (
    DuplicateRecordException,
    ResourceNotFoundException,
    ServiceUnavailableException,
)
from app.infrastructure.persistence.models.password_reset_token import (
    PasswordResetToken,
)
from app.infrastructure.persistence.models.user import User
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import ensure_utc
from app.shared.utils.generators import generate_cuid

logger = get_logger(__name__)

# Constraint names follow Base.metadata's naming convention.
_UNIQUE_CONSTRAINT_FIELDS: dict[str, str] = {
    "uq_app_user_email": "email",
    "uq_app_user_google_id": "google_id",
    "uq_password_reset_token_token_hash": "token_hash",
    "uq_password_reset_token_user_id": "user_id",
}
_USER_FK = "fk_password_reset_token_user_id_app_user"


class _ForeignKeyMissing(Exception):
    """A referenced row does not exist (FK violation)."""


def _classify_integrity_error(exc: IntegrityError) -> str | None:
    """Return the unique field that was violated, or None for a FK violation.

    Raises:
        ServiceUnavailableException: any other integrity failure (not expected).
    """
    message = str(exc.orig) if exc.orig is not None else str(exc)
    if _USER_FK in message:
        return None
    for constraint, field in _UNIQUE_CONSTRAINT_FIELDS.items():
        if constraint in message:
            return field
    logger.error("Unclassified integrity error in credential store")
    raise ServiceUnavailableException("credential_store") from exc


def _user_to_record(u: User) -> UserRecord:
    """Map ORM User to application UserRecord."""
    return UserRecord(
        id=u.id,
        email=u.email,
        name=u.name,
        hashed_password=u.hashed_password,
        google_id=u.google_id,
        created_at=ensure_utc(u.created_at),
    )


def _token_to_record(t: PasswordResetToken) -> ResetTokenRecord:
    return ResetTokenRecord(
        id=t.id,
        user_id=t.user_id,
        token_hash=t.token_hash,
        expires_at=ensure_utc(t.expires_at),
    )


class SqlCredentialStore:
    """Postgres-backed ICredentialStore."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def _transaction(self) -> AsyncIterator[AsyncSession]:
        """Yield a session inside a transaction; commit on exit, translate errors."""
        try:
            async with self._session_factory.begin() as session:
                yield session
        except IntegrityError as e:
            field = _classify_integrity_error(e)
            if field is None:
                raise _ForeignKeyMissing() from e
            raise DuplicateRecordException(field) from None
        except (SQLAlchemyError, OSError) as e:
            logger.error("Credential store failure: %s", type(e).__name__)
            raise ServiceUnavailableException("credential_store") from e

    async def _get_user_where(self, *criteria) -> UserRecord | None:
        async with self._transaction() as session:
            result = await session.execute(select(User).where(*criteria))
            user = result.scalar_one_or_none()
            return _user_to_record(user) if user else None

    async def get_user_by_id(self, user_id: str) -> UserRecord | None:
        return await self._get_user_where(User.id == user_id)

    async def get_user_by_email(self, email: str) -> UserRecord | None:
        return await self._get_user_where(User.email == email)

    async def get_user_by_google_id(self, google_id: str) -> UserRecord | None:
        return await self._get_user_where(User.google_id == google_id)

    async def create_user(
        self,
        email: str,
        *,
        hashed_password: str | None = None,
        name: str | None = None,
        google_id: str | None = None,
    ) -> UserRecord:
        """Insert a user; raise DuplicateRecordException on email/google_id conflict."""
        async with self._transaction() as session:
            user = User(
                email=email,
                hashed_password=hashed_password,
                name=name,
                google_id=google_id,
            )
            session.add(user)
            await session.flush()
            await session.refresh(user)
            return _user_to_record(user)

    async def delete_user(self, user_id: str) -> bool:
        """Delete user; reset tokens go with it (ON DELETE CASCADE)."""
        async with self._transaction() as session:
            result = await session.execute(
                delete(User).where(User.id == user_id).returning(User.id)
            )
            return result.scalar_one_or_none() is not None

    async def replace_reset_token(
        self, user_id: str, token_hash: str, expires_at: datetime
    ) -> ResetTokenRecord:
        """Upsert on user_id so concurrent requests leave exactly one live token.

        The row gets a fresh id on every replace, so a redemption that looked
        up the superseded token can no longer delete its successor.
        """
        stmt = pg_insert(PasswordResetToken).values(
            id=generate_cuid(),
            user_id=user_id,
            token_hash=token_hash,
            expires_at=expires_at,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[PasswordResetToken.user_id],
            set_={
                "id": stmt.excluded.id,
                "token_hash": stmt.excluded.token_hash,
                "expires_at": stmt.excluded.expires_at,
                "created_at": func.now(),
            },
        ).returning(PasswordResetToken)
        try:
            async with self._transaction() as session:
                result = await session.execute(stmt)
                return _token_to_record(result.scalar_one())
        except _ForeignKeyMissing:
            raise ResourceNotFoundException("user", user_id) from None

    async def get_reset_token(self, token_hash: str) -> ResetTokenRecord | None:
        async with self._transaction() as session:
            result = await session.execute(
                select(PasswordResetToken).where(
                    PasswordResetToken.token_hash == token_hash
                )
            )
            row = result.scalar_one_or_none()
            return _token_to_record(row) if row else None

    async def delete_reset_token(self, token_id: str) -> None:
        async with self._transaction() as session:
            await session.execute(
                delete(PasswordResetToken).where(PasswordResetToken.id == token_id)
            )

    async def redeem_reset_token(
        self, token_id: str, user_id: str, hashed_password: str
    ) -> RedeemOutcome:
        """Consume the token with DELETE ... RETURNING, then update its owner.

        Only one concurrent caller can delete a given row, so a token is
        redeemed at most once even under retries.
        """
        async with self._transaction() as session:
            consumed = await session.execute(
                delete(PasswordResetToken)
                .where(PasswordResetToken.id == token_id)
                .returning(PasswordResetToken.user_id)
            )
            owner_id = consumed.scalar_one_or_none()
            if owner_id is None:
                # Cascade from an account deletion also removes the token.
                exists = await session.execute(select(User.id).where(User.id == user_id))
                if exists.scalar_one_or_none() is None:
                    return RedeemOutcome.USER_GONE
                return RedeemOutcome.TOKEN_GONE
            updated = await session.execute(
                update(User)
                .where(User.id == owner_id)
                .values(hashed_password=hashed_password)
                .returning(User.id)
            )
            if updated.scalar_one_or_none() is None:
                return RedeemOutcome.USER_GONE
            return RedeemOutcome.REDEEMED

    async def delete_expired_reset_tokens(self, now: datetime) -> int:
        async with self._transaction() as session:
            result = await session.execute(
                delete(PasswordResetToken)
                .where(PasswordResetToken.expires_at <= now)
                .returning(PasswordResetToken.id)
            )
            return len(result.scalars().all())
