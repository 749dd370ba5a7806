"""Identity resolution across password and external-provider logins.

Guarantees one User record per human: an external login either finds the
account already linked to that provider subject, creates a fresh one, or is
rejected when the email belongs to an account that was never linked.
Accounts are never merged or re-linked automatically.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.domain.enums import IdentityProvider
from app.domain.exceptions import (
    DuplicateRecordException,
    IdentityConflictException,
    ValidationException,
)
from app.domain.value_objects import EmailAddress, ProviderSubject
from app.shared.telemetry.logging import get_logger, mask_email

if TYPE_CHECKING:
    from app.application.dtos.user import UserRecord
    from app.application.interfaces.repositories import ICredentialStore

logger = get_logger(__name__)


def _email_or_raise(email: str) -> EmailAddress:
    try:
        return EmailAddress(email)
    except ValueError as e:
        raise ValidationException(str(e), field="email") from None


class IdentityResolver:
    """Look up and reconcile user identities (email and Google subject)."""

    def __init__(self, store: ICredentialStore) -> None:
        self._store = store

    async def find_by_email(self, email: str) -> UserRecord | None:
        """Return the user with this email (case-insensitive), or None."""
        return await self._store.get_user_by_email(_email_or_raise(email).value)

    async def find_by_external_id(self, provider_id: str) -> UserRecord | None:
        """Return the user linked to this Google subject, or None."""
        if not provider_id or not provider_id.strip():
            return None
        return await self._store.get_user_by_google_id(provider_id.strip())

    async def resolve_external_login(
        self,
        provider_id: str,
        email: str,
        display_name: str | None = None,
    ) -> UserRecord:
        """Return the account for an external login, creating it on first use.

        Raises:
            ValidationException: provider_id or email missing/malformed.
            IdentityConflictException: email belongs to an account not linked
                to this provider subject. The existing account is untouched.
        """
        try:
            subject = ProviderSubject(provider_id)
        except ValueError as e:
            raise ValidationException(str(e), field="provider_id") from None
        address = _email_or_raise(email)

        linked = await self._store.get_user_by_google_id(subject.value)
        if linked is not None:
            return linked

        if await self._store.get_user_by_email(address.value) is not None:
            logger.warning(
                "External login rejected: email %s already has an unlinked account",
                address.masked(),
            )
            raise IdentityConflictException(IdentityProvider.GOOGLE.value)

        name = display_name.strip() if display_name and display_name.strip() else None
        try:
            created = await self._store.create_user(
                address.value, name=name, google_id=subject.value
            )
        except DuplicateRecordException as e:
            # Lost a race with a concurrent request for the same person.
            if e.field == "google_id":
                winner = await self._store.get_user_by_google_id(subject.value)
                if winner is not None:
                    return winner
            logger.warning(
                "External login rejected on insert: email %s taken concurrently",
                mask_email(address.value),
            )
            raise IdentityConflictException(IdentityProvider.GOOGLE.value) from None
        logger.info("Account created from Google login: user_id=%s", created.id)
        return created
