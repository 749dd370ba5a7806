"""Delete password reset tokens whose expiry has passed.

Usage:
    uv run python -m scripts.purge_expired_reset_tokens
Requires DATABASE_URL. Safe to run repeatedly (e.g. from cron).
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from app.domain.exceptions import ServiceUnavailableException
from app.infrastructure.persistence.database import dispose_engine, get_session_factory
from app.infrastructure.persistence.repositories import SqlCredentialStore
from app.shared.utils.datetime import utc_now


def _load_env() -> None:
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


async def main() -> None:
    """Purge expired reset tokens and report how many were removed."""
    try:
        store = SqlCredentialStore(get_session_factory())
    except ServiceUnavailableException:
        print("DATABASE_URL is not configured", file=sys.stderr)
        sys.exit(1)
    try:
        deleted = await store.delete_expired_reset_tokens(utc_now())
    finally:
        await dispose_engine()
    print(f"Done. Deleted {deleted} expired reset token(s)")


if __name__ == "__main__":
    _load_env()
    asyncio.run(main())
