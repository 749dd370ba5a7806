"""Create a password account from the command line (local development).

Usage:
    uv run python -m scripts.create_user <email> <password> [name]
"""

import asyncio
import sys
from pathlib import Path

from dotenv import load_dotenv

from app.api.v1.dependencies import build_auth_service
from app.core.config import get_settings
from app.domain.exceptions import AccountsException
from app.infrastructure.persistence.database import dispose_engine, get_session_factory


def _load_env() -> None:
    load_dotenv(Path(__file__).resolve().parent.parent / ".env", override=True)


async def main() -> None:
    """Register a user through AuthService so the usual rules apply."""
    if len(sys.argv) < 3:
        print(
            "Usage: uv run python -m scripts.create_user <email> <password> [name]",
            file=sys.stderr,
        )
        sys.exit(1)
    email, password = sys.argv[1], sys.argv[2]
    name = sys.argv[3] if len(sys.argv) > 3 else None

    try:
        service = build_auth_service(get_settings(), get_session_factory())
        result = await service.register(email, password, name)
    except AccountsException as e:
        print(f"{e.error_code}: {e.message}", file=sys.stderr)
        sys.exit(1)
    finally:
        await dispose_engine()
    print(f"Created user {result.user.id} ({result.user.email})")


if __name__ == "__main__":
    _load_env()
    asyncio.run(main())
