"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.credential_store import (
    SqlCredentialStore,
)

__all__ = [
    "SqlCredentialStore",
]
