"""Application layer: DTOs, interfaces, services.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (credential store, hasher, issuer).
"""

from app.application.interfaces import (
    ICredentialStore,
    IPasswordHasher,
    IPasswordResetNotifier,
    ITokenIssuer,
)
from app.application.services import AuthService, IdentityResolver

__all__ = [
    "AuthService",
    "ICredentialStore",
    "IPasswordHasher",
    "IPasswordResetNotifier",
    "ITokenIssuer",
    "IdentityResolver",
]
