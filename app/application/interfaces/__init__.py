"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import ICredentialStore
from app.application.interfaces.services import (
    IPasswordHasher,
    IPasswordResetNotifier,
    ITokenIssuer,
)

__all__ = [
    "ICredentialStore",
    "IPasswordHasher",
    "IPasswordResetNotifier",
    "ITokenIssuer",
]
