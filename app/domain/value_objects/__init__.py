"""Domain value objects and shared value types."""

from app.domain.value_objects.core import (
    EmailAddress,
    ProviderSubject,
    normalize_email,
)

__all__ = [
    "EmailAddress",
    "ProviderSubject",
    "normalize_email",
]
