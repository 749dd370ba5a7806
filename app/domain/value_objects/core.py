"""Domain value objects for the accounts service.

Value objects are immutable types that represent domain concepts with
self-validation. They have no identity, only value.
"""

import re
from dataclasses import dataclass

# Shape only. Strict syntax is checked at the HTTP boundary (pydantic EmailStr).
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_EMAIL_MAX_LENGTH = 320


def normalize_email(value: str) -> str:
    """Return the canonical form of an email: trimmed and lower-cased."""
    return value.strip().lower()


@dataclass(frozen=True)
class EmailAddress:
    """Value object for an account email in canonical form.

    Two emails that differ only in case or surrounding whitespace are the
    same account identity.
    """

    value: str

    def __post_init__(self) -> None:
        """Canonicalize and validate shape.

        Raises:
            ValueError: If empty, too long, or not shaped like an email.
        """
        object.__setattr__(self, "value", normalize_email(self.value or ""))
        if not self.value:
            raise ValueError("Email must be a non-empty string")
        if len(self.value) > _EMAIL_MAX_LENGTH:
            raise ValueError(f"Email must not exceed {_EMAIL_MAX_LENGTH} characters")
        if not _EMAIL_RE.match(self.value):
            raise ValueError("Email must look like local@domain.tld")

    def masked(self) -> str:
        """Return a log-safe rendering, e.g. 'a***@example.com'."""
        local, _, domain = self.value.partition("@")
        return f"{local[:1]}***@{domain}"


@dataclass(frozen=True)
class ProviderSubject:
    """Value object for an external identity provider subject (e.g. Google 'sub')."""

    value: str

    def __post_init__(self) -> None:
        """Validate non-empty after trimming.

        Raises:
            ValueError: If empty.
        """
        object.__setattr__(self, "value", (self.value or "").strip())
        if not self.value:
            raise ValueError("Provider id must be a non-empty string")
