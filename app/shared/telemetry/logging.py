"""Logging configuration for the application.

Credentials never reach log output: a RedactingFilter on the root handler
masks anything shaped like a session JWT or a hex reset token, and callers
log emails through mask_email().
"""

import logging
import re
import sys

from app.core.config import get_settings
from app.shared.context import get_request_id

# header.payload.signature, each base64url; JWT headers always start with "eyJ".
_JWT_RE = re.compile(r"eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+")
# Reset tokens (32 random bytes) and their SHA-256 digests are 64 hex chars.
_HEX_TOKEN_RE = re.compile(r"\b[0-9a-fA-F]{64}\b")
_REDACTED = "[REDACTED]"


def redact(text: str) -> str:
    """Return text with session tokens and reset tokens replaced by a placeholder."""
    text = _JWT_RE.sub(_REDACTED, text)
    return _HEX_TOKEN_RE.sub(_REDACTED, text)


def mask_email(email: str | None) -> str:
    """Render an email for logs as first char + *** + domain (e.g. a***@example.com)."""
    if not email:
        return "<none>"
    local, sep, domain = email.strip().partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


class RequestIdFilter(logging.Filter):
    """Attach the current request ID (or "-") to every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id() or "-"
        return True


class RedactingFilter(logging.Filter):
    """Logging filter that scrubs tokens from the fully formatted message."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        scrubbed = redact(message)
        if scrubbed != message:
            record.msg = scrubbed
            record.args = None
        return True


def setup_logging() -> None:
    """Configure application-wide logging.

    Level is DEBUG when settings.debug is True, otherwise INFO.
    Output goes to stdout through RequestIdFilter and RedactingFilter.
    """
    settings = get_settings()
    log_level = logging.DEBUG if settings.debug else logging.INFO
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(RequestIdFilter())
    handler.addFilter(RedactingFilter())
    logging.basicConfig(
        level=log_level,
        force=True,
        format="%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] %(message)s",
        handlers=[handler],
    )


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given module name.

    Args:
        name: Usually __name__ of the calling module.

    Returns:
        Logger instance.
    """
    return logging.getLogger(name)
