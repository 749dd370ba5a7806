"""Shared telemetry: logging setup and redaction helpers."""

from app.shared.telemetry.logging import (
    RedactingFilter,
    RequestIdFilter,
    get_logger,
    mask_email,
    redact,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "mask_email",
    "redact",
    "RedactingFilter",
    "RequestIdFilter",
]
