"""Core: config, exception handlers, lifespan, and rate limits."""

from app.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
