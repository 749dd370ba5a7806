"""Application lifespan: startup and shutdown.

Wiring only: logging, the shared outbound HTTP client, the AuthService graph
(built once per process), and engine disposal.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.core.config import get_settings
from app.shared.telemetry.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: logging, shared HTTP client, AuthService. A missing DATABASE_URL
    leaves app.state.auth_service unset; requests then fail with 503.
    Shutdown: HTTP client close, SQL engine dispose.
    """
    from app.api.v1.dependencies import build_auth_service
    from app.domain.exceptions import ServiceUnavailableException
    from app.infrastructure.persistence.database import (
        dispose_engine,
        get_session_factory,
    )

    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    app.state.oauth_http_client = httpx.AsyncClient(timeout=30.0)
    try:
        app.state.auth_service = build_auth_service(settings, get_session_factory())
        logger.info("Auth service ready")
    except ServiceUnavailableException:
        app.state.auth_service = None
        logger.warning("Auth service not started: database is not configured")

    yield

    # ---- Shutdown ----
    if getattr(app.state, "oauth_http_client", None) is not None:
        await app.state.oauth_http_client.aclose()
        app.state.oauth_http_client = None
        logger.info("OAuth HTTP client closed")

    app.state.auth_service = None
    await dispose_engine()
