"""Fixtures for Postgres-backed tests. Skipped unless DATABASE_URL is set."""

import os

import pytest
from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models import User
from app.infrastructure.persistence.repositories import SqlCredentialStore


@pytest.fixture
async def session_factory() -> async_sessionmaker[AsyncSession]:
    """A fresh engine per test (asyncpg connections are bound to one event loop)."""
    url = os.environ.get("DATABASE_URL")
    if not url:
        pytest.skip(
            "Postgres not configured: set DATABASE_URL, then run: uv run alembic upgrade head"
        )
    engine = create_async_engine(url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, expire_on_commit=False)
    try:
        yield factory
    finally:
        async with factory.begin() as session:
            await session.execute(delete(User).where(User.email.like("%@it.example.com")))
        await engine.dispose()


@pytest.fixture
def sql_store(session_factory: async_sessionmaker[AsyncSession]) -> SqlCredentialStore:
    return SqlCredentialStore(session_factory)
