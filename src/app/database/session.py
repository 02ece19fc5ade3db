from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from app.config import get_settings
from app.database.base import Base


# The engine is built on first use rather than at import time, so importing the
# app (tests, tooling) never needs a reachable database or its driver.
@lru_cache()
def get_engine() -> AsyncEngine:
    settings = get_settings()
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,   # Keep False in production
        pool_pre_ping=True,              # Enables connection health checks
    )


@lru_cache()
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine | None = None) -> None:
    """Create any missing tables. There are no migrations; this is the whole schema step."""
    # Import models so they are registered on Base.metadata
    from app import models  # noqa: F401

    engine = engine or get_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# Dependency to get DB session
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)

    Commits are not issued here: the service layer commits after each mutation.
    """
    async with get_sessionmaker()() as session:
        yield session
