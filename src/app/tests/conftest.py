"""
Core pytest configuration for the entire test suite.

Only the database setup and logging install live here. Domain fixtures
(repositories, services, sample cats, HTTP client) are in
tests/test_fixtures/ and imported at the bottom of this module so every test
module can use them without imports.
"""

from __future__ import annotations

import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# Quiet noisy third-party loggers before anything imports them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.pool import StaticPool

from app.database.base import Base
from app import models  # noqa: F401 – import to register models with Base.metadata
from app.config import get_settings
from app.core.logging.builder import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install the application's logging config once for the session, then put
    pytest's capture handler back on the root logger (dictConfig removes it)
    so caplog keeps working.
    """
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# Test database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """
    Database URL without credentials, for logging.
    """
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    1. TEST_DATABASE_URL environment variable (CI override)
    2. the app's DATABASE_URL when TESTING=true and TEST_POSTGRES_DB is set
    3. in-memory SQLite
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url

    if settings.TESTING and settings.TEST_POSTGRES_DB:
        return settings.DATABASE_URL

    return "sqlite+aiosqlite://"


TEST_DATABASE_URL = get_test_database_url()
logger.info(f"Using test DB: {safe_log_db_url(TEST_DATABASE_URL)}")


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Fresh schema per test. For SQLite, StaticPool keeps a single connection so the
    in-memory database survives across sessions within the test.
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = create_async_engine(
            TEST_DATABASE_URL,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    else:
        engine = create_async_engine(TEST_DATABASE_URL, pool_pre_ping=True)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    maker = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session
        await session.rollback()


# Shared fixtures
from app.tests.test_fixtures.repository_fixtures import (  # noqa: E402,F401
    cat_repository,
    create_cat,
    sample_cats,
)
from app.tests.test_fixtures.service_fixtures import (  # noqa: E402,F401
    cat_service,
    mock_repository,
    mocked_service,
)
from app.tests.test_fixtures.api_fixtures import (  # noqa: E402,F401
    test_app,
    client,
)
