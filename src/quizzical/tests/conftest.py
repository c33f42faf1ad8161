"""
Core pytest configuration for the entire test suite.

Only the database setup and logging installation live here. Domain fixtures
are kept in tests/test_fixtures/ and imported at the bottom of this module so
they are available everywhere without explicit imports:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/api_fixtures.py
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from pathlib import Path
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Quiet noisy third-party loggers before anything imports them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
    "httpcore",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker,
    AsyncEngine,
)
from sqlalchemy.pool import NullPool

from quizzical.database.base import Base
from quizzical import models  # noqa: F401 - import to register models with Base.metadata
from quizzical.config import get_settings
from quizzical.core.logging.builder import setup_logging

# -------------------------------
# Load settings
# -------------------------------
settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging():
    """
    Install the application's logging configuration once for the whole session,
    so formatters and filters behave in tests exactly as they do in the app.
    """
    setup_logging(settings)
    yield


# ------------------------------------------------------------------------------------------------
# Determining the Test Database URL
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """
    Return the database URL without credentials, for logging.
    """
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url(workdir: Path) -> str:
    """
    Determine the test database URL.

    1. `TEST_DATABASE_URL` environment variable (CI override, e.g. a Postgres URL)
    2. The app's DATABASE_URL when `TESTING=true` and `TEST_POSTGRES_DB` is set
    3. A throwaway SQLite file under `workdir`, so tests run with no database server
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        return test_url

    if settings.TESTING and settings.TEST_POSTGRES_DB:
        return settings.DATABASE_URL

    return f"sqlite+aiosqlite:///{workdir / 'test_database.db'}"


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """
    Fresh schema for every test.

    Repositories commit their own work, so isolation comes from recreating the
    tables rather than from an outer transaction that is rolled back.
    """
    url = get_test_database_url(tmp_path)
    logger.debug(f"Using test DB: {safe_log_db_url(url)}")

    engine = create_async_engine(url, poolclass=NullPool)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    One AsyncSession per test, configured like the application's
    (expire_on_commit=False).
    """
    maker = async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)
    async with maker() as session:
        yield session


# Repository test fixtures
from .test_fixtures.repository_fixtures import (  # noqa: E402
    category_repository,
    question_repository,
    active_only_question_repository,
    make_question,
    sample_question,
    science_questions,
)

# API test fixtures
from .test_fixtures.api_fixtures import (  # noqa: E402
    app,
    client,
)
