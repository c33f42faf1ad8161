from functools import lru_cache
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)
from sqlalchemy.pool import NullPool

from quizzical.config import get_settings


# Built on first use rather than at import time, so importing the app without a
# configured database (tests, tooling) does not fail.
@lru_cache()
def get_engine() -> AsyncEngine:
    """
    Create the AsyncEngine.

    NullPool: every session opens its own connection and releases it on close.
    Connection reuse is left to whatever sits in front of the database.

    Raises:
        ConfigurationError: if no database URL is configured.
    """
    settings = get_settings()
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.SQLALCHEMY_ECHO,   # Set to False in production
        poolclass=NullPool,
    )


@lru_cache()
def get_sessionmaker() -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: repositories read generated ids after committing
    return async_sessionmaker(
        bind=get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )

