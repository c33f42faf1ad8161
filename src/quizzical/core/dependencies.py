"""
FastAPI dependencies shared by the routers.

Both repositories of one request receive the same session, so a request that
touches categories and questions runs on a single connection.
"""

from typing import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from quizzical.config import Settings, get_settings
from quizzical.database.session import get_sessionmaker
from quizzical.repositories import CategoryRepository, QuestionRepository


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    # One session per request; tests override this dependency
    async with get_sessionmaker()() as session:
        yield session


def get_category_repository(db: AsyncSession = Depends(get_db_session)) -> CategoryRepository:
    return CategoryRepository(db)


def get_question_repository(
    db: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings),
) -> QuestionRepository:
    return QuestionRepository(db, active_categories_only=settings.ACTIVE_CATEGORIES_ONLY)
