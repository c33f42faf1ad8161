"""
Category repository: idempotent creation, activation and listing of categories.

Every write commits as soon as its single-row effect is done. Categories are
never deleted; `active` is the only mutable attribute.
"""

import time
import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from quizzical.exceptions import NotFoundError, db_error_handler
from quizzical.models import CategoryRecord
from quizzical.schemas import Category, SaveCategoryStatus
from .base_repository import BaseRepository

logger = logging.getLogger(__name__)


class CategoryRepository(BaseRepository[CategoryRecord]):
    """
    Repository for Category operations.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(CategoryRecord, db)

    # =================================================================================================================
    # Create / Upsert Operations
    # =================================================================================================================

    async def _insert_if_absent(self, title: str, active: bool | None = None) -> bool:
        """
        INSERT ... ON CONFLICT (name) DO NOTHING RETURNING name.

        A returned row means this call inserted it. When `active` is None the
        column default applies.
        """
        values = {"name": title}
        if active is not None:
            values["active"] = active

        stmt = (
            self.upsert_insert()
            .values(**values)
            .on_conflict_do_nothing(index_elements=["name"])
            .returning(CategoryRecord.name)
        )
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def upsert_category(self, title: str) -> SaveCategoryStatus:
        """
        Create the category if it does not exist yet; never touches an existing row.

        Args:
            title: category title (business key)

        Returns:
            SaveCategoryStatus.CREATED if the row was inserted, EXISTS otherwise.

        Raises:
            RepositoryError subclasses (see quizzical.exceptions) on storage failure.
        """
        async with db_error_handler(self.db, "upsert category"):
            created = await self._insert_if_absent(title)
            await self.db.commit()

        status = SaveCategoryStatus.CREATED if created else SaveCategoryStatus.EXISTS
        logger.info("repo.upsert_category.success", extra={"category": title, "status": status.value})
        return status

    async def upsert_category_and_set_active(self, title: str, active: bool | None = None) -> SaveCategoryStatus:
        """
        Create the category with the given flag, or overwrite the flag of an existing row.

        With `active=None` this is exactly `upsert_category`.

        The insert and the conditional update run in one transaction, which
        keeps the CREATED/EXISTS answer exact on every dialect (a single
        ON CONFLICT DO UPDATE cannot portably say whether it inserted).

        Returns:
            SaveCategoryStatus.CREATED if the row was inserted, EXISTS if it was updated.
        """
        if active is None:
            return await self.upsert_category(title)

        start = time.perf_counter()
        async with db_error_handler(self.db, "upsert and activate category"):
            created = await self._insert_if_absent(title, active)
            if not created:
                await self.db.execute(
                    update(CategoryRecord)
                    .where(CategoryRecord.name == title)
                    .values(active=active)
                    .execution_options(synchronize_session=False)
                )
            await self.db.commit()

        status = SaveCategoryStatus.CREATED if created else SaveCategoryStatus.EXISTS
        logger.info(
            "repo.upsert_category_and_set_active.success",
            extra={
                "category": title,
                "active": active,
                "status": status.value,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return status

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def list_categories(self) -> list[Category]:
        """
        Return all active categories. Order is unspecified.
        """
        async with db_error_handler(self.db, "list categories"):
            result = await self.db.execute(
                select(CategoryRecord.name, CategoryRecord.active).where(CategoryRecord.active.is_(True))
            )
            categories = [
                Category.model_validate({"title": row.name, "active": row.active})
                for row in result.all()
            ]

        logger.debug("repo.list_categories.success", extra={"count": len(categories)})
        return categories

    # =================================================================================================================
    # Update Operations
    # =================================================================================================================

    async def set_category_active(self, title: str, active: bool) -> bool:
        """
        Set the `active` flag of an existing category.

        Returns:
            The flag now in effect.

        Raises:
            NotFoundError: no category has this title.
        """
        async with db_error_handler(self.db, "set category active"):
            result = await self.db.execute(
                update(CategoryRecord)
                .where(CategoryRecord.name == title)
                .values(active=active)
                .returning(CategoryRecord.active)
                .execution_options(synchronize_session=False)
            )
            current = result.scalar_one_or_none()
            if current is None:
                logger.info("repo.set_category_active.not_found", extra={"category": title})
                raise NotFoundError(f"Category '{title}' not found")
            await self.db.commit()

        logger.info("repo.set_category_active.success", extra={"category": title, "active": current})
        return bool(current)
