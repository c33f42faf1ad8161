import pytest
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from quizzical.exceptions import NotFoundError
from quizzical.models import CategoryRecord
from quizzical.repositories import CategoryRepository
from quizzical.schemas import SaveCategoryStatus


async def stored_rows(db: AsyncSession, title: str) -> list[tuple[str, bool]]:
    result = await db.execute(
        select(CategoryRecord.name, CategoryRecord.active).where(CategoryRecord.name == title)
    )
    return [(row.name, row.active) for row in result.all()]


@pytest.mark.asyncio
class TestUpsertCategory:
    """
    Tests covering CategoryRepository.upsert_category().

    Fixtures used:
      - category_repository: CategoryRepository bound to the test AsyncSession.
      - db_session: used directly to inspect stored rows.

    Rationale:
      - Creating a category must be idempotent: the title is the business key and a
        second call must neither fail nor create a duplicate row.
      - A plain upsert never changes an existing row's active flag.
    """

    async def test_first_call_creates_active_category(self, category_repository: CategoryRepository, db_session):
        """
        Behavior:
          - Upsert a new title; expect CREATED and a single active row.
        Importance:
          - New categories default to active.
        """
        status = await category_repository.upsert_category("Science")

        assert status is SaveCategoryStatus.CREATED
        assert await stored_rows(db_session, "Science") == [("Science", True)]

    async def test_second_call_reports_exists_without_duplicate(self, category_repository: CategoryRepository, db_session):
        """
        Behavior:
          - Upsert the same title twice.
          - Expect CREATED then EXISTS, and exactly one row.
        Importance:
          - Guards the ON CONFLICT DO NOTHING path that new questions rely on.
        """
        first = await category_repository.upsert_category("History")
        second = await category_repository.upsert_category("History")

        assert first is SaveCategoryStatus.CREATED
        assert second is SaveCategoryStatus.EXISTS
        assert len(await stored_rows(db_session, "History")) == 1

    async def test_plain_upsert_keeps_inactive_flag(self, category_repository: CategoryRepository, db_session):
        """
        Behavior:
          - Create an inactive category, then plain-upsert it.
          - Expect EXISTS and the flag still False.
        Importance:
          - Adding a question to a deactivated category must not silently re-activate it.
        """
        await category_repository.upsert_category_and_set_active("Art", False)

        status = await category_repository.upsert_category("Art")

        assert status is SaveCategoryStatus.EXISTS
        assert await stored_rows(db_session, "Art") == [("Art", False)]


@pytest.mark.asyncio
class TestUpsertCategoryAndSetActive:
    """
    Tests covering CategoryRepository.upsert_category_and_set_active().

    Rationale:
      - With an explicit flag the operation is an "insert or overwrite the flag".
      - With no flag it must behave exactly like upsert_category().
    """

    async def test_creates_with_given_flag(self, category_repository: CategoryRepository, db_session):
        status = await category_repository.upsert_category_and_set_active("Music", False)

        assert status is SaveCategoryStatus.CREATED
        assert await stored_rows(db_session, "Music") == [("Music", False)]

    async def test_overwrites_existing_flag(self, category_repository: CategoryRepository, db_session):
        """
        Behavior:
          - (X, True) then (X, False).
          - Expect one row whose flag is False; the second call reports EXISTS.
        """
        # Arrange
        await category_repository.upsert_category_and_set_active("Geography", True)

        # Act
        status = await category_repository.upsert_category_and_set_active("Geography", False)

        # Assert
        assert status is SaveCategoryStatus.EXISTS
        assert await stored_rows(db_session, "Geography") == [("Geography", False)]

    async def test_reactivates_inactive_category(self, category_repository: CategoryRepository, db_session):
        await category_repository.upsert_category_and_set_active("Sports", False)
        await category_repository.upsert_category_and_set_active("Sports", True)

        assert await stored_rows(db_session, "Sports") == [("Sports", True)]

    async def test_none_flag_behaves_as_plain_upsert(self, category_repository: CategoryRepository, db_session):
        await category_repository.upsert_category_and_set_active("Film", False)

        status = await category_repository.upsert_category_and_set_active("Film", None)

        assert status is SaveCategoryStatus.EXISTS
        assert await stored_rows(db_session, "Film") == [("Film", False)]


@pytest.mark.asyncio
class TestListCategories:
    """
    Tests covering CategoryRepository.list_categories().
    """

    async def test_empty_store_returns_empty_list(self, category_repository: CategoryRepository):
        assert await category_repository.list_categories() == []

    async def test_only_active_categories_are_listed(self, category_repository: CategoryRepository):
        """
        Behavior:
          - Two active categories and one inactive.
          - Expect only the active ones, in any order.
        """
        await category_repository.upsert_category("Science")
        await category_repository.upsert_category("History")
        await category_repository.upsert_category_and_set_active("Art", False)

        categories = await category_repository.list_categories()

        assert sorted(c.title for c in categories) == ["History", "Science"]
        assert all(c.active for c in categories)


@pytest.mark.asyncio
class TestSetCategoryActive:
    """
    Tests covering CategoryRepository.set_category_active().
    """

    async def test_returns_new_flag(self, category_repository: CategoryRepository, db_session):
        await category_repository.upsert_category("Science")

        assert await category_repository.set_category_active("Science", False) is False
        assert await stored_rows(db_session, "Science") == [("Science", False)]

        assert await category_repository.set_category_active("Science", True) is True

    async def test_deactivated_category_disappears_from_listing(self, category_repository: CategoryRepository):
        await category_repository.upsert_category("Science")
        await category_repository.set_category_active("Science", False)

        assert await category_repository.list_categories() == []

    async def test_unknown_category_raises_not_found(self, category_repository: CategoryRepository):
        """
        Behavior:
          - Setting the flag of a category that does not exist raises NotFoundError.
          - The session stays usable afterwards (the failed transaction was rolled back).
        Importance:
          - NotFoundError is what the API turns into a 404.
        """
        with pytest.raises(NotFoundError) as exc_info:
            await category_repository.set_category_active("Nope", True)

        assert exc_info.value.http_status() == 404
        assert await category_repository.upsert_category("Nope") is SaveCategoryStatus.CREATED
