"""
Question repository for handling question and choice persistence.

A question and its choices live in two tables. Creation writes both inside one
transaction; reads page through the questions of a category and attach their
choices with one batched query.
"""

import time
import logging
from collections import defaultdict

from sqlalchemy import Select, func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from quizzical.exceptions import DatabaseError, db_error_handler
from quizzical.models import CategoryRecord, ChoiceRecord, QuestionRecord
from quizzical.schemas import Choice, Question
from .base_repository import BaseRepository
from .bulk import bulk_insert

logger = logging.getLogger(__name__)

CHOICE_COLUMNS = ("question_id", "text", "correct")


class QuestionRepository(BaseRepository[QuestionRecord]):
    """
    Repository for Question operations.

    `active_categories_only` fixes, for the lifetime of the instance, how a
    category name is matched by both `count_questions` and `get_questions`:
      - False (default): by name only, whatever the category's active flag
      - True: the category row must exist and be active
    Sharing the policy keeps the count and the page contents consistent.
    """

    def __init__(self, db: AsyncSession, *, active_categories_only: bool = False):
        super().__init__(QuestionRecord, db)
        self.active_categories_only = active_categories_only

    def _in_category(self, stmt: Select, category: str) -> Select:
        stmt = stmt.where(QuestionRecord.category == category)
        if self.active_categories_only:
            stmt = stmt.join(CategoryRecord, CategoryRecord.name == QuestionRecord.category).where(
                CategoryRecord.active.is_(True)
            )
        return stmt

    # =================================================================================================================
    # Create Operations
    # =================================================================================================================

    async def save_question(self, question: Question) -> Question:
        """
        Persist a question and all its choices atomically.

        Steps:
          1. INSERT the question row and read its generated id (RETURNING).
          2. INSERT all choices with one bulk statement; generated ids come back
             in input order.
          3. COMMIT.
        Any failure rolls back the whole transaction, so a question never
        persists without its choices.

        Args:
            question: a validated question; incoming ids are ignored.

        Returns:
            A copy of the question with its id and every choice id populated,
            choices in their input order.

        Raises:
            DatabaseError: no choices, a statement failed, or no id was returned.
            Other RepositoryError subclasses for connection / I/O failures.
        """
        start = time.perf_counter()

        async with db_error_handler(self.db, "save question"):
            # An empty VALUES list is not a valid INSERT
            if not question.choices:
                raise DatabaseError("Failed to save question: no choices")

            result = await self.db.execute(
                insert(QuestionRecord)
                .values(text=question.text, category=question.category)
                .returning(QuestionRecord.id)
            )
            question_id = result.scalar_one_or_none()
            if question_id is None:
                raise DatabaseError("Failed to save question: no id returned")

            statement, parameters = bulk_insert(
                ChoiceRecord,
                CHOICE_COLUMNS,
                [(question_id, choice.title, choice.correct) for choice in question.choices],
            )
            choice_ids = list((await self.db.execute(statement, parameters)).scalars().all())
            if len(choice_ids) != len(question.choices):
                raise DatabaseError("Failed to save question: choice ids missing")

            await self.db.commit()

        saved = question.model_copy(update={
            "id": question_id,
            "choices": [
                choice.model_copy(update={"id": choice_id})
                for choice, choice_id in zip(question.choices, choice_ids)
            ],
        })

        logger.info(
            "repo.save_question.success",
            extra={
                "id": question_id,
                "category": question.category,
                "choice_count": len(choice_ids),
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )
        return saved

    # =================================================================================================================
    # Read Operations
    # =================================================================================================================

    async def count_questions(self, category: str) -> int:
        """
        Count the questions of a category (under this repository's matching policy).
        """
        async with db_error_handler(self.db, "count questions"):
            stmt = self._in_category(
                select(func.count(QuestionRecord.id)).select_from(QuestionRecord), category
            )
            count = (await self.db.execute(stmt)).scalar_one()

        logger.debug("repo.count_questions.success", extra={"category": category, "count": count})
        return int(count)

    async def get_questions(self, category: str, page: int, size: int) -> list[Question]:
        """
        Return one page of a category's questions, ordered by id, with their choices.

        Page numbers are 1-based; page 0 (or below) is read as the first page.
        At most `size` questions are returned; a page past the end yields [].

        Choices for the whole page are fetched with one IN (...) query and
        grouped in memory, so a page costs two round trips regardless of size.
        """
        offset = 0 if page <= 0 else (page - 1) * size

        async with db_error_handler(self.db, "get questions"):
            stmt = self._in_category(
                select(QuestionRecord.id, QuestionRecord.text, QuestionRecord.category), category
            ).order_by(QuestionRecord.id).offset(offset).limit(size)
            rows = (await self.db.execute(stmt)).all()

            # Nothing on this page: skip the choices query entirely
            if not rows:
                logger.debug("repo.get_questions.empty", extra={"category": category, "page": page, "size": size})
                return []

            question_ids = [row.id for row in rows]
            choice_rows = (await self.db.execute(
                select(ChoiceRecord.id, ChoiceRecord.question_id, ChoiceRecord.text, ChoiceRecord.correct)
                .where(ChoiceRecord.question_id.in_(question_ids))
                .order_by(ChoiceRecord.id)
            )).all()

            grouped: dict[int, list[Choice]] = defaultdict(list)
            for row in choice_rows:
                grouped[row.question_id].append(
                    Choice.model_validate({"id": row.id, "title": row.text, "correct": row.correct})
                )

            questions = [
                Question.model_validate({
                    "id": row.id,
                    "text": row.text,
                    "category": row.category,
                    "choices": grouped.get(row.id, []),
                })
                for row in rows
            ]

        logger.debug(
            "repo.get_questions.success",
            extra={"category": category, "page": page, "size": size, "count": len(questions)},
        )
        return questions
