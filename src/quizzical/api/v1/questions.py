"""
Question routes.

    POST /questions   validate, make sure the category exists, store the question
    GET  /questions   one page of a category's questions
"""

import logging

from fastapi import APIRouter, Depends, status

from quizzical.config import Settings, get_settings
from quizzical.core.dependencies import get_category_repository, get_question_repository
from quizzical.exceptions import ValidationError
from quizzical.repositories import CategoryRepository, QuestionRepository
from quizzical.schemas import PaginatedResult, Question, compute_page
from quizzical.validators import validate_question

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/questions", tags=["questions"])


def parse_non_negative_int(raw: str | None, default: int) -> int:
    """
    Lenient query parsing: absent, non-numeric or negative values fall back to `default`.

    0 is kept: page 0 reads the first page and is echoed back, size 0 reaches
    compute_page, which treats it as a limit of 1.
    """
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value if value >= 0 else default


@router.post("", response_model=Question, status_code=status.HTTP_201_CREATED)
async def create_question(
    question: Question,
    categories: CategoryRepository = Depends(get_category_repository),
    questions: QuestionRepository = Depends(get_question_repository),
) -> Question:
    """
    The category is created on first use. An existing category keeps its
    active flag: adding a question never re-activates a category.
    """
    validate_question(question)
    await categories.upsert_category(question.category)
    return await questions.save_question(question)


@router.get("", response_model=PaginatedResult[Question])
async def list_questions(
    category: str | None = None,
    page: str | None = None,
    size: str | None = None,
    questions: QuestionRepository = Depends(get_question_repository),
    settings: Settings = Depends(get_settings),
) -> PaginatedResult[Question]:
    if not category:
        raise ValidationError("category", "Query parameter 'category' is required", location="parameter")

    page_number = parse_non_negative_int(page, settings.DEFAULT_PAGE)
    page_size = parse_non_negative_int(size, settings.DEFAULT_PAGE_SIZE)

    total = await questions.count_questions(category)
    # Nothing to page through: skip the fetch
    data = await questions.get_questions(category, page_number, page_size) if total else []

    logger.debug(
        "api.list_questions",
        extra={"category": category, "page": page_number, "size": page_size, "total": total},
    )
    return compute_page(data, page_number, total, page_size)
