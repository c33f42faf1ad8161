"""
Business-rule checks run on incoming questions before any repository is called.

The store trusts its input: it does not re-check these rules, so every write
path must go through `validate_question` first.
"""

import logging

from quizzical.exceptions.validation import ValidationError
from quizzical.schemas.question import Question

logger = logging.getLogger(__name__)


def validate_question(question: Question) -> Question:
    """
    Ensure the question has choices and at most one of them is marked correct.

    Zero correct choices is accepted. Returns the question unchanged so the
    call can be chained.

    Raises:
        ValidationError: field "choices" when the list is empty or more than one choice is correct.
    """
    if not question.choices:
        logger.info("validation.question.no_choices", extra={"category": question.category})
        raise ValidationError("choices", "At least one choice is required")

    correct = sum(1 for choice in question.choices if choice.correct)
    if correct > 1:
        logger.info(
            "validation.question.too_many_correct",
            extra={"category": question.category, "correct_count": correct},
        )
        raise ValidationError("choices", "Only one correct choice allowed")
    return question
