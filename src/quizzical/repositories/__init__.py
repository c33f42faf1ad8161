"""
Repository layer initialization module.

Usage:
    from quizzical.repositories import CategoryRepository, QuestionRepository
"""

from .base_repository import BaseRepository
from .category_repository import CategoryRepository
from .question_repository import QuestionRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "QuestionRepository",
]
