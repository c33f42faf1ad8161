"""
Centralized access to all database models.

Importing this package registers every table with `Base.metadata`, which is
what `create_all` (used by the test suite) relies on.
"""

from .category import CategoryRecord
from .question import QuestionRecord, ChoiceRecord

__all__ = [
    "CategoryRecord",
    "QuestionRecord",
    "ChoiceRecord",
]
