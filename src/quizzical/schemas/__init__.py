from .category import Category, CategoryActive, CategoryCreate, CategoryList, CategorySaved, SaveCategoryStatus
from .question import Choice, Question
from .pagination import PaginatedResult, compute_page

__all__ = [
    "Category",
    "CategoryActive",
    "CategoryCreate",
    "CategoryList",
    "CategorySaved",
    "SaveCategoryStatus",
    "Choice",
    "Question",
    "PaginatedResult",
    "compute_page",
]
