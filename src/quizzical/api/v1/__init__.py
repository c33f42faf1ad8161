from fastapi import APIRouter

from .categories import router as categories_router
from .questions import router as questions_router

router = APIRouter()
router.include_router(categories_router)
router.include_router(questions_router)

__all__ = ["router"]
