"""
Category routes.

    GET  /categories                 active categories
    POST /categories                 create (or re-activate / deactivate) a category
    PUT  /categories/{title}/active  flip the active flag of an existing category
"""

from fastapi import APIRouter, Depends, Response, status

from quizzical.core.dependencies import get_category_repository
from quizzical.exceptions import ValidationError
from quizzical.repositories import CategoryRepository
from quizzical.schemas import (
    CategoryActive,
    CategoryCreate,
    CategoryList,
    CategorySaved,
    SaveCategoryStatus,
)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=CategoryList)
async def list_categories(repo: CategoryRepository = Depends(get_category_repository)) -> CategoryList:
    return CategoryList(categories=await repo.list_categories())


@router.post("", response_model=CategorySaved, status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate,
    response: Response,
    repo: CategoryRepository = Depends(get_category_repository),
) -> CategorySaved:
    """
    201 when the category was created, 200 when it already existed.
    An explicit `active` overwrites the stored flag either way.
    """
    result = await repo.upsert_category_and_set_active(body.title, body.active)
    if result is SaveCategoryStatus.EXISTS:
        response.status_code = status.HTTP_200_OK
    return CategorySaved(title=body.title, status=result)


@router.put("/{title}/active", response_model=CategoryActive)
async def set_category_active(
    title: str,
    active: bool | None = None,
    repo: CategoryRepository = Depends(get_category_repository),
) -> CategoryActive:
    if active is None:
        raise ValidationError("active", "Query parameter 'active' is required", location="parameter")
    return CategoryActive(active=await repo.set_category_active(title, active))
