from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class SaveCategoryStatus(str, Enum):
    """Outcome of an upsert: the row was inserted, or a row with that title was already there."""
    CREATED = "created"
    EXISTS = "exists"


class Category(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    title: str = Field(min_length=1)
    active: bool = True


class CategoryCreate(BaseModel):
    """Body of a category creation request; `active` is only overwritten when given."""
    title: str = Field(min_length=1)
    active: bool | None = None


class CategoryList(BaseModel):
    categories: list[Category]


class CategoryActive(BaseModel):
    active: bool


class CategorySaved(BaseModel):
    title: str
    status: SaveCategoryStatus
