from pydantic import BaseModel, Field
from sqlmodel import SQLModel
from typing import Optional
from ..models import CategoryBase


class CategoryCreate(CategoryBase):
    pass


class CategoryRead(SQLModel):
    id: int
    name: str


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)


class CategoryWithReviewCount(CategoryRead):
    # Sum of Review.count over the category's reviews
    review_count: int = 0
