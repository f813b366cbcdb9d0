from pydantic import BaseModel, ConfigDict, Field
from sqlmodel import SQLModel
from typing import Optional
import datetime as dt
from ..models import ReviewBase, ReviewStrMixin


class ReviewCreate(ReviewBase):
    pass


class ReviewRead(ReviewStrMixin, SQLModel):
    # No constraints here: rows are shown exactly as stored
    model_config = ConfigDict(frozen=True)

    id: int
    score: int
    name: str
    date: dt.date
    category: Optional[int] = None
    count: int


class ReviewUpdate(BaseModel):
    score: Optional[int] = Field(None, ge=1, le=5)
    name: Optional[str] = Field(None, min_length=3)
    date: Optional[dt.date] = None
    category: Optional[int] = None
    count: Optional[int] = Field(None, ge=1, le=99)


class ReviewWithCategory(BaseModel):
    """
    A review joined with its category, as returned by the review search.

    `category_name` is "Undefined" when the review is not linked to a category.
    Instances are built per query and never persisted.
    """
    model_config = ConfigDict(frozen=True)

    review: ReviewRead
    category_id: Optional[int] = None
    category_name: Optional[str] = None

    def __str__(self) -> str:
        return f"{self.review}(category #{self.category_id} {self.category_name})"
