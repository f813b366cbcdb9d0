from sqlmodel import Field, SQLModel
from pydantic import field_validator
from pydantic_core import PydanticCustomError
from typing import Optional
import datetime as dt


"""
This file contains the models for the database tables.

We have 2 tables:
    - Category
    - Review

Constructing a table model never validates it, so drafts (e.g. a Review with
an empty name) are allowed; see validation.py for the checks run before saving.
"""

# Shown in place of the category name when a review is not linked to one
UNDEFINED_CATEGORY_NAME = "Undefined"


def _not_blank(value: str) -> str:
    if not value.strip():
        raise PydanticCustomError("not_blank", "must not be blank")
    return value


class CategoryBase(SQLModel):
    name: str = Field(index=True, unique=True, min_length=1)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _not_blank(value)


class Category(CategoryBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    def __str__(self) -> str:
        return f"{type(self).__name__}(id={self.id}, name='{self.name}')"


class ReviewStrMixin:
    """Diagnostic representation shared by the review shapes; not used for equality."""

    def __str__(self) -> str:
        return (
            f"{type(self).__name__}(id={getattr(self, 'id', None)}, score={self.score}, "
            f"name='{self.name}', date={self.date}, category={self.category}, count={self.count})"
        )


class ReviewBase(ReviewStrMixin, SQLModel):
    score: int = Field(default=1, ge=1, le=5)  # 1 being worst, 5 being best
    name: str = Field(default="", min_length=3, index=True)  # the beverage name
    date: dt.date = Field(default_factory=dt.date.today)  # when the review was done
    category: Optional[int] = Field(default=None, index=True)  # Category.id, not enforced
    count: int = Field(default=1, ge=1, le=99)  # times tasted

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        return _not_blank(value)

    @field_validator("date")
    @classmethod
    def date_past_or_present(cls, value: dt.date) -> dt.date:
        if value > dt.date.today():
            raise PydanticCustomError(
                "past_or_present", "must be a date in the past or in the present"
            )
        return value


class Review(ReviewBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

    def copy(self) -> "Review":
        """
        Return a detached review with the same field values, id included.

        The copy is not attached to any session, so it can be edited (e.g. in a
        form) without touching this instance.
        """
        return Review(
            id=self.id,
            score=self.score,
            name=self.name,
            date=self.date,
            category=self.category,
            count=self.count,
        )
