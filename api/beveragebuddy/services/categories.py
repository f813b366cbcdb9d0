"""
Data access for beverage categories.
"""

import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..errors import NotFoundError, StorageError
from ..models import Category, Review
from ..schemas.category import CategoryWithReviewCount
from ..validation import ensure_valid
from .query import normalize_filter, starts_with_ignore_case
from .reviews import ReviewService

logger = logging.getLogger(__name__)


class CategoryService:
    def __init__(self, session: Session):
        self.session = session

    def get(self, category_id: int) -> Optional[Category]:
        try:
            return self.session.get(Category, category_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load category #{category_id}: {str(e)}")
            raise StorageError(f"Failed to load category #{category_id}") from e

    def get_by_name(self, name: str) -> Optional[Category]:
        query = select(Category).where(Category.name == name)
        try:
            return self.session.exec(query).first()
        except SQLAlchemyError as e:
            logger.error(f"Failed to look up category '{name}': {str(e)}")
            raise StorageError(f"Failed to look up category '{name}'") from e

    def exists_with_name(self, name: str) -> bool:
        return self.get_by_name(name) is not None

    def find_categories(self, filter_text: str) -> List[Category]:
        """
        Fetch the categories whose name starts with the filter text, ignoring case.

        An empty filter returns all categories. The result is ordered by name.
        """
        prefix = normalize_filter(filter_text)
        query = (
            select(Category)
            .where(starts_with_ignore_case(Category.name, prefix))
            .order_by(Category.name, Category.id)
        )
        try:
            return list(self.session.exec(query).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to search categories: {str(e)}")
            raise StorageError("Failed to search categories") from e

    def find_with_review_counts(self, filter_text: str) -> List[CategoryWithReviewCount]:
        """Matching categories, each with the total times its beverages were tasted."""
        reviews = ReviewService(self.session)
        return [
            CategoryWithReviewCount(
                id=category.id,
                name=category.name,
                review_count=reviews.get_total_count_for_reviews_in_category(category.id),
            )
            for category in self.find_categories(filter_text)
        ]

    def save(self, category: Category) -> Category:
        """
        Validate and persist a category.

        Raises:
            ValidationError: If the name is blank.
            StorageError: If the write fails, e.g. on a duplicate name.
        """
        ensure_valid(category)
        try:
            persistent = self.session.merge(category) if category.id is not None else category
            self.session.add(persistent)
            self.session.commit()
            self.session.refresh(persistent)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to save category '{category.name}': {str(e)}")
            raise StorageError(f"Failed to save category '{category.name}'") from e
        logger.info(f"Saved category #{persistent.id} '{persistent.name}'")
        return persistent

    def delete(self, category_id: int) -> None:
        """
        Delete a category, unlinking it from its reviews first.

        Both happen in one transaction; the reviews themselves are kept and
        show up as "Undefined" afterwards.

        Raises:
            NotFoundError: If there is no such category.
            StorageError: If the write fails; nothing is changed.
        """
        category = self.get(category_id)
        if category is None:
            raise NotFoundError(f"Category #{category_id} not found")
        try:
            linked = self.session.exec(select(Review).where(Review.category == category_id)).all()
            for review in linked:
                review.category = None
                self.session.add(review)
            self.session.delete(category)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to delete category #{category_id}: {str(e)}")
            raise StorageError(f"Failed to delete category #{category_id}") from e
        logger.info(f"Deleted category #{category_id}, unlinked {len(linked)} reviews")
