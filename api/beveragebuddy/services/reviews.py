"""
Data access for reviews.

ReviewService wraps a SQLModel Session; any session works, including one on an
in-memory SQLite engine. Every method issues its own statement(s) and keeps no
state between calls.
"""

import logging
from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from ..errors import NotFoundError, StorageError
from ..models import Category, Review, UNDEFINED_CATEGORY_NAME
from ..schemas.review import ReviewRead, ReviewWithCategory
from ..validation import ensure_valid
from .query import normalize_filter, starts_with_ignore_case

logger = logging.getLogger(__name__)


class ReviewService:
    def __init__(self, session: Session):
        self.session = session

    def get(self, review_id: int) -> Optional[Review]:
        try:
            return self.session.get(Review, review_id)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load review #{review_id}: {str(e)}")
            raise StorageError(f"Failed to load review #{review_id}") from e

    def find_all(self) -> List[Review]:
        query = select(Review).order_by(Review.name, Review.id)
        try:
            return list(self.session.exec(query).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list reviews: {str(e)}")
            raise StorageError("Failed to list reviews") from e

    def get_total_count_for_reviews_in_category(self, category_id: int) -> int:
        """
        Compute the total sum of `count` for all reviews belonging to a category.

        Args:
            category_id: Category.id; ids with no reviews are fine.

        Returns:
            The total sum, 0 or greater.

        Raises:
            StorageError: If the query fails.
        """
        query = select(func.sum(Review.count)).where(Review.category == category_id)
        try:
            total = self.session.exec(query).one()
        except SQLAlchemyError as e:
            logger.error(f"Failed to sum review counts for category #{category_id}: {str(e)}")
            raise StorageError(f"Failed to sum review counts for category #{category_id}") from e
        return int(total or 0)

    def find_reviews(self, filter_text: str) -> List[ReviewWithCategory]:
        """
        Fetch the reviews matching the given filter text.

        The filter is trimmed and matched case-insensitively as a prefix of the
        review name, the category name ("Undefined" for reviews without one),
        the score or the count. An empty filter returns every review. Results
        are ordered by name, then by id.

        Args:
            filter_text: The filter text, may be empty.

        Returns:
            The matching reviews joined with their category, may be empty.

        Raises:
            StorageError: If the query fails; no partial results are returned.
        """
        prefix = normalize_filter(filter_text)
        category_name = func.coalesce(Category.name, UNDEFINED_CATEGORY_NAME)
        query = (
            select(Review, Category.id, category_name)
            .outerjoin(Category, Review.category == Category.id)
            .where(
                or_(
                    starts_with_ignore_case(Review.name, prefix),
                    starts_with_ignore_case(category_name, prefix),
                    starts_with_ignore_case(Review.score, prefix),
                    starts_with_ignore_case(Review.count, prefix),
                )
            )
            .order_by(Review.name, Review.id)
        )
        logger.debug(f"Searching reviews with filter '{prefix}'")
        try:
            rows = self.session.exec(query).all()
        except SQLAlchemyError as e:
            logger.error(f"Failed to search reviews: {str(e)}")
            raise StorageError("Failed to search reviews") from e

        return [
            ReviewWithCategory(
                review=ReviewRead.model_validate(review),
                category_id=category_id,
                category_name=name,
            )
            for review, category_id, name in rows
        ]

    def save(self, review: Review) -> Review:
        """
        Validate and persist a review, inserting it or updating the row with its id.

        Detached copies (see Review.copy) are merged into the session, so an
        edited copy can be saved over the original.

        Returns:
            The persistent review, with `id` set.

        Raises:
            ValidationError: If any field constraint is broken; nothing is written.
            StorageError: If the write fails; the session is rolled back.
        """
        ensure_valid(review)
        try:
            persistent = self.session.merge(review) if review.id is not None else review
            self.session.add(persistent)
            self.session.commit()
            self.session.refresh(persistent)
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to save review '{review.name}': {str(e)}")
            raise StorageError(f"Failed to save review '{review.name}'") from e
        logger.info(f"Saved review #{persistent.id} '{persistent.name}'")
        return persistent

    def delete(self, review_id: int) -> None:
        review = self.get(review_id)
        if review is None:
            raise NotFoundError(f"Review #{review_id} not found")
        try:
            self.session.delete(review)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Failed to delete review #{review_id}: {str(e)}")
            raise StorageError(f"Failed to delete review #{review_id}") from e
        logger.info(f"Deleted review #{review_id}")
