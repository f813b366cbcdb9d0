"""
Demo content for a fresh database: a handful of categories and one review per
beverage, with random scores, counts and dates.
"""

import datetime as dt
import logging
import random
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .errors import StorageError
from .models import Category, Review
from .validation import ensure_valid

logger = logging.getLogger(__name__)


# beverage name -> category name
BEVERAGES: Dict[str, str] = {
    "Evian": "Mineral Water",
    "Voss": "Mineral Water",
    "Veen": "Mineral Water",
    "San Pellegrino": "Mineral Water",
    "Perrier": "Mineral Water",
    "Coca-Cola": "Soft Drink",
    "Fanta": "Soft Drink",
    "Sprite": "Soft Drink",
    "Maxwell Ready-to-Drink Coffee": "Coffee",
    "Nescafé Gold": "Coffee",
    "Starbucks Cold Brew": "Coffee",
    "Earl Grey": "Tea",
    "Darjeeling": "Tea",
    "Sencha": "Tea",
    "Jasmine": "Tea",
    "Butter Milk": "Dairy",
    "Kefir": "Dairy",
    "Almond Milk": "Dairy",
    "Thatchers Gold": "Cider",
    "Strongbow": "Cider",
    "Koskenkorva": "Other",
    "Guinness": "Beer",
    "Kozel": "Beer",
    "Pilsner Urquell": "Beer",
    "Leffe Blonde": "Beer",
    "Château Margaux": "Wine",
    "Riesling": "Wine",
    "Prosecco": "Wine",
}


def seed_demo_data(session: Session, rng: Optional[random.Random] = None) -> bool:
    """
    Populate an empty database with demo categories and reviews.

    Does nothing when at least one category exists.

    Args:
        session: Session to write with.
        rng: Random source, for reproducible data.

    Returns:
        True if data was created.
    """
    rng = rng or random.Random()
    today = dt.date.today()
    try:
        if session.exec(select(Category)).first() is not None:
            logger.debug("Categories present, skipping demo data")
            return False

        categories = {name: Category(name=name) for name in sorted(set(BEVERAGES.values()))}
        for category in categories.values():
            ensure_valid(category)
        session.add_all(categories.values())
        session.flush()

        for beverage, category_name in BEVERAGES.items():
            review = Review(
                name=beverage,
                score=rng.randint(1, 5),
                date=today - dt.timedelta(days=rng.randint(0, 365)),
                category=categories[category_name].id,
                count=rng.randint(1, 99),
            )
            ensure_valid(review)
            session.add(review)
        session.commit()
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Failed to create demo data: {str(e)}")
        raise StorageError("Failed to create demo data") from e

    logger.info(f"Created {len(categories)} demo categories and {len(BEVERAGES)} reviews")
    return True
