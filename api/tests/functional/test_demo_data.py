import random
import pytest
from sqlmodel import select
from beveragebuddy.database import drop_all_tables
from beveragebuddy.errors import StorageError
from beveragebuddy.demo_data import BEVERAGES, seed_demo_data
from beveragebuddy.models import Category, Review
from beveragebuddy.services.reviews import ReviewService
from beveragebuddy.validation import validate_review


def test_seed_empty_database(session):
    assert seed_demo_data(session, random.Random(1)) is True

    categories = session.exec(select(Category)).all()
    reviews = session.exec(select(Review)).all()
    assert {c.name for c in categories} == set(BEVERAGES.values())
    assert len(reviews) == len(BEVERAGES)
    assert all(validate_review(r) == [] for r in reviews)

def test_seed_links_reviews_to_categories(session):
    seed_demo_data(session, random.Random(2))
    results = ReviewService(session).find_reviews("guinness")
    assert len(results) == 1
    assert results[0].category_name == "Beer"

def test_seed_is_idempotent(session):
    assert seed_demo_data(session, random.Random(3)) is True
    assert seed_demo_data(session, random.Random(3)) is False
    assert len(session.exec(select(Review)).all()) == len(BEVERAGES)

def test_seed_raises_storage_error_without_tables(session):
    drop_all_tables()
    with pytest.raises(StorageError):
        seed_demo_data(session, random.Random(4))
