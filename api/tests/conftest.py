import os

# Must be set before beveragebuddy is imported: selects the in-memory database
os.environ["ENV"] = "test"

import datetime as dt

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from beveragebuddy.database import engine, drop_all_tables, recreate_tables
from beveragebuddy.main import app
from beveragebuddy.models import Category, Review


@pytest.fixture(scope="function", autouse=True)
def setup_test_db():
    recreate_tables()  # Fresh tables in in-memory SQLite
    yield
    drop_all_tables()


@pytest.fixture(name="session")
def session_fixture():
    with Session(engine) as session:
        yield session


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def beverages(session):
    """The Stout / Lager example: Stout is a Beer, Lager has no category."""
    beer = Category(name="Beer")
    session.add(beer)
    session.commit()
    session.refresh(beer)

    stout = Review(name="Stout", score=4, count=2, category=beer.id, date=dt.date(2024, 3, 1))
    lager = Review(name="Lager", score=3, count=5, category=None, date=dt.date(2024, 3, 2))
    session.add(stout)
    session.add(lager)
    session.commit()
    session.refresh(stout)
    session.refresh(lager)
    return {"beer": beer, "stout": stout, "lager": lager}


@pytest.fixture
def test_review_data():
    return {
        "name": "Guinness",
        "score": 4,
        "date": "2024-05-01",
        "count": 3
    }
