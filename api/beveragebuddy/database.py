from sqlmodel import SQLModel, create_engine, Session
from sqlalchemy.pool import StaticPool
from typing import Generator
import logging
from sqlalchemy.exc import SQLAlchemyError

from . import config

logger = logging.getLogger(__name__)


if config.ENV == "test":
    # A single shared connection so every session sees the same in-memory database
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

elif config.ENV == "local":
    logger.info("Connecting to local database at: %s", config.DATABASE_URL)
    connect_args = {"check_same_thread": False} if config.DATABASE_URL.startswith("sqlite") else {}
    engine = create_engine(config.DATABASE_URL, echo=True, connect_args=connect_args)

elif config.ENV == "prod":
    engine = create_engine(config.DATABASE_URL, pool_pre_ping=True)
    logger.info("Connected to production database")

else:
    raise ValueError(f"Invalid environment: {config.ENV}")


def get_session() -> Generator[Session, None, None]:
    """
    Get a database session.
    """
    logger.debug("Establishing database session")
    with Session(engine) as session:
        yield session


def init_db():
    """
    Initialize the database by creating all tables if they don't exist.
    """
    # Register the tables on SQLModel.metadata
    from . import models  # noqa: F401

    logger.debug("Initializing database tables")
    try:
        SQLModel.metadata.create_all(engine)
        logger.debug("Database tables initialized successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error initializing database: {str(e)}")
        raise

def drop_all_tables():
    """
    Drop all tables in the database.
    """
    logger.debug("Dropping all tables")
    try:
        SQLModel.metadata.drop_all(engine)
        logger.debug("All tables dropped successfully")
    except SQLAlchemyError as e:
        logger.error(f"Error dropping tables: {str(e)}")
        raise

def recreate_tables():
    """
    Drop the category and review tables and create them again, empty.

    Used to start every test from a clean database. Failures are logged and
    re-raised by drop_all_tables / init_db.
    """
    drop_all_tables()
    init_db()
    logger.info(f"Recreated tables: {', '.join(sorted(SQLModel.metadata.tables))}")
