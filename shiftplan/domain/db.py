"""Database initialization and utilities."""

from __future__ import annotations

import logging

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .models import Base

DEFAULT_DB_URL = "sqlite:///shiftplan.db"

logger = logging.getLogger(__name__)


def create_db_engine(db_url: str = DEFAULT_DB_URL, echo: bool = False):
    """Create SQLAlchemy engine."""
    return create_engine(db_url, echo=echo)


def init_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Initialize database and create all tables."""
    engine = create_db_engine(db_url)
    Base.metadata.create_all(engine)
    logger.info("Database initialized: %s", db_url)


def get_session(db_url: str = DEFAULT_DB_URL) -> Session:
    """Get a new database session."""
    SessionFactory = sessionmaker(bind=create_db_engine(db_url))
    return SessionFactory()


def reset_database(db_url: str = DEFAULT_DB_URL) -> None:
    """Drop every table and create an empty schema."""
    engine = create_db_engine(db_url)
    Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    logger.warning("Dropped and recreated %d tables in %s", len(Base.metadata.tables), db_url)
