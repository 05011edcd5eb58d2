# api/database.py
"""Database session dependency for FastAPI."""

from functools import lru_cache
from typing import Generator

from sqlalchemy.orm import Session, sessionmaker

from db.db_utils import get_engine
from migration.common.config import settings


@lru_cache(maxsize=1)
def get_session_factory() -> sessionmaker:
    """Session factory for the configured destination database, built on first use."""
    engine = get_engine(settings.DATABASE_URL)
    return sessionmaker(bind=engine, autoflush=False)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that provides a database session.
    Automatically closes session after request completes.
    """
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()
