"""
Database connection helpers shared by the migration stages and the API.

Engines are created explicitly by the caller and passed into each component;
nothing here holds a process-wide session.
"""

import logging
import re
from typing import List

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from db.models import Base
from migration.common.exceptions import ConnectivityError

logger = logging.getLogger(__name__)


def mask_url(url: str) -> str:
    """Hide the password part of a connection string for display."""
    return re.sub(r":[^:@/]+@", ":****@", url)


def _enable_sqlite_foreign_keys(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_engine(url: str, echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine for the destination database.

    Args:
        url: SQLAlchemy connection string
        echo: Log every SQL statement

    Returns:
        Engine (not yet connected)

    Raises:
        ConnectivityError: when the URL is empty or malformed
    """
    if not url:
        raise ConnectivityError(
            "Database URL is not set (DATABASE_URL)", database="destination"
        )
    try:
        parsed = make_url(url)
    except ArgumentError as e:
        raise ConnectivityError(
            f"Malformed database URL: {mask_url(url)}",
            database="destination",
            original_error=e,
        )

    kwargs = {"echo": echo}
    if parsed.get_backend_name() == "sqlite":
        # In-memory databases must share one connection across threads
        kwargs["connect_args"] = {"check_same_thread": False}
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    engine = create_engine(parsed, **kwargs)
    if parsed.get_backend_name() == "sqlite":
        _enable_sqlite_foreign_keys(engine)
    return engine


def get_source_engine(url: str) -> Engine:
    """Create an engine for the legacy SQL Server source."""
    if not url:
        raise ConnectivityError(
            "Source database URL is not set (SOURCE_DATABASE_URL)", database="source"
        )
    try:
        return get_engine(url)
    except ConnectivityError as e:
        e.details["database"] = "source"
        raise


def get_session(engine: Engine) -> Session:
    """Open a new ORM session bound to the given engine."""
    SessionLocal = sessionmaker(bind=engine, autoflush=False)
    return SessionLocal()


def check_connection(engine: Engine, database: str = "destination") -> None:
    """
    Run SELECT 1 against the engine.

    Raises:
        ConnectivityError: wrapping the driver message
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        raise ConnectivityError(
            f"Cannot connect to {database} database: {e}",
            database=database,
            original_error=e,
        )
    logger.info(f"Connected to {database} database")


def create_all_tables(engine: Engine) -> List[str]:
    """Create the destination schema and return the table names present afterwards."""
    Base.metadata.create_all(engine)
    tables = sorted(inspect(engine).get_table_names())
    logger.info(f"Destination tables ready: {', '.join(tables)}")
    return tables
