# migration/setup_db.py
"""
Destination database setup helpers.
- Create the destination schema
- Test connectivity and list existing tables
"""

import logging
import sys
from typing import Any, Dict

from sqlalchemy import inspect, text
from sqlalchemy.exc import SQLAlchemyError

from db.db_utils import check_connection, create_all_tables, get_engine, mask_url
from migration.common.config import settings
from migration.common.exceptions import MigrationError
from migration.common.logging import configure_from_settings

logger = logging.getLogger(__name__)


def run_create_tables() -> None:
    """Create all destination tables and list them."""
    configure_from_settings()
    engine = None
    try:
        engine = get_engine(settings.DATABASE_URL)
        check_connection(engine)
        tables = create_all_tables(engine)
    except MigrationError as e:
        logger.error(f"Table creation failed: {e}")
        sys.exit(1)
    finally:
        if engine is not None:
            engine.dispose()

    logger.info("Tables in database:")
    for name in tables:
        logger.info(f"  - {name}")


def describe_database(engine) -> Dict[str, Any]:
    """Server version and table names for an engine."""
    with engine.connect() as conn:
        if engine.dialect.name == "postgresql":
            version = conn.execute(text("SELECT version()")).scalar()
        elif engine.dialect.name == "sqlite":
            version = "SQLite " + conn.execute(text("SELECT sqlite_version()")).scalar()
        else:
            version = str(engine.dialect.server_version_info)
    return {"version": version, "tables": sorted(inspect(engine).get_table_names())}


def run_test_connection() -> None:
    """Print the masked URL, server version and existing tables."""
    configure_from_settings()
    logger.info(f"Connecting to: {mask_url(settings.DATABASE_URL)}")

    engine = None
    try:
        engine = get_engine(settings.DATABASE_URL)
        check_connection(engine)
        info = describe_database(engine)
    except (MigrationError, SQLAlchemyError) as e:
        logger.error(f"Connection failed: {e}")
        sys.exit(1)
    finally:
        if engine is not None:
            engine.dispose()

    logger.info(f"Server version: {info['version']}")
    if info["tables"]:
        logger.info(f"Existing tables ({len(info['tables'])}):")
        for name in info["tables"]:
            logger.info(f"  - {name}")
    else:
        logger.info("No tables found")


if __name__ == "__main__":
    run_test_connection()
