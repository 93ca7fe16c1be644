"""
Database initialization and schema verification.
"""

import logging

from sqlalchemy import inspect

from catalog.database.connection import DatabaseManager, get_db_manager, DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'users', 'movies', 'movie_genres'}


def init_database(db_path: str = DEFAULT_DB_PATH, reset: bool = False) -> DatabaseManager:
    """
    Initialize the database and create all tables.

    Args:
        db_path: Path to SQLite database file
        reset: If True, drop existing tables before creating new ones

    Returns:
        DatabaseManager instance
    """
    db_manager = get_db_manager(db_path=db_path)

    if reset:
        logger.warning("Resetting database %s (dropping all tables)", db_manager.db_path)
        db_manager.reset_database()
    else:
        db_manager.create_tables()
    logger.info("Database tables ready at %s", db_manager.db_path)

    return db_manager


def verify_schema(db_manager: DatabaseManager) -> bool:
    """
    Verify that all tables exist in the database.

    Returns:
        True if all tables exist, False otherwise
    """
    inspector = inspect(db_manager.engine)
    existing_tables = set(inspector.get_table_names())

    missing_tables = EXPECTED_TABLES - existing_tables
    if missing_tables:
        logger.error("Missing tables: %s", sorted(missing_tables))
        return False

    return True
