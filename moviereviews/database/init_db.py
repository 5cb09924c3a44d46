"""
Database initialization and schema creation.

This module provides functions to create the database schema and check
that it is in place.
"""

import logging

from sqlalchemy import inspect

from moviereviews.database.connection import DatabaseManager, DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'users', 'movies', 'reviews'}


def init_database(db_path: str = DEFAULT_DB_PATH, reset: bool = False) -> DatabaseManager:
    """
    Initialize the database and create all tables.

    Args:
        db_path: SQLAlchemy URL or path to SQLite database file
        reset: If True, drop existing tables before creating new ones

    Returns:
        DatabaseManager instance
    """
    db_manager = DatabaseManager(db_path=db_path)

    if reset:
        logger.info("Resetting database (dropping all tables)...")
        db_manager.reset_database()
        logger.info("Database reset complete.")
    else:
        logger.info("Creating database tables...")
        db_manager.create_tables()
        logger.info("Database tables created.")

    return db_manager


def verify_schema(db_manager: DatabaseManager) -> bool:
    """
    Verify that all tables exist in the database.

    Args:
        db_manager: DatabaseManager instance

    Returns:
        True if all tables exist, False otherwise
    """
    inspector = inspect(db_manager.engine)
    existing_tables = set(inspector.get_table_names())

    missing_tables = EXPECTED_TABLES - existing_tables

    if missing_tables:
        logger.error("Missing tables: %s", sorted(missing_tables))
        return False

    logger.info("All tables exist: %s", sorted(existing_tables))
    return True
