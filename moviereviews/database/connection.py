"""
Database connection management using SQLAlchemy.

This module handles engine creation, session management, and provides
utilities for database operations.
"""

import os
import sqlite3
from contextlib import contextmanager
from typing import Generator
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from moviereviews.database.models import Base


# Default database path
DEFAULT_DB_PATH = "data/moviereviews.db"


def get_database_url(db_path: str = DEFAULT_DB_PATH) -> str:
    """
    Get a SQLAlchemy database URL.

    Args:
        db_path: SQLAlchemy URL, ":memory:", or path to a SQLite database file

    Returns:
        SQLAlchemy database URL
    """
    if "://" in db_path:
        return db_path
    if db_path == ":memory:":
        return "sqlite:///:memory:"

    # Ensure directory exists
    db_dir = os.path.dirname(db_path)
    if db_dir:
        os.makedirs(db_dir, exist_ok=True)

    # SQLite URL format: sqlite:///path/to/database.db
    return f"sqlite:///{os.path.abspath(db_path)}"


def is_in_memory(database_url: str) -> bool:
    """True for SQLite URLs that point at a private in-memory database."""
    return database_url in ("sqlite://", "sqlite:///:memory:")


@event.listens_for(Engine, "connect")
def set_sqlite_pragma(dbapi_conn, connection_record):
    """
    Enable foreign key constraints for SQLite.

    SQLite disables foreign key constraints by default.
    This event listener enables them for all SQLite connections.
    """
    if not isinstance(dbapi_conn, sqlite3.Connection):
        return
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class DatabaseManager:
    """
    Database connection manager.

    Handles engine creation, session management, and database initialization.
    One instance is built at process start and handed to whoever needs it.
    """

    def __init__(self, db_path: str = DEFAULT_DB_PATH, echo: bool = False):
        """
        Initialize database manager.

        Args:
            db_path: SQLAlchemy URL or path to SQLite database file
            echo: If True, log all SQL statements (useful for debugging)
        """
        self.database_url = get_database_url(db_path)

        engine_kwargs = {"echo": echo}
        if self.database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if is_in_memory(self.database_url):
                # An in-memory database lives only as long as its one connection
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.database_url, **engine_kwargs)

        # Create session factory
        self.SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine
        )

    def create_tables(self):
        """
        Create all tables defined in the models.

        This creates tables if they don't exist. Existing tables are not modified.
        """
        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self):
        """
        Drop all tables defined in the models.

        WARNING: This will delete all data in the database!
        """
        Base.metadata.drop_all(bind=self.engine)

    def reset_database(self):
        """
        Drop and recreate all tables.

        WARNING: This will delete all data in the database!
        """
        self.drop_tables()
        self.create_tables()

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Context manager for database sessions.

        Automatically commits on success and rolls back on failure.

        Usage:
            with db_manager.session_scope() as session:
                session.add(user)

        Yields:
            SQLAlchemy Session object
        """
        session = self.SessionLocal()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self):
        """Close the database engine and all connections."""
        self.engine.dispose()
