"""
Database module for the movie reviews API.

This module provides database models, connection management, and CRUD operations
using SQLAlchemy ORM.
"""

from moviereviews.database.models import Base, User, Movie, Review
from moviereviews.database.connection import DatabaseManager, get_database_url
from moviereviews.database.init_db import init_database, verify_schema
from moviereviews.database import crud

__all__ = [
    # Models
    'Base',
    'User',
    'Movie',
    'Review',
    # Connection
    'DatabaseManager',
    'get_database_url',
    # Initialization
    'init_database',
    'verify_schema',
    # CRUD module
    'crud',
]
