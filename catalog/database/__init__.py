"""
Database module for the movie catalog.

This module provides database models, connection management, and CRUD operations
for the SQLite database using SQLAlchemy ORM.
"""

from catalog.database.models import Base, User, Movie, MovieGenre
from catalog.database.connection import DatabaseManager, get_db_manager
from catalog.database.init_db import init_database, verify_schema
from catalog.database import crud

__all__ = [
    # Models
    'Base',
    'User',
    'Movie',
    'MovieGenre',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    # Initialization
    'init_database',
    'verify_schema',
    # CRUD module
    'crud',
]
