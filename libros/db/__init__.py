"""
Database module for libros.

Provides SQLAlchemy session management and initialization.
"""

from .models import Base, Book, BookType
from .session import get_session, init_db, close_db
from .migrations import run_all_migrations, check_migrations

__all__ = [
    'Base',
    'Book',
    'BookType',
    'get_session',
    'init_db',
    'close_db',
    'run_all_migrations',
    'check_migrations'
]
