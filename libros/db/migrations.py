"""
Database migration utilities for libros.

The schema is created with SQLAlchemy's create_all(); this module holds the
additive column migrations needed by databases written before a column
existed. Every migration is idempotent: it is applied once and is a no-op
on every later open.
"""

import logging

from sqlalchemy import inspect, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError

logger = logging.getLogger(__name__)


def column_exists(engine: Engine, table_name: str, column_name: str) -> bool:
    """Check if a column exists on a table."""
    inspector = inspect(engine)
    if table_name not in inspector.get_table_names():
        return False
    return column_name in [col['name'] for col in inspector.get_columns(table_name)]


def migrate_add_book_type(engine: Engine, dry_run: bool = False) -> bool:
    """
    Add the type column to a books table that predates it.

    Existing rows get 'paperback'.

    Args:
        engine: Engine bound to the library database
        dry_run: If True, only check if migration is needed

    Returns:
        True if migration was applied (or would be applied in dry_run),
        False if already up-to-date
    """
    if column_exists(engine, 'books', 'type'):
        logger.debug("books.type column already exists, skipping migration")
        return False

    if dry_run:
        logger.info("Migration needed: books.type column does not exist")
        return True

    logger.info("Applying migration: Adding type column to books table")

    try:
        with engine.begin() as conn:
            conn.execute(text(
                "ALTER TABLE books ADD COLUMN type TEXT NOT NULL DEFAULT 'paperback'"
            ))
    except OperationalError as e:
        # Another open got there first; the column is in place either way
        if "duplicate column name" in str(e).lower():
            logger.debug("books.type column added concurrently, nothing to do")
            return False
        raise

    logger.info("Migration completed successfully")
    return True


MIGRATIONS = [
    ('add_book_type', migrate_add_book_type),
]


def run_all_migrations(engine: Engine, dry_run: bool = False) -> dict:
    """
    Run all pending migrations on a library database.

    Args:
        engine: Engine bound to the library database
        dry_run: If True, only check which migrations are needed

    Returns:
        Dict mapping migration name to whether it was applied
    """
    results = {}

    for name, migration_func in MIGRATIONS:
        try:
            results[name] = migration_func(engine, dry_run=dry_run)
        except Exception as e:
            logger.error(f"Migration '{name}' failed: {e}")
            raise

    return results


def check_migrations(engine: Engine) -> dict:
    """Check which migrations need to be applied."""
    return run_all_migrations(engine, dry_run=True)
