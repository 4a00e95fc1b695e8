"""
Database session management for libros.

Provides session factory and initialization utilities. The process holds
exactly one engine, opened at startup and disposed at quit.
"""

from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.engine import Engine

from .models import Base
from .migrations import run_all_migrations

# Global session factory
_SessionFactory: Optional[sessionmaker] = None
_engine: Optional[Engine] = None


def init_db(db_path: Path, echo: bool = False) -> Engine:
    """
    Initialize database, create the books table and bring legacy tables up to date.

    Args:
        db_path: Path to the SQLite file (created if missing)
        echo: If True, log all SQL statements (debug mode)

    Returns:
        SQLAlchemy engine
    """
    global _engine, _SessionFactory

    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    _engine = create_engine(f'sqlite:///{db_path}', echo=echo)

    # create_all leaves an existing (possibly legacy) table untouched
    Base.metadata.create_all(_engine)
    run_all_migrations(_engine)

    _SessionFactory = sessionmaker(bind=_engine)

    return _engine


def get_session() -> Session:
    """
    Get a new database session.

    Raises:
        RuntimeError: If database not initialized
    """
    if _SessionFactory is None:
        raise RuntimeError(
            "Database not initialized. Call init_db() first."
        )
    return _SessionFactory()


def close_db():
    """Close database connection and cleanup."""
    global _engine, _SessionFactory

    if _engine:
        _engine.dispose()
        _engine = None

    _SessionFactory = None
