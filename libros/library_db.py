"""
Database-backed Library class for libros.

Durable CRUD over the single ``books`` table using SQLAlchemy + SQLite.
"""

from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional
import logging

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .constants import DATABASE_FILENAME
from .db.models import Book, BookType
from .db.session import init_db, get_session, close_db
from .errors import StorageError
from .validation import validate_book

logger = logging.getLogger(__name__)


class Library:
    """
    Database-backed personal book library.

    Usage:
        lib = Library.open(Path("~/.libros").expanduser())
        lib.save_book("Dune", "Frank Herbert", BookType.DIGITAL)
        books = lib.load_books()
        lib.close()

    Books returned by this class are detached snapshots: changing their
    attributes never writes to the database.
    """

    def __init__(self, library_path: Path, session: Session):
        self.library_path = Path(library_path)
        self.session = session

    @classmethod
    def open(cls, library_path: Path, echo: bool = False) -> 'Library':
        """
        Open or create a library.

        Args:
            library_path: Path to library directory
            echo: If True, log all SQL statements

        Returns:
            Library instance

        Raises:
            StorageError: If the directory or database cannot be opened
        """
        library_path = Path(library_path)
        try:
            init_db(library_path / DATABASE_FILENAME, echo=echo)
        except (SQLAlchemyError, OSError) as e:
            close_db()
            raise StorageError(f"cannot open library at {library_path}: {e}") from e
        session = get_session()

        logger.info(f"Opened library at {library_path}")
        return cls(library_path, session)

    @property
    def db_path(self) -> Path:
        return self.library_path / DATABASE_FILENAME

    def close(self):
        """Close library and cleanup database connection."""
        if self.session is None:
            return
        self.session.close()
        self.session = None
        close_db()
        logger.info("Closed library")

    @contextmanager
    def _storage(self, action: str):
        """Roll back and re-raise database failures as StorageError."""
        try:
            yield
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"{action} failed: {e}")
            raise StorageError(str(e)) from e

    def save_book(self, title: str, author: str,
                  book_type: BookType = BookType.PAPERBACK, notes: str = "") -> Book:
        """
        Add a book to the library.

        Args:
            title: Book title (trimmed, required)
            author: Author name (trimmed, required)
            book_type: Format of the book
            notes: Optional notes (trimmed)

        Returns:
            The stored Book, with id and timestamps assigned

        Raises:
            ValidationError: If title or author is empty, or a field is too long
            StorageError: If the insert fails
        """
        title, author, notes = validate_book(title, author, notes)
        now = datetime.now()
        book = Book(
            title=title,
            author=author,
            type=BookType.coerce(book_type).value,
            notes=notes,
            created_at=now,
            updated_at=now,
        )

        with self._storage("Save"):
            self.session.add(book)
            self.session.commit()
            self.session.refresh(book)
            self.session.expunge(book)

        logger.info(f"Added book: {book.title}")
        return book

    def load_books(self) -> List[Book]:
        """Get all books, newest first."""
        with self._storage("Load"):
            books = (
                self.session.query(Book)
                .order_by(Book.created_at.desc(), Book.id.desc())
                .all()
            )
            self.session.expunge_all()
            self.session.rollback()
        return books

    def get_book(self, book_id: int) -> Optional[Book]:
        """Get book by ID."""
        with self._storage("Get"):
            book = self.session.get(Book, book_id)
            if book is not None:
                self.session.expunge(book)
            self.session.rollback()
        return book

    def update_book(self, book_id: int, title: str, author: str,
                    book_type: BookType = BookType.PAPERBACK, notes: str = "") -> int:
        """
        Update the editable fields of a book and refresh its updated_at.

        An unknown id updates nothing and is not an error.

        Returns:
            Number of rows affected (0 or 1)

        Raises:
            ValidationError: If title or author is empty, or a field is too long
            StorageError: If the update fails
        """
        title, author, notes = validate_book(title, author, notes)

        with self._storage("Update"):
            rows = (
                self.session.query(Book)
                .filter(Book.id == book_id)
                .update({
                    Book.title: title,
                    Book.author: author,
                    Book.type: BookType.coerce(book_type).value,
                    Book.notes: notes,
                    Book.updated_at: datetime.now(),
                }, synchronize_session=False)
            )
            self.session.commit()

        if rows:
            logger.info(f"Updated book {book_id}: {title}")
        else:
            logger.debug(f"Update of book {book_id} matched no rows")
        return rows

    def delete_book(self, book_id: int) -> int:
        """
        Delete a book from the library.

        An unknown id deletes nothing and is not an error.

        Returns:
            Number of rows affected (0 or 1)
        """
        with self._storage("Delete"):
            rows = (
                self.session.query(Book)
                .filter(Book.id == book_id)
                .delete(synchronize_session=False)
            )
            self.session.commit()

        if rows:
            logger.info(f"Deleted book {book_id}")
        else:
            logger.debug(f"Delete of book {book_id} matched no rows")
        return rows

    def count_books(self) -> int:
        """Total number of books."""
        with self._storage("Count"):
            count = self.session.query(func.count(Book.id)).scalar()
            self.session.rollback()
        return count or 0
