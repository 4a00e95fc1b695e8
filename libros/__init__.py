"""
libros - a personal book library manager for the terminal.

Main API:
    from libros.library_db import Library
    from libros.db.models import BookType
    from pathlib import Path

    # Open or create a library
    lib = Library.open(Path("~/.libros").expanduser())

    # Add a book
    book = lib.save_book("Dune", "Frank Herbert", BookType.DIGITAL)

    # Newest first
    books = lib.load_books()

    # Always close when done
    lib.close()

Running ``libros`` with no arguments opens the interactive UI.
"""

from .library_db import Library
from .db.models import Book, BookType
from .errors import LibrosError, StorageError, ValidationError

__version__ = "1.0.0"
__all__ = [
    "Library",
    "Book",
    "BookType",
    "LibrosError",
    "StorageError",
    "ValidationError",
]
