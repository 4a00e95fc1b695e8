"""
Messages flowing into the screen router.

Every input the UI reacts to is one of the types in ``Message``: a keystroke,
or the result of a command that ran on the event loop. Results carry the
request that produced them, so a screen never has to look at its own
(possibly changed) state to learn what was submitted.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from .config import Theme
from .db.models import Book, BookType


@dataclass(frozen=True)
class KeyEvent:
    """
    A normalised keystroke.

    ``key`` is the key name ("enter", "shift+tab", "ctrl+a", "left", "a").
    ``text`` holds literal characters to insert, for printable keys and
    pastes; it is empty for control and navigation keys.
    """
    key: str
    text: str = ""

    @classmethod
    def char(cls, ch: str) -> "KeyEvent":
        return cls(ch, ch)

    @classmethod
    def paste(cls, data: str) -> "KeyEvent":
        return cls("paste", data)


@dataclass(frozen=True)
class BookRequest:
    """Snapshot of the editable fields of a book, as submitted from a form."""
    title: str
    author: str
    book_type: BookType = BookType.PAPERBACK
    notes: str = ""


@dataclass(frozen=True)
class SaveResult:
    request: BookRequest
    error: Optional[Exception] = None


@dataclass(frozen=True)
class UpdateResult:
    book_id: int
    request: BookRequest
    error: Optional[Exception] = None


@dataclass(frozen=True)
class DeleteResult:
    book_id: int
    error: Optional[Exception] = None


@dataclass(frozen=True)
class LoadResult:
    books: List[Book] = field(default_factory=list)
    error: Optional[Exception] = None


@dataclass(frozen=True)
class ExportResult:
    path: Optional[Path] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class BackupResult:
    path: Optional[Path] = None
    error: Optional[Exception] = None


@dataclass(frozen=True)
class ThemeSaved:
    theme: Theme
    error: Optional[Exception] = None


Message = Union[
    KeyEvent,
    SaveResult,
    UpdateResult,
    DeleteResult,
    LoadResult,
    ExportResult,
    BackupResult,
    ThemeSaved,
]
