"""Scrolling list of every book in the library."""

import logging
from typing import List, Optional

from rich import box
from rich.console import Group
from rich.panel import Panel
from rich.text import Text

from ...constants import BOOKS_PER_PAGE, NOTE_TRUNCATE_LENGTH
from ...db.models import Book
from ...messages import KeyEvent, LoadResult, Message
from ...utils import format_book_type, format_date, truncate_notes
from ..styles import Styles, letter_spaced
from .base import DOWN_KEYS, UP_KEYS, Outcome, Screen, banner, header, help_line

logger = logging.getLogger(__name__)


class ListBooksScreen:
    """
    Newest-first list showing ``page_size`` books at a time.

    The selection is clamped at both ends. The window (``offset``) only
    moves when the selection would leave it.
    """

    captures_text = False

    def __init__(self, page_size: int = BOOKS_PER_PAGE):
        self.books: List[Book] = []
        self.index = 0
        self.offset = 0
        self.page_size = max(1, page_size)
        self.error: Optional[Exception] = None
        self.deleted = False

    @property
    def selected(self) -> Optional[Book]:
        if not self.books:
            return None
        return self.books[self.index]

    def move_up(self) -> None:
        if self.index > 0:
            self.index -= 1
            if self.index < self.offset:
                self.offset = self.index

    def move_down(self) -> None:
        if self.index < len(self.books) - 1:
            self.index += 1
            if self.index >= self.offset + self.page_size:
                self.offset = self.index - self.page_size + 1

    def set_books(self, books: List[Book]) -> None:
        """Replace the list, keeping the selection inside it."""
        self.books = list(books)
        if not self.books:
            self.index = 0
            self.offset = 0
            return
        self.index = min(self.index, len(self.books) - 1)
        self.offset = min(self.offset, self.index)
        if self.index >= self.offset + self.page_size:
            self.offset = self.index - self.page_size + 1

    def update(self, message: Message) -> Outcome:
        if isinstance(message, LoadResult):
            if message.error is not None:
                logger.error(f"Failed to load books: {message.error}")
                self.error = message.error
            else:
                self.error = None
                self.set_books(message.books)
            return None, Screen.LIST_BOOKS

        if not isinstance(message, KeyEvent):
            return None, Screen.LIST_BOOKS

        key = message.key
        if key == "esc":
            return None, Screen.MENU
        if key in UP_KEYS:
            self.move_up()
        elif key in DOWN_KEYS:
            self.move_down()
        elif key == "enter" and self.books:
            return None, Screen.BOOK_DETAIL
        return None, Screen.LIST_BOOKS

    @property
    def page(self) -> int:
        return self.offset // self.page_size + 1

    @property
    def page_count(self) -> int:
        return (len(self.books) + self.page_size - 1) // self.page_size

    def _render_book(self, book: Book, selected: bool, styles: Styles) -> Panel:
        body = Text()
        body.append(letter_spaced(book.title), styles.title if selected else styles.blurred)
        body.append("\n\n")
        body.append(
            f"{letter_spaced('Author:')}  {letter_spaced(book.author)}",
            styles.button if selected else styles.blurred,
        )
        body.append("\n\n")
        body.append(
            f"{letter_spaced('Type:')} {letter_spaced(format_book_type(book.type))} | "
            f"{letter_spaced('Added:')} {letter_spaced(format_date(book.created_at))}",
            styles.blurred,
        )
        if book.notes:
            body.append("\n\n")
            body.append(letter_spaced(truncate_notes(book.notes, NOTE_TRUNCATE_LENGTH)), styles.notes)
        return Panel(
            body,
            box=box.ROUNDED if selected else box.SIMPLE,
            border_style=styles.focused if selected else styles.blurred,
            expand=False,
            padding=(0, 2),
        )

    def render(self, styles: Styles):
        parts = [header(styles, "Your Book Collection")]

        if not self.books:
            parts.append(Text("No books found. Add some books first!", styles.blurred))
        else:
            end = min(self.offset + self.page_size, len(self.books))
            for i in range(self.offset, end):
                parts.append(self._render_book(self.books[i], i == self.index, styles))
            parts.append(Text(
                f"   {letter_spaced('Total books:')} {len(self.books)} | "
                f"{letter_spaced('Page:')} {self.page}/{self.page_count}",
                styles.blurred,
            ))

        parts.append(banner(styles, self.error, "Book deleted successfully!" if self.deleted else ""))
        parts.append(help_line(styles, "Use ↑/↓ or j/k to navigate, Enter to view details, Esc for menu, q to quit"))
        return Group(*parts)
