"""Read-only view of one book with edit and delete actions."""

import logging
from typing import Optional

from rich.console import Group
from rich.text import Text

from ...constants import TEXT_WRAP_WIDTH
from ...db.models import Book
from ...messages import DeleteResult, KeyEvent, Message
from ...utils import format_book_type, format_date, wrap_text
from ..commands import DeleteBook, LoadBooks
from ..styles import Styles
from .base import Outcome, Screen, banner, choices, header, help_line, move_index

logger = logging.getLogger(__name__)

EDIT_BOOK = "Edit Book"
DELETE_BOOK = "Delete Book"
BACK_TO_LIST = "Back to List"

ACTIONS = (EDIT_BOOK, DELETE_BOOK, BACK_TO_LIST)


class BookDetailScreen:
    captures_text = False

    def __init__(self):
        self.book: Optional[Book] = None
        self.index = 0
        self.error: Optional[Exception] = None
        self.updated = False

    def set_book(self, book: Optional[Book]) -> None:
        self.book = book
        self.index = 0
        self.error = None
        self.updated = False

    def update(self, message: Message) -> Outcome:
        if isinstance(message, DeleteResult):
            if message.error is not None:
                logger.warning(f"Delete of book {message.book_id} failed: {message.error}")
                self.error = message.error
                return None, Screen.BOOK_DETAIL
            return LoadBooks(), Screen.LIST_BOOKS

        if not isinstance(message, KeyEvent):
            return None, Screen.BOOK_DETAIL

        key = message.key
        if key == "esc":
            return None, Screen.LIST_BOOKS
        if key == "enter" and self.book is not None:
            action = ACTIONS[self.index]
            if action == EDIT_BOOK:
                return None, Screen.EDIT_BOOK
            if action == DELETE_BOOK:
                self.error = None
                return DeleteBook(self.book.id), Screen.BOOK_DETAIL
            return None, Screen.LIST_BOOKS

        self.index = move_index(self.index, key, len(ACTIONS))
        return None, Screen.BOOK_DETAIL

    def render(self, styles: Styles):
        parts = [header(styles, "Book Details")]
        book = self.book
        if book is None:
            parts.append(Text("No book selected.", styles.blurred))
        else:
            info = Text()
            info.append(f"Added: {format_date(book.created_at)}\n", styles.blurred)
            if book.updated_at.date() != book.created_at.date():
                info.append(f"Last updated: {format_date(book.updated_at)}\n", styles.blurred)
            info.append("\n")
            info.append("Title: ", styles.focused)
            info.append(f"{book.title}\n")
            info.append("Author: ", styles.focused)
            info.append(f"{book.author}\n")
            info.append("Type: ", styles.focused)
            info.append(f"{format_book_type(book.type)}\n")
            if book.notes:
                info.append("\n")
                info.append("Notes:\n", styles.focused)
                info.append(wrap_text(book.notes, TEXT_WRAP_WIDTH) + "\n", styles.notes)
            info.append("\n")
            parts.append(info)
            parts.append(choices(ACTIONS, self.index, styles))

        parts.append(banner(styles, self.error, "Book updated successfully!" if self.updated else ""))
        parts.append(help_line(styles, "Use ↑/↓ or j/k to navigate, Enter to select, Esc to go back, q to quit"))
        return Group(*parts)
