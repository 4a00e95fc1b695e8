"""Form for editing the selected book."""

from datetime import datetime
from typing import Optional
import logging

from rich.console import Group

from ...config import UIConfig
from ...db.models import Book, BookType
from ...messages import KeyEvent, Message, UpdateResult
from ..commands import UpdateBook
from ..form import BookForm, FormAction
from ..styles import Styles
from .base import Outcome, Screen, banner, header, help_line
from .form_view import render_form

logger = logging.getLogger(__name__)


class EditBookScreen:
    """
    Edits a book in place.

    The book itself is only touched after the store confirms the update;
    leaving with esc discards whatever was typed.
    """

    captures_text = True

    def __init__(self, ui: UIConfig = None):
        ui = ui or UIConfig()
        self.book: Optional[Book] = None
        self.form = BookForm(
            "UPDATE BOOK", tab_cycles_selector=False,
            input_width=ui.input_width, textarea_width=ui.textarea_width,
        )

    def load(self, book: Book) -> None:
        self.book = book
        self.form.load(book)

    def update(self, message: Message) -> Outcome:
        if isinstance(message, UpdateResult):
            if message.error is not None:
                logger.debug(f"Update of book {message.book_id} rejected: {message.error}")
                self.form.error = message.error
                self.form.succeeded = False
                return None, Screen.EDIT_BOOK
            self._apply(message)
            self.form.error = None
            self.form.succeeded = True
            return None, Screen.BOOK_DETAIL

        if not isinstance(message, KeyEvent):
            return None, Screen.EDIT_BOOK

        action = self.form.handle_key(message)
        if action is FormAction.CANCEL:
            return None, Screen.BOOK_DETAIL
        if action is FormAction.SUBMIT and self.book is not None:
            self.form.clear_status()
            return UpdateBook(self.book.id, self.form.snapshot()), Screen.EDIT_BOOK
        return None, Screen.EDIT_BOOK

    def _apply(self, result: UpdateResult) -> None:
        """Copy the values the store accepted onto the in-memory book."""
        book = self.book
        if book is None or book.id != result.book_id:
            return
        r = result.request
        book.title = r.title.strip()
        book.author = r.author.strip()
        book.type = BookType.coerce(r.book_type).value
        book.notes = r.notes.strip()
        book.updated_at = datetime.now()

    def render(self, styles: Styles):
        return Group(
            header(styles, "Edit Book"),
            render_form(self.form, styles),
            banner(styles, self.form.error),
            help_line(styles, "Tab/↑/↓ to move, ←/→ on Type to change, Ctrl+J for a new line, Esc to cancel"),
        )
