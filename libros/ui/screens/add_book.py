"""Form for adding a new book."""

import logging

from rich.console import Group

from ...config import UIConfig
from ...messages import KeyEvent, Message, SaveResult
from ..commands import SaveBook
from ..form import BookForm, FormAction
from ..styles import Styles
from .base import Outcome, Screen, banner, header, help_line
from .form_view import render_form

logger = logging.getLogger(__name__)


class AddBookScreen:
    """
    Title, author, type and notes, saved with the SAVE BOOK button.

    Tab and shift+tab cycle the type while it has focus. After a successful
    save the form is blanked and ready for the next book.
    """

    captures_text = True

    def __init__(self, ui: UIConfig = None):
        ui = ui or UIConfig()
        self.form = BookForm(
            "SAVE BOOK", tab_cycles_selector=True,
            input_width=ui.input_width, textarea_width=ui.textarea_width,
        )

    def reset(self) -> None:
        self.form.reset()

    def update(self, message: Message) -> Outcome:
        if isinstance(message, SaveResult):
            if message.error is not None:
                logger.debug(f"Save rejected: {message.error}")
                self.form.error = message.error
                self.form.succeeded = False
            else:
                self.form.reset()
                self.form.succeeded = True
            return None, Screen.ADD_BOOK

        if not isinstance(message, KeyEvent):
            return None, Screen.ADD_BOOK

        action = self.form.handle_key(message)
        if action is FormAction.CANCEL:
            return None, Screen.MENU
        if action is FormAction.SUBMIT:
            return SaveBook(self.form.snapshot()), Screen.ADD_BOOK
        return None, Screen.ADD_BOOK

    def render(self, styles: Styles):
        return Group(
            header(styles, "Add New Book"),
            render_form(self.form, styles),
            banner(styles, self.form.error, "Book saved successfully!" if self.form.succeeded else ""),
            help_line(styles, "Tab/↑/↓ to move, Tab or ←/→ on Type to change, Ctrl+J for a new line, Esc for menu"),
        )
