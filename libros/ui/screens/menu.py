"""Main menu."""

import logging
from typing import List

from rich.console import Group

from ...errors import LibrosError
from ...library_db import Library
from ...messages import KeyEvent, Message
from ..commands import LoadBooks, Quit
from ..styles import Styles
from .base import Outcome, Screen, choices, header, help_line, move_index

logger = logging.getLogger(__name__)

ADD_BOOK = "Add Book"
VIEW_BOOKS = "View Books"
UTILITIES = "Utilities"
THEME = "Theme"
QUIT = "Quit"


class MenuScreen:
    """
    Entry screen.

    "View Books" and "Utilities" are only offered once the library holds at
    least one book, so the item list is rebuilt each time the menu is shown.
    """

    captures_text = False

    def __init__(self, library: Library):
        self.library = library
        self.items: List[str] = []
        self.index = 0
        self.refresh()

    def refresh(self) -> None:
        try:
            count = self.library.count_books()
        except LibrosError as e:
            logger.warning(f"Could not count books: {e}")
            count = 0

        self.items = [ADD_BOOK]
        if count > 0:
            self.items += [VIEW_BOOKS, UTILITIES]
        self.items += [THEME, QUIT]
        self.index = min(self.index, len(self.items) - 1)

    @property
    def selected(self) -> str:
        return self.items[self.index]

    def update(self, message: Message) -> Outcome:
        if not isinstance(message, KeyEvent):
            return None, Screen.MENU

        if message.key == "enter":
            item = self.selected
            if item == ADD_BOOK:
                return None, Screen.ADD_BOOK
            if item == VIEW_BOOKS:
                return LoadBooks(), Screen.LIST_BOOKS
            if item == UTILITIES:
                return None, Screen.UTILITIES
            if item == THEME:
                return None, Screen.THEME
            return Quit(), Screen.MENU

        self.index = move_index(self.index, message.key, len(self.items))
        return None, Screen.MENU

    def render(self, styles: Styles):
        return Group(
            header(styles),
            choices(self.items, self.index, styles),
            help_line(styles, "Use ↑/↓ or j/k to navigate, Enter to select, q or Ctrl+C to quit"),
        )
