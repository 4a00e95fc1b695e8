"""
Top-level dispatcher for the terminal UI.

The router owns one instance of every screen and the current ``Screen``.
Each message is handed to a screen, which answers with an optional command
and the screen it wants next. When that differs from the current one the
router runs the entry side effects for the new screen and switches.

Keystrokes go to the active screen. Command results go to the screen that
issued the command; its requested transition only applies if it is still
the active screen.
"""

from pathlib import Path
from typing import Callable, Optional
import logging

from ..config import LibrosConfig
from ..constants import EXPORTS_DIRNAME
from ..library_db import Library
from ..messages import (
    BackupResult, DeleteResult, ExportResult, KeyEvent, LoadResult, Message,
    SaveResult, ThemeSaved, UpdateResult,
)
from .commands import BackupDatabase, Command, Quit
from .screens import (
    AddBookScreen, BackupScreen, BookDetailScreen, EditBookScreen, ExportScreen,
    ListBooksScreen, MenuScreen, Screen, ThemeScreen, UtilitiesScreen,
)
from .styles import Styles

logger = logging.getLogger(__name__)

HARD_QUIT_KEY = "ctrl+c"
SOFT_QUIT_KEY = "q"

# Which screen receives each kind of command result
RESULT_OWNERS = {
    SaveResult: Screen.ADD_BOOK,
    UpdateResult: Screen.EDIT_BOOK,
    DeleteResult: Screen.BOOK_DETAIL,
    LoadResult: Screen.LIST_BOOKS,
    ExportResult: Screen.EXPORT,
    BackupResult: Screen.BACKUP,
    ThemeSaved: Screen.THEME,
}


def _changes_count(message: Message) -> bool:
    """True for a successful save or delete."""
    return isinstance(message, (SaveResult, DeleteResult)) and message.error is None


class Router:
    """
    Holds the current screen and applies transitions.

    Args:
        library: Open record store; closed exactly once by quit()
        config: Configuration, replaced in part when the theme changes
        exports_dir: Default export directory (``<library>/exports``)
    """

    def __init__(self, library: Library, config: LibrosConfig,
                 exports_dir: Optional[Path] = None):
        self.library = library
        self.config = config
        self.styles = Styles.from_theme(config.theme)
        self.current = Screen.MENU
        self.done = False
        self._quitting = False
        # Runs every queued command; set by whoever owns the task queue
        self.drain: Optional[Callable[[], None]] = None

        if exports_dir is None:
            exports_dir = library.library_path / EXPORTS_DIRNAME

        self.menu = MenuScreen(library)
        self.add_book = AddBookScreen(config.ui)
        self.list_books = ListBooksScreen(config.ui.page_size)
        self.detail = BookDetailScreen()
        self.edit_book = EditBookScreen(config.ui)
        self.utilities = UtilitiesScreen()
        self.export = ExportScreen(exports_dir)
        self.backup = BackupScreen()
        self.theme = ThemeScreen(config.theme.name)

        self.screens = {
            Screen.MENU: self.menu,
            Screen.ADD_BOOK: self.add_book,
            Screen.LIST_BOOKS: self.list_books,
            Screen.BOOK_DETAIL: self.detail,
            Screen.EDIT_BOOK: self.edit_book,
            Screen.UTILITIES: self.utilities,
            Screen.EXPORT: self.export,
            Screen.BACKUP: self.backup,
            Screen.THEME: self.theme,
        }

    @property
    def active(self):
        return self.screens[self.current]

    def quit(self) -> None:
        """
        Finish pending commands, close the store (once) and mark the UI done.

        Results of the drained commands are still dispatched, so a save
        submitted just before quitting is written and reported.
        """
        if self.done or self._quitting:
            return
        self._quitting = True
        logger.info("Quitting")
        try:
            if self.drain is not None:
                self.drain()
        finally:
            self.library.close()
            self.done = True

    def update(self, message: Message) -> Optional[Command]:
        """
        Dispatch one message.

        Returns:
            A command for the task queue, or None
        """
        if self.done:
            return None

        if isinstance(message, KeyEvent):
            if message.key == HARD_QUIT_KEY:
                self.quit()
                return None
            if message.key == SOFT_QUIT_KEY and not self.active.captures_text:
                self.quit()
                return None
            owner = self.current
        else:
            owner = RESULT_OWNERS[type(message)]

        if isinstance(message, ThemeSaved) and message.error is None:
            self.config.theme = message.theme
            self.styles = Styles.from_theme(message.theme)
            logger.info(f"Theme changed to {message.theme.name}")

        command, next_screen = self.screens[owner].update(message)

        if isinstance(command, Quit):
            self.quit()
            return None

        if owner is not self.current:
            logger.debug(f"{type(message).__name__} arrived after leaving {owner.name}")
            if self.current is Screen.MENU and _changes_count(message):
                self.menu.refresh()
            return command

        if next_screen is not self.current:
            entry_command = self._enter(next_screen, message)
            if command is None:
                command = entry_command
        return command

    def _enter(self, screen: Screen, message: Message) -> Optional[Command]:
        """Switch to ``screen``, running its entry side effects."""
        previous = self.current
        self.current = screen
        logger.debug(f"Screen {previous.name} -> {screen.name}")

        if screen is Screen.MENU:
            self.menu.refresh()
        elif screen is Screen.ADD_BOOK:
            self.add_book.reset()
        elif screen is Screen.LIST_BOOKS:
            self.list_books.deleted = (
                isinstance(message, DeleteResult) and message.error is None
            )
        elif screen is Screen.BOOK_DETAIL:
            if previous is Screen.LIST_BOOKS:
                self.detail.set_book(self.list_books.selected)
            elif previous is Screen.EDIT_BOOK:
                self.detail.updated = self.edit_book.form.succeeded is True
                self.edit_book.form.clear_status()
        elif screen is Screen.EDIT_BOOK:
            if self.detail.book is not None:
                self.edit_book.load(self.detail.book)
        elif screen is Screen.EXPORT:
            self.export.reset()
        elif screen is Screen.BACKUP:
            self.backup.reset()
            return BackupDatabase()
        elif screen is Screen.THEME:
            self.theme.select(self.config.theme.name)
        return None

    def render(self):
        """Rich renderable for the current screen in the current theme."""
        return self.active.render(self.styles)
