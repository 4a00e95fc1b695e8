"""Screens of the terminal UI. Each one answers ``update(message)`` with a command and the next screen."""

from .add_book import AddBookScreen
from .backup import BackupScreen
from .base import Screen
from .detail import BookDetailScreen
from .edit_book import EditBookScreen
from .export import ExportScreen, ExportState
from .list_books import ListBooksScreen
from .menu import MenuScreen
from .theme import ThemeScreen
from .utilities import UtilitiesScreen

__all__ = [
    "Screen",
    "MenuScreen",
    "AddBookScreen",
    "ListBooksScreen",
    "BookDetailScreen",
    "EditBookScreen",
    "UtilitiesScreen",
    "ExportScreen",
    "ExportState",
    "BackupScreen",
    "ThemeScreen",
]
