"""Screen identity and rendering helpers shared by all screens."""

from enum import Enum
from typing import Optional, Sequence, Tuple

from rich.text import Text

from ...messages import KeyEvent
from ..commands import Command
from ..styles import APP_TITLE, Styles, letter_spaced


class Screen(Enum):
    """Every screen the router can show."""
    MENU = "menu"
    ADD_BOOK = "add_book"
    LIST_BOOKS = "list_books"
    BOOK_DETAIL = "book_detail"
    EDIT_BOOK = "edit_book"
    UTILITIES = "utilities"
    EXPORT = "export"
    BACKUP = "backup"
    THEME = "theme"


# What a screen hands back after each message
Outcome = Tuple[Optional[Command], Screen]

UP_KEYS = ("up", "k")
DOWN_KEYS = ("down", "j")


def move_index(index: int, key: str, count: int) -> int:
    """Move a list selection one step for up/down/k/j, clamped at both ends."""
    if key in UP_KEYS and index > 0:
        return index - 1
    if key in DOWN_KEYS and index < count - 1:
        return index + 1
    return index


def is_key(message, *keys: str) -> bool:
    return isinstance(message, KeyEvent) and message.key in keys


def header(styles: Styles, subtitle: str = "", title: str = APP_TITLE) -> Text:
    text = Text("\n")
    text.append(title, styles.title)
    text.append("\n\n")
    if subtitle:
        text.append(letter_spaced(subtitle), styles.blurred)
        text.append("\n\n")
    return text


def choices(items: Sequence[str], index: int, styles: Styles) -> Text:
    """Vertical menu with the item at ``index`` highlighted."""
    text = Text()
    for i, item in enumerate(items):
        text.append(f" {item} ", styles.selected if i == index else styles.blurred)
        text.append("\n\n")
    return text


def help_line(styles: Styles, hint: str) -> Text:
    return Text("\n" + letter_spaced(hint), styles.help)


def banner(styles: Styles, error: Optional[Exception] = None, success: str = "") -> Text:
    """Error or success line; empty when there is nothing to report."""
    if error is not None:
        return Text(f"\nError: {error}\n", styles.error)
    if success:
        return Text("\n" + letter_spaced(f"✓ {success}") + "\n", styles.success)
    return Text()

