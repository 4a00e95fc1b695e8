"""Utilities menu: export and backup."""

from rich.console import Group
from rich.text import Text

from ...messages import KeyEvent, Message
from ..styles import Styles
from .base import Outcome, Screen, choices, help_line, move_index

EXPORT = "Export"
BACKUP = "Backup"
BACK_TO_MENU = "Back to Main Menu"

ITEMS = (EXPORT, BACKUP, BACK_TO_MENU)


class UtilitiesScreen:
    captures_text = False

    def __init__(self):
        self.index = 0

    def update(self, message: Message) -> Outcome:
        if not isinstance(message, KeyEvent):
            return None, Screen.UTILITIES

        key = message.key
        if key == "esc":
            return None, Screen.MENU
        if key == "enter":
            item = ITEMS[self.index]
            if item == EXPORT:
                return None, Screen.EXPORT
            if item == BACKUP:
                return None, Screen.BACKUP
            return None, Screen.MENU

        self.index = move_index(self.index, key, len(ITEMS))
        return None, Screen.UTILITIES

    def render(self, styles: Styles):
        return Group(
            Text.assemble("\n", ("Ｕｔｉｌｉｔｉｅｓ", styles.title), "\n"),
            choices(ITEMS, self.index, styles),
            help_line(styles, "Use ↑/↓ or j/k to navigate, Enter to select, Esc for menu, q to quit"),
        )
