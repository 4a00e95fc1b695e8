"""Theme picker."""

from typing import Optional

from rich.console import Group
from rich.text import Text

from ...config import THEMES, get_theme, theme_names
from ...messages import KeyEvent, Message, ThemeSaved
from ..commands import SaveTheme
from ..styles import Styles
from .base import Outcome, Screen, banner, header, help_line, move_index


class ThemeScreen:
    captures_text = False

    def __init__(self, current: str = ""):
        self.names = theme_names()
        self.index = 0
        self.error: Optional[Exception] = None
        self.select(current)

    def select(self, name: str) -> None:
        """Point the cursor at ``name`` (default theme if unknown)."""
        self.index = self.names.index(get_theme(name).name)
        self.error = None

    @property
    def selected(self) -> str:
        return self.names[self.index]

    def update(self, message: Message) -> Outcome:
        if isinstance(message, ThemeSaved):
            if message.error is not None:
                self.error = message.error
                return None, Screen.THEME
            return None, Screen.MENU

        if not isinstance(message, KeyEvent):
            return None, Screen.THEME

        key = message.key
        self.error = None
        if key == "esc":
            return None, Screen.MENU
        if key == "enter":
            return SaveTheme(THEMES[self.selected]), Screen.THEME

        self.index = move_index(self.index, key, len(self.names))
        return None, Screen.THEME

    def render(self, styles: Styles):
        options = Text()
        for i, name in enumerate(self.names):
            theme = THEMES[name]
            if i == self.index:
                options.append(f" {name} ", f"bold #FFFFFF on {theme.primary_color}")
            else:
                options.append(f" {name} ", theme.primary_color)
            options.append("\n\n")

        return Group(
            header(styles, "Pick Theme"),
            Text("Choose your preferred color theme for the application\n", styles.blurred),
            options,
            banner(styles, self.error),
            help_line(styles, "Use ↑/↓ or j/k to navigate, Enter to select, Esc to return to menu"),
        )
