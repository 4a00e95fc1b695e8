"""Shows the outcome of copying the database file."""

from typing import Optional

from rich.console import Group
from rich.text import Text

from ...messages import BackupResult, Message
from ..styles import Styles, letter_spaced
from .base import Outcome, Screen, banner, help_line, is_key


class BackupScreen:
    captures_text = False

    def __init__(self):
        self.in_progress = False
        self.result: Optional[BackupResult] = None

    def reset(self) -> None:
        self.in_progress = True
        self.result = None

    def update(self, message: Message) -> Outcome:
        if isinstance(message, BackupResult):
            self.in_progress = False
            self.result = message
            return None, Screen.BACKUP
        if is_key(message, "enter", "esc"):
            return None, Screen.UTILITIES
        return None, Screen.BACKUP

    def render(self, styles: Styles):
        parts = [Text.assemble("\n", ("Ｄａｔａｂａｓｅ　Ｂａｃｋｕｐ", styles.title), "\n")]
        if self.in_progress or self.result is None:
            parts.append(Text(letter_spaced("Creating backup..."), styles.accent))
        elif self.result.error is not None:
            parts.append(banner(styles, self.result.error))
        else:
            parts.append(banner(styles, success=f"Backup saved to {self.result.path}"))
        parts.append(help_line(styles, "Press Enter or Esc to return to Utilities"))
        return Group(*parts)
