"""
Export screen.

Runs through four states:

    PATH_INPUT -> FORMAT_SELECTION -> EXPORTING -> SHOW_RESULT
                        ^                               |
                        +-------------------------------+

The path is checked before any format is offered, so a typo is reported
while the user is still in the text field.
"""

from enum import Enum
from pathlib import Path
from typing import Optional
import logging

from rich.console import Group
from rich.text import Text

from ...errors import LibrosError
from ...messages import ExportResult, KeyEvent, Message
from ...validation import validate_export_path
from ..commands import ExportBooks
from ..form import Form, FormAction, Slot
from ..styles import Styles, letter_spaced
from ..widgets import TextInput
from .base import Outcome, Screen, banner, choices, header, help_line, move_index
from .form_view import render_form

logger = logging.getLogger(__name__)

JSON_FORMAT = "JSON Format"
MARKDOWN_FORMAT = "Markdown Format"
BACK_TO_UTILITIES = "Back to Utilities"
BACK_TO_MENU = "Back to Main Menu"

FORMAT_OPTIONS = (JSON_FORMAT, MARKDOWN_FORMAT, BACK_TO_UTILITIES, BACK_TO_MENU)
FORMAT_KEYS = {JSON_FORMAT: "json", MARKDOWN_FORMAT: "markdown"}


class ExportState(Enum):
    PATH_INPUT = "path_input"
    FORMAT_SELECTION = "format_selection"
    EXPORTING = "exporting"
    SHOW_RESULT = "show_result"


class ExportScreen:
    def __init__(self, exports_dir: Path):
        self.exports_dir = Path(exports_dir)
        self.path_input = TextInput(placeholder=f"Leave empty for {self.exports_dir}")
        self.form = Form([Slot.text("path", self.path_input, label="Export directory:"),
                          Slot.submit("CONTINUE")])
        self.state = ExportState.PATH_INPUT
        self.directory: Optional[Path] = None
        self.index = 0
        self.result: Optional[ExportResult] = None

    @property
    def captures_text(self) -> bool:
        return self.state is ExportState.PATH_INPUT

    def reset(self) -> None:
        """Clear any previous outcome and start again at path entry."""
        self.state = ExportState.PATH_INPUT
        self.directory = None
        self.index = 0
        self.result = None
        self.form.reset()

    def update(self, message: Message) -> Outcome:
        if isinstance(message, ExportResult):
            self.result = message
            self.state = ExportState.SHOW_RESULT
            return None, Screen.EXPORT

        if not isinstance(message, KeyEvent):
            return None, Screen.EXPORT

        if self.state is ExportState.PATH_INPUT:
            return self._update_path(message)
        if self.state is ExportState.FORMAT_SELECTION:
            return self._update_format(message)
        if self.state is ExportState.SHOW_RESULT and message.key in ("enter", "esc"):
            self.result = None
            self.state = ExportState.FORMAT_SELECTION
        return None, Screen.EXPORT

    def _update_path(self, message: KeyEvent) -> Outcome:
        action = self.form.handle_key(message)
        if action is FormAction.CANCEL:
            return None, Screen.UTILITIES
        if action is FormAction.SUBMIT:
            try:
                self.directory = validate_export_path(self.path_input.value, self.exports_dir)
            except LibrosError as e:
                self.form.error = e
                return None, Screen.EXPORT
            self.form.clear_status()
            self.index = 0
            self.state = ExportState.FORMAT_SELECTION
        return None, Screen.EXPORT

    def _update_format(self, message: KeyEvent) -> Outcome:
        key = message.key
        if key == "esc":
            self.state = ExportState.PATH_INPUT
            self.form.focus(0)
            return None, Screen.EXPORT
        if key != "enter":
            self.index = move_index(self.index, key, len(FORMAT_OPTIONS))
            return None, Screen.EXPORT

        option = FORMAT_OPTIONS[self.index]
        if option == BACK_TO_UTILITIES:
            return None, Screen.UTILITIES
        if option == BACK_TO_MENU:
            return None, Screen.MENU

        logger.debug(f"Exporting {FORMAT_KEYS[option]} to {self.directory}")
        self.state = ExportState.EXPORTING
        return ExportBooks(self.directory, FORMAT_KEYS[option]), Screen.EXPORT

    def render(self, styles: Styles):
        parts = [header(styles, "Export Books")]

        if self.state is ExportState.PATH_INPUT:
            parts.append(render_form(self.form, styles))
            parts.append(banner(styles, self.form.error))
            parts.append(help_line(styles, "Enter a directory starting with / or ~, Tab to move, Esc to go back"))
        elif self.state is ExportState.FORMAT_SELECTION:
            parts.append(Text(f"{letter_spaced('Directory:')} {self.directory}\n", styles.blurred))
            parts.append(choices(FORMAT_OPTIONS, self.index, styles))
            parts.append(help_line(styles, "Use ↑/↓ or j/k to navigate, Enter to select, Esc to change directory"))
        elif self.state is ExportState.EXPORTING:
            parts.append(Text(letter_spaced("Exporting books..."), styles.accent))
        else:
            result = self.result
            if result is not None and result.error is None:
                parts.append(banner(styles, success=f"Exported to {result.path}"))
            else:
                parts.append(banner(styles, result.error if result else None))
            parts.append(help_line(styles, "Press Enter or Esc to continue"))
        return Group(*parts)
