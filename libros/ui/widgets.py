"""
Editable text fields for the form screens.

TextInput is a single-line field with a placeholder, a character limit and
a cursor. TextArea behaves the same but keeps newlines and wraps at a fixed
width. Neither changes its own focus: the owning form calls focus() and
blur() explicitly, and keys sent to a blurred field are ignored.

Value and cursor live in a prompt_toolkit Buffer; the kill keys follow
readline (unix-line-discard, kill-line, unix-word-rubout). The widgets only
add the character limit and draw themselves as rich Text.
"""

import textwrap
from typing import List, Optional, Tuple

from prompt_toolkit.buffer import Buffer
from prompt_toolkit.document import Document
from rich.text import Text

from ..constants import INPUT_FIELD_WIDTH, TEXTAREA_HEIGHT, TEXTAREA_WIDTH
from ..messages import KeyEvent

CURSOR_STYLE = "reverse"
PLACEHOLDER_STYLE = "dim"


class TextInput:
    """Single-line text field."""

    multiline = False

    def __init__(self, placeholder: str = "", char_limit: int = 0,
                 width: int = INPUT_FIELD_WIDTH, prompt: str = ""):
        self.placeholder = placeholder
        self.char_limit = char_limit
        self.width = width
        self.prompt = prompt
        self.buffer = Buffer(multiline=self.multiline)
        self._focused = False

    @property
    def value(self) -> str:
        return self.buffer.text

    def set_value(self, value: str) -> None:
        """Replace the value, truncated to the limit, cursor at the end."""
        value = self._clean(value or "")
        if self.char_limit:
            value = value[:self.char_limit]
        self.buffer.set_document(Document(value, len(value)), bypass_readonly=True)

    @property
    def cursor(self) -> int:
        return self.buffer.cursor_position

    @cursor.setter
    def cursor(self, position: int) -> None:
        self.buffer.cursor_position = max(0, min(len(self.value), position))

    @property
    def focused(self) -> bool:
        return self._focused

    def focus(self) -> None:
        self._focused = True

    def blur(self) -> None:
        self._focused = False

    def cursor_start(self) -> None:
        self.cursor = 0

    def cursor_end(self) -> None:
        self.cursor = len(self.value)

    def insert(self, text: str) -> None:
        """Insert at the cursor; characters beyond the limit are dropped."""
        text = self._clean(text)
        if self.char_limit:
            text = text[:max(0, self.char_limit - len(self.value))]
        if text:
            self.buffer.insert_text(text)

    def apply_key(self, event: KeyEvent) -> "TextInput":
        """Edit the value or move the cursor according to ``event``."""
        if not self._focused:
            return self

        buff = self.buffer
        doc = buff.document
        key = event.key
        if key in ("backspace", "ctrl+h"):
            buff.delete_before_cursor(1)
        elif key == "delete":
            buff.delete(1)
        elif key == "left":
            self.cursor -= 1
        elif key == "right":
            self.cursor += 1
        elif key == "home":
            buff.cursor_position += doc.get_start_of_line_position()
        elif key == "end":
            buff.cursor_position += doc.get_end_of_line_position()
        elif key == "ctrl+u":
            if doc.cursor_position_col == 0:
                buff.delete_before_cursor(1)
            else:
                buff.delete_before_cursor(-doc.get_start_of_line_position())
        elif key == "ctrl+k":
            if doc.current_char == "\n":
                buff.delete(1)
            else:
                buff.delete(doc.get_end_of_line_position())
        elif key == "ctrl+w":
            pos = doc.find_start_of_previous_word(count=1, WORD=True)
            if pos is None:
                pos = -buff.cursor_position
            if pos:
                buff.delete_before_cursor(-pos)
        elif event.text:
            self.insert(event.text)
        return self

    def _clean(self, text: str) -> str:
        return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")

    def _render_line(self, out: Text, line: str, cursor_col: int, style: str) -> None:
        if cursor_col < 0:
            out.append(line, style)
            return
        out.append(line[:cursor_col], style)
        out.append(line[cursor_col] if cursor_col < len(line) else " ", CURSOR_STYLE)
        out.append(line[cursor_col + 1:], style)

    def render(self, style: str = "", prompt_style: str = "") -> Text:
        text = Text()
        if self.prompt:
            text.append(self.prompt, prompt_style or style)
        if not self.value:
            if self._focused:
                text.append((self.placeholder or " ")[0], CURSOR_STYLE)
                text.append(self.placeholder[1:], PLACEHOLDER_STYLE)
            else:
                text.append(self.placeholder, PLACEHOLDER_STYLE)
            return text
        self._render_line(text, self.value, self.cursor if self._focused else -1, style)
        return text


class TextArea(TextInput):
    """Multi-line text field wrapped at ``width`` columns."""

    multiline = True

    def __init__(self, placeholder: str = "", char_limit: int = 0,
                 width: int = TEXTAREA_WIDTH, height: int = TEXTAREA_HEIGHT,
                 prompt: str = ""):
        super().__init__(placeholder, char_limit, width, prompt)
        self.height = height

    def apply_key(self, event: KeyEvent) -> "TextArea":
        if self._focused and event.key == "ctrl+j":
            self.insert("\n")
            return self
        super().apply_key(event)
        return self

    def _clean(self, text: str) -> str:
        return text.replace("\r\n", "\n").replace("\r", "\n")

    def _rows(self, width: int) -> List[Tuple[int, str]]:
        """Wrapped display rows as (offset into value, text) pairs."""
        rows = []
        pos = 0
        for paragraph in self.buffer.document.lines:
            chunks = textwrap.wrap(
                paragraph, width,
                drop_whitespace=False, replace_whitespace=False, expand_tabs=False,
            ) or [""]
            for chunk in chunks:
                rows.append((pos, chunk))
                pos += len(chunk)
            pos += 1
        return rows

    def lines(self, width: Optional[int] = None) -> List[str]:
        """The value as it is displayed, one entry per row wrapped at ``width``."""
        return [line for _, line in self._rows(width or self.width)]

    def render(self, style: str = "", prompt_style: str = "") -> Text:
        if not self.value:
            return super().render(style, prompt_style)

        text = Text()
        rows = self._rows(self.width)
        cursor = self.cursor
        for i, (start, line) in enumerate(rows):
            end = start + len(line)
            paragraph_end = i + 1 == len(rows) or rows[i + 1][0] != end
            has_cursor = self._focused and (
                start <= cursor < end or (cursor == end and paragraph_end)
            )
            if self.prompt:
                text.append(self.prompt, prompt_style or style)
            self._render_line(text, line, cursor - start if has_cursor else -1, style)
            if i < len(rows) - 1:
                text.append("\n")
        return text
