"""
Focus state machine shared by the data-entry screens.

A form is an ordered list of slots: text fields, a cyclic selector, a
multi-line field and, last, a submit action. Exactly one slot has focus.
Keys move focus with modulo wraparound (never clamping), cycle the selector
without moving focus, submit, cancel, or are forwarded to the focused field.

Focus order for a book form:

    0 Title -> 1 Author -> 2 Type -> 3 Notes -> 4 Submit -> 0 ...
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ..constants import (
    AUTHOR_MAX_LENGTH, INPUT_FIELD_WIDTH, NOTES_MAX_LENGTH, TEXTAREA_HEIGHT,
    TEXTAREA_WIDTH, TITLE_MAX_LENGTH,
)
from ..db.models import Book, BookType
from ..messages import BookRequest, KeyEvent
from .widgets import TextArea, TextInput

FORWARD_KEYS = ("tab", "down", "enter")
BACKWARD_KEYS = ("shift+tab", "up")


class SlotKind(Enum):
    TEXT = "text"
    SELECTOR = "selector"
    TEXTAREA = "textarea"
    SUBMIT = "submit"


class FormAction(Enum):
    """What a keystroke asks of the screen that owns the form."""
    NONE = "none"
    SUBMIT = "submit"
    CANCEL = "cancel"


class Selector:
    """A fixed set of mutually exclusive choices, advanced modulo its size."""

    def __init__(self, choices: Sequence[Any], index: int = 0):
        if not choices:
            raise ValueError("Selector needs at least one choice")
        self.choices = list(choices)
        self.index = index % len(self.choices)

    @property
    def value(self) -> Any:
        return self.choices[self.index]

    def next(self) -> None:
        self.index = (self.index + 1) % len(self.choices)

    def prev(self) -> None:
        self.index = (self.index - 1) % len(self.choices)

    def select(self, value: Any) -> None:
        """Select ``value`` if it is one of the choices; otherwise keep the current one."""
        if value in self.choices:
            self.index = self.choices.index(value)


class Slot:
    """One focus stop in a form."""

    def __init__(self, name: str, kind: SlotKind, widget=None, label: str = ""):
        self.name = name
        self.kind = kind
        self.widget = widget
        self.label = label

    @property
    def is_text(self) -> bool:
        return self.kind in (SlotKind.TEXT, SlotKind.TEXTAREA)

    @classmethod
    def text(cls, name: str, widget: TextInput, label: str = "") -> "Slot":
        return cls(name, SlotKind.TEXT, widget, label)

    @classmethod
    def textarea(cls, name: str, widget: TextArea, label: str = "") -> "Slot":
        return cls(name, SlotKind.TEXTAREA, widget, label)

    @classmethod
    def selector(cls, name: str, widget: Selector, label: str = "") -> "Slot":
        return cls(name, SlotKind.SELECTOR, widget, label)

    @classmethod
    def submit(cls, label: str) -> "Slot":
        return cls("submit", SlotKind.SUBMIT, None, label)


class Form:
    """
    Keyboard focus state for an ordered list of slots.

    Args:
        slots: Focus stops in order; the last one must be the submit action
        tab_cycles_selector: If True, tab/shift+tab on the selector cycle its
            choice instead of moving focus
    """

    def __init__(self, slots: List[Slot], tab_cycles_selector: bool = False):
        if not slots or slots[-1].kind is not SlotKind.SUBMIT:
            raise ValueError("A form must end with a submit slot")
        self.slots = slots
        self.tab_cycles_selector = tab_cycles_selector
        self.focus_index = 0
        self.error: Optional[Exception] = None
        self.succeeded: Optional[bool] = None
        self.focus(0)

    @property
    def slot_count(self) -> int:
        return len(self.slots)

    @property
    def focused_slot(self) -> Slot:
        return self.slots[self.focus_index]

    def slot(self, name: str) -> Slot:
        for slot in self.slots:
            if slot.name == name:
                return slot
        raise KeyError(name)

    def focus(self, index: int) -> None:
        """Focus slot ``index`` and blur every other text slot."""
        self.focus_index = index % self.slot_count
        for i, slot in enumerate(self.slots):
            if not slot.is_text:
                continue
            if i == self.focus_index:
                slot.widget.focus()
                slot.widget.cursor_end()
            else:
                slot.widget.blur()

    def focus_next(self) -> None:
        self.focus((self.focus_index + 1) % self.slot_count)

    def focus_prev(self) -> None:
        self.focus((self.focus_index - 1 + self.slot_count) % self.slot_count)

    def clear_status(self) -> None:
        self.error = None
        self.succeeded = None

    def values(self) -> Dict[str, Any]:
        """Current value of every non-submit slot, by name."""
        return {
            slot.name: slot.widget.value
            for slot in self.slots
            if slot.kind is not SlotKind.SUBMIT
        }

    def reset(self) -> None:
        """Blank every text slot, rewind the selectors and focus slot 0."""
        for slot in self.slots:
            if slot.is_text:
                slot.widget.set_value("")
            elif slot.kind is SlotKind.SELECTOR:
                slot.widget.index = 0
        self.clear_status()
        self.focus(0)

    def handle_key(self, event: KeyEvent) -> FormAction:
        key = event.key
        slot = self.focused_slot

        if key == "esc":
            self.clear_status()
            return FormAction.CANCEL

        if key in ("ctrl+a", "ctrl+e"):
            if slot.is_text:
                if key == "ctrl+a":
                    slot.widget.cursor_start()
                else:
                    slot.widget.cursor_end()
            return FormAction.NONE

        if key == "enter" and slot.kind is SlotKind.SUBMIT:
            return FormAction.SUBMIT

        if slot.kind is SlotKind.SELECTOR:
            if key == "right" or (self.tab_cycles_selector and key == "tab"):
                slot.widget.next()
                return FormAction.NONE
            if key == "left" or (self.tab_cycles_selector and key == "shift+tab"):
                slot.widget.prev()
                return FormAction.NONE

        if key in FORWARD_KEYS:
            self.focus_next()
            return FormAction.NONE
        if key in BACKWARD_KEYS:
            self.focus_prev()
            return FormAction.NONE

        if slot.is_text:
            slot.widget.apply_key(event)
        return FormAction.NONE


class BookForm(Form):
    """Title, author, type, notes and a submit button."""

    def __init__(self, submit_label: str, tab_cycles_selector: bool = False,
                 input_width: int = INPUT_FIELD_WIDTH, textarea_width: int = TEXTAREA_WIDTH):
        slots = [
            Slot.text("title", TextInput(
                placeholder="_______________", char_limit=TITLE_MAX_LENGTH,
                width=input_width), label="Title:"),
            Slot.text("author", TextInput(
                placeholder="_______________", char_limit=AUTHOR_MAX_LENGTH,
                width=input_width), label="Author:"),
            Slot.selector("type", Selector(BookType.choices()), label="Type:"),
            Slot.textarea("notes", TextArea(
                placeholder="Notes about this book (optional)...",
                char_limit=NOTES_MAX_LENGTH, width=textarea_width,
                height=TEXTAREA_HEIGHT), label="Notes:"),
            Slot.submit(submit_label),
        ]
        super().__init__(slots, tab_cycles_selector=tab_cycles_selector)

    def snapshot(self) -> BookRequest:
        """Immutable copy of the current field values."""
        values = self.values()
        return BookRequest(
            title=values["title"],
            author=values["author"],
            book_type=values["type"],
            notes=values["notes"],
        )

    def load(self, book: Book) -> None:
        """Populate the fields from ``book`` and focus the title."""
        self.slot("title").widget.set_value(book.title)
        self.slot("author").widget.set_value(book.author)
        self.slot("notes").widget.set_value(book.notes or "")
        self.slot("type").widget.select(book.book_type)
        self.clear_status()
        self.focus(0)
