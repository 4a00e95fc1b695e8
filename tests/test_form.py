"""
Tests for the form focus state machine.
"""

import pytest
from datetime import datetime

from libros.db.models import Book, BookType
from libros.messages import BookRequest, KeyEvent
from libros.ui.form import BookForm, Form, FormAction, Selector, Slot, SlotKind
from libros.ui.widgets import TextArea, TextInput

TITLE, AUTHOR, TYPE, NOTES, SUBMIT = range(5)


def press(form, *keys):
    return [form.handle_key(KeyEvent(k)) for k in keys]


def type_into(form, text):
    for ch in text:
        form.handle_key(KeyEvent.char(ch))


def text_form(n_text: int) -> Form:
    """A form with ``n_text`` text fields and a submit slot."""
    slots = [Slot.text(f"f{i}", TextInput()) for i in range(n_text)]
    return Form(slots + [Slot.submit("OK")])


@pytest.fixture
def add_form():
    return BookForm("SAVE BOOK", tab_cycles_selector=True)


@pytest.fixture
def edit_form():
    return BookForm("UPDATE BOOK", tab_cycles_selector=False)


class TestFocusNavigation:
    """Test focus movement and wraparound."""

    def test_book_form_has_five_slots(self, add_form):
        assert add_form.slot_count == 5
        assert [s.kind for s in add_form.slots] == [
            SlotKind.TEXT, SlotKind.TEXT, SlotKind.SELECTOR, SlotKind.TEXTAREA, SlotKind.SUBMIT,
        ]
        assert add_form.focus_index == TITLE

    def test_backward_from_first_wraps_to_last(self, edit_form):
        press(edit_form, "shift+tab")
        assert edit_form.focus_index == SUBMIT

    def test_up_from_first_wraps_to_last(self, edit_form):
        press(edit_form, "up")
        assert edit_form.focus_index == SUBMIT

    def test_forward_from_last_wraps_to_first(self, edit_form):
        edit_form.focus(SUBMIT)
        press(edit_form, "tab")
        assert edit_form.focus_index == TITLE

    @pytest.mark.parametrize("key", ["tab", "down", "enter"])
    def test_forward_keys(self, edit_form, key):
        press(edit_form, key)
        assert edit_form.focus_index == AUTHOR

    @pytest.mark.parametrize("n_text", [0, 1, 2, 3, 6])
    @pytest.mark.parametrize("start", [0, 1])
    def test_n_forward_steps_return_to_start(self, n_text, start):
        form = text_form(n_text)
        form.focus(start)
        start = form.focus_index
        for _ in range(form.slot_count):
            form.focus_next()
        assert form.focus_index == start

    def test_n_forward_keys_return_to_start_on_book_form(self, edit_form):
        for start in range(edit_form.slot_count):
            edit_form.focus(start)
            press(edit_form, *["down"] * edit_form.slot_count)
            assert edit_form.focus_index == start

    def test_only_focused_text_slot_is_focused(self, edit_form):
        title = edit_form.slot("title").widget
        author = edit_form.slot("author").widget
        notes = edit_form.slot("notes").widget
        assert title.focused and not author.focused and not notes.focused

        press(edit_form, "tab")
        assert author.focused and not title.focused

        press(edit_form, "tab")  # selector: no text widget focused
        assert not any(w.focused for w in (title, author, notes))

        press(edit_form, "tab")
        assert notes.focused

    def test_focus_moves_cursor_to_end(self, edit_form):
        author = edit_form.slot("author").widget
        author.set_value("Frank")
        author.cursor = 0
        edit_form.focus(AUTHOR)
        assert author.cursor == 5


class TestSelectorCycling:
    """Test the type selector slot."""

    def test_right_and_left_do_not_move_focus(self, edit_form):
        edit_form.focus(TYPE)
        selector = edit_form.slot("type").widget

        press(edit_form, "right")
        assert selector.value is BookType.HARDBACK
        assert edit_form.focus_index == TYPE

        press(edit_form, "left", "left")
        assert selector.value is BookType.DIGITAL
        assert edit_form.focus_index == TYPE

    def test_hundred_right_cycles_return_to_start(self, edit_form):
        edit_form.focus(TYPE)
        selector = edit_form.slot("type").widget
        selector.index = 2

        press(edit_form, *["right"] * 100)
        assert selector.index == 2
        assert edit_form.focus_index == TYPE

    def test_hundred_right_cycles_with_three_choices(self):
        selector = Selector(["a", "b", "c"])
        form = Form([Slot.selector("s", selector), Slot.submit("OK")])
        press(form, *["right"] * 100)
        assert selector.index == (0 + 100) % 3
        assert form.focus_index == 0

    def test_tab_cycles_selector_on_add_form(self, add_form):
        add_form.focus(TYPE)
        press(add_form, "tab")
        assert add_form.slot("type").widget.value is BookType.HARDBACK
        assert add_form.focus_index == TYPE

        press(add_form, "shift+tab")
        assert add_form.slot("type").widget.value is BookType.PAPERBACK
        assert add_form.focus_index == TYPE

        # down/up still leave the selector
        press(add_form, "down")
        assert add_form.focus_index == NOTES

    def test_tab_moves_focus_on_edit_form(self, edit_form):
        edit_form.focus(TYPE)
        press(edit_form, "tab")
        assert edit_form.focus_index == NOTES
        assert edit_form.slot("type").widget.value is BookType.PAPERBACK

    def test_left_right_elsewhere_go_to_text(self, edit_form):
        type_into(edit_form, "ab")
        press(edit_form, "left")
        type_into(edit_form, "X")
        assert edit_form.values()["title"] == "aXb"
        assert edit_form.slot("type").widget.index == 0


class TestSubmitAndCancel:
    """Test enter on submit, esc, and cursor shortcuts."""

    def test_enter_on_submit(self, edit_form):
        edit_form.focus(SUBMIT)
        assert press(edit_form, "enter") == [FormAction.SUBMIT]
        assert edit_form.focus_index == SUBMIT

    def test_enter_elsewhere_moves_forward(self, edit_form):
        assert press(edit_form, "enter") == [FormAction.NONE]
        assert edit_form.focus_index == AUTHOR

    def test_esc_cancels_and_clears_status(self, edit_form):
        edit_form.error = ValueError("boom")
        edit_form.succeeded = False
        edit_form.focus(NOTES)

        assert press(edit_form, "esc") == [FormAction.CANCEL]
        assert edit_form.error is None
        assert edit_form.succeeded is None

    def test_cursor_shortcuts_keep_focus(self, edit_form):
        type_into(edit_form, "Dune")
        title = edit_form.slot("title").widget

        press(edit_form, "ctrl+a")
        assert title.cursor == 0
        assert edit_form.focus_index == TITLE

        press(edit_form, "ctrl+e")
        assert title.cursor == 4
        assert edit_form.focus_index == TITLE

    def test_cursor_shortcuts_on_selector_do_nothing(self, edit_form):
        edit_form.focus(TYPE)
        assert press(edit_form, "ctrl+a", "ctrl+e") == [FormAction.NONE, FormAction.NONE]
        assert edit_form.focus_index == TYPE


class TestFieldEditing:
    """Test keys forwarded to the focused field."""

    def test_typing_goes_to_focused_field_only(self, edit_form):
        type_into(edit_form, "Dune")
        press(edit_form, "tab")
        type_into(edit_form, "Frank Herbert")

        values = edit_form.values()
        assert values["title"] == "Dune"
        assert values["author"] == "Frank Herbert"

    def test_vim_letters_are_text(self, edit_form):
        type_into(edit_form, "jk")
        assert edit_form.values()["title"] == "jk"
        assert edit_form.focus_index == TITLE

    def test_typing_on_selector_is_ignored(self, edit_form):
        edit_form.focus(TYPE)
        type_into(edit_form, "abc")
        assert edit_form.values()["title"] == ""
        assert edit_form.values()["notes"] == ""

    def test_title_limit_boundary(self, edit_form):
        edit_form.slot("title").widget.set_value("t" * 255)
        edit_form.focus(TITLE)
        type_into(edit_form, "x")
        assert edit_form.values()["title"] == "t" * 255

    def test_notes_take_newlines(self, edit_form):
        edit_form.focus(NOTES)
        type_into(edit_form, "one")
        press(edit_form, "ctrl+j")
        type_into(edit_form, "two")
        assert edit_form.values()["notes"] == "one\ntwo"
        assert edit_form.focus_index == NOTES


class TestBookForm:
    """Test snapshot, load and reset."""

    def test_snapshot(self, add_form):
        type_into(add_form, "Dune")
        press(add_form, "down")
        type_into(add_form, "Frank Herbert")
        press(add_form, "down", "tab", "tab", "tab", "down")
        type_into(add_form, "spice")

        request = add_form.snapshot()
        assert request == BookRequest("Dune", "Frank Herbert", BookType.DIGITAL, "spice")

    def test_snapshot_is_independent_of_later_edits(self, add_form):
        type_into(add_form, "Dune")
        request = add_form.snapshot()
        type_into(add_form, "!")
        assert request.title == "Dune"

    def test_load(self, edit_form):
        book = Book(id=1, title="Emma", author="Jane Austen", type="hardback",
                    notes="reread", created_at=datetime.now(), updated_at=datetime.now())
        edit_form.focus(NOTES)
        edit_form.error = ValueError("stale")

        edit_form.load(book)

        assert edit_form.values() == {
            "title": "Emma", "author": "Jane Austen",
            "type": BookType.HARDBACK, "notes": "reread",
        }
        assert edit_form.focus_index == TITLE
        assert edit_form.error is None
        assert edit_form.slot("title").widget.cursor == 4

    def test_reset(self, add_form):
        type_into(add_form, "Dune")
        add_form.focus(TYPE)
        press(add_form, "right")
        add_form.focus(SUBMIT)

        add_form.reset()

        assert add_form.values() == {
            "title": "", "author": "", "type": BookType.PAPERBACK, "notes": "",
        }
        assert add_form.focus_index == TITLE
        assert add_form.slot("title").widget.focused

    def test_form_must_end_with_submit(self):
        with pytest.raises(ValueError):
            Form([Slot.text("a", TextInput())])

    def test_textarea_slot(self):
        form = Form([Slot.textarea("notes", TextArea()), Slot.submit("OK")])
        type_into(form, "x")
        assert form.values() == {"notes": "x"}
