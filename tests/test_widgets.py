"""
Tests for the text input widgets.
"""

import pytest
from rich.text import Text

from libros.messages import KeyEvent
from libros.ui.widgets import TextArea, TextInput


def focused_input(value="", **kwargs) -> TextInput:
    widget = TextInput(**kwargs)
    widget.focus()
    widget.set_value(value)
    return widget


def type_into(widget, text):
    for ch in text:
        widget.apply_key(KeyEvent.char(ch))


class TestTextInput:
    """Test single-line editing."""

    def test_typing_appends(self):
        widget = focused_input()
        type_into(widget, "Dune")
        assert widget.value == "Dune"
        assert widget.cursor == 4

    def test_blurred_widget_ignores_keys(self):
        widget = TextInput()
        assert widget.focused is False
        type_into(widget, "abc")
        widget.apply_key(KeyEvent("backspace"))
        assert widget.value == ""

    def test_focus_is_explicit(self):
        widget = TextInput()
        widget.focus()
        assert widget.focused
        widget.blur()
        assert not widget.focused

    def test_char_limit_boundary(self):
        """A character typed at the limit is dropped without error."""
        widget = focused_input("abc", char_limit=3)
        widget.apply_key(KeyEvent.char("d"))
        assert widget.value == "abc"

    def test_char_limit_with_full_title(self):
        widget = focused_input("t" * 255, char_limit=255)
        widget.apply_key(KeyEvent.char("x"))
        assert widget.value == "t" * 255

    def test_paste_truncated_to_limit(self):
        widget = focused_input("ab", char_limit=5)
        widget.apply_key(KeyEvent.paste("cdefgh"))
        assert widget.value == "abcde"

    def test_set_value_truncates_and_moves_cursor(self):
        widget = TextInput(char_limit=4)
        widget.set_value("abcdef")
        assert widget.value == "abcd"
        assert widget.cursor == 4

    def test_set_value_flattens_newlines(self):
        widget = TextInput()
        widget.set_value("a\nb\r\nc")
        assert widget.value == "a b c"

    def test_cursor_movement(self):
        widget = focused_input("hello")
        widget.apply_key(KeyEvent("left"))
        widget.apply_key(KeyEvent("left"))
        assert widget.cursor == 3
        type_into(widget, "X")
        assert widget.value == "helXlo"

        widget.apply_key(KeyEvent("home"))
        assert widget.cursor == 0
        widget.apply_key(KeyEvent("left"))
        assert widget.cursor == 0

        widget.apply_key(KeyEvent("end"))
        widget.apply_key(KeyEvent("right"))
        assert widget.cursor == len(widget.value)

    def test_cursor_start_and_end(self):
        widget = focused_input("hello")
        widget.cursor_start()
        assert widget.cursor == 0
        widget.cursor_end()
        assert widget.cursor == 5

    def test_backspace_and_delete(self):
        widget = focused_input("hello")
        widget.apply_key(KeyEvent("backspace"))
        assert widget.value == "hell"

        widget.apply_key(KeyEvent("home"))
        widget.apply_key(KeyEvent("backspace"))
        assert widget.value == "hell"
        widget.apply_key(KeyEvent("delete"))
        assert widget.value == "ell"
        assert widget.cursor == 0

    def test_ctrl_h_is_backspace(self):
        widget = focused_input("ab")
        widget.apply_key(KeyEvent("ctrl+h"))
        assert widget.value == "a"

    def test_kill_keys(self):
        widget = focused_input("hello world")
        for _ in range(5):
            widget.apply_key(KeyEvent("left"))
        widget.apply_key(KeyEvent("ctrl+k"))
        assert widget.value == "hello "

        widget = focused_input("hello world")
        for _ in range(5):
            widget.apply_key(KeyEvent("left"))
        widget.apply_key(KeyEvent("ctrl+u"))
        assert widget.value == "world"
        assert widget.cursor == 0

    def test_delete_word(self):
        widget = focused_input("hello big world")
        widget.apply_key(KeyEvent("ctrl+w"))
        assert widget.value == "hello big "
        widget.apply_key(KeyEvent("ctrl+w"))
        assert widget.value == "hello "

    def test_apply_key_returns_widget(self):
        widget = focused_input()
        assert widget.apply_key(KeyEvent.char("a")) is widget

    def test_render_placeholder_and_value(self):
        widget = TextInput(placeholder="Title")
        assert widget.render().plain == "Title"

        widget.focus()
        widget.set_value("Dune")
        rendered = widget.render()
        assert isinstance(rendered, Text)
        # Cursor cell after the value
        assert rendered.plain == "Dune "


class TestTextArea:
    """Test multi-line editing."""

    def test_ctrl_j_inserts_newline(self):
        widget = TextArea()
        widget.focus()
        type_into(widget, "line one")
        widget.apply_key(KeyEvent("ctrl+j"))
        type_into(widget, "line two")
        assert widget.value == "line one\nline two"

    def test_keeps_newlines_from_set_value(self):
        widget = TextArea()
        widget.set_value("a\r\nb")
        assert widget.value == "a\nb"

    def test_char_limit_applies(self):
        widget = TextArea(char_limit=3)
        widget.focus()
        type_into(widget, "abcd")
        widget.apply_key(KeyEvent("ctrl+j"))
        assert widget.value == "abc"

    def test_wraps_at_width(self):
        widget = TextArea(width=10)
        widget.set_value("the quick brown fox jumps")
        lines = widget.lines()
        assert all(len(line) <= 10 for line in lines)
        assert "".join(lines) == "the quick brown fox jumps"

    def test_lines_split_on_newlines(self):
        widget = TextArea(width=40)
        widget.set_value("first\n\nthird")
        assert widget.lines() == ["first", "", "third"]

    def test_blurred_textarea_ignores_newline(self):
        widget = TextArea()
        widget.apply_key(KeyEvent("ctrl+j"))
        assert widget.value == ""

    @pytest.mark.parametrize("cursor", [0, 3, 9])
    def test_render_contains_value(self, cursor):
        widget = TextArea(width=20)
        widget.focus()
        widget.set_value("some\nnotes")
        widget.cursor = cursor
        plain = widget.render().plain
        assert "some" in plain
        assert "notes" in plain

    def test_lines_at_other_width(self):
        widget = TextArea(width=40)
        widget.set_value("the quick brown fox jumps")
        assert widget.lines() == ["the quick brown fox jumps"]
        narrow = widget.lines(10)
        assert all(len(line) <= 10 for line in narrow)
        assert "".join(narrow) == "the quick brown fox jumps"

    def test_kill_keys_stay_on_current_line(self):
        widget = TextArea()
        widget.focus()
        widget.set_value("first line\nsecond line")
        widget.apply_key(KeyEvent("ctrl+u"))
        assert widget.value == "first line\n"

        widget.apply_key(KeyEvent("ctrl+u"))
        assert widget.value == "first line"

        widget.apply_key(KeyEvent("home"))
        widget.apply_key(KeyEvent("ctrl+k"))
        assert widget.value == ""

    def test_home_and_end_use_current_line(self):
        widget = TextArea()
        widget.focus()
        widget.set_value("ab\ncd")
        widget.apply_key(KeyEvent("home"))
        assert widget.cursor == 3
        widget.apply_key(KeyEvent("left"))
        assert widget.cursor == 2
        widget.apply_key(KeyEvent("home"))
        assert widget.cursor == 0
        widget.apply_key(KeyEvent("end"))
        assert widget.cursor == 2

    def test_value_lives_in_buffer(self):
        widget = TextArea()
        widget.focus()
        type_into(widget, "abc")
        assert widget.buffer.text == "abc"
        assert widget.buffer.cursor_position == 3
