"""Text formatting helpers shared by the UI, exports and CLI."""

import textwrap
from datetime import datetime

from .db.models import BookType


def format_date(dt: datetime) -> str:
    """
    Human-readable date with an ordinal day.

    Examples: "January 1st, 2024", "March 23rd, 2024", "April 11th, 2024"
    """
    day = dt.day
    if 11 <= day <= 13:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")
    return f"{dt.strftime('%B')} {day}{suffix}, {dt.year}"


def format_book_type(value) -> str:
    """Capitalised display name for a book type or raw type string."""
    if isinstance(value, BookType):
        return value.label
    value = str(value or "")
    if not value:
        return value
    return value[0].upper() + value[1:].lower()


def truncate_notes(notes: str, max_length: int) -> str:
    """
    Shorten notes for the list view.

    Cuts at the last space when it falls within the final 20 characters
    of the limit, and marks the cut with " . . .".
    """
    if len(notes) <= max_length:
        return notes
    truncated = notes[:max_length]
    last_space = truncated.rfind(" ")
    if last_space > max_length - 20:
        truncated = notes[:last_space]
    return truncated + " . . ."


def wrap_text(text: str, width: int) -> str:
    """Greedy word wrap; words longer than ``width`` stay on their own line."""
    if len(text) <= width or not text.strip():
        return text
    return textwrap.fill(text, width, break_long_words=False, break_on_hyphens=False)
