"""
Input validation for book records and export paths.

This is the single place where field length limits are enforced; the
input widgets carry the same limits only as a typing aid.
"""

import os
import tempfile
from pathlib import Path
from typing import Tuple

from .constants import AUTHOR_MAX_LENGTH, NOTES_MAX_LENGTH, TITLE_MAX_LENGTH
from .errors import StorageError, ValidationError


def _required(value: str, field: str, max_length: int) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(field, f"{field} is required")
    if len(value) > max_length:
        raise ValidationError(field, f"{field} exceeds maximum length of {max_length}")
    return value


def validate_title(title: str) -> str:
    """Return the trimmed title or raise ValidationError."""
    return _required(title, "title", TITLE_MAX_LENGTH)


def validate_author(author: str) -> str:
    """Return the trimmed author or raise ValidationError."""
    return _required(author, "author", AUTHOR_MAX_LENGTH)


def validate_notes(notes: str) -> str:
    """Notes are optional; only the length is checked."""
    notes = (notes or "").strip()
    if len(notes) > NOTES_MAX_LENGTH:
        raise ValidationError("notes", f"notes exceed maximum length of {NOTES_MAX_LENGTH}")
    return notes


def validate_book(title: str, author: str, notes: str = "") -> Tuple[str, str, str]:
    """
    Validate and trim the editable fields of a book.

    Args:
        title: Raw title input
        author: Raw author input
        notes: Raw notes input

    Returns:
        Tuple of (title, author, notes), trimmed

    Raises:
        ValidationError: If title or author is blank, or any field is too long
    """
    return validate_title(title), validate_author(author), validate_notes(notes)


def validate_export_path(raw: str, default_dir: Path) -> Path:
    """
    Resolve the directory an export should be written to.

    An empty input selects ``default_dir`` (created later, at export time).
    Anything else must be absolute (``/...``) or home-relative (``~...``)
    and name an existing, writable directory.

    Args:
        raw: Path as typed by the user
        default_dir: Directory used when nothing was typed

    Returns:
        Absolute directory path

    Raises:
        ValidationError: If the path is not absolute
        StorageError: If the directory is missing or not writable
    """
    raw = (raw or "").strip()
    if not raw:
        return Path(default_dir)

    if not (raw.startswith("/") or raw.startswith("~")):
        raise ValidationError("path", "please enter an absolute path (starting with / or ~)")

    path = Path(os.path.expanduser(raw))
    if not path.is_dir():
        raise StorageError(f"directory does not exist: {path}")

    try:
        with tempfile.NamedTemporaryFile(dir=path, prefix=".libros_test"):
            pass
    except OSError as e:
        raise StorageError(f"directory is not writable: {path} ({e})") from e

    return path
