"""Limits, file names and layout defaults."""

from pathlib import Path

# Field limits (characters, after trimming)
TITLE_MAX_LENGTH = 255
AUTHOR_MAX_LENGTH = 255
NOTES_MAX_LENGTH = 1000

# Input widget sizing
INPUT_FIELD_WIDTH = 50
TEXTAREA_WIDTH = 60
TEXTAREA_HEIGHT = 4

# List view
BOOKS_PER_PAGE = 3
NOTE_TRUNCATE_LENGTH = 60
TEXT_WRAP_WIDTH = 60

# Files
DATABASE_FILENAME = "books.db"
BACKUP_SUFFIX = ".bak"
EXPORTS_DIRNAME = "exports"
LOG_FILENAME = "libros.log"
JSON_EXPORT_FILENAME = "books.json"
MARKDOWN_EXPORT_FILENAME = "books.md"

DEFAULT_LIBRARY_PATH = Path.home() / ".libros"
