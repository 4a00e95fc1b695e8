"""
Export service for library data.

Provides a unified interface for writing the book collection to disk:
- JSON: Machine-readable data export
- Markdown: Human-readable document, one section per book
- Database backup: Byte-identical copy of the SQLite file
"""

import json
import shutil
from pathlib import Path
from typing import List
from datetime import datetime
import logging

from ..constants import BACKUP_SUFFIX, JSON_EXPORT_FILENAME, MARKDOWN_EXPORT_FILENAME
from ..db.models import Book
from ..errors import StorageError
from ..utils import format_book_type, format_date

logger = logging.getLogger(__name__)

EXPORT_FORMATS = {
    "json": JSON_EXPORT_FILENAME,
    "markdown": MARKDOWN_EXPORT_FILENAME,
}


class ExportService:
    """Service for exporting library data in various formats."""

    def export(self, books: List[Book], directory: Path, fmt: str) -> Path:
        """
        Export books into ``directory`` using the format's standard file name.

        Args:
            books: Books to export
            directory: Target directory (created if missing)
            fmt: "json" or "markdown"

        Returns:
            Path of the written file
        """
        if fmt not in EXPORT_FORMATS:
            raise ValueError(f"Unknown export format: {fmt}")

        output_path = Path(directory) / EXPORT_FORMATS[fmt]
        if fmt == "json":
            return self.export_json(books, output_path)
        return self.export_markdown(books, output_path)

    def export_json(self, books: List[Book], output_path: Path) -> Path:
        """
        Export books to a JSON document.

        The document holds ``export_date``, ``total_books`` and ``books``.
        """
        export_data = {
            "export_date": datetime.now().isoformat(),
            "total_books": len(books),
            "books": [book.to_dict() for book in books],
        }

        content = json.dumps(export_data, indent=2, ensure_ascii=False)
        return self._write(output_path, content)

    def export_markdown(self, books: List[Book], output_path: Path) -> Path:
        """Export books to Markdown, one section per book separated by rules."""
        lines = [
            "# Book Collection Export",
            "",
            f"**Export Date:** {format_date(datetime.now())}  ",
            f"**Total Books:** {len(books)}  ",
            "",
        ]

        for i, book in enumerate(books, 1):
            lines.append(f"## {i}. {book.title}")
            lines.append("")
            lines.append(f"**Author:** {book.author}  ")
            lines.append(f"**Type:** {format_book_type(book.book_type)}  ")
            lines.append(f"**Created:** {format_date(book.created_at)}  ")
            lines.append(f"**Updated:** {format_date(book.updated_at)}  ")
            if book.notes:
                lines.append("")
                lines.append("**Notes:**  ")
                lines.append(book.notes)
            lines.append("")
            lines.append("---")
            lines.append("")

        return self._write(output_path, "\n".join(lines))

    def backup_database(self, db_path: Path) -> Path:
        """
        Copy the database file to a sibling ``.bak`` file, overwriting it.

        Returns:
            Path of the backup

        Raises:
            StorageError: If the database is missing or the copy fails
        """
        db_path = Path(db_path)
        backup_path = db_path.with_name(db_path.name + BACKUP_SUFFIX)

        if not db_path.exists():
            raise StorageError(f"database not found: {db_path}")

        try:
            shutil.copyfile(db_path, backup_path)
        except OSError as e:
            raise StorageError(f"failed to write backup file: {e}") from e

        logger.info(f"Backed up {db_path} to {backup_path}")
        return backup_path

    def _write(self, output_path: Path, content: str) -> Path:
        output_path = Path(output_path)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"failed to write {output_path}: {e}") from e

        logger.info(f"Exported to {output_path}")
        return output_path
