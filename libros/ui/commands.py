"""
Deferred units of work issued by screens.

A command is a frozen request: it holds a snapshot of everything it needs,
runs against a CommandContext, and always produces a result message. Errors
raised by the store or the filesystem are carried inside the message rather
than propagated, so every outcome re-enters the UI the same way.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional
import logging

from ..config import Theme, update_theme
from ..errors import LibrosError
from ..library_db import Library
from ..messages import (
    BackupResult, BookRequest, DeleteResult, ExportResult, LoadResult,
    Message, SaveResult, ThemeSaved, UpdateResult,
)
from ..services.export_service import ExportService

logger = logging.getLogger(__name__)


def _persist_theme(theme: Theme) -> None:
    update_theme(theme.name)


@dataclass
class CommandContext:
    """Collaborators a command may use."""
    library: Library
    export_service: ExportService = field(default_factory=ExportService)
    save_theme: Callable[[Theme], None] = _persist_theme


class Command:
    """Base class for commands."""

    def run(self, context: CommandContext) -> Optional[Message]:
        raise NotImplementedError


@dataclass(frozen=True)
class SaveBook(Command):
    request: BookRequest

    def run(self, context: CommandContext) -> SaveResult:
        r = self.request
        try:
            context.library.save_book(r.title, r.author, r.book_type, r.notes)
        except LibrosError as e:
            return SaveResult(r, e)
        return SaveResult(r)


@dataclass(frozen=True)
class UpdateBook(Command):
    book_id: int
    request: BookRequest

    def run(self, context: CommandContext) -> UpdateResult:
        r = self.request
        try:
            context.library.update_book(self.book_id, r.title, r.author, r.book_type, r.notes)
        except LibrosError as e:
            return UpdateResult(self.book_id, r, e)
        return UpdateResult(self.book_id, r)


@dataclass(frozen=True)
class DeleteBook(Command):
    book_id: int

    def run(self, context: CommandContext) -> DeleteResult:
        try:
            context.library.delete_book(self.book_id)
        except LibrosError as e:
            return DeleteResult(self.book_id, e)
        return DeleteResult(self.book_id)


@dataclass(frozen=True)
class LoadBooks(Command):

    def run(self, context: CommandContext) -> LoadResult:
        try:
            return LoadResult(context.library.load_books())
        except LibrosError as e:
            return LoadResult(error=e)


@dataclass(frozen=True)
class ExportBooks(Command):
    directory: Path
    fmt: str

    def run(self, context: CommandContext) -> ExportResult:
        try:
            books = context.library.load_books()
            path = context.export_service.export(books, self.directory, self.fmt)
        except LibrosError as e:
            return ExportResult(error=e)
        return ExportResult(path)


@dataclass(frozen=True)
class BackupDatabase(Command):

    def run(self, context: CommandContext) -> BackupResult:
        try:
            path = context.export_service.backup_database(context.library.db_path)
        except LibrosError as e:
            return BackupResult(error=e)
        return BackupResult(path)


@dataclass(frozen=True)
class SaveTheme(Command):
    theme: Theme

    def run(self, context: CommandContext) -> ThemeSaved:
        try:
            context.save_theme(self.theme)
        except OSError as e:
            logger.warning(f"Could not save theme {self.theme.name}: {e}")
            return ThemeSaved(self.theme, e)
        return ThemeSaved(self.theme)


@dataclass(frozen=True)
class Quit(Command):
    """Handled by the router itself; never reaches the task queue."""

    def run(self, context: CommandContext) -> None:
        return None
