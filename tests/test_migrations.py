"""
Tests for the additive schema migrations.
"""

import pytest
from sqlalchemy import create_engine, text

from libros.library_db import Library
from libros.db.migrations import check_migrations, column_exists, migrate_add_book_type


def make_legacy_db(db_path):
    """A books table from before the type column existed."""
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE books ("
            "id INTEGER PRIMARY KEY AUTOINCREMENT, "
            "title TEXT NOT NULL, "
            "author TEXT NOT NULL, "
            "notes TEXT, "
            "created_at DATETIME DEFAULT CURRENT_TIMESTAMP, "
            "updated_at DATETIME DEFAULT CURRENT_TIMESTAMP)"
        ))
        conn.execute(text(
            "INSERT INTO books (title, author, notes, created_at, updated_at) "
            "VALUES ('Old Book', 'Old Author', '', '2023-05-01 10:00:00', '2023-05-01 10:00:00')"
        ))
    return engine


class TestBookTypeMigration:
    """Test adding the type column to legacy tables."""

    def test_legacy_rows_default_to_paperback(self, tmp_path):
        make_legacy_db(tmp_path / "books.db").dispose()

        lib = Library.open(tmp_path)
        try:
            books = lib.load_books()
            assert len(books) == 1
            assert books[0].title == "Old Book"
            assert books[0].type == "paperback"
        finally:
            lib.close()

    def test_migration_runs_once(self, tmp_path):
        engine = make_legacy_db(tmp_path / "books.db")
        try:
            assert check_migrations(engine) == {"add_book_type": True}
            assert migrate_add_book_type(engine) is True
            assert column_exists(engine, "books", "type")

            # Every later open is a no-op, not an error
            assert migrate_add_book_type(engine) is False
            assert check_migrations(engine) == {"add_book_type": False}
        finally:
            engine.dispose()

    def test_reopen_after_migration(self, tmp_path):
        make_legacy_db(tmp_path / "books.db").dispose()

        for _ in range(3):
            lib = Library.open(tmp_path)
            assert lib.count_books() == 1
            lib.close()

    def test_new_library_needs_no_migration(self, temp_library):
        from libros.db.session import _engine
        assert check_migrations(_engine) == {"add_book_type": False}

    def test_dry_run_leaves_table_alone(self, tmp_path):
        engine = make_legacy_db(tmp_path / "books.db")
        try:
            assert migrate_add_book_type(engine, dry_run=True) is True
            assert not column_exists(engine, "books", "type")
        finally:
            engine.dispose()

    def test_missing_table(self, tmp_path):
        engine = create_engine(f"sqlite:///{tmp_path / 'empty.db'}")
        try:
            assert column_exists(engine, "books", "type") is False
        finally:
            engine.dispose()

    def test_legacy_library_accepts_new_books(self, tmp_path):
        make_legacy_db(tmp_path / "books.db").dispose()

        lib = Library.open(tmp_path)
        try:
            lib.save_book("Dune", "Frank Herbert", "digital")
            assert [b.type for b in lib.load_books()] == ["digital", "paperback"]
        finally:
            lib.close()
