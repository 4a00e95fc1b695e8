"""
Shared fixtures for libros tests.
"""

import pytest
import tempfile
import shutil
from pathlib import Path

from libros.library_db import Library
from libros.config import LibrosConfig
from libros.messages import KeyEvent
from libros.ui.commands import CommandContext
from libros.ui.router import Router
from libros.ui.tasks import TaskQueue


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the real ~/.config/libros."""
    config_path = tmp_path / "config" / "config.json"
    monkeypatch.setenv("LIBROS_CONFIG", str(config_path))
    return config_path


@pytest.fixture
def temp_library():
    """Create a temporary library for testing."""
    temp_dir = tempfile.mkdtemp()
    lib = Library.open(Path(temp_dir))

    yield lib

    # Cleanup
    lib.close()
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture
def populated_library(temp_library):
    """Library with three books, added oldest first."""
    for title, author, book_type in [
        ("Dune", "Frank Herbert", "digital"),
        ("Emma", "Jane Austen", "paperback"),
        ("Beloved", "Toni Morrison", "hardback"),
    ]:
        temp_library.save_book(title, author, book_type)
    return temp_library


class Harness:
    """Router plus task queue, driven the way the running app drives them."""

    def __init__(self, library: Library, exports_dir: Path):
        self.library = library
        self.saved_themes = []
        self.config = LibrosConfig()
        self.router = Router(library, self.config, exports_dir)
        self.queue = TaskQueue(CommandContext(library, save_theme=self.saved_themes.append))
        self.router.drain = lambda: self.queue.run_pending(self.router.update)

    def send(self, *messages):
        for message in messages:
            self.queue.submit(self.router.update(message))
            self.queue.run_pending(self.router.update)

    def press(self, *keys: str):
        self.send(*(KeyEvent(k) for k in keys))

    def type(self, text: str):
        self.send(*(KeyEvent.char(ch) for ch in text))


@pytest.fixture
def make_harness(tmp_path):
    """Build a Harness over a library, exporting to tmp_path/exports by default."""
    def factory(library: Library) -> Harness:
        return Harness(library, tmp_path / "exports")
    return factory


@pytest.fixture
def harness(temp_library, make_harness):
    """Router over an empty library."""
    return make_harness(temp_library)


@pytest.fixture
def populated_harness(populated_library, make_harness):
    """Router over a library holding three books."""
    return make_harness(populated_library)
