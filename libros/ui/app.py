"""
Full-screen terminal application.

prompt_toolkit owns the terminal and the asyncio event loop; rich builds
each frame. A frame is the router's renderable printed to an in-memory
rich Console and handed to prompt_toolkit as ANSI text.

Commands never block a keystroke: each one is queued and drained by a
background task on the same loop, one command per iteration, so results
re-enter the router exactly like key presses do.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from prompt_toolkit.application import Application
from prompt_toolkit.formatted_text import ANSI
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from rich.console import Console

from ..config import LibrosConfig
from ..constants import EXPORTS_DIRNAME, LOG_FILENAME
from ..library_db import Library
from ..messages import KeyEvent, Message
from .commands import Command, CommandContext
from .router import Router
from .tasks import TaskQueue

logger = logging.getLogger(__name__)

DEFAULT_WIDTH = 100

# prompt_toolkit key -> KeyEvent.key
KEY_NAMES = {
    Keys.Escape: "esc",
    Keys.Enter: "enter",
    Keys.Tab: "tab",
    Keys.BackTab: "shift+tab",
    Keys.Up: "up",
    Keys.Down: "down",
    Keys.Left: "left",
    Keys.Right: "right",
    Keys.Home: "home",
    Keys.End: "end",
    Keys.Delete: "delete",
    Keys.Backspace: "backspace",
    Keys.ControlA: "ctrl+a",
    Keys.ControlE: "ctrl+e",
    Keys.ControlU: "ctrl+u",
    Keys.ControlK: "ctrl+k",
    Keys.ControlW: "ctrl+w",
    Keys.ControlJ: "ctrl+j",
    Keys.ControlC: "ctrl+c",
}


class LibrosApp:
    """
    Wires a Router and a TaskQueue to a prompt_toolkit Application.

    Args:
        router: Screen router receiving every message
        queue: Queue the router's commands are run from
    """

    def __init__(self, router: Router, queue: TaskQueue):
        self.router = router
        self.queue = queue
        router.drain = lambda: queue.run_pending(router.update)
        self._draining = False
        self._exited = False

        self.control = FormattedTextControl(self._frame, focusable=True, show_cursor=False)
        self.application = Application(
            layout=Layout(Window(self.control, wrap_lines=False)),
            key_bindings=self._key_bindings(),
            full_screen=True,
            mouse_support=False,
        )

    def _key_bindings(self) -> KeyBindings:
        kb = KeyBindings()

        def bind(key, name):
            @kb.add(key, eager=(key == Keys.Escape))
            def _(event):
                self.dispatch(KeyEvent(name))

        for key, name in KEY_NAMES.items():
            bind(key, name)

        @kb.add(Keys.Any)
        def _(event):
            data = event.data
            if len(data) == 1 and data.isprintable():
                self.dispatch(KeyEvent.char(data))

        @kb.add(Keys.BracketedPaste)
        def _(event):
            self.dispatch(KeyEvent.paste(event.data))

        return kb

    def _width(self) -> int:
        return self.application.output.get_size().columns or DEFAULT_WIDTH

    def _frame(self) -> ANSI:
        console = Console(
            width=self._width(),
            force_terminal=True,
            color_system="truecolor",
            highlight=False,
        )
        with console.capture() as capture:
            console.print(self.router.render())
        return ANSI(capture.get())

    def dispatch(self, message: Message) -> None:
        """Feed one message to the router and schedule whatever it asks for."""
        self._schedule(self.router.update(message))
        self._refresh()

    def _schedule(self, command: Optional[Command]) -> None:
        if command is None:
            return
        self.queue.submit(command)
        if not self._draining:
            self._draining = True
            self.application.create_background_task(self._drain())

    async def _drain(self) -> None:
        try:
            while len(self.queue) and not self.router.done:
                # Yield so pending input and redraws are handled between commands
                await asyncio.sleep(0)
                message = self.queue.run_next()
                if message is not None:
                    self.queue.submit(self.router.update(message))
                self._refresh()
        finally:
            self._draining = False

    def _refresh(self) -> None:
        if self.router.done:
            if not self._exited:
                self._exited = True
                self.application.exit()
            return
        self.application.invalidate()

    def run(self) -> None:
        self.application.run()


def _log_to_file(log_path: Path) -> None:
    """Send log records to a file; the terminal belongs to the UI while it runs."""
    handler = logging.FileHandler(log_path, encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)


def run_tui(library_path: Path, config: LibrosConfig) -> None:
    """
    Open the library and run the interactive UI until the user quits.

    Args:
        library_path: Directory holding books.db
        config: Loaded configuration

    Raises:
        StorageError: If the library cannot be opened; nothing is shown then
    """
    library_path = Path(library_path)
    library = Library.open(library_path)
    _log_to_file(library_path / LOG_FILENAME)
    logger.info(f"Starting UI for {library_path}")

    router = Router(library, config, library_path / EXPORTS_DIRNAME)
    queue = TaskQueue(CommandContext(library))
    try:
        LibrosApp(router, queue).run()
    finally:
        router.quit()
