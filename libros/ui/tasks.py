"""Single-threaded task queue for commands."""

from collections import deque
from typing import Callable, Deque, Optional
import logging

from ..messages import Message
from .commands import Command, CommandContext

logger = logging.getLogger(__name__)


class TaskQueue:
    """
    FIFO of pending commands, run one at a time on the caller's thread.

    There is no cancellation: a submitted command always runs and its result
    is always handed back.
    """

    def __init__(self, context: CommandContext):
        self.context = context
        self._pending: Deque[Command] = deque()

    def __len__(self) -> int:
        return len(self._pending)

    def submit(self, command: Optional[Command]) -> None:
        if command is not None:
            self._pending.append(command)

    def run_next(self) -> Optional[Message]:
        """Run the oldest pending command and return its result message."""
        if not self._pending:
            return None
        command = self._pending.popleft()
        logger.debug(f"Running {type(command).__name__}")
        return command.run(self.context)

    def run_pending(self, dispatch: Callable[[Message], Optional[Command]]) -> None:
        """
        Drain the queue, feeding each result through ``dispatch``.

        Commands returned by ``dispatch`` are queued and run in turn.
        """
        while self._pending:
            message = self.run_next()
            if message is not None:
                self.submit(dispatch(message))
