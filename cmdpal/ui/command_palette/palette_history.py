"""In-memory record of recently executed palette commands."""

import logging

from cmdpal.config.constants import MAX_RECENT_HISTORY

from .palette_commands import CommandDescriptor

logger = logging.getLogger(__name__)


class RecentHistory:
    """Most-recent-first list of executed commands, one entry per id.

    Kept by the host for the lifetime of the process only.
    """

    def __init__(self, max_items: int = MAX_RECENT_HISTORY):
        self.max_items = max_items
        self._items: list[CommandDescriptor] = []

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple[CommandDescriptor, ...]:
        return tuple(self._items)

    def record(self, command: CommandDescriptor) -> None:
        """Move (or add) a command to the front of the history."""
        self._items = [c for c in self._items if c.id != command.id]
        self._items.insert(0, command)
        self._items = self._items[: self.max_items]
        logger.debug(f"Recorded recent command: {command.id}")

    def clear(self) -> None:
        self._items.clear()
