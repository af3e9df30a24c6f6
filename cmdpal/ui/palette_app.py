"""
Minimal host application for the command palette.

Owns the catalog, the category overrides and the recent-command history,
and opens the palette overlay on ctrl+k.
"""

import logging
from collections.abc import Iterable, Mapping

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer, Static

from cmdpal.config.palette_config import PaletteSettings

from .command_palette import (
    CategoryInfo,
    CommandDescriptor,
    CommandPaletteScreen,
    RecentHistory,
    default_commands,
)

logger = logging.getLogger(__name__)


class PaletteApp(App):
    """Textual app hosting a command palette over a catalog."""

    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        align: center middle;
    }

    #status {
        width: auto;
        color: $text-muted;
    }
    """

    BINDINGS = [
        Binding("ctrl+k", "open_palette", "Commands"),
        Binding("q", "quit", "Quit"),
    ]

    def __init__(
        self,
        commands: Iterable[CommandDescriptor] | None = None,
        categories: Mapping[str, CategoryInfo] | None = None,
        settings: PaletteSettings | None = None,
        open_on_start: bool = True,
        **kwargs,
    ):
        super().__init__(**kwargs)
        commands = list(commands or ())
        # Sample catalog when the host has nothing to offer
        self.commands = commands if commands else default_commands()
        self.categories = dict(categories or {})
        self.settings = settings or PaletteSettings()
        self.history = RecentHistory()
        self.last_executed: str | None = None
        self.open_on_start = open_on_start

    def compose(self) -> ComposeResult:
        yield Static("Press ctrl+k to open the command palette", id="status")
        yield Footer()

    def on_mount(self) -> None:
        if self.open_on_start:
            self.call_after_refresh(self.action_open_palette)

    def action_open_palette(self) -> None:
        if isinstance(self.screen, CommandPaletteScreen):
            return
        screen = CommandPaletteScreen(
            commands=self.commands,
            recents=self.history.items,
            categories=self.categories,
            max_results=self.settings.max_results,
            show_recent=self.settings.show_recent,
            show_categories=self.settings.show_categories,
            placeholder=self.settings.placeholder,
            debounce_ms=self.settings.debounce_ms,
        )
        self.push_screen(screen, callback=self._on_palette_closed)

    def _on_palette_closed(self, command_id: str | None) -> None:
        if command_id is None:
            logger.debug("Palette dismissed")
            return

        command = next((c for c in self.commands if c.id == command_id), None)
        if command is not None:
            self.history.record(command)
            label = command.label
        else:
            label = command_id
        self.last_executed = command_id
        self.query_one("#status", Static).update(f"Ran: {label}")
