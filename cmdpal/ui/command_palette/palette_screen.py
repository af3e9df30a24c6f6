"""
Command Palette Screen - VS Code-style modal overlay.

Renders the palette session and turns keys, pointer events and clicks
outside the palette into presenter signals.
"""

import logging
from collections.abc import Iterable, Mapping

from rich.text import Text
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.screen import ModalScreen
from textual.timer import Timer
from textual.widgets import Button, Input, ListItem, ListView, Static

from cmdpal.config.constants import DEFAULT_DEBOUNCE_MS, DEFAULT_MAX_RESULTS, DEFAULT_PLACEHOLDER

from .palette_commands import CategoryInfo, CommandDescriptor
from .palette_matcher import MatchResult
from .palette_presenter import Direction, FocusTarget, PaletteSession, PaletteState

logger = logging.getLogger(__name__)


class PaletteResultWidget(ListItem):
    """Widget for a single palette result."""

    DEFAULT_CSS = """
    PaletteResultWidget {
        height: auto;
        padding: 0 1;
    }
    """

    class Hovered(Message):
        """Posted when the pointer moves onto a result."""

        def __init__(self, index: int):
            super().__init__()
            self.index = index

    def __init__(self, result: MatchResult, index: int, show_categories: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.result = result
        self.index = index
        self.show_categories = show_categories

    def compose(self) -> ComposeResult:
        command = self.result.command
        label = command.label
        if len(label) > 50:
            label = label[:47] + "..."

        line = Text.assemble(
            (f"{self.result.category_info.icon} ", ""),
            (label, "bold"),
        )
        if self.show_categories and not self.result.is_recent and self.result.category_info.label:
            line.append(f"  {self.result.category_info.label}", style="dim")
        if command.shortcut:
            line.append(f"  {command.shortcut}", style="cyan")
        if command.description:
            line.append(f"\n   {command.description}", style="dim")
        yield Static(line)

    def on_enter(self, event: events.Enter) -> None:
        self.post_message(self.Hovered(self.index))


class CommandPaletteScreen(ModalScreen):
    """
    Command palette modal overlay.

    Dismisses with the id of the executed command, or None when the
    palette was closed without running anything.
    """

    CSS = """
    CommandPaletteScreen {
        align: center top;
        padding-top: 5;
    }

    #palette-container {
        width: 80;
        height: auto;
        max-height: 30;
        background: $surface;
        border: solid $primary;
    }

    #palette-search {
        height: 3;
        border-bottom: solid $primary-darken-1;
    }

    #palette-input {
        width: 1fr;
        border: none;
        background: $surface-darken-1;
        padding: 0 1;
    }

    #palette-close {
        width: 5;
        min-width: 5;
    }

    #palette-results {
        height: auto;
        max-height: 20;
        min-height: 3;
        padding: 0;
    }

    #palette-hints {
        height: 1;
        background: $surface-darken-1;
        color: $text-muted;
        padding: 0 1;
    }

    ListItem.--highlight {
        background: $accent;
    }
    """

    BINDINGS = [
        Binding("escape", "dismiss_palette", "Close", show=False, priority=True),
        Binding("ctrl+k", "dismiss_palette", "Close", show=False, priority=True),
        Binding("enter", "select", "Select", show=False, priority=True),
        Binding("up", "cursor_up", "Up", show=False, priority=True),
        Binding("down", "cursor_down", "Down", show=False, priority=True),
        Binding("ctrl+p", "cursor_up", "Up", show=False, priority=True),
        Binding("ctrl+n", "cursor_down", "Down", show=False, priority=True),
    ]

    def __init__(
        self,
        commands: Iterable[CommandDescriptor] = (),
        recents: Iterable[CommandDescriptor] = (),
        categories: Mapping[str, CategoryInfo] | None = None,
        max_results: int = DEFAULT_MAX_RESULTS,
        show_recent: bool = True,
        show_categories: bool = True,
        placeholder: str = DEFAULT_PLACEHOLDER,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        **kwargs,
    ):
        super().__init__(**kwargs)
        self.placeholder = placeholder
        self.show_categories = show_categories
        self.debounce_ms = debounce_ms
        self.session = PaletteSession(
            catalog=commands,
            recents=recents,
            max_results=max_results,
            categories=categories,
            show_recent=show_recent,
            on_state_update=self._on_state_update,
            on_open_change=self._on_open_change,
            on_focus_request=self._on_focus_request,
        )
        self._debounce_timer: Timer | None = None
        self._render_id = 0
        self._rendered_results: tuple[MatchResult, ...] | None = None
        self._executed_id: str | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="palette-container"):
            with Horizontal(id="palette-search"):
                yield Input(placeholder=self.placeholder, id="palette-input")
                yield Button("✕", id="palette-close")
            yield ListView(id="palette-results")
            yield Static(
                "↑↓ to navigate │ ↵ to select │ esc to close",
                id="palette-hints",
            )

    def on_mount(self) -> None:
        self.session.open()

    # ------------------------------------------------------------------
    # Presenter callbacks
    # ------------------------------------------------------------------

    def _on_state_update(self, state: PaletteState) -> None:
        """Schedule a render; only the newest one runs."""
        self._render_id += 1
        self.call_later(self._render_results, state, self._render_id)

    def _on_open_change(self, is_open: bool) -> None:
        if not is_open:
            if self._debounce_timer:
                self._debounce_timer.stop()
            # Deferred until the running handler has settled _executed_id
            self.call_later(self._dismiss_with_result)

    def _dismiss_with_result(self) -> None:
        self.dismiss(self._executed_id)

    def _on_focus_request(self, target: FocusTarget) -> None:
        if target is FocusTarget.INPUT:
            self.query_one("#palette-input", Input).focus()
        # Focus goes back to the trigger when the screen is popped

    async def _render_results(self, state: PaletteState, render_id: int) -> None:
        """Render results to the ListView."""
        if render_id != self._render_id or not state.is_open:
            return

        results_view = self.query_one("#palette-results", ListView)
        if state.results is not self._rendered_results:
            await results_view.clear()
            if state.results:
                await results_view.extend(
                    PaletteResultWidget(result, index, show_categories=self.show_categories)
                    for index, result in enumerate(state.results)
                )
            else:
                await results_view.append(
                    ListItem(Static(Text(f'No commands found for "{state.query}"', style="dim")))
                )
            self._rendered_results = state.results

        if state.results:
            results_view.index = state.selected_index

    # ------------------------------------------------------------------
    # Input events
    # ------------------------------------------------------------------

    def on_input_changed(self, event: Input.Changed) -> None:
        """Forward query edits, debounced and tagged with the session generation."""
        if event.input.id != "palette-input":
            return

        query = event.value
        generation = self.session.generation

        if self._debounce_timer:
            self._debounce_timer.stop()
            self._debounce_timer = None

        if self.debounce_ms <= 0:
            self.session.query_changed(query, generation)
            return

        self._debounce_timer = self.set_timer(
            self.debounce_ms / 1000,
            lambda: self.session.query_changed(query, generation),
        )

    def action_cursor_up(self) -> None:
        self.session.navigate(Direction.PREV)

    def action_cursor_down(self) -> None:
        self.session.navigate(Direction.NEXT)

    def action_dismiss_palette(self) -> None:
        self.session.dismiss()

    def action_select(self) -> None:
        """Execute the selected item."""
        self._run(self.session.selected_result(), self.session.select)

    def on_palette_result_widget_hovered(self, message: PaletteResultWidget.Hovered) -> None:
        self.session.hover(message.index)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        """Handle a click on a result."""
        event.stop()
        if not isinstance(event.item, PaletteResultWidget):
            return
        index = event.item.index
        self._run(event.item.result, lambda: self.session.activate(index))

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id == "palette-close":
            event.stop()
            self.session.dismiss()

    def on_key(self, event: events.Key) -> None:
        """Typing anywhere in the palette goes to the search input."""
        input_widget = self.query_one("#palette-input", Input)
        if event.is_printable and event.character and self.focused is not input_widget:
            event.stop()
            input_widget.focus()
            input_widget.insert_text_at_cursor(event.character)

    def on_mouse_down(self, event: events.MouseDown) -> None:
        """Close when the pointer goes down outside the palette."""
        container = self.query_one("#palette-container", Vertical)
        if not container.region.contains(event.screen_x, event.screen_y):
            self.session.dismiss()

    def _run(self, result: MatchResult | None, execute) -> None:
        if result is None:
            return
        self._executed_id = result.command.id
        try:
            execute()
        except Exception as e:
            self._executed_id = None
            logger.exception(f"Command {result.command.id} failed")
            self.app.notify(f"{result.command.label} failed: {e}", severity="error")
