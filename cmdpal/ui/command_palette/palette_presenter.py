"""
Presenter for the command palette.

Owns the palette session: open/closed lifecycle, the query, the ranked
results and the selection. The view forwards discrete signals (open, query
edits, navigation, hover, select, dismiss) and renders the state snapshots
this presenter publishes.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

from cmdpal.config.constants import DEFAULT_MAX_RESULTS

from .palette_commands import CategoryInfo, CommandDescriptor
from .palette_matcher import MatchResult, compute_results

logger = logging.getLogger(__name__)


class Direction(Enum):
    """Keyboard navigation direction."""

    NEXT = "next"
    PREV = "prev"


class FocusTarget(Enum):
    """Where the view should move input focus."""

    INPUT = "input"  # The palette's query input, on open
    TRIGGER = "trigger"  # The control that opened the palette, on close


@dataclass
class PaletteState:
    """Snapshot of the palette session."""

    is_open: bool = False
    query: str = ""
    results: tuple[MatchResult, ...] = field(default_factory=tuple)
    selected_index: int = -1


class PaletteSession:
    """
    Command palette state machine.

    States are Closed and Open. Every signal runs to completion before the
    next one; closing bumps the generation so work scheduled for an older
    session is dropped.
    """

    def __init__(
        self,
        catalog: Iterable[CommandDescriptor] | None = (),
        recents: Iterable[CommandDescriptor] | None = (),
        max_results: int = DEFAULT_MAX_RESULTS,
        categories: Mapping[str, CategoryInfo] | None = None,
        show_recent: bool = True,
        on_state_update: Callable[[PaletteState], None] | None = None,
        on_open_change: Callable[[bool], None] | None = None,
        on_focus_request: Callable[[FocusTarget], None] | None = None,
    ):
        self.on_state_update = on_state_update
        self.on_open_change = on_open_change
        self.on_focus_request = on_focus_request
        self._catalog = tuple(catalog or ())
        self._recents = tuple(recents or ())
        self._max_results = max_results
        self._categories = dict(categories or {})
        self._show_recent = show_recent
        self._is_open = False
        self._query = ""
        self._results: tuple[MatchResult, ...] = ()
        self._selected_index = 0
        self._generation = 0

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def state(self) -> PaletteState:
        """Current state snapshot."""
        return PaletteState(
            is_open=self._is_open,
            query=self._query,
            results=self._results,
            selected_index=self._clamped_index(),
        )

    @property
    def is_open(self) -> bool:
        return self._is_open

    @property
    def generation(self) -> int:
        return self._generation

    def selected_result(self) -> MatchResult | None:
        """Get the currently selected result."""
        index = self._clamped_index()
        if index < 0:
            return None
        return self._results[index]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def open(self) -> None:
        """Open the palette with an empty query."""
        if self._is_open:
            return
        self._is_open = True
        self._generation += 1
        self._query = ""
        self._selected_index = 0
        logger.debug(f"Palette opened (generation {self._generation})")
        self._request_focus(FocusTarget.INPUT)
        self._recompute()
        self._notify_update()
        if self.on_open_change:
            self.on_open_change(True)

    def dismiss(self) -> None:
        """Close without running anything (close button, escape, outside click)."""
        if not self._is_open:
            return
        self._close()

    def _close(self) -> None:
        self._is_open = False
        self._generation += 1
        self._query = ""
        self._selected_index = 0
        self._results = ()
        logger.debug(f"Palette closed (generation {self._generation})")
        self._request_focus(FocusTarget.TRIGGER)
        self._notify_update()
        if self.on_open_change:
            self.on_open_change(False)

    # ------------------------------------------------------------------
    # Signals from the view
    # ------------------------------------------------------------------

    def query_changed(self, text: str, generation: int | None = None) -> None:
        """Update the query and re-anchor the selection to the top result."""
        if not self._is_open:
            return
        if generation is not None and generation != self._generation:
            logger.debug(f"Dropping stale query {text!r} from generation {generation}")
            return
        self._query = text
        self._recompute()
        self._selected_index = 0
        self._notify_update()

    def navigate(self, direction: Direction | str) -> None:
        """Move the selection one step, wrapping around at either end."""
        if not self._is_open or not self._results:
            return
        direction = Direction(direction)
        step = 1 if direction is Direction.NEXT else -1
        self._selected_index = (self._clamped_index() + step) % len(self._results)
        self._notify_update()

    def hover(self, index: int) -> None:
        """Pointer pre-selection; keeps keyboard and pointer selection in sync."""
        if not self._is_open or not 0 <= index < len(self._results):
            return
        if index == self._selected_index:
            return
        self._selected_index = index
        self._notify_update()

    def select(self) -> MatchResult | None:
        """
        Run the selected command and close the palette.

        Returns the executed result, or None if nothing was selected. The
        palette closes even if the command's action raises; the exception
        propagates after the close.
        """
        if not self._is_open:
            return None
        result = self.selected_result()
        if result is None:
            return None

        logger.info(f"Executing command: {result.command.id}")
        try:
            result.command.action()
        finally:
            self._close()
        return result

    def activate(self, index: int) -> MatchResult | None:
        """Pointer click on a row: select it and run it."""
        self.hover(index)
        if not 0 <= index < len(self._results):
            return None
        return self.select()

    # ------------------------------------------------------------------
    # Host property changes
    # ------------------------------------------------------------------

    def set_catalog(self, catalog: Iterable[CommandDescriptor] | None) -> None:
        self._catalog = tuple(catalog or ())
        self._refresh()

    def set_recents(self, recents: Iterable[CommandDescriptor] | None) -> None:
        self._recents = tuple(recents or ())
        self._refresh()

    def set_categories(self, categories: Mapping[str, CategoryInfo] | None) -> None:
        self._categories = dict(categories or {})
        self._refresh()

    def set_max_results(self, max_results: int) -> None:
        self._max_results = max_results
        self._refresh()

    def set_show_recent(self, show_recent: bool) -> None:
        self._show_recent = show_recent
        self._refresh()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _refresh(self) -> None:
        """Recompute for new inputs, keeping the query and the selection."""
        if not self._is_open:
            return
        self._recompute()
        self._selected_index = self._clamped_index()
        self._notify_update()

    def _recompute(self) -> None:
        self._results = tuple(
            compute_results(
                self._query,
                self._catalog,
                self._recents if self._show_recent else (),
                self._max_results,
                self._categories,
            )
        )

    def _clamped_index(self) -> int:
        if not self._results:
            return -1
        return max(0, min(self._selected_index, len(self._results) - 1))

    def _request_focus(self, target: FocusTarget) -> None:
        if self.on_focus_request:
            self.on_focus_request(target)

    def _notify_update(self) -> None:
        """Notify listeners of state change."""
        if self.on_state_update:
            self.on_state_update(self.state)
