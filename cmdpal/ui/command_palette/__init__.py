"""
Command Palette - VS Code-style quick access overlay.

Provides:
- compute_results: Fuzzy matching and ranking of catalog commands
- PaletteSession: Open/close lifecycle, query and selection state machine
- CommandPaletteScreen: Modal overlay rendering a session
"""

from .palette_commands import (
    DEFAULT_CATEGORIES,
    CategoryInfo,
    CommandDescriptor,
    default_commands,
    merge_categories,
)
from .palette_history import RecentHistory
from .palette_matcher import MatchResult, compute_results, fuzzy_match
from .palette_presenter import Direction, FocusTarget, PaletteSession, PaletteState
from .palette_screen import CommandPaletteScreen

__all__ = [
    "DEFAULT_CATEGORIES",
    "CategoryInfo",
    "CommandDescriptor",
    "CommandPaletteScreen",
    "Direction",
    "FocusTarget",
    "MatchResult",
    "PaletteSession",
    "PaletteState",
    "RecentHistory",
    "compute_results",
    "default_commands",
    "fuzzy_match",
    "merge_categories",
]
