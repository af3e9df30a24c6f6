"""
Command model for the command palette.

Defines the command descriptors a host hands to the palette, the category
table used to label and decorate them, and the sample catalog shown when a
host supplies no commands of its own.
"""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, replace
from typing import Any

from cmdpal.config.constants import FALLBACK_CATEGORY_ICON, RECENT_CATEGORY
from cmdpal.exceptions import CatalogError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CategoryInfo:
    """Display information for a command category."""

    label: str
    icon: str


@dataclass(frozen=True)
class CommandDescriptor:
    """A command that can be executed from the palette."""

    id: str  # Unique within the catalog, e.g. "go-to-file"
    label: str  # Display name: "Go to File..."
    description: str | None = None  # What it does
    category: str | None = None  # Key into the category table
    shortcut: str | None = None  # Keyboard shortcut hint
    action: Callable[[], Any] | None = None  # Invoked when selected

    @property
    def is_executable(self) -> bool:
        """True when the command can be matched and run."""
        return bool(self.id) and callable(self.action)

    def as_recent(self) -> "CommandDescriptor":
        """Copy of this command tagged with the recent category."""
        return replace(self, category=RECENT_CATEGORY)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        action: Callable[[], Any] | None = None,
    ) -> "CommandDescriptor":
        """Create a descriptor from a mapping (e.g. a catalog file entry)."""
        command_id = data.get("id")
        label = data.get("label")
        if not command_id or not isinstance(command_id, str):
            raise CatalogError("Command is missing an id", label=label)
        if not label or not isinstance(label, str):
            raise CatalogError("Command is missing a label", command_id=command_id)

        def optional_text(key: str) -> str | None:
            value = data.get(key)
            return None if value is None else str(value)

        return cls(
            id=command_id,
            label=label,
            description=optional_text("description"),
            category=optional_text("category"),
            shortcut=optional_text("shortcut"),
            action=action,
        )


DEFAULT_CATEGORIES: Mapping[str, CategoryInfo] = {
    "navigation": CategoryInfo("Navigation", "🧭"),
    "edit": CategoryInfo("Edit", "✏️"),
    "view": CategoryInfo("View", "👁️"),
    "file": CategoryInfo("File", "📁"),
    "search": CategoryInfo("Search", "🔍"),
    "tools": CategoryInfo("Tools", "🔧"),
    "help": CategoryInfo("Help", "❓"),
    RECENT_CATEGORY: CategoryInfo("Recent", "🕐"),
}

FALLBACK_CATEGORY = CategoryInfo("", FALLBACK_CATEGORY_ICON)


def merge_categories(
    overrides: Mapping[str, CategoryInfo] | None = None,
) -> dict[str, CategoryInfo]:
    """Merge host category overrides over the defaults; host entries win."""
    merged = dict(DEFAULT_CATEGORIES)
    if overrides:
        merged.update(overrides)
    return merged


def resolve_category(
    category: str | None,
    categories: Mapping[str, CategoryInfo],
) -> CategoryInfo:
    """Look up display info for a category id."""
    if category is None:
        return FALLBACK_CATEGORY
    return categories.get(category, FALLBACK_CATEGORY)


def _log_action(message: str) -> Callable[[], None]:
    def action() -> None:
        logger.info(message)

    return action


def default_commands() -> list[CommandDescriptor]:
    """Sample commands used when a host supplies none."""
    return [
        CommandDescriptor(
            id="go-to-file",
            label="Go to File...",
            category="navigation",
            shortcut="⌘P",
            description="Quickly open any file",
            action=_log_action("Open file picker"),
        ),
        CommandDescriptor(
            id="command-palette",
            label="Command Palette",
            category="navigation",
            shortcut="⌘⇧P",
            description="Show all commands",
            action=_log_action("Open command palette"),
        ),
        CommandDescriptor(
            id="find-in-files",
            label="Find in Files",
            category="search",
            shortcut="⌘⇧F",
            description="Search across all files",
            action=_log_action("Search in files"),
        ),
        CommandDescriptor(
            id="toggle-sidebar",
            label="Toggle Sidebar",
            category="view",
            shortcut="⌘B",
            description="Show or hide the sidebar",
            action=_log_action("Toggle sidebar"),
        ),
        CommandDescriptor(
            id="new-file",
            label="New File",
            category="file",
            shortcut="⌘N",
            description="Create a new file",
            action=_log_action("Create new file"),
        ),
        CommandDescriptor(
            id="save-all",
            label="Save All",
            category="file",
            shortcut="⌘⌥S",
            description="Save all open files",
            action=_log_action("Save all files"),
        ),
    ]
