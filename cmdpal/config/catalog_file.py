"""
Catalog files for the command palette.

Lets a host describe its commands and category overrides in YAML:

    categories:
      git: {label: Git, icon: "🌿"}
    commands:
      - id: git-commit
        label: Commit Changes
        description: Commit staged changes
        category: git
        shortcut: "⌘K"

Actions cannot be expressed in YAML, so the host passes an action factory
that turns each entry into a callable.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from cmdpal.exceptions import CatalogError, CatalogFileError
from cmdpal.ui.command_palette.palette_commands import CategoryInfo, CommandDescriptor

logger = logging.getLogger(__name__)

ActionFactory = Callable[[Dict[str, Any]], Callable[[], Any]]


def log_action_factory(entry: Dict[str, Any]) -> Callable[[], Any]:
    """Default action factory: executing a command just logs it."""
    command_id = entry.get("id")

    def action() -> None:
        logger.info(f"Executed catalog command: {command_id}")

    return action


@dataclass
class CatalogFile:
    """Commands and category overrides loaded from a catalog file."""

    commands: List[CommandDescriptor] = field(default_factory=list)
    categories: Dict[str, CategoryInfo] = field(default_factory=dict)
    skipped: int = 0  # Entries dropped for missing id/label


def _parse_categories(raw: Any, path: Path) -> Dict[str, CategoryInfo]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise CatalogFileError("'categories' must be a mapping", path=path)

    categories = {}
    for key, value in raw.items():
        if not isinstance(value, dict) or "label" not in value:
            raise CatalogFileError(
                "Category entries need at least a label", path=path, category=key
            )
        categories[str(key)] = CategoryInfo(
            label=str(value["label"]),
            icon=str(value.get("icon", "")),
        )
    return categories


def parse_catalog(
    data: Any,
    path: Path,
    action_factory: Optional[ActionFactory] = None,
) -> CatalogFile:
    """Build a catalog from already-parsed YAML data."""
    action_factory = action_factory or log_action_factory

    if data is None:
        return CatalogFile()
    if not isinstance(data, dict):
        raise CatalogFileError("Catalog file must contain a mapping", path=path)

    raw_commands = data.get("commands") or []
    if not isinstance(raw_commands, list):
        raise CatalogFileError("'commands' must be a list", path=path)

    catalog = CatalogFile(categories=_parse_categories(data.get("categories"), path))
    seen_ids = set()
    for index, entry in enumerate(raw_commands):
        if not isinstance(entry, dict):
            logger.warning(f"Skipping catalog entry #{index} in {path}: not a mapping")
            catalog.skipped += 1
            continue
        try:
            command = CommandDescriptor.from_dict(entry, action=action_factory(entry))
        except CatalogError as e:
            logger.warning(f"Skipping catalog entry #{index} in {path}: {e}")
            catalog.skipped += 1
            continue
        if command.id in seen_ids:
            logger.warning(f"Skipping duplicate command id {command.id!r} in {path}")
            catalog.skipped += 1
            continue
        seen_ids.add(command.id)
        catalog.commands.append(command)

    logger.debug(f"Loaded {len(catalog.commands)} commands from {path}")
    return catalog


def load_catalog_file(
    path: Path,
    action_factory: Optional[ActionFactory] = None,
) -> CatalogFile:
    """
    Load a YAML catalog file.

    Args:
        path: Path to the catalog file
        action_factory: Turns each entry into the command's action

    Returns:
        The parsed catalog

    Raises:
        CatalogFileError: If the file is missing, unreadable or malformed
    """
    path = Path(path).expanduser()
    if not path.exists():
        raise CatalogFileError("Catalog file not found", path=path)

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise CatalogFileError("Catalog file is not valid YAML", path=path) from e
    except OSError as e:
        raise CatalogFileError("Could not read catalog file", path=path) from e

    return parse_catalog(data, path, action_factory)
