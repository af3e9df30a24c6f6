"""Shared helpers for cmdpal CLI commands."""

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from cmdpal.config.catalog_file import load_catalog_file
from cmdpal.ui.command_palette import CategoryInfo, CommandDescriptor, default_commands

logger = logging.getLogger(__name__)


def load_catalog(
    path: Optional[Path],
) -> Tuple[List[CommandDescriptor], Dict[str, CategoryInfo]]:
    """Load commands and category overrides, falling back to the sample commands."""
    if path is None:
        return default_commands(), {}

    catalog = load_catalog_file(path)
    if catalog.skipped:
        logger.warning(f"Skipped {catalog.skipped} invalid entries in {path}")
    if not catalog.commands:
        logger.warning(f"No commands in {path}")
    return catalog.commands, catalog.categories
