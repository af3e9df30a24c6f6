"""Interactive command palette for cmdpal."""

from pathlib import Path
from typing import Optional

import typer

from cmdpal.commands._helpers import load_catalog
from cmdpal.config.palette_config import get_palette_settings
from cmdpal.error_handling import safe_operation


@safe_operation("run")
def run(
    catalog: Optional[Path] = typer.Option(
        None, "--catalog", "-c", help="YAML catalog file (defaults to the sample commands)"
    ),
):
    """Open the interactive command palette (ctrl+k reopens it, q quits)."""
    from cmdpal.ui.palette_app import PaletteApp

    settings = get_palette_settings()
    commands, categories = load_catalog(catalog)

    try:
        PaletteApp(commands=commands, categories=categories, settings=settings).run()
    except KeyboardInterrupt:
        pass
