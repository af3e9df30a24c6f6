"""Category listing for cmdpal."""

from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from cmdpal.commands._helpers import load_catalog
from cmdpal.error_handling import safe_operation
from cmdpal.ui.command_palette import DEFAULT_CATEGORIES, merge_categories
from cmdpal.utils.output import console, print_json


@safe_operation("categories")
def categories(
    catalog: Optional[Path] = typer.Option(
        None, "--catalog", "-c", help="YAML catalog file with category overrides"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """List command categories, including overrides from a catalog file."""
    commands, overrides = load_catalog(catalog)
    merged = merge_categories(overrides)

    counts: dict[str, int] = {}
    for command in commands:
        if command.category:
            counts[command.category] = counts.get(command.category, 0) + 1

    if json_output:
        print_json({
            key: {"label": info.label, "icon": info.icon, "commands": counts.get(key, 0)}
            for key, info in merged.items()
        })
        return

    table = Table(title="Categories")
    table.add_column("Key", style="dim")
    table.add_column("Icon")
    table.add_column("Label", style="bold")
    table.add_column("Commands", justify="right")
    table.add_column("Source", style="dim")

    for key, info in merged.items():
        source = "catalog" if key in overrides else "default"
        if key in overrides and key in DEFAULT_CATEGORIES:
            source = "catalog (override)"
        table.add_row(key, info.icon, info.label, str(counts.get(key, 0)), source)

    console.print(table)
