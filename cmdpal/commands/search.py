"""Non-interactive palette queries for cmdpal."""

from pathlib import Path
from typing import List, Optional

import typer
from rich.table import Table
from rich.text import Text

from cmdpal.commands._helpers import load_catalog
from cmdpal.config.palette_config import get_palette_settings
from cmdpal.error_handling import safe_operation
from cmdpal.exceptions import CatalogError
from cmdpal.ui.command_palette import compute_results
from cmdpal.utils.output import console, print_json


@safe_operation("search")
def search(
    query: str = typer.Argument("", help="Text to match against the catalog"),
    catalog: Optional[Path] = typer.Option(
        None, "--catalog", "-c", help="YAML catalog file (defaults to the sample commands)"
    ),
    max_results: Optional[int] = typer.Option(
        None, "--max-results", "-n", min=1, help="Maximum results (defaults to the configured value)"
    ),
    recent: Optional[List[str]] = typer.Option(
        None, "--recent", "-r", help="Command id to treat as recently used (repeatable)"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """
    Show the palette results for a query.

    Results are ranked the same way as in the interactive palette.
    """
    settings = get_palette_settings()
    commands, categories = load_catalog(catalog)

    by_id = {cmd.id: cmd for cmd in commands}
    recents = []
    for command_id in recent or []:
        if command_id not in by_id:
            raise CatalogError("Unknown command id given to --recent", command_id=command_id)
        recents.append(by_id[command_id])

    results = compute_results(
        query,
        commands,
        recents if settings.show_recent else [],
        max_results or settings.max_results,
        categories,
    )

    if json_output:
        print_json([
            {
                "id": r.command.id,
                "label": r.command.label,
                "description": r.command.description,
                "category": r.category_info.label or None,
                "shortcut": r.command.shortcut,
                "recent": r.is_recent,
            }
            for r in results
        ])
        return

    if not results:
        console.print(Text(f'No commands found for "{query}"', style="yellow"))
        return

    table = Table(title=Text(f'Results for "{query}"' if query else "All commands"))
    table.add_column("#", style="dim", justify="right")
    table.add_column("Command", style="bold")
    table.add_column("Category")
    table.add_column("Shortcut", style="cyan")
    table.add_column("Id", style="dim")

    for rank, result in enumerate(results, 1):
        category = f"{result.category_info.icon} {result.category_info.label}".strip()
        table.add_row(
            str(rank),
            result.command.label,
            category,
            result.command.shortcut or "",
            result.command.id,
        )

    console.print(table)
