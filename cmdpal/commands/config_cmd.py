"""Palette settings command for cmdpal."""

from typing import Optional

import typer
from rich.table import Table

from cmdpal.config.palette_config import (
    get_config_path,
    get_palette_settings,
    update_palette_settings,
)
from cmdpal.error_handling import safe_operation
from cmdpal.utils.output import console, print_json


@safe_operation("config")
def config(
    max_results: Optional[int] = typer.Option(
        None, "--max-results", help="Maximum results shown in the palette"
    ),
    show_recent: Optional[bool] = typer.Option(
        None, "--show-recent/--no-show-recent", help="Show recent commands for an empty query"
    ),
    show_categories: Optional[bool] = typer.Option(
        None, "--show-categories/--no-show-categories", help="Show category labels next to commands"
    ),
    placeholder: Optional[str] = typer.Option(
        None, "--placeholder", help="Placeholder text of the search input"
    ),
    debounce_ms: Optional[int] = typer.Option(
        None, "--debounce-ms", help="Delay before a query edit is searched"
    ),
    json_output: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
):
    """
    Show or update palette settings.

    Without options the current settings are shown.
    """
    changes = {
        "max_results": max_results,
        "show_recent": show_recent,
        "show_categories": show_categories,
        "placeholder": placeholder,
        "debounce_ms": debounce_ms,
    }
    if any(value is not None for value in changes.values()):
        settings = update_palette_settings(**changes)
        if not json_output:
            console.print(f"[green]✅ Saved settings to {get_config_path()}[/green]")
    else:
        settings = get_palette_settings()

    if json_output:
        print_json(settings.to_dict())
        return

    table = Table(show_header=False, box=None)
    table.add_column("Setting", style="dim")
    table.add_column("Value", style="bold")
    for key, value in settings.to_dict().items():
        table.add_row(key, str(value))
    console.print(table)
