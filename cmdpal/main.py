#!/usr/bin/env python3
"""
Main CLI entry point for cmdpal
"""

import typer

from cmdpal import __version__
from cmdpal.commands.categories import categories
from cmdpal.commands.config_cmd import config
from cmdpal.commands.run import run
from cmdpal.commands.search import search
from cmdpal.error_handling import setup_logging

app = typer.Typer(
    name="cmdpal",
    help="Fuzzy command palette for terminal applications",
    no_args_is_help=True,
)


def version():
    """Show cmdpal version"""
    typer.echo(f"cmdpal version {__version__}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
):
    """
    cmdpal - fuzzy command palette for terminal applications

    [bold]Examples:[/bold]

    Rank the sample commands for a query:
        [cyan]cmdpal search file[/cyan]

    Search your own catalog:
        [cyan]cmdpal search commit --catalog commands.yaml[/cyan]

    Open the interactive palette:
        [cyan]cmdpal run --catalog commands.yaml[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    setup_logging(verbose=verbose, quiet=quiet)


app.command()(search)
app.command()(run)
app.command()(categories)
app.command(name="config")(config)
app.command()(version)


def run_cli() -> None:
    app()


if __name__ == "__main__":
    run_cli()
