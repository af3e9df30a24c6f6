"""
Centralized error handling for the cmdpal CLI

This module provides:
- Rich Console for user-facing error messages
- Logging setup for developer diagnostics
- A decorator that turns exceptions into consistent CLI output and exit codes
"""

import functools
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from cmdpal.config.constants import CMDPAL_CONFIG_DIR, LOG_FILENAME
from cmdpal.exceptions import CatalogError, CmdpalError, ConfigurationError

# Global console instance for error display
console = Console(stderr=True, force_terminal=True, color_system="auto")

# Root logger for the package
logger = logging.getLogger("cmdpal")


def setup_logging(
    verbose: bool = False,
    quiet: bool = False,
    log_file: Optional[Path] = None
) -> None:
    """
    Set up logging for cmdpal

    Args:
        verbose: Enable verbose (DEBUG) logging on the console
        quiet: Only show errors on the console
        log_file: Optional log file path (defaults to ~/.config/cmdpal/cmdpal.log)
    """
    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.ERROR
    else:
        console_level = logging.WARNING

    detailed_formatter = logging.Formatter(
        '%(asctime)s | %(name)s | %(levelname)s | %(funcName)s:%(lineno)d | %(message)s'
    )
    simple_formatter = logging.Formatter('%(levelname)s: %(message)s')

    logger.handlers.clear()
    logger.setLevel(logging.DEBUG)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(console_level)
    console_handler.setFormatter(simple_formatter)
    logger.addHandler(console_handler)

    if log_file is None:
        log_file = CMDPAL_CONFIG_DIR / LOG_FILENAME

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    except OSError as e:
        # Carry on without a log file
        if verbose:
            console.print(f"[yellow]Warning: Could not create log file {log_file}: {e}[/yellow]")


def _error_title(error: CmdpalError) -> str:
    if isinstance(error, ConfigurationError):
        return "Configuration Error"
    if isinstance(error, CatalogError):
        return "Catalog Error"
    return "Error"


def _display_user_error(error: CmdpalError, show_details: bool) -> None:
    """Display error to user with Rich formatting"""
    message = Text()
    message.append("❌ ", style="bold")
    message.append(error.message, style="bold red")

    if show_details and error.context:
        details_text = "\n".join(f"• {k}: {v}" for k, v in error.context.items())
        message.append(f"\n\nDetails:\n{details_text}", style="dim red")

    if error.suggestion:
        message.append(f"\n\n💡 Suggestion: {error.suggestion}", style="cyan")

    panel = Panel(
        message,
        title=f"[bold]{_error_title(error)}[/bold]",
        title_align="left",
        border_style="red",
        padding=(0, 1)
    )
    console.print(panel)


def handle_error(
    error: Exception,
    operation: str = "unknown",
    context: Optional[Dict[str, Any]] = None,
    show_details: bool = False
) -> None:
    """
    Log an error, show it to the user and exit with status 1

    Args:
        error: The exception to handle
        operation: Description of the operation that failed
        context: Additional context for logging
        show_details: Whether to show technical details to user
    """
    context = context or {}

    if isinstance(error, CmdpalError):
        logger.error("%s failed: %s", operation, error, extra={"operation": operation, **context})
        _display_user_error(error, show_details)
    else:
        logger.error(
            "Unexpected error during %s: %s", operation, error,
            extra={"operation": operation, **context}, exc_info=True,
        )
        wrapped = CmdpalError(
            f"An unexpected error occurred during {operation}",
            suggestion="Run again with --verbose or check the log file for details.",
            original_error=str(error),
            error_type=type(error).__name__,
        )
        _display_user_error(wrapped, show_details=True)

    raise typer.Exit(1)


def safe_operation(operation_name: str, show_details: bool = False):
    """
    Decorator for CLI commands: report failures consistently instead of a traceback

    Args:
        operation_name: Name of the operation for logging
        show_details: Whether to show technical details on error
    """
    def decorator(func):
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (typer.Exit, typer.Abort):
                raise
            except Exception as e:
                handle_error(e, operation_name, show_details=show_details)
        return wrapper
    return decorator
