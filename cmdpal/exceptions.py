"""Custom exception hierarchy for cmdpal.

The palette engine itself never raises: it is total over its inputs. These
exceptions cover the edges around it, where commands and settings come from
files written by people.

Exception Hierarchy:
    CmdpalError (base)
    ├── CatalogError - an invalid command descriptor
    │   └── CatalogFileError - a catalog file that cannot be loaded
    └── ConfigurationError - settings file values

Usage:
    from cmdpal.exceptions import CatalogFileError

    try:
        data = yaml.safe_load(handle)
    except yaml.YAMLError as e:
        raise CatalogFileError("Catalog file is not valid YAML", path=path) from e
"""

from typing import Any, Optional


class CmdpalError(Exception):
    """Base exception for all cmdpal errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., ids, paths)
        suggestion: Optional hint shown to the user by the CLI
    """

    def __init__(
        self,
        message: str,
        *,
        suggestion: Optional[str] = None,
        **context: Any,
    ) -> None:
        self.message = message
        self.context = context
        self.suggestion = suggestion
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Catalog Errors
# =============================================================================


class CatalogError(CmdpalError):
    """A command descriptor is missing required fields or has bad values."""

    def __init__(
        self,
        message: str = "Invalid command descriptor",
        *,
        command_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if command_id:
            context["command_id"] = command_id
        super().__init__(message, **context)


class CatalogFileError(CatalogError):
    """A catalog file is missing, unreadable or malformed."""

    def __init__(
        self,
        message: str = "Could not load catalog file",
        *,
        path: Optional[Any] = None,
        **context: Any,
    ) -> None:
        if path is not None:
            context["path"] = str(path)
        context.setdefault("suggestion", "Check the file exists and follows the catalog format")
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(CmdpalError):
    """Settings file values are invalid."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        *,
        key: Optional[str] = None,
        **context: Any,
    ) -> None:
        if key:
            context["key"] = key
        super().__init__(message, **context)
