"""
Palette settings.

Handles persistence of palette preferences (result limit, recent commands,
category labels, placeholder text and input debounce).
Config is stored in ~/.config/cmdpal/palette_config.json
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any

from cmdpal.exceptions import ConfigurationError

from .constants import (
    CMDPAL_CONFIG_DIR,
    DEFAULT_DEBOUNCE_MS,
    DEFAULT_MAX_RESULTS,
    DEFAULT_PLACEHOLDER,
    PALETTE_CONFIG_FILENAME,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaletteSettings:
    """Validated palette settings."""

    max_results: int = DEFAULT_MAX_RESULTS
    show_recent: bool = True
    show_categories: bool = True
    placeholder: str = DEFAULT_PLACEHOLDER
    debounce_ms: int = DEFAULT_DEBOUNCE_MS

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PaletteSettings:
        """Build settings from a config dict, rejecting bad values."""
        merged = {**DEFAULT_CONFIG, **data}

        max_results = merged["max_results"]
        if isinstance(max_results, bool) or not isinstance(max_results, int) or max_results < 1:
            raise ConfigurationError(
                "max_results must be a positive integer",
                key="max_results",
                value=max_results,
            )

        debounce_ms = merged["debounce_ms"]
        if isinstance(debounce_ms, bool) or not isinstance(debounce_ms, int) or debounce_ms < 0:
            raise ConfigurationError(
                "debounce_ms must be a non-negative integer",
                key="debounce_ms",
                value=debounce_ms,
            )

        for key in ("show_recent", "show_categories"):
            if not isinstance(merged[key], bool):
                raise ConfigurationError(f"{key} must be true or false", key=key, value=merged[key])

        if not isinstance(merged["placeholder"], str):
            raise ConfigurationError(
                "placeholder must be a string", key="placeholder", value=merged["placeholder"]
            )

        return cls(
            max_results=max_results,
            show_recent=merged["show_recent"],
            show_categories=merged["show_categories"],
            placeholder=merged["placeholder"],
            debounce_ms=debounce_ms,
        )


DEFAULT_CONFIG: dict[str, Any] = {
    "max_results": DEFAULT_MAX_RESULTS,
    "show_recent": True,
    "show_categories": True,
    "placeholder": DEFAULT_PLACEHOLDER,
    "debounce_ms": DEFAULT_DEBOUNCE_MS,
}


def get_config_path() -> Path:
    """
    Get path to the palette config file.

    Returns:
        Path to ~/.config/cmdpal/palette_config.json
    """
    return CMDPAL_CONFIG_DIR / PALETTE_CONFIG_FILENAME


def load_palette_config() -> dict[str, Any]:
    """
    Load palette configuration from file.

    Returns:
        Config dict, or defaults if file doesn't exist or is invalid
    """
    path = get_config_path()
    if not path.exists():
        return DEFAULT_CONFIG.copy()
    try:
        config = json.loads(path.read_text())
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Ignoring unreadable palette config {path}: {e}")
        return DEFAULT_CONFIG.copy()
    if not isinstance(config, dict):
        logger.warning(f"Ignoring palette config {path}: expected a JSON object")
        return DEFAULT_CONFIG.copy()
    # Merge with defaults to handle missing keys
    return {**DEFAULT_CONFIG, **config}


def save_palette_config(config: dict[str, Any]) -> None:
    """
    Save palette configuration to file.

    Args:
        config: Configuration dict to save
    """
    path = get_config_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(config, indent=2) + "\n")
    except OSError as e:
        raise ConfigurationError("Could not write palette config", path=str(path)) from e


def get_palette_settings() -> PaletteSettings:
    """Load and validate the palette settings."""
    return PaletteSettings.from_dict(load_palette_config())


def update_palette_settings(**changes: Any) -> PaletteSettings:
    """
    Validate and persist changed settings.

    Args:
        **changes: Setting names and new values; None values are ignored

    Returns:
        The settings after the update
    """
    config = load_palette_config()
    unknown = [key for key in changes if key not in DEFAULT_CONFIG]
    if unknown:
        raise ConfigurationError("Unknown setting", key=unknown[0])
    config.update({key: value for key, value in changes.items() if value is not None})
    settings = PaletteSettings.from_dict(config)
    save_palette_config(config)
    return settings
