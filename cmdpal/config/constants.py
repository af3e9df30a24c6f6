"""
Centralized constants for cmdpal.

Default values for the palette engine, the settings file and the CLI live
here so the engine, the view and the command line agree on them.
"""

import os
from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

CMDPAL_CONFIG_DIR = Path(
    os.environ.get("CMDPAL_CONFIG_DIR", str(Path.home() / ".config" / "cmdpal"))
).expanduser()

PALETTE_CONFIG_FILENAME = "palette_config.json"
LOG_FILENAME = "cmdpal.log"

# =============================================================================
# RESULT LIMITS
# =============================================================================

DEFAULT_MAX_RESULTS = 10  # Results shown in the palette list
MAX_RECENT_RESULTS = 5  # Recent commands shown ahead of the catalog
MAX_RECENT_HISTORY = 10  # Executed commands remembered by the host

# =============================================================================
# VIEW
# =============================================================================

DEFAULT_PLACEHOLDER = "Type a command or search..."
DEFAULT_DEBOUNCE_MS = 100  # Delay before an input edit reaches the session
FALLBACK_CATEGORY_ICON = "⚡"
RECENT_CATEGORY = "recent"
