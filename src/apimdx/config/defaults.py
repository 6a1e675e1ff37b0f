"""Package-level default configuration values."""

from __future__ import annotations

from typing import Any

# Default cache settings
DEFAULT_CACHE_ENABLED = True
DEFAULT_TYPE_ANALYSIS_MAX_SIZE = 1000
DEFAULT_REFERENCE_RESOLUTION_MAX_SIZE = 500
DEFAULT_ENABLE_STATS = False

# Preset name -> (type analysis size, reference resolution size, stats)
CACHE_PRESETS: dict[str, tuple[int, int, bool]] = {
    "default": (1000, 500, True),
    "development": (500, 200, True),
    "production": (2000, 1000, False),
}

# Default renderer settings
DEFAULT_TYPE_TREE_IMPORT = 'import { TypeTree } from "/snippets/tsdocs/TypeTree.jsx"'
DEFAULT_PROPERTY_SECTION_TITLE = "Properties"
DEFAULT_METHOD_SECTION_TITLE = "Methods"
DEFAULT_PLACEHOLDER_TYPE = "object"

# Log level
DEFAULT_LOG_LEVEL = "WARNING"


def get_defaults() -> dict[str, Any]:
    """Return all defaults as a flat dictionary for merging."""
    return {
        "cache_enabled": DEFAULT_CACHE_ENABLED,
        "cache_preset": None,
        "type_analysis_max_size": DEFAULT_TYPE_ANALYSIS_MAX_SIZE,
        "reference_resolution_max_size": DEFAULT_REFERENCE_RESOLUTION_MAX_SIZE,
        "enable_stats": DEFAULT_ENABLE_STATS,
        "type_tree_import": DEFAULT_TYPE_TREE_IMPORT,
        "property_section_title": DEFAULT_PROPERTY_SECTION_TITLE,
        "method_section_title": DEFAULT_METHOD_SECTION_TITLE,
        "placeholder_type": DEFAULT_PLACEHOLDER_TYPE,
        "log_level": DEFAULT_LOG_LEVEL,
    }
