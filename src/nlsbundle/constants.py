"""Shared constants for nlsbundle.

Centralized configuration constants used across the syntax, runtime and
localization packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Locale tags: Reserved tag names
- Input limits: DoS prevention via size constraints
- Resource layout: Default file names for nls modules
- Fallback strings: Placeholder rendering for missing arguments

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale tags
    "ROOT_LOCALE",
    # Input limits
    "MAX_SOURCE_SIZE",
    "MAX_PLACEHOLDER_INDEX",
    "MAX_NESTING_DEPTH",
    # Resource layout
    "DEFAULT_RESOURCE_ID",
    # Fallback strings
    "PLACEHOLDER_TOKEN",
]

# ============================================================================
# LOCALE TAGS
# ============================================================================

# Tag of the default bundle. Every lookup chain ends here.
ROOT_LOCALE: str = "root"

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum nls module source size in characters (1 MB).
# A UI message module is a few kilobytes; anything larger is malformed input.
MAX_SOURCE_SIZE: int = 1024 * 1024

# Largest placeholder index accepted by the template parser.
# Larger digit runs are treated as literal text.
MAX_PLACEHOLDER_INDEX: int = 999

# Maximum object nesting inside define({...}).
# A master module nests two levels (root -> messages).
MAX_NESTING_DEPTH: int = 8

# ============================================================================
# RESOURCE LAYOUT
# ============================================================================

# File name of a bundle module inside an nls directory.
DEFAULT_RESOURCE_ID: str = "messages.js"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Canonical text of a placeholder, used when a token is left unreplaced.
# Format string - use .format(index=...)
PLACEHOLDER_TOKEN: str = "{{{{[{index}]}}}}"  # e.g., {{[0]}}
