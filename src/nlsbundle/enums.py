"""Enumerations for nlsbundle type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class PlaceholderPolicy(StrEnum):
    """Behavior when a template references an index beyond the supplied arguments.

    StrEnum provides automatic string conversion: str(PlaceholderPolicy.KEEP) == "keep"
    """

    KEEP = "keep"
    """Leave the placeholder token in the output and log a warning."""

    RAISE = "raise"
    """Raise PlaceholderIndexOutOfRangeError."""

    EMPTY = "empty"
    """Substitute the empty string and log a warning (Handlebars behavior)."""


class LoadStatus(StrEnum):
    """Outcome of loading one externally defined locale bundle.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Resource found and parsed."""

    NOT_FOUND = "not_found"
    """Resource does not exist for this locale."""

    ERROR = "error"
    """Resource exists but could not be read or parsed."""

    SKIPPED = "skipped"
    """No loader was supplied; the locale stays unloaded."""


__all__ = [
    "LoadStatus",
    "PlaceholderPolicy",
]
