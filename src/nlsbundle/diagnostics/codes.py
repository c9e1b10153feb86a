"""Diagnostic codes and data structures.

Defines error codes, source spans, and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
    "SourceSpan",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Lookup errors (missing keys, unavailable locales)
        2000-2999: Resolution errors (placeholder substitution)
        3000-3999: Syntax errors (define({...}) module parsing)
        4000-4999: Definition errors (malformed bundle definitions)
        5000-5099: Registry state errors
        5100-5199: Validation warnings (cross-locale checks)
    """

    # Lookup errors (1000-1999)
    KEY_NOT_FOUND = 1001
    INVALID_KEY = 1002

    # Resolution errors (2000-2999)
    PLACEHOLDER_INDEX_OUT_OF_RANGE = 2001
    INVALID_ARGUMENTS = 2002

    # Syntax errors (3000-3999)
    UNEXPECTED_EOF = 3001
    UNEXPECTED_CHARACTER = 3002
    UNTERMINATED_STRING = 3003
    INVALID_ESCAPE = 3004
    NESTING_DEPTH_EXCEEDED = 3005
    MISSING_DEFINE = 3006

    # Definition errors (4000-4999)
    ROOT_BUNDLE_MISSING = 4001
    INVALID_LOCALE_TAG = 4002
    INVALID_MESSAGE_VALUE = 4003
    INVALID_LOCALE_VALUE = 4004
    SOURCE_TOO_LARGE = 4005
    ORPHAN_KEYS_REJECTED = 4006
    DUPLICATE_KEY = 4007

    # Registry state errors (5000-5099)
    REGISTRY_FROZEN = 5001

    # Validation warnings (5100-5199)
    VALIDATION_ORPHAN_KEY = 5101
    VALIDATION_PLACEHOLDER_MISMATCH = 5102
    VALIDATION_LOCALE_NOT_LOADED = 5103
    VALIDATION_MISSING_TRANSLATION = 5104
    VALIDATION_EMPTY_MESSAGE = 5105


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Source code location for error reporting.

    Attributes:
        start: Starting character offset (0-indexed)
        end: Ending character offset (exclusive)
        line: Line number (1-indexed)
        column: Column number (1-indexed)
    """

    start: int
    end: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate SourceSpan invariants.

        Raises:
            ValueError: If start is negative, end precedes start, or line/column
                is less than 1.
        """
        if self.start < 0:
            msg = f"SourceSpan.start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"SourceSpan.end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)
        if self.line < 1:
            msg = f"SourceSpan.line must be >= 1 (1-indexed), got {self.line}"
            raise ValueError(msg)
        if self.column < 1:
            msg = f"SourceSpan.column must be >= 1 (1-indexed), got {self.column}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Provides error information for both humans (CLI output, logs) and
    tools (JSON output).

    Attributes:
        code: Unique error code
        message: Human-readable error description
        span: Source location (None for lookup errors)
        hint: Suggestion for fixing the error
        locale: Locale tag involved (if any)
        message_key: Message key involved (if any)
        source_path: Resource path involved (if any)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    span: SourceSpan | None = None
    hint: str | None = None
    locale: str | None = None
    message_key: str | None = None
    source_path: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[KEY_NOT_FOUND]: Message key 'nope' not found for locale 'fr'
              = locale: fr
              = help: Check that the key is defined in the root bundle

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
