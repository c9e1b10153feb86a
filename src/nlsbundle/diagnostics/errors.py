"""nlsbundle exception hierarchy with structured diagnostics.

All exceptions optionally store a Diagnostic object for rich error
information. Each concrete error also derives from the closest builtin
exception so callers can catch LookupError, IndexError or ValueError
without importing this module.

Hierarchy:
    NlsError
    ├─ KeyNotFoundError (LookupError)
    ├─ PlaceholderIndexOutOfRangeError (IndexError)
    ├─ BundleDefinitionError (ValueError)
    │  └─ NlsSyntaxError
    └─ RegistryFrozenError (RuntimeError)

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from .codes import Diagnostic

__all__ = [
    "BundleDefinitionError",
    "KeyNotFoundError",
    "NlsError",
    "NlsSyntaxError",
    "PlaceholderIndexOutOfRangeError",
    "RegistryFrozenError",
]


class NlsError(Exception):
    """Base exception for all nlsbundle errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize NlsError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class KeyNotFoundError(NlsError, LookupError):
    """Message key absent from every bundle on the locale chain.

    Attributes:
        key: The message key that was looked up
        locale: The locale tag requested by the caller
        searched: Locale tags searched, in order
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        key: str = "",
        locale: str = "",
        searched: Sequence[str] = (),
    ) -> None:
        super().__init__(message)
        self.key = key
        self.locale = locale
        self.searched = tuple(searched)


class PlaceholderIndexOutOfRangeError(NlsError, IndexError):
    """Template references an argument index that was not supplied.

    Only raised under PlaceholderPolicy.RAISE.

    Attributes:
        key: Message key of the template
        index: Placeholder index referenced by the template
        arg_count: Number of arguments supplied
    """

    def __init__(
        self,
        message: str | Diagnostic,
        *,
        key: str = "",
        index: int = 0,
        arg_count: int = 0,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.index = index
        self.arg_count = arg_count


class BundleDefinitionError(NlsError, ValueError):
    """Malformed bundle definition detected at load time."""


class NlsSyntaxError(BundleDefinitionError):
    """Unparseable define({...}) module source.

    Attributes:
        line: Line number of the error (1-indexed, 0 if unknown)
        column: Column number of the error (1-indexed, 0 if unknown)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        super().__init__(message)
        span = self.diagnostic.span if self.diagnostic is not None else None
        self.line = span.line if span is not None else 0
        self.column = span.column if span is not None else 0


class RegistryFrozenError(NlsError, RuntimeError):
    """Attempt to register a bundle after the registry was frozen."""
