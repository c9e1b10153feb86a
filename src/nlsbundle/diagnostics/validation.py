"""Validation result types for bundle definition checks.

Consolidates feedback from the two validation stages:
- Structural: Unparseable modules, malformed definitions (errors)
- Cross-locale: Orphan keys, placeholder mismatches, unloaded locales (warnings)

Python 3.13+.
"""

from dataclasses import dataclass

from .codes import DiagnosticCode

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
]


# ============================================================================
# VALIDATION ERROR & WARNING TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class ValidationError:
    """Structural error that prevents a bundle from loading.

    Attributes:
        code: Diagnostic code
        message: Human-readable error message
        locale: Locale tag involved (optional)
        line: Line number where error occurred (1-indexed, optional)
        column: Column number where error occurred (1-indexed, optional)
    """

    code: DiagnosticCode
    message: str
    locale: str | None = None
    line: int | None = None
    column: int | None = None

    def format(self) -> str:
        """Format error as human-readable string."""
        location = ""
        if self.line is not None:
            location = f" at line {self.line}"
            if self.column is not None:
                location += f", column {self.column}"
        where = f" ({self.locale})" if self.locale else ""
        return f"[{self.code.name}]{where}{location}: {self.message}"


@dataclass(frozen=True, slots=True)
class ValidationWarning:
    """Cross-locale consistency warning.

    Attributes:
        code: Diagnostic code
        message: Human-readable warning message
        locale: Locale tag involved (optional)
        message_key: Message key involved (optional)
    """

    code: DiagnosticCode
    message: str
    locale: str | None = None
    message_key: str | None = None

    def format(self) -> str:
        """Format warning as human-readable string."""
        where = f" ({self.locale})" if self.locale else ""
        return f"[{self.code.name}]{where}: {self.message}"


# ============================================================================
# UNIFIED VALIDATION RESULT
# ============================================================================


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Immutable validation result.

    Attributes:
        errors: Structural errors
        warnings: Cross-locale warnings

    Example:
        >>> result = ValidationResult.valid()
        >>> result.is_valid
        True
        >>> result.error_count
        0
    """

    errors: tuple[ValidationError, ...]
    warnings: tuple[ValidationWarning, ...]

    @property
    def is_valid(self) -> bool:
        """Check if validation passed. Warnings do not affect validity."""
        return len(self.errors) == 0

    @property
    def error_count(self) -> int:
        """Get number of errors."""
        return len(self.errors)

    @property
    def warning_count(self) -> int:
        """Get number of warnings."""
        return len(self.warnings)

    def warnings_for(self, code: DiagnosticCode) -> tuple[ValidationWarning, ...]:
        """Get warnings with the given code."""
        return tuple(w for w in self.warnings if w.code is code)

    @staticmethod
    def valid() -> "ValidationResult":
        """Create a valid result with no errors or warnings."""
        return ValidationResult(errors=(), warnings=())

    @staticmethod
    def invalid(
        errors: tuple[ValidationError, ...] = (),
        warnings: tuple[ValidationWarning, ...] = (),
    ) -> "ValidationResult":
        """Create a result from errors and warnings.

        Args:
            errors: Structural errors
            warnings: Cross-locale warnings

        Returns:
            ValidationResult with the provided errors and warnings
        """
        return ValidationResult(errors=errors, warnings=warnings)
