"""Diagnostic formatting service.

Centralizes diagnostic output formatting with configurable options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from .codes import Diagnostic

if TYPE_CHECKING:
    from .validation import ValidationResult

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    RUST = "rust"  # Compiler-style output (default)
    SIMPLE = "simple"  # Single-line format
    JSON = "json"  # JSON format for tooling integration


# Control characters other than tab are escaped before output.
_CONTROL_ESCAPES = {i: f"\\x{i:02x}" for i in range(32) if i != 9}
_CONTROL_ESCAPES[127] = "\\x7f"


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Formats Diagnostic objects into human-readable or machine-readable
    output. Message text from bundle sources is escaped so control
    characters cannot inject terminal sequences into CLI or log output.

    Attributes:
        output_format: Output style (rust, simple, json)
        sanitize: Truncate message text to max_content_length
        color: Enable ANSI color codes (for terminal output)
        max_content_length: Maximum message length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.root_bundle_missing()))
        ROOT_BUNDLE_MISSING: Bundle definition has no 'root' mapping
    """

    output_format: OutputFormat = OutputFormat.RUST
    sanitize: bool = False
    color: bool = False
    max_content_length: int = 100

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic string
        """
        match self.output_format:
            case OutputFormat.RUST:
                return self._format_rust(diagnostic)
            case OutputFormat.SIMPLE:
                return self._format_simple(diagnostic)
            case OutputFormat.JSON:
                return self._format_json(diagnostic)

    def format_all(self, diagnostics: Iterable[Diagnostic]) -> str:
        """Format multiple diagnostics separated by blank lines."""
        return "\n\n".join(self.format(d) for d in diagnostics)

    def format_validation_result(self, result: "ValidationResult") -> str:
        """Format a ValidationResult with summary, errors and warnings.

        Args:
            result: ValidationResult to format

        Returns:
            Formatted string with summary and details
        """
        if self.output_format is OutputFormat.JSON:
            return json.dumps(
                {
                    "valid": result.is_valid,
                    "errors": [
                        {
                            "code": e.code.name,
                            "message": self._maybe_sanitize(e.message),
                            "locale": e.locale,
                            "line": e.line,
                            "column": e.column,
                        }
                        for e in result.errors
                    ],
                    "warnings": [
                        {
                            "code": w.code.name,
                            "message": self._maybe_sanitize(w.message),
                            "locale": w.locale,
                            "message_key": w.message_key,
                        }
                        for w in result.warnings
                    ],
                },
                ensure_ascii=False,
            )

        parts: list[str] = []

        if result.is_valid:
            parts.append(f"Validation passed: {result.warning_count} warning(s)")
        else:
            parts.append(
                f"Validation failed: {result.error_count} error(s), "
                f"{result.warning_count} warning(s)"
            )

        if result.errors:
            parts.append("\nErrors:")
            parts.extend(f"  {self._clean(error.format())}" for error in result.errors)

        if result.warnings:
            parts.append("\nWarnings:")
            parts.extend(f"  {self._clean(warning.format())}" for warning in result.warnings)

        return "\n".join(parts)

    def _format_rust(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in compiler style.

        Example output:
            error[KEY_NOT_FOUND]: Message key 'x' not found for locale 'fr' (...)
              = locale: fr
              = help: Check that the key is defined in the root bundle
        """
        severity = diagnostic.severity if diagnostic.severity == "warning" else "error"

        if self.color:
            if severity == "error":
                severity_str = f"\033[1;31m{severity}\033[0m"  # Bold red
            else:
                severity_str = f"\033[1;33m{severity}\033[0m"  # Bold yellow
        else:
            severity_str = severity

        message = self._clean(diagnostic.message)
        parts = [f"{severity_str}[{diagnostic.code.name}]: {message}"]

        if diagnostic.span and diagnostic.source_path:
            parts.append(
                f"  --> {diagnostic.source_path}:{diagnostic.span.line}:{diagnostic.span.column}"
            )
        elif diagnostic.span:
            parts.append(f"  --> line {diagnostic.span.line}, column {diagnostic.span.column}")
        elif diagnostic.source_path:
            parts.append(f"  --> {diagnostic.source_path}")

        if diagnostic.locale:
            parts.append(f"  = locale: {diagnostic.locale}")

        if diagnostic.message_key:
            parts.append(f"  = key: {self._clean(diagnostic.message_key)}")

        if diagnostic.hint:
            parts.append(f"  = help: {self._clean(diagnostic.hint)}")

        return "\n".join(parts)

    def _format_simple(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic in single-line format.

        Example output:
            KEY_NOT_FOUND: Message key 'x' not found for locale 'fr' (...)
        """
        return f"{diagnostic.code.name}: {self._clean(diagnostic.message)}"

    def _format_json(self, diagnostic: Diagnostic) -> str:
        """Format diagnostic as JSON.

        Example output:
            {"code": "KEY_NOT_FOUND", "code_value": 1001, "message": "...", "severity": "error"}
        """
        data: dict[str, str | int | None] = {
            "code": diagnostic.code.name,
            "code_value": diagnostic.code.value,
            "message": self._maybe_sanitize(diagnostic.message),
            "severity": diagnostic.severity,
        }

        if diagnostic.span:
            data["line"] = diagnostic.span.line
            data["column"] = diagnostic.span.column
            data["start"] = diagnostic.span.start
            data["end"] = diagnostic.span.end

        if diagnostic.source_path:
            data["source_path"] = diagnostic.source_path

        if diagnostic.locale:
            data["locale"] = diagnostic.locale

        if diagnostic.message_key:
            data["message_key"] = diagnostic.message_key

        if diagnostic.hint:
            data["hint"] = self._maybe_sanitize(diagnostic.hint)

        return json.dumps(data, ensure_ascii=False)

    def _clean(self, text: str) -> str:
        """Escape control characters, then truncate if sanitizing."""
        return self._maybe_sanitize(text.translate(_CONTROL_ESCAPES))

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled.

        Args:
            text: Text to possibly truncate

        Returns:
            Original or truncated text
        """
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
