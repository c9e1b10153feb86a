"""Diagnostic system for nlsbundle errors.

Provides structured error diagnostics with codes, spans and hints, the
exception hierarchy built on them, and validation result types.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode, SourceSpan
from .errors import (
    BundleDefinitionError,
    KeyNotFoundError,
    NlsError,
    NlsSyntaxError,
    PlaceholderIndexOutOfRangeError,
    RegistryFrozenError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate
from .validation import ValidationError, ValidationResult, ValidationWarning

__all__ = [
    "BundleDefinitionError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "KeyNotFoundError",
    "NlsError",
    "NlsSyntaxError",
    "OutputFormat",
    "PlaceholderIndexOutOfRangeError",
    "RegistryFrozenError",
    "SourceSpan",
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
]
