"""Validation utilities for nls bundles.

Standalone cross-locale checks, separated from BundleRegistry so lookups
stay free of validation cost.

Python 3.13+.
"""

from nlsbundle.validation.resource import (
    validate_definition,
    validate_registry,
)

__all__ = [
    "validate_definition",
    "validate_registry",
]
