"""nlsbundle - RequireJS i18n message bundles for Python.

Loads nls message modules (define({root: {...}, fr: true})), resolves
keys along locale fallback chains (fr-ca -> fr -> root) and substitutes
positional {{[i]}} placeholders.

Public API:
    BundleRegistry - Locale -> bundle registry with fallback resolution
    MessageBundle - Single-locale immutable messages
    RegistryConfig - Registry-wide settings
    PlaceholderPolicy - Handling of placeholders without an argument
    parse_nls_module - Parse define({...}) source to NlsModule
    serialize_nls_module - Serialize NlsModule to canonical source
    parse_template - Parse message text to Template

Exceptions:
    NlsError - Base exception class
    KeyNotFoundError - Key absent from the whole locale chain
    PlaceholderIndexOutOfRangeError - Missing argument under RAISE policy
    BundleDefinitionError - Malformed definition, raised at load time
    NlsSyntaxError - Unparseable module source
    RegistryFrozenError - Registration after freeze()

Submodules:
    nlsbundle.syntax - Template and module parsers, AST, serializer
    nlsbundle.localization - Definitions, resource loaders, load tracking
    nlsbundle.validation - Cross-locale bundle validation
    nlsbundle.diagnostics - Error types and validation results
    nlsbundle.catalogs - Shipped message catalogs
"""

# Essential Public API - Minimal exports for clean namespace
from .diagnostics import (
    BundleDefinitionError,
    KeyNotFoundError,
    NlsError,
    NlsSyntaxError,
    PlaceholderIndexOutOfRangeError,
    RegistryFrozenError,
)
from .enums import PlaceholderPolicy
from .runtime import BundleRegistry, MessageBundle, RegistryConfig
from .syntax import parse_nls_module, parse_template, serialize_nls_module

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("nlsbundle")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BundleDefinitionError",
    "BundleRegistry",
    "KeyNotFoundError",
    "MessageBundle",
    "NlsError",
    "NlsSyntaxError",
    "PlaceholderIndexOutOfRangeError",
    "PlaceholderPolicy",
    "RegistryConfig",
    "RegistryFrozenError",
    "__version__",
    "parse_nls_module",
    "parse_template",
    "serialize_nls_module",
]
