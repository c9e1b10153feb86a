"""Localization package: definitions, loaders and load tracking.

Submodules:
    types      - PEP 695 type aliases (MessageKey, LocaleTag, ResourceId, ...)
    definition - BundleDefinition and normalize_definition()
    loading    - ResourceLoader protocol, PathResourceLoader,
                 PackageResourceLoader, FallbackInfo, ResourceLoadResult,
                 LoadSummary

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from nlsbundle.enums import LoadStatus
from nlsbundle.localization.definition import BundleDefinition, normalize_definition
from nlsbundle.localization.loading import (
    FallbackInfo,
    LoadSummary,
    PackageResourceLoader,
    PathResourceLoader,
    ResourceLoader,
    ResourceLoadResult,
)
from nlsbundle.localization.types import (
    BundleDefinitionMapping,
    LocaleTag,
    MessageKey,
    MessageTemplate,
    ModuleSource,
    ResourceId,
)

__all__ = [
    # Definitions
    "BundleDefinition",
    "normalize_definition",
    # Loader protocol and implementations
    "ResourceLoader",
    "PathResourceLoader",
    "PackageResourceLoader",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "ResourceLoadResult",
    # Fallback observability
    "FallbackInfo",
    # Type aliases for user code type annotations
    "BundleDefinitionMapping",
    "LocaleTag",
    "MessageKey",
    "MessageTemplate",
    "ModuleSource",
    "ResourceId",
]
