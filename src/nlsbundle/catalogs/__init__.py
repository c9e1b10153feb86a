"""Shipped message catalogs.

identity: messages of the identity service UI (users, groups,
organizations), as a master module with a French translation.

    >>> from nlsbundle.catalogs import load_identity_registry
    >>> registry = load_identity_registry()
    >>> registry.resolve("fr", "service:id:added-member", ["alice", "admins"])
    "L'utilisateur alice a été ajouté au groupe admins"

Python 3.13+.
"""

from __future__ import annotations

import logging

from nlsbundle.constants import DEFAULT_RESOURCE_ID, ROOT_LOCALE
from nlsbundle.localization.loading import PackageResourceLoader
from nlsbundle.runtime import BundleRegistry, RegistryConfig
from nlsbundle.syntax import NlsModuleParser

__all__ = ["IDENTITY_CATALOG", "identity_loader", "load_identity_registry"]

logger = logging.getLogger(__name__)

# Resource layout of the identity catalog inside this package.
IDENTITY_CATALOG: str = "identity/nls/{locale}"


def identity_loader() -> PackageResourceLoader:
    """Loader reading the identity catalog from installed package data."""
    return PackageResourceLoader(__name__, IDENTITY_CATALOG)


def load_identity_registry(
    config: RegistryConfig | None = None,
    *,
    include_translations: bool = True,
) -> BundleRegistry:
    """Build a frozen registry from the shipped identity catalog.

    Args:
        config: Registry configuration
        include_translations: Load the locales the master module flags true.
            When False only root is loaded and every locale falls back to it.

    Returns:
        Frozen BundleRegistry

    Raises:
        BundleDefinitionError: If the shipped master module is malformed
    """
    config = config if config is not None else RegistryConfig()
    loader = identity_loader()
    source = loader.load(ROOT_LOCALE, DEFAULT_RESOURCE_ID)
    module = NlsModuleParser(max_source_size=config.max_source_size).parse(
        source, source_path=loader.describe_path(ROOT_LOCALE, DEFAULT_RESOURCE_ID)
    )
    registry = BundleRegistry.from_definition(
        module, loader if include_translations else None, config=config
    )
    summary = registry.get_load_summary()
    if summary.has_errors:
        logger.warning("Identity catalog loaded with %d errors", summary.errors)
    return registry
