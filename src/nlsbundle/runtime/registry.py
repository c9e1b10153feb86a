"""BundleRegistry - locale tag to bundle mapping with fallback resolution.

Orchestrates one MessageBundle per locale and implements the lookup chain
(fr-ca -> fr -> root). The registry is built once at startup, through
register_locale() calls followed by freeze(), or in one step with
from_definition(); after freeze() it is read-only.

Initialization Behavior:
    from_definition() loads every locale flagged true through the supplied
    ResourceLoader at construction and records each attempt in a
    LoadSummary. FileNotFoundError and other load errors are captured in
    ResourceLoadResult objects (NOT_FOUND, ERROR) rather than raised; a
    locale that failed to load simply falls back to root at lookup time.
    Structural problems in the definition itself (missing root, bad tags,
    non-string messages) raise BundleDefinitionError immediately.

        registry = BundleRegistry.from_definition(definition, loader)
        summary = registry.get_load_summary()
        if summary.has_errors:
            raise RuntimeError(f"Failed to load {summary.errors} bundles")

Python 3.13+. External dependency: Babel (locale tag validation).
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Self

from nlsbundle.constants import DEFAULT_RESOURCE_ID, ROOT_LOCALE
from nlsbundle.diagnostics import (
    BundleDefinitionError,
    ErrorTemplate,
    KeyNotFoundError,
    RegistryFrozenError,
)
from nlsbundle.enums import LoadStatus
from nlsbundle.locale_utils import is_known_locale, locale_fallback_chain, normalize_locale
from nlsbundle.localization.definition import normalize_definition
from nlsbundle.localization.loading import (
    FallbackInfo,
    LoadSummary,
    ResourceLoader,
    ResourceLoadResult,
)
from nlsbundle.runtime.bundle import MessageBundle
from nlsbundle.runtime.config import RegistryConfig
from nlsbundle.runtime.resolver import TemplateResolver, coerce_args
from nlsbundle.syntax import NlsModuleParser, Template

if TYPE_CHECKING:
    from nlsbundle.syntax import NlsModule

__all__ = ["BundleRegistry"]

logger = logging.getLogger(__name__)

# Logging truncation limit for resolved strings in debug output.
_LOG_TRUNCATE_DEBUG: int = 50


class BundleRegistry:
    """Locale tag -> MessageBundle registry with per-key locale fallback.

    Architecture:
    - MessageBundle: immutable messages of a single locale
    - BundleRegistry: the set of bundles plus fallback resolution

    Thread Safety:
        register_locale() and freeze() are serialized by an internal lock.
        After freeze() the bundle table is a read-only mapping of immutable
        bundles, so resolve() needs no locking and may be called from any
        number of threads.

    Example - Building at startup:
        >>> registry = BundleRegistry()
        >>> registry.register_locale("root", {"login": "Login", "mail": "Mail"})
        >>> registry.register_locale("fr", {"login": "Identifiant"})
        >>> registry.freeze()
        >>> registry.resolve("fr", "login")
        'Identifiant'
        >>> registry.resolve("fr", "mail")  # Falls back to root
        'Mail'

    Example - From a definition:
        >>> registry = BundleRegistry.from_definition(
        ...     {"root": {"service:id:added-member": "User {{[0]}} has been added to group {{[1]}}"},
        ...      "fr": True}
        ... )
        >>> registry.resolve("fr", "service:id:added-member", ["alice", "admins"])
        'User alice has been added to group admins'
    """

    __slots__ = (
        "_bundles",
        "_config",
        "_declared",
        "_frozen",
        "_load_results",
        "_lock",
        "_on_fallback",
        "_resolver",
    )

    def __init__(
        self,
        *,
        config: RegistryConfig | None = None,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> None:
        """Initialize an empty, unfrozen registry.

        Args:
            config: Registry configuration (default: RegistryConfig())
            on_fallback: Optional callback invoked when a key resolves from a
                later locale in the chain than the requested one. Useful for
                spotting missing translations.
        """
        self._config = config if config is not None else RegistryConfig()
        self._on_fallback = on_fallback
        self._resolver = TemplateResolver(self._config.placeholder_policy)
        self._bundles: dict[str, MessageBundle] | MappingProxyType[str, MessageBundle] = {}
        self._declared: dict[str, bool] = {}
        self._load_results: list[ResourceLoadResult] = []
        self._lock = threading.Lock()
        self._frozen = False

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_definition(
        cls,
        definition: Mapping[str, object] | NlsModule,
        loader: ResourceLoader | None = None,
        *,
        config: RegistryConfig | None = None,
        resource_id: str = DEFAULT_RESOURCE_ID,
        on_fallback: Callable[[FallbackInfo], None] | None = None,
    ) -> Self:
        """Build a frozen registry from a bundle definition.

        Args:
            definition: Nested mapping ({"root": {...}, "fr": True}) or a parsed
                master module
            loader: Loader for locales flagged true (optional; without one they
                stay unloaded and fall back to root)
            config: Registry configuration
            resource_id: Module file name passed to the loader
            on_fallback: Fallback callback (see __init__)

        Returns:
            Frozen registry

        Raises:
            BundleDefinitionError: If the definition is malformed or declares a
                locale tag unknown to CLDR (when config.validate_locales)
        """
        checked = normalize_definition(definition)
        registry = cls(config=config, on_fallback=on_fallback)
        registry.register_locale(ROOT_LOCALE, checked.root)

        for tag, messages in checked.inline.items():
            registry.register_locale(tag, messages)
        for tag in checked.disabled:
            registry.declare_locale(tag, available=False)

        for tag in checked.external:
            registry.declare_locale(tag)
            if loader is None:
                logger.info("No loader supplied; locale '%s' stays unloaded", tag)
                registry._load_results.append(
                    ResourceLoadResult(
                        locale=tag, resource_id=resource_id, status=LoadStatus.SKIPPED
                    )
                )
                continue
            registry._load_results.append(registry._load_external(tag, loader, resource_id))

        return registry.freeze()

    def _load_external(
        self, tag: str, loader: ResourceLoader, resource_id: str
    ) -> ResourceLoadResult:
        """Load, parse and register one external locale module."""
        source_path = loader.describe_path(tag, resource_id)
        parser = NlsModuleParser(max_source_size=self._config.max_source_size)
        try:
            source = loader.load(tag, resource_id)
            module = parser.parse(source, source_path=source_path)
            if module.is_master:
                raise BundleDefinitionError(
                    ErrorTemplate.unexpected_master_module(tag, source_path)
                )
            bundle = self.register_locale(tag, MessageBundle.from_module(tag, module))
        except FileNotFoundError:
            logger.warning("Bundle for locale '%s' not found: %s", tag, source_path)
            return ResourceLoadResult(
                locale=tag,
                resource_id=resource_id,
                status=LoadStatus.NOT_FOUND,
                source_path=source_path,
            )
        except (OSError, ValueError) as e:
            # Permission errors, path traversal, syntax and definition errors
            logger.error("Failed to load bundle %s: %s", source_path, e)
            return ResourceLoadResult(
                locale=tag,
                resource_id=resource_id,
                status=LoadStatus.ERROR,
                error=e,
                source_path=source_path,
            )
        logger.info("Loaded bundle %s: %d messages", source_path, len(bundle))
        return ResourceLoadResult(
            locale=tag,
            resource_id=resource_id,
            status=LoadStatus.SUCCESS,
            source_path=source_path,
            message_count=len(bundle),
        )

    def _canonical_tag(self, tag: str) -> str:
        """Normalize and (optionally) CLDR-validate a tag for registration."""
        try:
            canonical = normalize_locale(tag)
        except (AttributeError, ValueError) as e:
            raise BundleDefinitionError(ErrorTemplate.invalid_locale_tag(tag, str(e))) from e
        if self._config.validate_locales and not is_known_locale(canonical):
            raise BundleDefinitionError(
                ErrorTemplate.invalid_locale_tag(tag, "unknown to CLDR")
            )
        return canonical

    def register_locale(
        self, tag: str, bundle: MessageBundle | Mapping[str, str]
    ) -> MessageBundle:
        """Insert a locale bundle. Startup only.

        Registering a tag again layers the new messages over the existing
        bundle.

        Args:
            tag: Locale tag ("root" for the default bundle)
            bundle: MessageBundle or key -> template text mapping

        Returns:
            The bundle now registered for the tag

        Raises:
            RegistryFrozenError: If freeze() was already called
            BundleDefinitionError: If the tag or messages are malformed, or
                orphan keys are rejected by config
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(ErrorTemplate.registry_frozen(str(tag)))
            canonical = self._canonical_tag(tag)

            if isinstance(bundle, MessageBundle):
                incoming = bundle if bundle.locale == canonical else MessageBundle(
                    canonical, bundle.messages()
                )
            else:
                incoming = MessageBundle(canonical, bundle)

            if self._config.reject_orphans and canonical != ROOT_LOCALE:
                self._check_orphans(canonical, incoming)

            existing = self._bundles.get(canonical)
            registered = existing.merged(incoming) if existing is not None else incoming
            self._bundles[canonical] = registered  # type: ignore[index]
            self._declared[canonical] = True

        logger.debug("Registered locale '%s': %d messages", canonical, len(registered))
        return registered

    def _check_orphans(self, tag: str, bundle: MessageBundle) -> None:
        root = self._bundles.get(ROOT_LOCALE)
        if root is None:
            raise BundleDefinitionError(ErrorTemplate.root_bundle_missing())
        orphans = root.missing_keys(bundle)
        if orphans:
            raise BundleDefinitionError(ErrorTemplate.orphan_keys_rejected(tag, sorted(orphans)))

    def declare_locale(self, tag: str, *, available: bool = True) -> None:
        """Record a locale declared in a definition without registering messages.

        Locales declared available but never registered are reported by
        validation as not loaded.

        Raises:
            RegistryFrozenError: If freeze() was already called
            BundleDefinitionError: If the tag is malformed
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError(ErrorTemplate.registry_frozen(str(tag)))
            canonical = self._canonical_tag(tag)
            self._declared.setdefault(canonical, available)

    def freeze(self) -> Self:
        """Make the registry read-only. Idempotent.

        Returns:
            self, for chaining
        """
        with self._lock:
            if self._frozen:
                return self
            self._bundles = MappingProxyType(dict(self._bundles))
            self._frozen = True

        if ROOT_LOCALE not in self._bundles:
            logger.warning("Registry frozen without a root bundle; every lookup will fail")
        logger.info(
            "BundleRegistry frozen: locales=%s, placeholder_policy=%s",
            ", ".join(self._bundles),
            self._config.placeholder_policy,
        )
        return self

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def config(self) -> RegistryConfig:
        """Get registry configuration (read-only)."""
        return self._config

    @property
    def is_frozen(self) -> bool:
        """Check whether freeze() has been called."""
        return self._frozen

    @property
    def locales(self) -> tuple[str, ...]:
        """Tags with a registered bundle, root first then registration order."""
        tags = list(self._bundles)
        if ROOT_LOCALE in tags:
            tags.remove(ROOT_LOCALE)
            tags.insert(0, ROOT_LOCALE)
        return tuple(tags)

    @property
    def declared_locales(self) -> Mapping[str, bool]:
        """Every declared tag with its availability flag."""
        return MappingProxyType(dict(self._declared))

    @property
    def unloaded_locales(self) -> tuple[str, ...]:
        """Tags declared available that have no registered bundle."""
        return tuple(
            tag for tag, available in self._declared.items()
            if available and tag not in self._bundles
        )

    def get_bundle(self, tag: str) -> MessageBundle | None:
        """Get the bundle registered for tag, or None."""
        try:
            return self._bundles.get(normalize_locale(tag))
        except (AttributeError, TypeError, ValueError):
            return None

    def get_load_summary(self) -> LoadSummary:
        """Get summary of external locale load attempts from from_definition().

        Bundles added with register_locale() are not included.
        """
        return LoadSummary(results=tuple(self._load_results))

    def _chain(self, locale: str) -> tuple[str, ...]:
        try:
            return locale_fallback_chain(locale)
        except (AttributeError, TypeError, ValueError):
            logger.warning("Invalid locale %r requested; using root", locale)
            return (ROOT_LOCALE,)

    def keys(self, locale: str = ROOT_LOCALE) -> frozenset[str]:
        """All keys resolvable for locale (union over its fallback chain)."""
        keys: set[str] = set()
        for tag in self._chain(locale):
            bundle = self._bundles.get(tag)
            if bundle is not None:
                keys.update(bundle)
        return frozenset(keys)

    def has_message(self, locale: str, key: str) -> bool:
        """Check whether key resolves for locale."""
        return any(
            key in bundle
            for tag in self._chain(locale)
            if (bundle := self._bundles.get(tag)) is not None
        )

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def find_template(self, locale: str, key: str) -> tuple[str, Template]:
        """Find the template that resolve() would use.

        Returns:
            (resolved locale tag, template)

        Raises:
            KeyNotFoundError: If key is absent from every bundle on the chain
        """
        chain = self._chain(locale)
        if not isinstance(key, str) or not key:
            raise KeyNotFoundError(
                ErrorTemplate.invalid_key(key), key=str(key), locale=chain[0], searched=chain
            )

        for tag in chain:
            bundle = self._bundles.get(tag)
            if bundle is None:
                continue
            template = bundle.get(key)
            if template is not None:
                if tag != chain[0] and self._on_fallback is not None:
                    self._on_fallback(FallbackInfo(chain[0], tag, key))
                return tag, template

        logger.warning("Message key %r not found for locale '%s'", key, chain[0])
        raise KeyNotFoundError(
            ErrorTemplate.key_not_found(key, chain[0], chain),
            key=key,
            locale=chain[0],
            searched=chain,
        )

    def resolve(self, locale: str, key: str, args: Iterable[object] | None = None) -> str:
        """Resolve a key and positional arguments into a display string.

        Looks the key up along the locale's fallback chain (e.g. fr-ca, fr,
        root), then substitutes each {{[i]}} with str(args[i]).

        Args:
            locale: Locale tag; an invalid tag resolves against root
            key: Message key
            args: Positional substitution arguments

        Returns:
            Fully substituted string

        Raises:
            KeyNotFoundError: If key is absent from every bundle on the chain
            PlaceholderIndexOutOfRangeError: Under PlaceholderPolicy.RAISE, if a
                placeholder index is >= len(args)
            TypeError: If args is a string or not iterable

        Example:
            >>> registry.resolve("root", "service:id:removed-member", ["bob", "admins"])
            'User bob has been removed from group admins'
        """
        resolved_locale, template = self.find_template(locale, key)
        result = self._resolver.resolve(key, template, coerce_args(key, args))
        logger.debug(
            "Resolved message '%s' (%s): %r", key, resolved_locale, result[:_LOG_TRUNCATE_DEBUG]
        )
        return result

    def __repr__(self) -> str:
        return (
            f"BundleRegistry(locales={list(self.locales)!r}, frozen={self._frozen}, "
            f"placeholder_policy={self._config.placeholder_policy!s})"
        )
