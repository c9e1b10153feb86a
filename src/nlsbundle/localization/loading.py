"""Resource loading infrastructure for BundleRegistry.

Provides the protocol for nls module loaders, filesystem and package-data
implementations with path-traversal protection, and result/summary data
structures for tracking load attempts.

Components:
    ResourceLoader - Protocol for loading module sources (structural typing)
    PathResourceLoader - Disk-based loader with path-traversal prevention
    PackageResourceLoader - Loader for modules shipped as package data
    FallbackInfo - Immutable record of a locale fallback event
    ResourceLoadResult - Immutable result of a single resource load attempt
    LoadSummary - Immutable aggregate of all load results from construction

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Protocol

from nlsbundle.constants import ROOT_LOCALE
from nlsbundle.enums import LoadStatus
from nlsbundle.localization.types import LocaleTag, ModuleSource, ResourceId

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocol
    "ResourceLoader",
    # Concrete loaders
    "PathResourceLoader",
    "PackageResourceLoader",
    # Fallback observability
    "FallbackInfo",
    # Load result types
    "ResourceLoadResult",
    "LoadSummary",
]


class ResourceLoader(Protocol):
    """Protocol for loading nls module sources for specific locales.

    Implementations must provide a load() method that retrieves module
    source for a given locale and resource identifier. The root locale
    ("root") addresses the master module.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom loaders.

    Example:
        >>> class DictLoader:
        ...     def __init__(self, sources):
        ...         self.sources = sources
        ...     def load(self, locale, resource_id):
        ...         try:
        ...             return self.sources[locale]
        ...         except KeyError:
        ...             raise FileNotFoundError(locale) from None
        ...     def describe_path(self, locale, resource_id):
        ...         return f"{locale}/{resource_id}"
    """

    def load(self, locale: LocaleTag, resource_id: ResourceId) -> ModuleSource:
        """Load module source for given locale.

        Args:
            locale: Canonical locale tag (e.g., 'root', 'fr', 'fr-ca')
            resource_id: Module file name (e.g., 'messages.js')

        Returns:
            Module source code as string

        Raises:
            FileNotFoundError: If resource doesn't exist for this locale
            OSError: If the resource cannot be read
        """

    def describe_path(self, locale: LocaleTag, resource_id: ResourceId) -> str:
        """Return human-readable path for diagnostics."""
        return f"{locale}/{resource_id}"


def _validate_locale(locale: LocaleTag) -> None:
    """Validate locale tag for path traversal attacks.

    Raises:
        ValueError: If locale contains unsafe path components
    """
    if not locale:
        msg = "Locale code cannot be empty"
        raise ValueError(msg)
    if ".." in locale:
        msg = f"Path traversal sequences not allowed in locale: '{locale}'"
        raise ValueError(msg)
    if "/" in locale or "\\" in locale:
        msg = f"Path separators not allowed in locale: '{locale}'"
        raise ValueError(msg)


def _validate_resource_id(resource_id: ResourceId) -> None:
    """Validate resource_id for path traversal attacks and whitespace.

    Raises:
        ValueError: If resource_id contains unsafe path components or
            leading/trailing whitespace
    """
    stripped = resource_id.strip()
    if stripped != resource_id:
        msg = f"Resource ID contains leading/trailing whitespace: {resource_id!r}"
        raise ValueError(msg)
    if not resource_id:
        msg = "Resource ID cannot be empty"
        raise ValueError(msg)
    if Path(resource_id).is_absolute() or resource_id.startswith(("/", "\\")):
        msg = f"Absolute paths not allowed in resource_id: '{resource_id}'"
        raise ValueError(msg)
    if ".." in resource_id:
        msg = f"Path traversal sequences not allowed in resource_id: '{resource_id}'"
        raise ValueError(msg)


def _locale_dir(base_path: str, locale: LocaleTag) -> str:
    """Substitute the locale into a path template.

    The root module lives in the template directory itself:
    "nls/{locale}" gives "nls" for root and "nls/fr" for French.
    """
    if locale == ROOT_LOCALE:
        return base_path.replace("/{locale}", "").replace("{locale}", "") or "."
    return base_path.replace("{locale}", locale)


@dataclass(frozen=True, slots=True)
class PathResourceLoader:
    """File system resource loader using path templates.

    Implements ResourceLoader for the RequireJS nls layout:

        nls/messages.js      (master module, locale "root")
        nls/fr/messages.js   (French module)

    Security:
        Locale tags containing path separators or ".." are rejected.
        Resource IDs containing ".." or absolute paths are rejected.
        All resolved paths are validated against a fixed root directory.

    Example:
        >>> loader = PathResourceLoader("webjars/service/id/nls/{locale}")
        >>> source = loader.load("fr", "messages.js")
        # Loads from: webjars/service/id/nls/fr/messages.js

    Attributes:
        base_path: Path template with {locale} placeholder
        root_dir: Fixed root directory for path traversal validation.
                  Defaults to the static prefix of base_path.
    """

    base_path: str
    root_dir: str | None = None
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory and validate template.

        Raises:
            ValueError: If base_path does not contain {locale} placeholder
        """
        if "{locale}" not in self.base_path:
            msg = (
                f"base_path must contain '{{locale}}' placeholder for locale substitution, "
                f"got: '{self.base_path}'"
            )
            raise ValueError(msg)

        if self.root_dir is not None:
            resolved = Path(self.root_dir).resolve()
        else:
            static_prefix = self.base_path.split("{locale}")[0].rstrip("/\\")
            resolved = Path(static_prefix).resolve() if static_prefix else Path.cwd().resolve()
        object.__setattr__(self, "_resolved_root", resolved)

    def describe_path(self, locale: LocaleTag, resource_id: ResourceId) -> str:
        """Return the locale-substituted path of the resource."""
        return f"{_locale_dir(self.base_path, locale)}/{resource_id}"

    def load(self, locale: LocaleTag, resource_id: ResourceId) -> ModuleSource:
        """Load module source from disk.

        Raises:
            ValueError: If locale or resource_id contains path traversal sequences
            FileNotFoundError: If file doesn't exist
            OSError: If file cannot be read
        """
        _validate_locale(locale)
        _validate_resource_id(resource_id)

        full_path = (Path(_locale_dir(self.base_path, locale)) / resource_id).resolve()
        if not full_path.is_relative_to(self._resolved_root):
            msg = (
                f"Path traversal detected: resolved path escapes root directory. "
                f"locale='{locale}', resource_id='{resource_id}'"
            )
            raise ValueError(msg)

        return full_path.read_text(encoding="utf-8")


@dataclass(frozen=True, slots=True)
class PackageResourceLoader:
    """Loader for nls modules shipped inside an installed package.

    Example:
        >>> loader = PackageResourceLoader("nlsbundle.catalogs", "identity/nls/{locale}")
        >>> source = loader.load("root", "messages.js")

    Attributes:
        package: Importable package name holding the resources
        base_path: Path template (relative to the package) with {locale}
    """

    package: str
    base_path: str = "nls/{locale}"

    def __post_init__(self) -> None:
        if "{locale}" not in self.base_path:
            msg = f"base_path must contain '{{locale}}' placeholder, got: '{self.base_path}'"
            raise ValueError(msg)
        if ".." in self.base_path or self.base_path.startswith(("/", "\\")):
            msg = f"base_path must be relative to the package, got: '{self.base_path}'"
            raise ValueError(msg)

    def describe_path(self, locale: LocaleTag, resource_id: ResourceId) -> str:
        """Return the package-qualified path of the resource."""
        return f"{self.package}:{_locale_dir(self.base_path, locale)}/{resource_id}"

    def load(self, locale: LocaleTag, resource_id: ResourceId) -> ModuleSource:
        """Load module source from package data.

        Raises:
            ValueError: If locale or resource_id contains path traversal sequences
            FileNotFoundError: If the resource is not shipped
        """
        _validate_locale(locale)
        _validate_resource_id(resource_id)

        target = resources.files(self.package)
        for part in _locale_dir(self.base_path, locale).split("/"):
            if part and part != ".":
                target = target.joinpath(part)
        target = target.joinpath(resource_id)
        if not target.is_file():
            raise FileNotFoundError(self.describe_path(locale, resource_id))
        return target.read_text(encoding="utf-8")


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when BundleRegistry resolves a key
    from a later locale in the chain than the one requested.

    Attributes:
        requested_locale: Canonical tag requested by the caller
        resolved_locale: The locale that actually contained the key
        message_key: The key that was resolved

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"{info.message_key}: {info.requested_locale} -> {info.resolved_locale}")
        >>> registry = BundleRegistry(on_fallback=log_fallback)
    """

    requested_locale: LocaleTag
    resolved_locale: LocaleTag
    message_key: str


@dataclass(frozen=True, slots=True)
class ResourceLoadResult:
    """Result of loading one external locale module.

    Attributes:
        locale: Locale tag of the resource
        resource_id: Resource identifier (e.g., 'messages.js')
        status: Load status
        error: Exception if status is ERROR, None otherwise
        source_path: Human-readable path to resource (if available)
        message_count: Number of messages loaded (SUCCESS only)
    """

    locale: LocaleTag
    resource_id: ResourceId
    status: LoadStatus
    error: Exception | None = None
    source_path: str | None = None
    message_count: int = 0

    @property
    def is_success(self) -> bool:
        """Check if resource loaded successfully."""
        return self.status == LoadStatus.SUCCESS

    @property
    def is_not_found(self) -> bool:
        """Check if resource was not found."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if resource load failed with an error."""
        return self.status == LoadStatus.ERROR

    @property
    def is_skipped(self) -> bool:
        """Check if loading was skipped (no loader supplied)."""
        return self.status == LoadStatus.SKIPPED


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of resource load results from registry construction.

    Attributes:
        results: All individual load results

    Example:
        >>> registry = BundleRegistry.from_definition(definition, loader)
        >>> summary = registry.get_load_summary()
        >>> for result in summary.get_errors():
        ...     print(f"Failed: {result.source_path}: {result.error}")
    """

    results: tuple[ResourceLoadResult, ...]

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors}, "
            f"skipped={self.skipped})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of successful loads."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def not_found(self) -> int:
        """Number of resources not found."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    @property
    def skipped(self) -> int:
        """Number of locales left unloaded for lack of a loader."""
        return sum(1 for r in self.results if r.is_skipped)

    def get_errors(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[ResourceLoadResult, ...]:
        """Get all results where resource was not found."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[ResourceLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_locale(self, locale: LocaleTag) -> tuple[ResourceLoadResult, ...]:
        """Get all results for a specific locale."""
        return tuple(r for r in self.results if r.locale == locale)

    @property
    def has_errors(self) -> bool:
        """Check if any resources failed to load with errors."""
        return self.errors > 0

    @property
    def all_successful(self) -> bool:
        """Check if every attempted resource loaded (no errors, none missing or skipped)."""
        return self.successful == self.total_attempted
