"""Registry configuration.

Provides a single frozen dataclass that encapsulates every registry-wide
setting, so BundleRegistry, the loaders and the CLI share one typed object.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from nlsbundle.constants import MAX_SOURCE_SIZE
from nlsbundle.enums import PlaceholderPolicy

__all__ = ["RegistryConfig"]


@dataclass(frozen=True, slots=True)
class RegistryConfig:
    """Immutable configuration for BundleRegistry.

    All fields have sensible defaults; ``RegistryConfig()`` is a usable
    configuration.

    Attributes:
        placeholder_policy: What to do when a template references an argument
            index that was not supplied (default: KEEP the token and log a
            warning).
        validate_locales: Reject locale tags unknown to CLDR at registration
            (default: True). "root" is always accepted.
        reject_orphans: Reject locale bundles defining keys the root bundle
            lacks (default: False; orphans are reported by validation instead).
        max_source_size: Maximum module source size in characters for loaded
            resources (default: 1 MB). 0 disables the limit.

    Example:
        >>> config = RegistryConfig(placeholder_policy=PlaceholderPolicy.RAISE)
        >>> registry = BundleRegistry(config=config)
        >>> registry.config.placeholder_policy
        <PlaceholderPolicy.RAISE: 'raise'>
    """

    placeholder_policy: PlaceholderPolicy = PlaceholderPolicy.KEEP
    validate_locales: bool = True
    reject_orphans: bool = False
    max_source_size: int = MAX_SOURCE_SIZE

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_source_size is negative or placeholder_policy
                is not a known policy name.
        """
        if self.max_source_size < 0:
            msg = "max_source_size must be non-negative"
            raise ValueError(msg)
        # Accept plain strings ("raise") from config files and CLI options.
        object.__setattr__(self, "placeholder_policy", PlaceholderPolicy(self.placeholder_policy))
