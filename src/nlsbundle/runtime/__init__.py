"""Runtime: bundles, registry and placeholder resolution.

Python 3.13+. External dependency: Babel (locale tag validation).
"""

from .bundle import MessageBundle
from .config import RegistryConfig
from .registry import BundleRegistry
from .resolver import TemplateResolver, coerce_args, stringify_argument

__all__ = [
    "BundleRegistry",
    "MessageBundle",
    "RegistryConfig",
    "TemplateResolver",
    "coerce_args",
    "stringify_argument",
]
