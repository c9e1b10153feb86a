"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the package and by user code
when annotating BundleRegistry call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "BundleDefinitionMapping",
    "LocaleTag",
    "MessageKey",
    "MessageTemplate",
    "ModuleSource",
    "ResourceId",
]

type MessageKey = str
"""Identifier for a message (e.g., 'login', 'service:id:group-parent')."""

type MessageTemplate = str
"""Raw message text, optionally with {{[n]}} placeholders."""

type LocaleTag = str
"""Locale tag (e.g., 'root', 'fr', 'fr-ca')."""

type ResourceId = str
"""Bundle module file name (e.g., 'messages.js')."""

type ModuleSource = str
"""Raw define({...}) module source text."""

type BundleDefinitionMapping = Mapping[LocaleTag, Mapping[MessageKey, MessageTemplate] | bool]
"""Nested bundle definition: {'root': {...}, 'fr': True}."""
