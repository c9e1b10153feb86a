"""Bundle definition normalization.

Turns the nested mapping form

    {"root": {key: template, ...}, "<locale>": True | False | {...}}

(or a parsed master NlsModule) into a checked BundleDefinition. All
structural problems surface here as BundleDefinitionError, at startup,
before any lookup happens.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from nlsbundle.constants import ROOT_LOCALE
from nlsbundle.diagnostics import BundleDefinitionError, ErrorTemplate
from nlsbundle.locale_utils import normalize_locale
from nlsbundle.localization.types import LocaleTag, MessageKey, MessageTemplate
from nlsbundle.syntax import NlsModule

__all__ = ["BundleDefinition", "normalize_definition"]


@dataclass(frozen=True, slots=True)
class BundleDefinition:
    """Checked bundle definition.

    Attributes:
        root: Root messages
        inline: Locale bundles declared inline, by canonical tag
        external: Locales flagged true (defined in separate resources)
        disabled: Locales flagged false
    """

    root: Mapping[MessageKey, MessageTemplate]
    inline: Mapping[LocaleTag, Mapping[MessageKey, MessageTemplate]] = field(default_factory=dict)
    external: tuple[LocaleTag, ...] = ()
    disabled: tuple[LocaleTag, ...] = ()

    @property
    def locales(self) -> tuple[LocaleTag, ...]:
        """All declared non-root locales (inline and external), in declaration order."""
        return (*self.inline, *self.external)


def _check_messages(tag: str, messages: object) -> dict[str, str]:
    if not isinstance(messages, Mapping):
        raise BundleDefinitionError(ErrorTemplate.invalid_locale_value(tag, messages))
    checked: dict[str, str] = {}
    for key, value in messages.items():
        if not isinstance(key, str) or not key or not isinstance(value, str):
            raise BundleDefinitionError(ErrorTemplate.invalid_message_value(key, value, tag))
        checked[key] = value
    return checked


def _canonical_tag(tag: object) -> str:
    if not isinstance(tag, str):
        raise BundleDefinitionError(ErrorTemplate.invalid_locale_tag(tag, "not a string"))
    try:
        return normalize_locale(tag)
    except ValueError as e:
        raise BundleDefinitionError(ErrorTemplate.invalid_locale_tag(tag, str(e))) from e


def normalize_definition(definition: Mapping[str, object] | NlsModule) -> BundleDefinition:
    """Check and normalize a bundle definition.

    Args:
        definition: Nested mapping or parsed master module

    Returns:
        BundleDefinition with canonical locale tags

    Raises:
        BundleDefinitionError: If root is missing, a locale value is neither a
            boolean nor a mapping, a message is not a string, or two tags
            normalize to the same locale

    Example:
        >>> d = normalize_definition({"root": {"login": "Login"}, "fr": True})
        >>> d.external
        ('fr',)
    """
    if isinstance(definition, NlsModule):
        if not definition.is_master:
            raise BundleDefinitionError(ErrorTemplate.root_bundle_missing())
        definition = definition.to_definition()

    if not isinstance(definition, Mapping):
        raise BundleDefinitionError(ErrorTemplate.root_bundle_missing())

    root: dict[str, str] | None = None
    inline: dict[str, dict[str, str]] = {}
    external: list[str] = []
    disabled: list[str] = []
    seen: dict[str, object] = {}

    for raw_tag, value in definition.items():
        tag = _canonical_tag(raw_tag)
        if tag in seen:
            reason = f"duplicate of {seen[tag]!r}"
            raise BundleDefinitionError(ErrorTemplate.invalid_locale_tag(raw_tag, reason))
        seen[tag] = raw_tag

        if tag == ROOT_LOCALE:
            root = _check_messages(tag, value)
        elif isinstance(value, bool):
            (external if value else disabled).append(tag)
        else:
            inline[tag] = _check_messages(tag, value)

    if root is None:
        raise BundleDefinitionError(ErrorTemplate.root_bundle_missing())

    return BundleDefinition(
        root=root,
        inline=inline,
        external=tuple(external),
        disabled=tuple(disabled),
    )
