"""MessageBundle - immutable messages of one locale.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from nlsbundle.diagnostics import BundleDefinitionError, ErrorTemplate, KeyNotFoundError
from nlsbundle.enums import PlaceholderPolicy
from nlsbundle.locale_utils import normalize_locale
from nlsbundle.runtime.resolver import TemplateResolver, coerce_args
from nlsbundle.syntax import Template, parse_template

if TYPE_CHECKING:
    from nlsbundle.syntax import NlsModule

__all__ = ["MessageBundle"]

logger = logging.getLogger(__name__)

# Logging truncation limit for message values in debug output.
_LOG_TRUNCATE_DEBUG: int = 50


class MessageBundle:
    """Immutable mapping from message keys to parsed templates for one locale.

    Templates are parsed once at construction; a malformed definition (a
    non-string key or value) fails here, never at lookup time.

    Thread Safety:
        Instances are immutable after construction and safe to share
        between threads without locking.

    Examples:
        >>> bundle = MessageBundle("root", {
        ...     "login": "Login",
        ...     "service:id:added-member": "User {{[0]}} has been added to group {{[1]}}",
        ... })
        >>> bundle.format("login")
        'Login'
        >>> bundle.format("service:id:added-member", ["alice", "admins"])
        'User alice has been added to group admins'
        >>> bundle.placeholder_arity("service:id:added-member")
        2
    """

    __slots__ = ("_locale", "_templates")

    def __init__(self, locale: str, messages: Mapping[str, str] | None = None, /) -> None:
        """Initialize bundle for locale.

        Args:
            locale: Locale tag (normalized to lowercase hyphen form) [positional-only]
            messages: Message key -> template text mapping [positional-only]

        Raises:
            BundleDefinitionError: If the tag is malformed, messages is not a
                mapping, or a key/value is not a string
        """
        try:
            self._locale = normalize_locale(locale)
        except (AttributeError, ValueError) as e:
            raise BundleDefinitionError(ErrorTemplate.invalid_locale_tag(locale, str(e))) from e

        if messages is None:
            messages = {}
        if not isinstance(messages, Mapping):
            raise BundleDefinitionError(ErrorTemplate.invalid_locale_value(self._locale, messages))

        templates: dict[str, Template] = {}
        for key, value in messages.items():
            if not isinstance(key, str) or not key or not isinstance(value, str):
                raise BundleDefinitionError(
                    ErrorTemplate.invalid_message_value(key, value, self._locale)
                )
            templates[key] = parse_template(value)
        self._templates: Mapping[str, Template] = MappingProxyType(templates)

    @classmethod
    def from_mapping(cls, locale: str, mapping: Mapping[str, str]) -> MessageBundle:
        """Create a bundle from a key -> template text mapping."""
        return cls(locale, mapping)

    @classmethod
    def from_module(cls, locale: str, module: NlsModule) -> MessageBundle:
        """Create a bundle from a parsed module's entries.

        For a master module this is the root bundle; for a locale module it
        is the flat message mapping.
        """
        return cls(locale, module.messages())

    @property
    def locale(self) -> str:
        """Get the canonical locale tag of this bundle (read-only).

        Example:
            >>> MessageBundle("fr_CA").locale
            'fr-ca'
        """
        return self._locale

    def __contains__(self, key: object) -> bool:
        return key in self._templates

    def __len__(self) -> int:
        return len(self._templates)

    def __iter__(self) -> Iterator[str]:
        return iter(self._templates)

    def __repr__(self) -> str:
        return f"MessageBundle(locale={self._locale!r}, messages={len(self._templates)})"

    def keys(self) -> frozenset[str]:
        """Get all message keys."""
        return frozenset(self._templates)

    def get(self, key: str) -> Template | None:
        """Get the template for key, or None if absent."""
        return self._templates.get(key)

    def get_template(self, key: str) -> Template:
        """Get the template for key.

        Raises:
            KeyNotFoundError: If key is not defined in this bundle
        """
        template = self._templates.get(key)
        if template is None:
            raise KeyNotFoundError(
                ErrorTemplate.key_not_found(key, self._locale, (self._locale,)),
                key=key,
                locale=self._locale,
                searched=(self._locale,),
            )
        return template

    def placeholder_arity(self, key: str) -> int:
        """Get the number of arguments the message needs.

        Raises:
            KeyNotFoundError: If key is not defined in this bundle
        """
        return self.get_template(key).arity

    def messages(self) -> dict[str, str]:
        """Return a copy of the raw key -> template text mapping."""
        return {key: template.source for key, template in self._templates.items()}

    def merged(self, other: MessageBundle | Mapping[str, str]) -> MessageBundle:
        """Return a new bundle with other's messages layered over this one's."""
        overlay = other.messages() if isinstance(other, MessageBundle) else dict(other)
        return MessageBundle(self._locale, {**self.messages(), **overlay})

    def missing_keys(self, keys: Iterable[str]) -> frozenset[str]:
        """Return the subset of keys this bundle does not define."""
        return frozenset(k for k in keys if k not in self._templates)

    def format(
        self,
        key: str,
        args: Iterable[object] | None = None,
        *,
        policy: PlaceholderPolicy = PlaceholderPolicy.KEEP,
    ) -> str:
        """Resolve key against this bundle only (no locale fallback).

        Args:
            key: Message key
            args: Positional substitution arguments
            policy: Out-of-range placeholder policy

        Returns:
            Fully substituted string

        Raises:
            KeyNotFoundError: If key is not defined in this bundle
            PlaceholderIndexOutOfRangeError: Under PlaceholderPolicy.RAISE
            TypeError: If args is a string or not iterable
        """
        template = self.get_template(key)
        result = TemplateResolver(policy).resolve(key, template, coerce_args(key, args))
        logger.debug(
            "Resolved message '%s' (%s): %r", key, self._locale, result[:_LOG_TRUNCATE_DEBUG]
        )
        return result
