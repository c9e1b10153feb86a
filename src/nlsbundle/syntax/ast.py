"""Syntax tree node definitions for templates and nls modules.

Two small trees live here:
- Template: a message value split into literal text and positional
  placeholders ({{[0]}}, {{[1]}}, ...)
- NlsModule: the object literal of a define({...}) module, either a master
  module (root messages plus locale flags) or a flat locale module

Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from typing import TypeIs

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Base types
    "Span",
    # Template structure
    "TextElement",
    "Placeholder",
    "TemplateElement",
    "Template",
    # Module structure
    "MessageEntry",
    "LocaleDeclaration",
    "NlsModule",
]

# ============================================================================
# BASE TYPES
# ============================================================================


@dataclass(frozen=True, slots=True)
class Span:
    """Character range in source text.

    Attributes:
        start: Starting offset (0-indexed, inclusive)
        end: Ending offset (exclusive)
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            msg = f"Span start must be >= 0, got {self.start}"
            raise ValueError(msg)
        if self.end < self.start:
            msg = f"Span end ({self.end}) must be >= start ({self.start})"
            raise ValueError(msg)


# ============================================================================
# TEMPLATE STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class TextElement:
    """Literal text inside a template."""

    value: str

    @staticmethod
    def guard(element: object) -> TypeIs["TextElement"]:
        """Type guard for TextElement."""
        return isinstance(element, TextElement)


@dataclass(frozen=True, slots=True)
class Placeholder:
    """Positional placeholder inside a template.

    Attributes:
        index: Zero-based index into the lookup arguments
        span: Location of the whole token in the template source
        unescaped: True for the triple-brace form {{{[n]}}} (informational;
            resolution renders both forms the same)
    """

    index: int
    span: Span
    unescaped: bool = False

    @staticmethod
    def guard(element: object) -> TypeIs["Placeholder"]:
        """Type guard for Placeholder."""
        return isinstance(element, Placeholder)


type TemplateElement = TextElement | Placeholder


@dataclass(frozen=True, slots=True)
class Template:
    """Parsed message template.

    Attributes:
        source: Original template text
        elements: Text and placeholder elements in order; adjacent text is merged

    Example:
        >>> template = parse_template("User {{[0]}} has been added to group {{[1]}}")
        >>> template.arity
        2
    """

    source: str
    elements: tuple[TemplateElement, ...]

    @property
    def placeholders(self) -> tuple[Placeholder, ...]:
        """All placeholders in source order."""
        return tuple(e for e in self.elements if isinstance(e, Placeholder))

    @property
    def indexes(self) -> frozenset[int]:
        """Distinct placeholder indexes referenced by the template."""
        return frozenset(p.index for p in self.placeholders)

    @property
    def arity(self) -> int:
        """Minimum number of arguments that fills every placeholder."""
        indexes = self.indexes
        return max(indexes) + 1 if indexes else 0

    @property
    def is_static(self) -> bool:
        """True if the template contains no placeholders."""
        return not any(isinstance(e, Placeholder) for e in self.elements)


# ============================================================================
# MODULE STRUCTURE
# ============================================================================


@dataclass(frozen=True, slots=True)
class MessageEntry:
    """One key/value member of a bundle object literal.

    Attributes:
        key: Message key
        value: Raw template text
        span: Location of the member in module source (None if built in code)
    """

    key: str
    value: str
    span: Span | None = None


@dataclass(frozen=True, slots=True)
class LocaleDeclaration:
    """Locale member of a master module.

    Attributes:
        tag: Locale tag as written in the source
        available: Flag value; inline bundles are always available
        entries: Inline messages, or None when defined in a separate module
        span: Location of the member in module source
    """

    tag: str
    available: bool
    entries: tuple[MessageEntry, ...] | None = None
    span: Span | None = None

    @property
    def is_inline(self) -> bool:
        """True if the locale's messages are declared inside the master module."""
        return self.entries is not None


@dataclass(frozen=True, slots=True)
class NlsModule:
    """Parsed define({...}) module.

    A master module declares root messages and locale flags:
        define({ root: { 'login': 'Login' }, fr: true });
    A locale module is a flat mapping:
        define({ 'login': 'Connexion' });

    Attributes:
        entries: Root messages (master) or the flat messages (locale module)
        locales: Locale declarations (master modules only)
        is_master: True if the module declares a root bundle
    """

    entries: tuple[MessageEntry, ...]
    locales: tuple[LocaleDeclaration, ...] = ()
    is_master: bool = False

    def messages(self) -> dict[str, str]:
        """Return entries as a key -> template text mapping."""
        return {entry.key: entry.value for entry in self.entries}

    def to_definition(self) -> dict[str, object]:
        """Convert to the nested mapping accepted by BundleRegistry.from_definition.

        Master modules produce {"root": {...}, "<tag>": True | False | {...}}.
        Locale modules produce their flat message mapping.
        """
        if not self.is_master:
            return dict(self.messages())
        definition: dict[str, object] = {"root": self.messages()}
        for declaration in self.locales:
            if declaration.entries is not None:
                definition[declaration.tag] = {e.key: e.value for e in declaration.entries}
            else:
                definition[declaration.tag] = declaration.available
        return definition
