"""Syntax layer: template and nls module parsing.

Exports:
    parse_template - Split a message value into text and placeholders
    parse_nls_module - Parse define({...}) module source
    serialize_nls_module - Write a module back to source
    NlsModuleParser - Configurable module parser (size and depth limits)
    AST node types - Template, TextElement, Placeholder, NlsModule, ...

Python 3.13+. Zero external dependencies.
"""

from .ast import (
    LocaleDeclaration,
    MessageEntry,
    NlsModule,
    Placeholder,
    Span,
    Template,
    TemplateElement,
    TextElement,
)
from .module_parser import NlsModuleParser, parse_nls_module
from .serializer import quote_string, serialize_nls_module
from .template import parse_template

__all__ = [
    "LocaleDeclaration",
    "MessageEntry",
    "NlsModule",
    "NlsModuleParser",
    "Placeholder",
    "Span",
    "Template",
    "TemplateElement",
    "TextElement",
    "parse_nls_module",
    "parse_template",
    "quote_string",
    "serialize_nls_module",
]
