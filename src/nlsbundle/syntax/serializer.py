"""Serializer for nls modules.

Writes an NlsModule back to canonical define({...}); source: tab indent,
single-quoted message keys and values, bare locale keys where they are
valid identifiers. Parsing the output yields an equal module (spans aside).

Python 3.13+. Zero external dependencies.
"""

from nlsbundle.constants import ROOT_LOCALE
from nlsbundle.syntax.ast import MessageEntry, NlsModule

__all__ = ["quote_string", "serialize_nls_module"]

_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
    "\v": "\\v",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def _escape_char(char: str) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    code = ord(char)
    if code < 0x20 or code == 0x7F or 0xD800 <= code <= 0xDFFF:
        return f"\\u{code:04x}"
    return char


def quote_string(text: str) -> str:
    """Quote text as a single-quoted JavaScript string literal.

    Example:
        >>> quote_string("it's")
        "'it\\\\'s'"
    """
    return "'" + "".join(_escape_char(c) for c in text) + "'"


def _locale_key(tag: str) -> str:
    if tag.isidentifier() and tag.isascii():
        return tag
    return quote_string(tag)


def _write_entries(lines: list[str], entries: tuple[MessageEntry, ...], indent: str) -> None:
    for i, entry in enumerate(entries):
        comma = "," if i < len(entries) - 1 else ""
        lines.append(f"{indent}{quote_string(entry.key)}: {quote_string(entry.value)}{comma}")


def serialize_nls_module(module: NlsModule, *, indent: str = "\t") -> str:
    """Serialize a module to define({...}); source.

    Args:
        module: Module to serialize
        indent: Indentation unit (default: one tab)

    Returns:
        Module source ending with a newline

    Example:
        >>> module = parse_nls_module("define({root: {'login': 'Login'}, fr: true})")
        >>> print(serialize_nls_module(module, indent="  "), end="")
        define({
          root: {
            'login': 'Login'
          },
          fr: true
        });
    """
    lines = ["define({"]
    if not module.is_master:
        _write_entries(lines, module.entries, indent)
        lines.append("});")
        return "\n".join(lines) + "\n"

    members = len(module.locales) + 1
    lines.append(f"{indent}{ROOT_LOCALE}: {{")
    _write_entries(lines, module.entries, indent * 2)
    lines.append(f"{indent}}}" + ("," if members > 1 else ""))

    for i, declaration in enumerate(module.locales, start=2):
        comma = "," if i < members else ""
        key = _locale_key(declaration.tag)
        if declaration.entries is None:
            flag = "true" if declaration.available else "false"
            lines.append(f"{indent}{key}: {flag}{comma}")
        else:
            lines.append(f"{indent}{key}: {{")
            _write_entries(lines, declaration.entries, indent * 2)
            lines.append(f"{indent}}}{comma}")

    lines.append("});")
    return "\n".join(lines) + "\n"
