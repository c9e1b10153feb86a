"""Parser for RequireJS-style nls modules.

Reads the subset of JavaScript used by nls message modules:

    module  := trivia "define" trivia "(" trivia object trivia ")" trivia [";"] trivia EOF
    object  := "{" trivia [member (trivia "," trivia member)* [trivia ","]] trivia "}"
    member  := key trivia ":" trivia value
    key     := string | identifier
    value   := string | "true" | "false" | object
    trivia  := (whitespace | "//" comment | "/*" comment "*/")*

Strings use single or double quotes with JavaScript escapes. Keys must be
unique within an object. The parser fails fast with NlsSyntaxError on the
first problem; bundle modules are small and hand-written, so one precise
error beats recovery.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nlsbundle.constants import MAX_NESTING_DEPTH, MAX_SOURCE_SIZE, ROOT_LOCALE
from nlsbundle.diagnostics import (
    BundleDefinitionError,
    Diagnostic,
    ErrorTemplate,
    NlsSyntaxError,
    SourceSpan,
)
from nlsbundle.syntax.ast import LocaleDeclaration, MessageEntry, NlsModule, Span
from nlsbundle.syntax.cursor import Cursor

__all__ = ["NlsModuleParser", "parse_nls_module"]

logger = logging.getLogger(__name__)

type JsValue = str | bool | list[_Member]

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_LINE_TERMINATORS = frozenset("\n\r\u2028\u2029")


def _is_identifier_start(char: str) -> bool:
    return char.isalpha() or char in "_$"


def _is_identifier_part(char: str) -> bool:
    return char.isalnum() or char in "_$"


def _combine_surrogates(text: str) -> str:
    """Join UTF-16 surrogate pairs produced by \\uXXXX escapes."""
    if not any("\ud800" <= c <= "\udfff" for c in text):
        return text
    chars: list[str] = []
    i = 0
    while i < len(text):
        high = text[i]
        low = text[i + 1] if i + 1 < len(text) else ""
        if "\ud800" <= high <= "\udbff" and "\udc00" <= low <= "\udfff":
            chars.append(chr(0x10000 + ((ord(high) - 0xD800) << 10) + (ord(low) - 0xDC00)))
            i += 2
        else:
            chars.append(high)
            i += 1
    return "".join(chars)


@dataclass(frozen=True, slots=True)
class _Member:
    key: str
    value: JsValue
    span: Span


class _ModuleReader:
    """Single-use recursive descent reader over one module source."""

    __slots__ = ("_max_depth", "_source_path")

    def __init__(self, max_depth: int, source_path: str | None) -> None:
        self._max_depth = max_depth
        self._source_path = source_path

    # ------------------------------------------------------------------
    # Error helpers
    # ------------------------------------------------------------------

    def _span(self, cursor: Cursor, end: int | None = None) -> SourceSpan:
        line, column = cursor.compute_line_col()
        return SourceSpan(
            start=cursor.pos,
            end=end if end is not None else cursor.pos,
            line=line,
            column=column,
        )

    def _fail(self, diagnostic: Diagnostic) -> NlsSyntaxError:
        if self._source_path is not None:
            diagnostic = Diagnostic(
                code=diagnostic.code,
                message=diagnostic.message,
                span=diagnostic.span,
                hint=diagnostic.hint,
                message_key=diagnostic.message_key,
                source_path=self._source_path,
            )
        return NlsSyntaxError(diagnostic)

    def _unexpected(self, cursor: Cursor, expected: str) -> NlsSyntaxError:
        if cursor.is_eof:
            diagnostic = ErrorTemplate.unexpected_eof(cursor.pos, expected)
            line, column = cursor.compute_line_col()
            diagnostic = Diagnostic(
                code=diagnostic.code,
                message=diagnostic.message,
                span=SourceSpan(cursor.pos, cursor.pos, line, column),
            )
            return self._fail(diagnostic)
        return self._fail(
            ErrorTemplate.unexpected_character(cursor.current, expected, self._span(cursor))
        )

    # ------------------------------------------------------------------
    # Grammar
    # ------------------------------------------------------------------

    def skip_trivia(self, cursor: Cursor) -> Cursor:
        """Skip whitespace and comments."""
        while True:
            cursor = cursor.skip_whitespace()
            if cursor.startswith("//"):
                cursor = cursor.skip_to_line_end()
            elif cursor.startswith("/*"):
                end = cursor.source.find("*/", cursor.pos + 2)
                if end < 0:
                    raise self._unexpected(Cursor(cursor.source, len(cursor.source)), "'*/'")
                cursor = Cursor(cursor.source, end + 2)
            else:
                return cursor

    def read_module(self, cursor: Cursor) -> list[_Member]:
        """Read define( object ) and return the top-level members."""
        cursor = self.skip_trivia(cursor)
        if not cursor.startswith("define"):
            raise self._fail(ErrorTemplate.missing_define(self._span(cursor)))
        cursor = self.skip_trivia(cursor.advance(len("define")))

        after = cursor.expect("(")
        if after is None:
            raise self._unexpected(cursor, "'('")
        cursor = self.skip_trivia(after)

        members, cursor = self.read_object(cursor, depth=1)
        cursor = self.skip_trivia(cursor)

        after = cursor.expect(")")
        if after is None:
            raise self._unexpected(cursor, "')'")
        cursor = self.skip_trivia(after)
        if (after := cursor.expect(";")) is not None:
            cursor = self.skip_trivia(after)

        if not cursor.is_eof:
            raise self._unexpected(cursor, "end of input")
        return members

    def read_object(self, cursor: Cursor, depth: int) -> tuple[list[_Member], Cursor]:
        """Read an object literal starting at '{'."""
        if depth > self._max_depth:
            raise self._fail(
                ErrorTemplate.nesting_depth_exceeded(self._max_depth, self._span(cursor))
            )
        after = cursor.expect("{")
        if after is None:
            raise self._unexpected(cursor, "'{'")
        cursor = self.skip_trivia(after)

        members: list[_Member] = []
        seen: set[str] = set()
        while True:
            if (after := cursor.expect("}")) is not None:
                return members, after

            member_start = cursor
            key, cursor = self.read_key(cursor)
            if key in seen:
                raise self._fail(ErrorTemplate.duplicate_key(key, self._span(member_start)))
            seen.add(key)

            cursor = self.skip_trivia(cursor)
            after = cursor.expect(":")
            if after is None:
                raise self._unexpected(cursor, "':'")
            cursor = self.skip_trivia(after)

            value, cursor = self.read_value(cursor, depth)
            members.append(_Member(key, value, Span(member_start.pos, cursor.pos)))

            cursor = self.skip_trivia(cursor)
            if (after := cursor.expect(",")) is not None:
                cursor = self.skip_trivia(after)
            elif cursor.is_eof or cursor.current != "}":
                raise self._unexpected(cursor, "',' or '}'")

    def read_key(self, cursor: Cursor) -> tuple[str, Cursor]:
        """Read a property key: quoted string or identifier."""
        if cursor.is_eof:
            raise self._unexpected(cursor, "property key")
        if cursor.current in ("'", '"'):
            return self.read_string(cursor)
        if _is_identifier_start(cursor.current):
            return self.read_identifier(cursor)
        raise self._unexpected(cursor, "property key")

    def read_identifier(self, cursor: Cursor) -> tuple[str, Cursor]:
        start = cursor
        while not cursor.is_eof and _is_identifier_part(cursor.current):
            cursor = cursor.advance()
        return start.slice_to(cursor.pos), cursor

    def read_value(self, cursor: Cursor, depth: int) -> tuple[JsValue, Cursor]:
        """Read a member value: string, boolean or nested object."""
        if cursor.is_eof:
            raise self._unexpected(cursor, "value")
        match cursor.current:
            case "'" | '"':
                return self.read_string(cursor)
            case "{":
                return self.read_object(cursor, depth + 1)
            case _ if _is_identifier_start(cursor.current):
                word, after = self.read_identifier(cursor)
                if word == "true":
                    return True, after
                if word == "false":
                    return False, after
        raise self._unexpected(cursor, "string, true, false or object")

    def read_string(self, cursor: Cursor) -> tuple[str, Cursor]:
        """Read a quoted string literal with JavaScript escapes."""
        quote = cursor.current
        opening = cursor
        cursor = cursor.advance()
        chars: list[str] = []

        while True:
            if cursor.is_eof or cursor.current in _LINE_TERMINATORS:
                raise self._fail(ErrorTemplate.unterminated_string(self._span(opening)))
            char = cursor.current
            if char == quote:
                return _combine_surrogates("".join(chars)), cursor.advance()
            if char == "\\":
                text, cursor = self.read_escape(cursor)
                chars.append(text)
                continue
            chars.append(char)
            cursor = cursor.advance()

    def read_escape(self, cursor: Cursor) -> tuple[str, Cursor]:
        """Read an escape sequence starting at the backslash."""
        backslash = cursor
        cursor = cursor.advance()
        if cursor.is_eof:
            raise self._fail(ErrorTemplate.unterminated_string(self._span(backslash)))
        char = cursor.current

        if char in _SIMPLE_ESCAPES:
            return _SIMPLE_ESCAPES[char], cursor.advance()
        if char == "\r":
            # Line continuation; CRLF counts as one terminator.
            cursor = cursor.advance()
            return "", cursor.expect("\n") or cursor
        if char in _LINE_TERMINATORS:
            return "", cursor.advance()
        if char == "x":
            return self._read_hex(backslash, cursor.advance(), 2)
        if char == "u":
            after = cursor.advance()
            if after.expect("{") is not None:
                return self._read_braced_hex(backslash, after.advance())
            return self._read_hex(backslash, after, 4)
        # Non-special characters escape to themselves (\' \" \\ \/ ...)
        return char, cursor.advance()

    def _read_hex(self, backslash: Cursor, cursor: Cursor, width: int) -> tuple[str, Cursor]:
        digits = cursor.slice_ahead(width)
        if len(digits) != width or not all(d in _HEX_DIGITS for d in digits):
            sequence = backslash.slice_to(cursor.pos + len(digits))
            raise self._fail(ErrorTemplate.invalid_escape(sequence, self._span(backslash)))
        return chr(int(digits, 16)), cursor.advance(width)

    def _read_braced_hex(self, backslash: Cursor, cursor: Cursor) -> tuple[str, Cursor]:
        start = cursor
        while not cursor.is_eof and cursor.current in _HEX_DIGITS:
            cursor = cursor.advance()
        digits = start.slice_to(cursor.pos)
        closing = cursor.expect("}")
        if closing is None or not digits or int(digits, 16) > 0x10FFFF:
            sequence = backslash.slice_to(cursor.pos + 1)
            raise self._fail(ErrorTemplate.invalid_escape(sequence, self._span(backslash)))
        return chr(int(digits, 16)), closing


class NlsModuleParser:
    """Parser for define({...}) nls modules.

    Parser Security:
        - max_source_size: Maximum source size in characters (default: 1 MB)
        - max_nesting_depth: Maximum object nesting (default: 8)

    Example:
        >>> parser = NlsModuleParser()
        >>> module = parser.parse("define({ root: { 'login': 'Login' }, fr: true });")
        >>> module.messages()
        {'login': 'Login'}
        >>> [(d.tag, d.available) for d in module.locales]
        [('fr', True)]
    """

    __slots__ = ("_max_nesting_depth", "_max_source_size")

    def __init__(
        self,
        *,
        max_source_size: int = MAX_SOURCE_SIZE,
        max_nesting_depth: int = MAX_NESTING_DEPTH,
    ) -> None:
        self._max_source_size = max_source_size
        self._max_nesting_depth = max_nesting_depth

    @property
    def max_source_size(self) -> int:
        """Maximum accepted source size in characters (0 disables the limit)."""
        return self._max_source_size

    def parse(self, source: str, *, source_path: str | None = None) -> NlsModule:
        """Parse module source.

        Args:
            source: Module source text
            source_path: Optional resource path for error messages

        Returns:
            Parsed NlsModule (master or locale module)

        Raises:
            NlsSyntaxError: If the source is not a valid nls module
            BundleDefinitionError: If the source is too large or a message
                value is not a string
        """
        if self._max_source_size and len(source) > self._max_source_size:
            raise BundleDefinitionError(
                ErrorTemplate.source_too_large(len(source), self._max_source_size, source_path)
            )

        reader = _ModuleReader(self._max_nesting_depth, source_path)
        members = reader.read_module(Cursor(source, 0))
        module = self._build_module(members)
        logger.debug(
            "Parsed %s module %s: %d entries, %d locale declarations",
            "master" if module.is_master else "locale",
            source_path or "<string>",
            len(module.entries),
            len(module.locales),
        )
        return module

    @staticmethod
    def _build_module(members: list[_Member]) -> NlsModule:
        root = next(
            (m for m in members if m.key == ROOT_LOCALE and isinstance(m.value, list)),
            None,
        )
        if root is None:
            return NlsModule(entries=NlsModuleParser._entries(members, "<module>"))

        locales: list[LocaleDeclaration] = []
        for member in members:
            if member is root:
                continue
            if isinstance(member.value, bool):
                locales.append(
                    LocaleDeclaration(member.key, available=member.value, span=member.span)
                )
            elif isinstance(member.value, list):
                entries = NlsModuleParser._entries(member.value, member.key)
                locales.append(
                    LocaleDeclaration(member.key, available=True, entries=entries, span=member.span)
                )
            else:
                raise BundleDefinitionError(
                    ErrorTemplate.invalid_locale_value(member.key, member.value)
                )
        return NlsModule(
            entries=NlsModuleParser._entries(root.value, ROOT_LOCALE),  # type: ignore[arg-type]
            locales=tuple(locales),
            is_master=True,
        )

    @staticmethod
    def _entries(members: list[_Member], locale: str) -> tuple[MessageEntry, ...]:
        entries: list[MessageEntry] = []
        for member in members:
            if not isinstance(member.value, str):
                raise BundleDefinitionError(
                    ErrorTemplate.invalid_message_value(member.key, member.value, locale)
                )
            entries.append(MessageEntry(member.key, member.value, member.span))
        return tuple(entries)


def parse_nls_module(source: str, *, source_path: str | None = None) -> NlsModule:
    """Parse define({...}) module source with default limits.

    Args:
        source: Module source text
        source_path: Optional resource path for error messages

    Returns:
        Parsed NlsModule

    Raises:
        NlsSyntaxError: If the source is not a valid nls module
        BundleDefinitionError: If a message value is not a string
    """
    return NlsModuleParser().parse(source, source_path=source_path)
