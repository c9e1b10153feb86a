"""Immutable cursor infrastructure for type-safe parsing.

Implements the immutable cursor pattern shared by the template and module
parsers. Python 3.13+. Zero external dependencies.

Design:
    - Cursor is immutable (frozen dataclass)
    - EOF is a state (is_eof), not a return value
    - Every advance() returns NEW cursor (prevents infinite loops)
    - Line:column computed on-demand (only for errors)

Line Ending Support:
    LF and CRLF. \\n is the line delimiter; CR-only files report wrong lines.
"""

from dataclasses import dataclass

__all__ = ["Cursor"]

# JavaScript whitespace accepted between tokens (BOM included).
_WHITESPACE = frozenset(" \t\n\r\v\f\u00a0\ufeff\u2028\u2029")


@dataclass(frozen=True, slots=True)
class Cursor:
    """Immutable source position tracker.

    Example:
        >>> cursor = Cursor("hello", 0)
        >>> cursor.current
        'h'
        >>> cursor.advance().current
        'e'
        >>> cursor.current  # Original unchanged (immutability)
        'h'
    """

    source: str
    pos: int

    @property
    def is_eof(self) -> bool:
        """Check if at end of input."""
        return self.pos >= len(self.source)

    @property
    def current(self) -> str:
        """Get current character.

        Raises:
            EOFError: If at end of input
        """
        if self.is_eof:
            msg = f"Unexpected EOF at position {self.pos}"
            raise EOFError(msg)
        return self.source[self.pos]

    def peek(self, offset: int = 0) -> str | None:
        """Peek at character with offset without advancing.

        Returns:
            Character at position + offset, or None if beyond EOF
        """
        target_pos = self.pos + offset
        if target_pos >= len(self.source):
            return None
        return self.source[target_pos]

    def advance(self, count: int = 1) -> "Cursor":
        """Return new cursor advanced by count positions (clamped to EOF)."""
        new_pos = min(self.pos + count, len(self.source))
        return Cursor(self.source, new_pos)

    def slice_to(self, end_pos: int) -> str:
        """Extract source slice from current position to end_pos."""
        return self.source[self.pos : end_pos]

    def slice_ahead(self, n: int) -> str:
        """Get next n characters without advancing (fewer near EOF)."""
        return self.source[self.pos : self.pos + n]

    def startswith(self, text: str) -> bool:
        """Check if the remaining source starts with text."""
        return self.source.startswith(text, self.pos)

    def expect(self, char: str) -> "Cursor | None":
        """Consume character if it matches expected, return None otherwise."""
        if not self.is_eof and self.current == char:
            return self.advance()
        return None

    def skip_whitespace(self) -> "Cursor":
        """Skip JavaScript whitespace and line terminators."""
        c = self
        while not c.is_eof and c.current in _WHITESPACE:
            c = c.advance()
        return c

    def skip_to_line_end(self) -> "Cursor":
        """Advance to the next line ending character (not consumed)."""
        cursor = self
        while not cursor.is_eof and cursor.current not in ("\n", "\r"):
            cursor = cursor.advance()
        return cursor

    def compute_line_col(self) -> tuple[int, int]:
        """Compute line and column for current position.

        LF, CRLF and lone CR each end one line.

        Returns:
            (line, column) tuple (1-indexed, like text editors)

        Example:
            >>> Cursor("line1\\nline2", 8).compute_line_col()
            (2, 3)
            >>> Cursor("line1\\rline2", 8).compute_line_col()
            (2, 3)
        """
        source, pos = self.source, self.pos
        breaks = (
            source.count("\n", 0, pos)
            + source.count("\r", 0, pos)
            - source.count("\r\n", 0, pos)
        )
        last_break = max(source.rfind("\n", 0, pos), source.rfind("\r", 0, pos))
        col = pos - last_break if last_break >= 0 else pos + 1
        return (breaks + 1, col)
