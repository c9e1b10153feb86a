"""Tests for the immutable Cursor."""

from __future__ import annotations

import pytest

from nlsbundle.syntax.cursor import Cursor


class TestCursor:
    """Position tracking primitives shared by both parsers."""

    def test_advance_is_immutable(self) -> None:
        cursor = Cursor("define", 0)

        assert cursor.advance(3).current == "i"
        assert cursor.current == "d"

    def test_current_at_eof_raises(self) -> None:
        with pytest.raises(EOFError):
            _ = Cursor("ab", 2).current

    def test_peek(self) -> None:
        cursor = Cursor("ab", 0)

        assert cursor.peek() == "a"
        assert cursor.peek(1) == "b"
        assert cursor.peek(2) is None

    def test_expect(self) -> None:
        cursor = Cursor("({", 0)

        after = cursor.expect("(")
        assert after is not None
        assert after.pos == 1
        assert cursor.expect("{") is None

    def test_startswith_and_slices(self) -> None:
        cursor = Cursor("define({})", 0)

        assert cursor.startswith("define")
        assert cursor.slice_ahead(3) == "def"
        assert cursor.slice_to(6) == "define"

    def test_skip_whitespace_includes_js_space(self) -> None:
        cursor = Cursor(" \t\u00a0\ufeff\u2028x", 0)

        assert cursor.skip_whitespace().current == "x"

    def test_skip_to_line_end(self) -> None:
        cursor = Cursor("// comment\nnext", 0).skip_to_line_end()

        assert cursor.current == "\n"

    @pytest.mark.parametrize(
        ("source", "pos", "expected"),
        [
            ("abc", 0, (1, 1)),
            ("abc", 2, (1, 3)),
            ("ab\ncd", 3, (2, 1)),
            ("ab\r\ncd\nef", 7, (3, 1)),
            ("ab\rcd", 3, (2, 1)),
            ("a\r\rbc", 4, (3, 2)),
            ("ab\r\ncd", 3, (2, 1)),
        ],
    )
    def test_compute_line_col(self, source: str, pos: int, expected: tuple[int, int]) -> None:
        assert Cursor(source, pos).compute_line_col() == expected
