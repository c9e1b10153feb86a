"""Template parser for positional placeholders.

Splits a message value into literal text and placeholders. Grammar:

    placeholder := "{{" ws "[" index "]" ws "}}"
                 | "{{{" ws "[" index "]" ws "}}}"
    index       := "0" | [1-9][0-9]*
    ws          := JavaScript whitespace, optional

Any "{{" sequence that does not form a placeholder is literal text, so
parsing never fails. Indexes above MAX_PLACEHOLDER_INDEX and indexes with
leading zeros are literal text too (they are not array indexes).

Both forms render the same: arguments are substituted as plain text and no
HTML escaping happens here. Placeholder.unescaped only records which form
the source used, for tooling that renders through Handlebars.

Python 3.13+. Zero external dependencies.
"""

from functools import lru_cache

from nlsbundle.constants import MAX_PLACEHOLDER_INDEX
from nlsbundle.syntax.ast import Placeholder, Span, Template, TemplateElement, TextElement
from nlsbundle.syntax.cursor import Cursor

__all__ = ["parse_template"]

_DIGITS = frozenset("0123456789")


def _parse_placeholder(cursor: Cursor) -> tuple[Placeholder, Cursor] | None:
    """Try to parse a placeholder at cursor (which sits on "{{").

    Returns:
        (placeholder, cursor after it), or None if the text is not a placeholder
    """
    start = cursor.pos
    unescaped = cursor.startswith("{{{")
    braces = 3 if unescaped else 2

    c: Cursor | None = cursor.advance(braces).skip_whitespace().expect("[")
    if c is None:
        return None

    digits_start = c
    while not c.is_eof and c.current in _DIGITS:
        c = c.advance()
    digits = digits_start.slice_to(c.pos)
    if not digits or (len(digits) > 1 and digits[0] == "0"):
        return None
    index = int(digits)
    if index > MAX_PLACEHOLDER_INDEX:
        return None

    c = c.expect("]")
    if c is None:
        return None
    c = c.skip_whitespace()
    if c.slice_ahead(braces) != "}" * braces:
        return None
    c = c.advance(braces)

    return Placeholder(index=index, span=Span(start, c.pos), unescaped=unescaped), c


@lru_cache(maxsize=1024)
def parse_template(text: str) -> Template:
    """Parse template text into a Template.

    Results are cached; templates are immutable so sharing them is safe.

    Args:
        text: Raw message value

    Returns:
        Template with merged text elements and placeholders

    Example:
        >>> template = parse_template("User {{[0]}} has been added to group {{[1]}}")
        >>> [p.index for p in template.placeholders]
        [0, 1]
        >>> parse_template("{{[x]}}").is_static
        True
    """
    elements: list[TemplateElement] = []
    buffer: list[str] = []
    cursor = Cursor(text, 0)

    while not cursor.is_eof:
        if cursor.startswith("{{"):
            parsed = _parse_placeholder(cursor)
            if parsed is not None:
                placeholder, cursor = parsed
                if buffer:
                    elements.append(TextElement("".join(buffer)))
                    buffer.clear()
                elements.append(placeholder)
                continue
        buffer.append(cursor.current)
        cursor = cursor.advance()

    if buffer:
        elements.append(TextElement("".join(buffer)))

    return Template(source=text, elements=tuple(elements))
