"""Hypothesis strategies for nls bundles.

Provides reusable strategies for generating bundle test data:
- Message keys in the "service:id:added-member" style
- Template text built from literal text and {{[i]}} placeholders, drawn
  together with the expected parse so tests need no oracle
- Root bundles and matching substitution arguments

Event-Emitting Strategies (HypoFuzz-Optimized):
- templates: Emits template_arity=N
- root_bundles: Emits bundle_size=small|medium|large

Python 3.13+.
"""

from __future__ import annotations

import string
from typing import TYPE_CHECKING

from hypothesis import event
from hypothesis import strategies as st

if TYPE_CHECKING:
    from hypothesis.strategies import DrawFn, SearchStrategy

# Real CLDR locales in RequireJS form.
LOCALE_POOL = [
    "fr", "fr-ca", "fr-fr", "de", "de-at", "en", "en-gb", "es", "es-mx",
    "it", "ja", "nl", "pt", "pt-br", "zh",
]

# Literal template text that cannot form or touch a placeholder.
PLAIN_TEXT = st.text(
    alphabet=st.characters(
        blacklist_categories=("Cs",),
        blacklist_characters="{}[]",
    ),
    max_size=20,
)

_KEY_CHARS = string.ascii_lowercase + string.digits + "-"


def locale_tags() -> SearchStrategy[str]:
    """Generate locale tags known to CLDR."""
    return st.sampled_from(LOCALE_POOL)


@st.composite
def message_keys(draw: DrawFn) -> str:
    """Generate message keys: colon-separated segments ("service:id:group")."""
    segments = draw(
        st.lists(st.text(alphabet=_KEY_CHARS, min_size=1, max_size=12), min_size=1, max_size=3)
    )
    return ":".join(segments)


@st.composite
def templates(draw: DrawFn, max_placeholders: int = 4) -> tuple[str, list[str | int]]:
    """Generate template text together with its parts.

    Returns:
        (text, parts) where parts holds literal strings and placeholder
        indexes in order; adjacent literals are not merged.

    Events emitted:
    - template_arity=N
    """
    count = draw(st.integers(min_value=0, max_value=max_placeholders))
    parts: list[str | int] = []
    for _ in range(count):
        parts.append(draw(PLAIN_TEXT))
        parts.append(draw(st.integers(min_value=0, max_value=max_placeholders)))
    parts.append(draw(PLAIN_TEXT))

    text = "".join(p if isinstance(p, str) else f"{{{{[{p}]}}}}" for p in parts)
    indexes = [p for p in parts if isinstance(p, int)]
    event(f"template_arity={max(indexes) + 1 if indexes else 0}")
    return text, parts


def message_values() -> SearchStrategy[str]:
    """Generate template text only."""
    return templates().map(lambda drawn: drawn[0])


@st.composite
def root_bundles(draw: DrawFn) -> dict[str, str]:
    """Generate a root bundle (key -> template text).

    Events emitted:
    - bundle_size=small|medium|large
    """
    bundle = draw(st.dictionaries(message_keys(), message_values(), min_size=1, max_size=15))
    size = len(bundle)
    event(f"bundle_size={'small' if size < 4 else 'medium' if size < 10 else 'large'}")
    return bundle


def substitution_args(count: int) -> SearchStrategy[list[str]]:
    """Generate exactly count arguments free of placeholder syntax."""
    return st.lists(
        st.text(alphabet=string.ascii_letters + string.digits + " ", max_size=10),
        min_size=count,
        max_size=count,
    )
