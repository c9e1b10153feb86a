"""Hypothesis strategies for nlsbundle property-based testing.

Strategies are organized by domain:

- nls: message keys, template text, bundles and module sources

Usage:
    from tests.strategies import message_keys, templates, root_bundles

Event-Emitting Strategies (HypoFuzz-Optimized):
    templates, root_bundles
"""

from .nls import (
    LOCALE_POOL,
    PLAIN_TEXT,
    locale_tags,
    message_keys,
    message_values,
    root_bundles,
    substitution_args,
    templates,
)

__all__ = [
    "LOCALE_POOL",
    "PLAIN_TEXT",
    "locale_tags",
    "message_keys",
    "message_values",
    "root_bundles",
    "substitution_args",
    "templates",
]
