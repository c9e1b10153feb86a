"""Locale tag utilities: canonical form, fallback chains, CLDR validation.

nls resources use RequireJS locale tags: lowercase, hyphen-separated
("fr", "fr-ca", "zh-hant-tw"), with the reserved tag "root" for the default
bundle. Babel works with POSIX identifiers ("fr_CA"). All locale handling
normalizes at the system boundary with normalize_locale(), then uses the
canonical form for lookups.

Python 3.13+. External dependency: Babel (CLDR locale data).
"""

from __future__ import annotations

import functools
import os
from typing import TYPE_CHECKING

from nlsbundle.constants import ROOT_LOCALE

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "get_babel_locale",
    "get_locale_display_name",
    "get_system_locale",
    "is_known_locale",
    "locale_fallback_chain",
    "normalize_locale",
    "to_babel_identifier",
]


def normalize_locale(locale_code: str) -> str:
    """Convert a BCP-47 or POSIX locale code to canonical RequireJS form.

    Strips any encoding suffix ("fr_FR.UTF-8"), lowercases, and uses
    hyphens as separators.

    Args:
        locale_code: Locale code (e.g., "fr-CA", "pt_BR", "root")

    Returns:
        Canonical tag (e.g., "fr-ca", "pt-br", "root")

    Raises:
        ValueError: If the code is empty or contains characters other than
            ASCII letters, digits, hyphens and underscores

    Example:
        >>> normalize_locale("fr_CA")
        'fr-ca'
        >>> normalize_locale("ROOT")
        'root'
    """
    code = locale_code.split(".")[0].strip()
    if not code:
        msg = "Locale code cannot be empty"
        raise ValueError(msg)
    if not (code.isascii() and code.replace("_", "").replace("-", "").isalnum()):
        msg = f"Invalid locale code format: '{locale_code}'"
        raise ValueError(msg)
    return "-".join(part for part in code.replace("_", "-").lower().split("-") if part)


@functools.lru_cache(maxsize=256)
def locale_fallback_chain(locale_code: str) -> tuple[str, ...]:
    """Build the lookup chain for a locale, ending with root.

    Each hyphen-separated prefix is tried before root, most specific first.
    Cached; invalid codes raise ValueError on every call.

    Example:
        >>> locale_fallback_chain("fr-CA")
        ('fr-ca', 'fr', 'root')
        >>> locale_fallback_chain("root")
        ('root',)
    """
    tag = normalize_locale(locale_code)
    if tag == ROOT_LOCALE:
        return (ROOT_LOCALE,)
    parts = tag.split("-")
    chain = ["-".join(parts[:i]) for i in range(len(parts), 0, -1)]
    chain.append(ROOT_LOCALE)
    return tuple(chain)


def to_babel_identifier(locale_code: str) -> str:
    """Convert a locale tag to a POSIX identifier Babel can parse.

    Language is lowercase, 4-letter script subtags are titlecased, 2-letter
    and 3-digit region subtags are uppercased.

    Example:
        >>> to_babel_identifier("zh-hant-tw")
        'zh_Hant_TW'
    """
    parts = normalize_locale(locale_code).split("-")
    converted = [parts[0]]
    for part in parts[1:]:
        if len(part) == 4 and part.isalpha():
            converted.append(part.title())
        elif (len(part) == 2 and part.isalpha()) or (len(part) == 3 and part.isdigit()):
            converted.append(part.upper())
        else:
            converted.append(part)
    return "_".join(converted)


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        locale_code: Locale tag (any separator, any case; not "root")

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If locale is not recognized
        ValueError: If locale format is invalid

    Example:
        >>> get_babel_locale("fr-ca").territory
        'CA'
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(to_babel_identifier(locale_code))


def is_known_locale(locale_code: str) -> bool:
    """Check whether CLDR knows a locale tag. "root" is always known.

    Example:
        >>> is_known_locale("fr")
        True
        >>> is_known_locale("xx-yy")
        False
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    try:
        if normalize_locale(locale_code) == ROOT_LOCALE:
            return True
        get_babel_locale(locale_code)
    except (UnknownLocaleError, ValueError):
        return False
    return True


def get_locale_display_name(locale_code: str, display_locale: str | None = None) -> str:
    """Get the human-readable name of a locale.

    Args:
        locale_code: Locale to describe
        display_locale: Locale to describe it in (default: the locale itself).
            "root" displays in English.

    Returns:
        Display name, e.g. "français (Canada)"; "root" is returned unchanged

    Raises:
        babel.core.UnknownLocaleError: If either locale is not recognized
    """
    if normalize_locale(locale_code) == ROOT_LOCALE:
        return ROOT_LOCALE
    locale = get_babel_locale(locale_code)
    if display_locale is None:
        name = locale.get_display_name()
    elif normalize_locale(display_locale) == ROOT_LOCALE:
        name = locale.get_display_name("en")
    else:
        name = locale.get_display_name(get_babel_locale(display_locale))
    return name or normalize_locale(locale_code)


def get_system_locale() -> str:
    """Detect the system locale from environment variables.

    Detection order: LC_ALL, LC_MESSAGES, LANG. "C" and "POSIX"
    pseudo-locales are ignored.

    Returns:
        Canonical tag of the detected locale, or "root" if none is set

    Example:
        >>> os.environ["LANG"] = "fr_FR.UTF-8"
        >>> get_system_locale()
        'fr-fr'
    """
    for var in ("LC_ALL", "LC_MESSAGES", "LANG"):
        value = os.environ.get(var)
        if value and value.split(".")[0] not in ("C", "POSIX", ""):
            try:
                return normalize_locale(value)
            except ValueError:
                continue
    return ROOT_LOCALE
