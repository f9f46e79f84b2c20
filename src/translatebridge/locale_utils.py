"""Language code utilities backed by Babel's CLDR data.

Centralizes language code normalization and validation. Hosts that have
their own language list implement the LanguageRegistry protocol directly;
everyone else can use BabelLanguageRegistry.

Python 3.13+.
"""

from __future__ import annotations

import functools
import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from babel import Locale

__all__ = [
    "BabelLanguageRegistry",
    "clear_language_cache",
    "get_babel_locale",
    "is_valid_language_code",
    "normalize_language_code",
]

# Shape accepted before consulting CLDR: lower-case letters, digits, hyphens.
_LANGUAGE_CODE_SHAPE = re.compile(r"^[a-z]{2,3}(?:-[a-z0-9]{2,8})*$")


def normalize_language_code(language_code: str) -> str:
    """Convert a BCP-47 language code to POSIX format for Babel.

    BCP-47 uses hyphens (pt-br), while Babel/POSIX uses underscores (pt_BR).

    Args:
        language_code: BCP-47 code (e.g., "pt-br", "zh-hans")

    Returns:
        POSIX-formatted code (e.g., "pt_BR", "zh_Hans")

    Example:
        >>> normalize_language_code("pt-br")
        'pt_BR'
        >>> normalize_language_code("en")
        'en'
    """
    language, *subtags = language_code.split("-")
    parts = [language.lower()]
    for subtag in subtags:
        match len(subtag):
            case 2:
                parts.append(subtag.upper())  # territory
            case 4:
                parts.append(subtag.title())  # script
            case _:
                parts.append(subtag.lower())
    return "_".join(parts)


@functools.lru_cache(maxsize=256)
def get_babel_locale(language_code: str) -> Locale:
    """Get a Babel Locale object with caching.

    Thread-safe via lru_cache internal locking.

    Args:
        language_code: BCP-47 or POSIX code

    Returns:
        Babel Locale object

    Raises:
        babel.core.UnknownLocaleError: If the code is not in CLDR
        ValueError: If the code is syntactically invalid
    """
    # Lazy import: Babel loads CLDR data at import time; defer until needed
    from babel import Locale  # noqa: PLC0415

    return Locale.parse(normalize_language_code(language_code.replace("_", "-")))


@functools.lru_cache(maxsize=1024)
def is_valid_language_code(language_code: str) -> bool:
    """Check a lower-case BCP-47 language code against CLDR.

    Codes must already be in the lower-case hyphenated form used in page
    paths (``"fr"``, ``"pt-br"``, ``"zh-hans"``); upper-case letters,
    underscores and whitespace are rejected.

    Args:
        language_code: Candidate code

    Returns:
        True if Babel knows the language
    """
    from babel.core import UnknownLocaleError  # noqa: PLC0415

    if not _LANGUAGE_CODE_SHAPE.match(language_code):
        return False
    try:
        get_babel_locale(language_code)
    except (UnknownLocaleError, ValueError, TypeError):
        return False
    return True


def clear_language_cache() -> None:
    """Clear the memoized Babel lookups.

    Useful in tests and after upgrading CLDR data in a long-running process.
    """
    is_valid_language_code.cache_clear()
    get_babel_locale.cache_clear()


class BabelLanguageRegistry:
    """LanguageRegistry implementation backed by Babel.

    Example:
        >>> registry = BabelLanguageRegistry()
        >>> registry.is_valid_language_code("fr")
        True
        >>> registry.is_valid_language_code("xx-not-a-code")
        False
    """

    __slots__ = ("_extra_codes",)

    def __init__(self, extra_codes: frozenset[str] = frozenset()) -> None:
        """Initialize registry.

        Args:
            extra_codes: Codes accepted even though CLDR does not know them
                (e.g., private-use or site-specific codes)
        """
        self._extra_codes = extra_codes

    def is_valid_language_code(self, code: str) -> bool:
        """Return True if code is an extra code or known to CLDR."""
        return code in self._extra_codes or is_valid_language_code(code)
