"""Translation progress queries for translatable pages.

All queries first resolve the given path to a translatable page through the
translation registry. A page that is not marked for translation, or whose
registry metadata is incomplete, is a legitimate "no data" answer: queries
return None or an empty result instead of raising.

Python 3.13+.
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from translatebridge.diagnostics import RegistryLookupError

if TYPE_CHECKING:
    from translatebridge.paths import CanonicalPath
    from translatebridge.registry import (
        LanguageRegistry,
        TranslatablePage,
        TranslationRegistry,
    )

__all__ = ["ProgressCalculator", "completion_ratio"]

logger = logging.getLogger(__name__)


def completion_ratio(figure: str | float) -> float:
    """Convert a registry completion figure to a ratio in [0.0, 1.0].

    Text figures are fractions (``"0.75"``) or percentages (``"75%"``).
    Unparseable and non-finite figures count as 0.0; out-of-range figures
    are clamped.

    Args:
        figure: Completion figure as text or number

    Returns:
        Ratio between 0.0 and 1.0 inclusive

    Example:
        >>> completion_ratio("0.5")
        0.5
        >>> completion_ratio("80%")
        0.8
        >>> completion_ratio("n/a")
        0.0
    """
    if isinstance(figure, int | float):
        value = float(figure)
    else:
        text = str(figure).strip()
        percent = text.endswith("%")
        if percent:
            text = text[:-1].rstrip()
        try:
            value = float(text)
        except ValueError:
            logger.warning("Unparseable completion figure %r treated as 0", figure)
            return 0.0
        if percent:
            value /= 100

    if not math.isfinite(value):
        logger.warning("Non-finite completion figure %r treated as 0", figure)
        return 0.0
    return min(max(value, 0.0), 1.0)


class ProgressCalculator:
    """Language variant and completion queries.

    Example:
        >>> progress = ProgressCalculator(translation_registry)
        >>> progress.available_languages(CanonicalPath(text="Main Page"))
        ('en', 'fr', 'de')
        >>> progress.language_progress(CanonicalPath(text="Main Page"))
        {'en': 1.0, 'fr': 0.5, 'de': 0.25}
    """

    __slots__ = ("_language_registry", "_translation_registry")

    def __init__(
        self,
        translation_registry: TranslationRegistry | None,
        language_registry: LanguageRegistry | None = None,
    ) -> None:
        """Initialize calculator.

        Args:
            translation_registry: Resolves translatable pages. None means the
                host has no translatable pages; every query returns no data.
            language_registry: Validates language codes read from subpage
                names when the registry lists no matching variant (optional)
        """
        self._translation_registry = translation_registry
        self._language_registry = language_registry

    def translatable_page(self, path: CanonicalPath) -> TranslatablePage | None:
        """Resolve path to its translatable page, or None.

        Registry lookup failures are logged and reported as None.
        """
        if self._translation_registry is None:
            return None
        try:
            page = self._translation_registry.resolve_translatable_page(path)
        except RegistryLookupError as e:
            logger.debug("No translatable page for %s: %s", path.full_text, e)
            return None
        if page is None:
            logger.debug("Not a translatable page: %s", path.full_text)
        return page

    def current_language(self, context_path: CanonicalPath) -> str | None:
        """Return the language of a translation variant page.

        Source pages and pages outside translation return None. The source
        page check compares canonical paths by value.

        Args:
            context_path: Page currently being rendered

        Returns:
            Language code of the variant, or None
        """
        page = self.translatable_page(context_path)
        if page is None:
            return None

        current = context_path.without_fragment()
        if current == page.path.without_fragment():
            return None

        for variant in page.variants():
            if variant.path.without_fragment() == current:
                return variant.language_code

        # Variant not listed yet (e.g., freshly created): trust a valid subpage code
        code = current.subpage_name
        if (
            code is not None
            and current.in_namespace(page.path.namespace)
            and current.base_text == page.path.text
            and self._language_registry is not None
            and self._language_registry.is_valid_language_code(code)
        ):
            return code
        return None

    def available_languages(self, path: CanonicalPath) -> tuple[str, ...]:
        """Return the language codes of all existing variants, in registry order.

        Non-translatable pages yield an empty tuple.
        """
        page = self.translatable_page(path)
        if page is None:
            return ()
        return tuple(variant.language_code for variant in page.variants())

    def language_progress(self, path: CanonicalPath) -> dict[str, float]:
        """Return completion ratio per language code.

        Non-translatable pages yield an empty mapping.
        """
        page = self.translatable_page(path)
        if page is None:
            return {}
        return {
            code: completion_ratio(figure)
            for code, figure in page.completion_percentages().items()
        }
