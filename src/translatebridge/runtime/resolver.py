"""Lazy, memoized resolution of translated bundle values.

Translated values are stored one per page, at
``Translations:<bundle>/<key>/<language>``. Fetching every page of a large
bundle to answer a single lookup would be wasteful, so the resolver builds,
per (bundle, language), a LanguageMap holding one LazyValue cell per key.
A cell fetches its page on first access and remembers the answer; a
missing page is remembered as the empty string and never fetched again.

Requests with no language, or for the source language the bundle declares,
never touch the store: the values come straight from the decoded bundle.
A bundle that declares no source language serves every named language from
translation unit pages.

Thread Safety:
    LanguageMap creation is guarded by the resolver lock. Each cell fills
    itself under its own lock (first write wins), so concurrent lookups of
    the same key fetch once and lookups of different keys do not contend.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Final

from translatebridge.config import BundleConfig
from translatebridge.diagnostics import ErrorTemplate, InvalidLanguageCodeError
from translatebridge.paths import translation_unit_path

if TYPE_CHECKING:
    from collections.abc import Iterator

    from translatebridge.bundle import Bundle
    from translatebridge.paths import CanonicalPath
    from translatebridge.registry import ContentStore, LanguageRegistry

__all__ = ["LanguageMap", "LazyMessageResolver", "LazyValue"]

logger = logging.getLogger(__name__)

_UNSET: Final = object()


class LazyValue:
    """Deferred, memoize-once fetch of one translated value.

    Attributes:
        path: Translation unit page backing this value
    """

    __slots__ = ("_content_store", "_lock", "_value", "path")

    def __init__(self, path: CanonicalPath, content_store: ContentStore) -> None:
        self.path = path
        self._content_store = content_store
        self._lock = threading.Lock()
        self._value: object = _UNSET

    @property
    def evaluated(self) -> bool:
        """True once the backing page has been fetched."""
        return self._value is not _UNSET

    def get(self) -> str:
        """Return the value, fetching the backing page on first call."""
        value = self._value
        if value is not _UNSET:
            return value  # type: ignore[return-value]

        with self._lock:
            if self._value is _UNSET:
                fetched = self._content_store.fetch(self.path)
                logger.debug(
                    "Fetched translation unit %s (%s)",
                    self.path.full_text,
                    "found" if fetched is not None else "absent",
                )
                self._value = fetched if fetched is not None else ""
            return self._value  # type: ignore[return-value]


class LanguageMap:
    """Key to LazyValue mapping for one (bundle, language) pair.

    Keys follow the bundle's document order.

    Attributes:
        bundle_key: Cache key of the owning bundle
        language: Language code of the translated values
    """

    __slots__ = ("_cells", "bundle_key", "language")

    def __init__(self, bundle: Bundle, language: str, content_store: ContentStore) -> None:
        self.bundle_key = bundle.cache_key
        self.language = language
        self._cells: dict[str, LazyValue] = {
            key: LazyValue(translation_unit_path(bundle.identifier, key, language), content_store)
            for key in bundle.ordered_keys
        }

    def get_value(self, key: str) -> str:
        """Evaluate one cell; unknown keys yield the empty string without a fetch."""
        cell = self._cells.get(key)
        return cell.get() if cell is not None else ""

    def resolve_all(self) -> dict[str, str]:
        """Evaluate every cell in key order and return the full mapping."""
        return {key: cell.get() for key, cell in self._cells.items()}

    def cell(self, key: str) -> LazyValue | None:
        """Return the cell for key without evaluating it."""
        return self._cells.get(key)

    @property
    def evaluated_count(self) -> int:
        """Number of cells whose page has been fetched."""
        return sum(1 for cell in self._cells.values() if cell.evaluated)

    def __len__(self) -> int:
        return len(self._cells)

    def __iter__(self) -> Iterator[str]:
        return iter(self._cells)

    def __contains__(self, key: object) -> bool:
        return key in self._cells


class LazyMessageResolver:
    """Compute bundle values for arbitrary languages, lazily.

    Example:
        >>> resolver = LazyMessageResolver(store, BabelLanguageRegistry())
        >>> resolver.get_value(bundle, "fr", "greeting")
        'Bonjour'
        >>> resolver.get_all_values(bundle, "fr")
        {'greeting': 'Bonjour', 'farewell': ''}
    """

    __slots__ = ("_config", "_content_store", "_language_registry", "_lock", "_maps")

    def __init__(
        self,
        content_store: ContentStore,
        language_registry: LanguageRegistry,
        config: BundleConfig | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            content_store: Source of translation unit pages
            language_registry: Validates requested language codes
            config: Supplies the default language for bundles that declare
                no source language (default: BundleConfig())
        """
        self._content_store = content_store
        self._language_registry = language_registry
        self._config = config or BundleConfig()
        self._maps: dict[tuple[str, str], LanguageMap] = {}
        self._lock = threading.Lock()

    def source_language_of(self, bundle: Bundle) -> str:
        """Declared source language, or the configured default.

        Reporting only; the default does not make a language short-circuit.
        """
        return bundle.source_language or self._config.default_language_code

    def is_source_language(self, bundle: Bundle, language: str | None) -> bool:
        """True when values for language come from the bundle itself.

        Only an omitted language or the declared source language qualifies;
        the configured default never does.
        """
        if language is None:
            return True
        return bundle.source_language is not None and language == bundle.source_language

    def get_keys(self, bundle: Bundle) -> tuple[str, ...]:
        """Return the bundle's keys in document order. Never fetches."""
        return bundle.ordered_keys

    def get_value(self, bundle: Bundle, language: str | None, key: str) -> str:
        """Return one value, evaluating at most one cell.

        Args:
            bundle: Valid bundle
            language: Requested language, or None for the source language
            key: Message key

        Returns:
            The value; empty string when the key is unknown or the
            translation does not exist

        Raises:
            InvalidLanguageCodeError: If language is not a recognized code
        """
        if self.is_source_language(bundle, language):
            return bundle.messages.get(key, "")
        return self._language_map(bundle, language).get_value(key)  # type: ignore[arg-type]

    def get_all_values(self, bundle: Bundle, language: str | None) -> dict[str, str]:
        """Return every value, forcing all cells for the language.

        Args:
            bundle: Valid bundle
            language: Requested language, or None for the source language

        Returns:
            Key to value mapping in document order

        Raises:
            InvalidLanguageCodeError: If language is not a recognized code
        """
        if self.is_source_language(bundle, language):
            return dict(bundle.messages)
        return self._language_map(bundle, language).resolve_all()  # type: ignore[arg-type]

    def language_map(self, bundle: Bundle, language: str) -> LanguageMap | None:
        """Return the LanguageMap for (bundle, language) if one was built."""
        with self._lock:
            return self._maps.get((bundle.cache_key, language))

    def _language_map(self, bundle: Bundle, language: str) -> LanguageMap:
        slot = (bundle.cache_key, language)
        with self._lock:
            language_map = self._maps.get(slot)
            if language_map is None:
                if not self._language_registry.is_valid_language_code(language):
                    raise InvalidLanguageCodeError(
                        ErrorTemplate.invalid_language_code(language),
                        language_code=language,
                    )
                language_map = LanguageMap(bundle, language, self._content_store)
                self._maps[slot] = language_map
                logger.debug(
                    "Built language map for %s in %s (%d keys)",
                    bundle.cache_key,
                    language,
                    len(language_map),
                )
        return language_map

    def get_stats(self) -> dict[str, int]:
        """Get resolver statistics.

        Returns:
            Dict with keys:
            - language_maps (int): Distinct (bundle, language) pairs built
            - cells (int): LazyValue cells across all maps
            - evaluated (int): Cells whose page has been fetched
        """
        with self._lock:
            maps = list(self._maps.values())
        return {
            "language_maps": len(maps),
            "cells": sum(len(m) for m in maps),
            "evaluated": sum(m.evaluated_count for m in maps),
        }
