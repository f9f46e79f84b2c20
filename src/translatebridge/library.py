"""Caller-facing library exposing bundle and progress queries.

TranslateLibrary wires PathResolver, BundleCache, LazyMessageResolver and
ProgressCalculator together behind the operations a scripting host binds
to named functions. Each call normalizes its identifier, resolves the
bundle through the cache, and computes only the requested values.

Key architectural decisions:
- Collaborators injected at construction (dependency inversion)
- Explicit BundleConfig; no global settings read mid-call
- Caches live as long as the library instance
- Argument types checked at the boundary, mirroring the host contract

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from translatebridge.config import BundleConfig
from translatebridge.diagnostics import ArgumentTypeError, ErrorTemplate
from translatebridge.locale_utils import BabelLanguageRegistry
from translatebridge.paths import CanonicalPath, PathResolver
from translatebridge.progress import ProgressCalculator
from translatebridge.runtime.cache import BundleCache
from translatebridge.runtime.resolver import LazyMessageResolver

if TYPE_CHECKING:
    from translatebridge.bundle import Bundle
    from translatebridge.registry import (
        BundleRegistry,
        ContentStore,
        LanguageRegistry,
        TranslationRegistry,
    )

__all__ = ["TranslateLibrary"]

logger = logging.getLogger(__name__)


def _check_string(function_name: str, position: int, value: object, *, optional: bool) -> None:
    if isinstance(value, str) or (optional and value is None):
        return
    raise ArgumentTypeError(
        ErrorTemplate.argument_type_mismatch(function_name, position, "string", value)
    )


class TranslateLibrary:
    """Message bundle and translation progress queries for a scripting host.

    Example:
        >>> store = MappingContentStore({
        ...     "Foo": '{"@metadata": {"sourceLanguage": "en"}, '
        ...            '"greeting": "Hello", "farewell": "Goodbye"}',
        ...     "Translations:Foo/greeting/fr": "Bonjour",
        ... })
        >>> library = TranslateLibrary(store, bundle_registry)
        >>> library.get_bundle_keys("Foo")
        ('greeting', 'farewell')
        >>> library.get_bundle_value("Foo", "greeting", "fr")
        'Bonjour'
        >>> library.get_bundle_values("Foo", "fr")
        {'greeting': 'Bonjour', 'farewell': ''}

    Attributes:
        context: Page currently being rendered; used when an identifier
            is omitted and by get_current_language()
    """

    __slots__ = ("_bundles", "_config", "_paths", "_progress", "_resolver", "context")

    def __init__(
        self,
        content_store: ContentStore,
        bundle_registry: BundleRegistry,
        language_registry: LanguageRegistry | None = None,
        translation_registry: TranslationRegistry | None = None,
        *,
        context: CanonicalPath | None = None,
        config: BundleConfig | None = None,
    ) -> None:
        """Initialize library.

        Args:
            content_store: Source of bundle and translation unit pages
            bundle_registry: Decides which pages are bundle sources
            language_registry: Validates language codes
                (default: BabelLanguageRegistry())
            translation_registry: Resolves translatable pages for progress
                queries (optional; without it progress queries return no data)
            context: Page currently being rendered (optional)
            config: Resolution settings (default: BundleConfig())
        """
        self._config = config or BundleConfig()
        language_registry = language_registry or BabelLanguageRegistry()
        self._paths = PathResolver(self._config)
        self._bundles = BundleCache(content_store, bundle_registry, self._config)
        self._resolver = LazyMessageResolver(content_store, language_registry, self._config)
        self._progress = ProgressCalculator(translation_registry, language_registry)
        self.context = context

    @property
    def config(self) -> BundleConfig:
        """Resolution settings (read-only)."""
        return self._config

    @property
    def paths(self) -> PathResolver:
        """Identifier normalizer used by every call."""
        return self._paths

    def _bundle(self, identifier: object) -> Bundle:
        path = self._paths.normalize(identifier, self.context)
        return self._bundles.resolve(path)

    def get_bundle_keys(self, identifier: object = None) -> tuple[str, ...]:
        """Return the bundle's message keys in document order.

        Raises:
            MalformedIdentifierError: If identifier cannot be normalized
            BundleError: If the bundle cannot be served
        """
        return self._resolver.get_keys(self._bundle(identifier))

    def get_bundle_value(
        self, identifier: object, key: object, language: object = None
    ) -> str:
        """Return one message value.

        Args:
            identifier: Bundle identifier
            key: Message key
            language: Language code, or None for the source language

        Returns:
            The value; empty string when absent

        Raises:
            ArgumentTypeError: If key is not a string or language is not a
                string or None
            MalformedIdentifierError: If identifier cannot be normalized
            BundleError: If the bundle cannot be served
            InvalidLanguageCodeError: If language is not recognized
        """
        _check_string("getBundleValue", 2, key, optional=False)
        _check_string("getBundleValue", 3, language, optional=True)
        bundle = self._bundle(identifier)
        logger.debug("getBundleValue %s key=%s language=%s", bundle.cache_key, key, language)
        return self._resolver.get_value(bundle, language, key)  # type: ignore[arg-type]

    def get_bundle_values(self, identifier: object = None, language: object = None) -> dict[str, str]:
        """Return all message values in document order.

        Raises:
            ArgumentTypeError: If language is not a string or None
            MalformedIdentifierError: If identifier cannot be normalized
            BundleError: If the bundle cannot be served
            InvalidLanguageCodeError: If language is not recognized
        """
        _check_string("getBundleValues", 2, language, optional=True)
        bundle = self._bundle(identifier)
        logger.debug("getBundleValues %s language=%s", bundle.cache_key, language)
        return self._resolver.get_all_values(bundle, language)  # type: ignore[arg-type]

    def get_bundle_metadata(self, identifier: object = None) -> dict[str, object]:
        """Return the bundle's metadata record.

        Keys: sourceLanguage, priorityLanguages, allowOnlyPriorityLanguages,
        description, label.

        Raises:
            MalformedIdentifierError: If identifier cannot be normalized
            BundleError: If the bundle cannot be served
        """
        return self._bundle(identifier).metadata.as_record()

    def get_current_language(self) -> str | None:
        """Return the language of the context page if it is a translation variant."""
        if self.context is None:
            return None
        return self._progress.current_language(self.context)

    def get_available_languages(self, identifier: object = None) -> tuple[str, ...]:
        """Return language codes of the page's existing variants.

        Raises:
            MalformedIdentifierError: If identifier cannot be normalized
        """
        return self._progress.available_languages(self._paths.normalize(identifier, self.context))

    def get_language_progress(self, identifier: object = None) -> dict[str, float]:
        """Return completion ratio per language code.

        Raises:
            MalformedIdentifierError: If identifier cannot be normalized
        """
        return self._progress.language_progress(self._paths.normalize(identifier, self.context))

    def get_cache_stats(self) -> dict[str, dict[str, int]]:
        """Return bundle cache and resolver statistics."""
        return {
            "bundles": self._bundles.get_stats(),
            "messages": self._resolver.get_stats(),
        }

    def exported_functions(self) -> dict[str, Callable[..., object]]:
        """Return the host-facing function table.

        Names follow the scripting host's camelCase convention.
        """
        return {
            "getBundleKeys": self.get_bundle_keys,
            "getBundleValue": self.get_bundle_value,
            "getBundleValues": self.get_bundle_values,
            "getBundleMetadata": self.get_bundle_metadata,
            "getCurrentLanguage": self.get_current_language,
            "getAvailableLanguages": self.get_available_languages,
            "getLanguageProgress": self.get_language_progress,
        }
