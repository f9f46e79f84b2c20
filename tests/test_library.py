"""End-to-end tests for TranslateLibrary.

Exercises the caller-facing operations through real PathResolver,
BundleCache, LazyMessageResolver and ProgressCalculator instances wired to
in-memory collaborators.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from hypothesis import given

from tests.helpers.fakes import (
    CountingContentStore,
    FakeBundleRegistry,
    FakeLanguageRegistry,
    FakeTranslationRegistry,
    make_translatable_page,
)
from tests.strategies import bundle_json, bundle_messages
from translatebridge import (
    ArgumentTypeError,
    BundleConfig,
    BundleError,
    CanonicalPath,
    InvalidLanguageCodeError,
    MalformedIdentifierError,
    MappingContentStore,
    TranslateLibrary,
    __version__,
)
from translatebridge.diagnostics import DiagnosticCode


@pytest.fixture
def library(
    store: CountingContentStore,
    bundle_registry: FakeBundleRegistry,
    language_registry: FakeLanguageRegistry,
) -> TranslateLibrary:
    page = make_translatable_page("Main Page", {"en": "1.0", "fr": "0.5", "de": "10%"})
    return TranslateLibrary(
        store,
        bundle_registry,
        language_registry,
        FakeTranslationRegistry([page]),
    )


class TestFooScenario:
    """Bundle Foo with a French greeting and no French farewell."""

    def test_missing_translation_is_empty(self, library: TranslateLibrary) -> None:
        assert library.get_bundle_value("Foo", "farewell", "fr") == ""

    def test_existing_translation(self, library: TranslateLibrary) -> None:
        assert library.get_bundle_value("Foo", "greeting", "fr") == "Bonjour"

    def test_all_values(self, library: TranslateLibrary) -> None:
        assert library.get_bundle_values("Foo", "fr") == {"greeting": "Bonjour", "farewell": ""}

    def test_keys(self, library: TranslateLibrary) -> None:
        assert library.get_bundle_keys("Foo") == ("greeting", "farewell")

    def test_metadata_record(self, library: TranslateLibrary) -> None:
        assert library.get_bundle_metadata("Foo") == {
            "sourceLanguage": "en",
            "priorityLanguages": ["fr", "de"],
            "allowOnlyPriorityLanguages": False,
            "description": "Greeting strings",
            "label": "Greetings",
        }

    def test_identifier_shapes_share_cache(
        self, library: TranslateLibrary, store: CountingContentStore
    ) -> None:
        library.get_bundle_keys("foo")
        library.get_bundle_keys({"text": "Foo"})
        library.get_bundle_keys(CanonicalPath(text="Foo"))
        library.get_bundle_keys(" Foo ")
        assert store.fetches["Foo"] == 1


class TestSourceLanguageShortCircuit:
    """Source language values come from the bundle itself."""

    def test_en_and_none_identical_without_fetch(
        self, library: TranslateLibrary, store: CountingContentStore
    ) -> None:
        english = library.get_bundle_values("Foo", "en")
        default = library.get_bundle_values("Foo", None)
        assert english == default == {"greeting": "Hello", "farewell": "Goodbye"}
        assert store.fetches == {"Foo": 1}

    def test_language_omitted(self, library: TranslateLibrary) -> None:
        assert library.get_bundle_value("Foo", "greeting") == "Hello"
        assert library.get_bundle_values("Foo") == {"greeting": "Hello", "farewell": "Goodbye"}


class TestLazySingleFetch:
    """Only the requested cell is fetched."""

    def test_repeated_value_fetches_once(self) -> None:
        store = CountingContentStore({"Abc": '{"a": "A", "b": "B", "c": "C"}'})
        library = TranslateLibrary(
            store, FakeBundleRegistry(sources={"Abc"}), FakeLanguageRegistry({"fr"})
        )

        library.get_bundle_value("Abc", "a", "fr")
        library.get_bundle_value("Abc", "a", "fr")

        assert store.fetches["Translations:Abc/a/fr"] == 1
        assert store.fetches["Translations:Abc/b/fr"] == 0
        assert store.fetches["Translations:Abc/c/fr"] == 0

    def test_concurrent_values_fetch_each_cell_once(self) -> None:
        messages = {f"key{i}": f"value {i}" for i in range(20)}
        pages = {"Big": bundle_json(messages)}
        pages.update({f"Translations:Big/key{i}/fr": f"valeur {i}" for i in range(0, 20, 2)})
        store = CountingContentStore(pages)
        library = TranslateLibrary(
            store, FakeBundleRegistry(sources={"Big"}), FakeLanguageRegistry({"fr"})
        )
        barrier = threading.Barrier(8)

        def worker(offset: int) -> dict[str, str]:
            barrier.wait()
            return {
                key: library.get_bundle_value("Big", key, "fr")
                for key in list(messages)[offset:] + list(messages)[:offset]
            }

        with ThreadPoolExecutor(max_workers=8) as executor:
            results = list(executor.map(worker, range(8)))

        assert all(result == results[0] for result in results)
        assert results[0]["key0"] == "valeur 0"
        assert results[0]["key1"] == ""
        assert store.fetches["Big"] == 1
        assert all(
            store.fetches[f"Translations:Big/key{i}/fr"] == 1 for i in range(20)
        )


class TestErrors:
    """Failure modes surfaced to callers."""

    def test_malformed_bundle_error_cached(self) -> None:
        store = CountingContentStore({"Broken": '{"a": ["not", "a", "string"]}'})
        library = TranslateLibrary(store, FakeBundleRegistry(sources={"Broken"}))

        with pytest.raises(BundleError) as first:
            library.get_bundle_keys("Broken")
        with pytest.raises(BundleError) as second:
            library.get_bundle_keys("Broken")

        assert str(first.value) == str(second.value)
        assert str(first.value) == 'The MessageBundle "Broken" contains invalid JSON'
        assert first.value is second.value
        assert store.fetches["Broken"] == 1

    def test_invalid_language_no_fetch(self, store: CountingContentStore) -> None:
        # Default registry validates against CLDR
        library = TranslateLibrary(store, FakeBundleRegistry(sources={"Foo"}))
        library.get_bundle_keys("Foo")

        with pytest.raises(InvalidLanguageCodeError, match="xx-not-a-code"):
            library.get_bundle_value("Foo", "greeting", "xx-not-a-code")

        assert store.fetches == {"Foo": 1}

    def test_babel_registry_accepts_known_language(self, store: CountingContentStore) -> None:
        library = TranslateLibrary(store, FakeBundleRegistry(sources={"Foo"}))
        assert library.get_bundle_value("Foo", "greeting", "fr") == "Bonjour"

    def test_disabled_integration(
        self, store: CountingContentStore, bundle_registry: FakeBundleRegistry
    ) -> None:
        library = TranslateLibrary(
            store, bundle_registry, config=BundleConfig(bundle_integration_enabled=False)
        )
        with pytest.raises(BundleError, match=r'MessageBundleIntegration is disabled \("Foo"\)'):
            library.get_bundle_metadata("Foo")
        assert store.total_fetches == 0

    def test_positional_identifier(self, library: TranslateLibrary) -> None:
        with pytest.raises(MalformedIdentifierError):
            library.get_bundle_keys(["Foo"])

    def test_missing_identifier_without_context(self, library: TranslateLibrary) -> None:
        with pytest.raises(MalformedIdentifierError):
            library.get_bundle_keys()

    @pytest.mark.parametrize(
        ("call", "message"),
        [
            (
                lambda lib: lib.get_bundle_value("Foo", 5),
                "bad argument #2 to 'getBundleValue' (string expected, got int)",
            ),
            (
                lambda lib: lib.get_bundle_value("Foo", None),
                "bad argument #2 to 'getBundleValue' (string expected, got nil)",
            ),
            (
                lambda lib: lib.get_bundle_value("Foo", "greeting", 3.5),
                "bad argument #3 to 'getBundleValue' (string expected, got float)",
            ),
            (
                lambda lib: lib.get_bundle_values("Foo", ["fr"]),
                "bad argument #2 to 'getBundleValues' (string expected, got list)",
            ),
        ],
    )
    def test_argument_types(self, library: TranslateLibrary, call: object, message: str) -> None:
        with pytest.raises(ArgumentTypeError) as exc_info:
            call(library)  # type: ignore[operator]
        assert str(exc_info.value) == message
        assert isinstance(exc_info.value, TypeError)
        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code == DiagnosticCode.ARGUMENT_TYPE_MISMATCH


class TestContextAndProgress:
    """Context page handling and progress queries."""

    def test_context_used_for_missing_identifier(self, library: TranslateLibrary) -> None:
        library.context = CanonicalPath(text="Foo")
        assert library.get_bundle_keys() == ("greeting", "farewell")

    def test_current_language_without_context(self, library: TranslateLibrary) -> None:
        assert library.get_current_language() is None

    def test_current_language_on_variant(self, library: TranslateLibrary) -> None:
        library.context = library.paths.normalize("Main_Page/fr")
        assert library.get_current_language() == "fr"

    def test_current_language_on_source_page(self, library: TranslateLibrary) -> None:
        library.context = library.paths.normalize("Main_Page#Intro")
        assert library.get_current_language() is None

    def test_available_languages(self, library: TranslateLibrary) -> None:
        assert library.get_available_languages("Main Page") == ("en", "fr", "de")

    def test_available_languages_from_context(self, library: TranslateLibrary) -> None:
        library.context = CanonicalPath(text="Main Page/de")
        assert library.get_available_languages() == ("en", "fr", "de")

    def test_language_progress(self, library: TranslateLibrary) -> None:
        assert library.get_language_progress("Main Page") == {"en": 1.0, "fr": 0.5, "de": 0.1}

    def test_non_translatable_page(self, library: TranslateLibrary) -> None:
        assert library.get_available_languages("Foo") == ()
        assert library.get_language_progress("Foo") == {}

    def test_progress_without_translation_registry(
        self, store: CountingContentStore, bundle_registry: FakeBundleRegistry
    ) -> None:
        library = TranslateLibrary(store, bundle_registry)
        assert library.get_available_languages("Main Page") == ()
        assert library.get_language_progress("Main Page") == {}

    def test_progress_rejects_malformed_identifier(self, library: TranslateLibrary) -> None:
        with pytest.raises(MalformedIdentifierError):
            library.get_language_progress("Bad[title]")


class TestHostBinding:
    """Function table and bookkeeping."""

    def test_exported_function_names(self, library: TranslateLibrary) -> None:
        assert sorted(library.exported_functions()) == [
            "getAvailableLanguages",
            "getBundleKeys",
            "getBundleMetadata",
            "getBundleValue",
            "getBundleValues",
            "getCurrentLanguage",
            "getLanguageProgress",
        ]

    def test_exported_functions_are_bound(self, library: TranslateLibrary) -> None:
        functions = library.exported_functions()
        assert functions["getBundleValue"]("Foo", "greeting", "fr") == "Bonjour"
        assert functions["getCurrentLanguage"]() is None

    def test_cache_stats(self, library: TranslateLibrary) -> None:
        library.get_bundle_value("Foo", "greeting", "fr")
        library.get_bundle_keys("Foo")
        stats = library.get_cache_stats()
        assert stats["bundles"]["size"] == 1
        assert stats["bundles"]["hits"] == 1
        assert stats["messages"] == {"language_maps": 1, "cells": 2, "evaluated": 1}

    def test_config_defaults(self, library: TranslateLibrary) -> None:
        assert library.config == BundleConfig()

    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)
        assert __version__


class TestLibraryProperties:
    """Property-based checks."""

    @given(messages=bundle_messages())
    def test_keys_preserve_document_order(self, messages: dict[str, str]) -> None:
        store = MappingContentStore({"Bundle": bundle_json(messages)})
        library = TranslateLibrary(store, FakeBundleRegistry(sources={"Bundle"}))
        assert library.get_bundle_keys("Bundle") == tuple(messages)
        assert library.get_bundle_values("Bundle") == messages

