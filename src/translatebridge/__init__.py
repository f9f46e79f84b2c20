"""translatebridge - Lazy, cached access to translated message bundles.

Resolves user-supplied identifiers into validated message bundles and
serves their values in any language. Translated values live in separately
stored pages and are fetched individually, on demand, then memoized.

Public API:
    TranslateLibrary - Caller-facing operations (keys, values, metadata, progress)
    BundleConfig - Explicit resolution settings
    CanonicalPath - Normalized resource identifier
    PathResolver - Identifier normalization
    Bundle / BundleMetadata - Decoded bundle content
    MappingContentStore / DirectoryContentStore - Bundled content stores
    BabelLanguageRegistry - CLDR-backed language code validation

Exceptions:
    TranslateError - Base exception class
    MalformedIdentifierError - Identifier cannot be normalized
    BundleError - Bundle cannot be served
    InvalidLanguageCodeError - Unknown language code
    ArgumentTypeError - Wrongly typed host-facing argument

Submodules:
    translatebridge.runtime - BundleCache, LazyMessageResolver, RWLock
    translatebridge.content - Bundle content decoding
    translatebridge.progress - Translation progress queries
    translatebridge.registry - Collaborator protocols
    translatebridge.diagnostics - Error types and diagnostic formatting
"""

from .bundle import Bundle, BundleMetadata
from .config import BundleConfig
from .diagnostics import (
    ArgumentTypeError,
    BundleError,
    InvalidLanguageCodeError,
    MalformedIdentifierError,
    TranslateError,
)
from .library import TranslateLibrary
from .locale_utils import BabelLanguageRegistry
from .paths import CanonicalPath, PathResolver
from .registry import DirectoryContentStore, MappingContentStore, TranslationVariant

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("translatebridge")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ArgumentTypeError",
    "BabelLanguageRegistry",
    "Bundle",
    "BundleConfig",
    "BundleError",
    "BundleMetadata",
    "CanonicalPath",
    "DirectoryContentStore",
    "InvalidLanguageCodeError",
    "MalformedIdentifierError",
    "MappingContentStore",
    "PathResolver",
    "TranslateError",
    "TranslateLibrary",
    "TranslationVariant",
    "__version__",
]
