"""Runtime caches for bundle and message resolution.

Exports:
    BundleCache: One memoized slot per bundle identifier
    ValidBundle / InvalidBundle: Tagged slot values
    LazyMessageResolver: Per-language lazy value resolution
    LanguageMap / LazyValue: Memo structures built by the resolver
    RWLock: Readers-writer lock used by BundleCache

Python 3.13+.
"""

from .cache import BundleCache, BundleCacheEntry, InvalidBundle, ValidBundle
from .resolver import LanguageMap, LazyMessageResolver, LazyValue
from .rwlock import RWLock

__all__ = [
    "BundleCache",
    "BundleCacheEntry",
    "InvalidBundle",
    "LanguageMap",
    "LazyMessageResolver",
    "LazyValue",
    "RWLock",
    "ValidBundle",
]
