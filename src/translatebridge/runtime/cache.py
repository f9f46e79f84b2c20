"""Process-wide cache of resolved message bundles.

Each canonical bundle identifier gets exactly one cache slot, filled on the
first request and never evicted. A slot holds either the decoded Bundle or
the BundleError explaining why the page cannot be served. Failures are
cached exactly like successes, so a permanently broken bundle costs one
store round-trip and one decode attempt per process no matter how often a
script asks for it.

Architecture:
    - Tagged slot values: ValidBundle | InvalidBundle
    - Slots keyed by CanonicalPath.full_text
    - RWLock guards the slot map: shared lookups, exclusive inserts
    - Each missing key gets a fill lock; the first thread to take it
      loads the page while later requests for that key wait on it, so an
      identifier is fetched once even under contention
    - Loading happens outside the map lock: a slow fill never delays
      hits on other identifiers

Staleness is accepted: content edited after its slot was filled is not
seen until the cache instance is discarded.

Python 3.13+.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias

from translatebridge.bundle import Bundle
from translatebridge.config import BundleConfig
from translatebridge.content import DecodedBundle, MalformedContent, decode_bundle_content
from translatebridge.diagnostics import BundleError, Diagnostic, ErrorTemplate
from translatebridge.enums import BundleRejection, EntryStatus
from translatebridge.runtime.rwlock import RWLock

if TYPE_CHECKING:
    from translatebridge.paths import CanonicalPath
    from translatebridge.registry import BundleRegistry, ContentStore

__all__ = ["BundleCache", "BundleCacheEntry", "InvalidBundle", "ValidBundle"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ValidBundle:
    """Slot value for a successfully decoded bundle."""

    bundle: Bundle

    @property
    def status(self) -> EntryStatus:
        """Always EntryStatus.VALID."""
        return EntryStatus.VALID


@dataclass(frozen=True, slots=True)
class InvalidBundle:
    """Slot value for a bundle that cannot be served.

    Attributes:
        reason: Why the bundle was refused
        rejection: Which check refused it
        error: The single error instance raised for this identifier
    """

    reason: str
    rejection: BundleRejection
    error: BundleError

    @property
    def status(self) -> EntryStatus:
        """Always EntryStatus.INVALID."""
        return EntryStatus.INVALID


BundleCacheEntry: TypeAlias = ValidBundle | InvalidBundle


class BundleCache:
    """Resolve canonical paths to validated bundles, memoizing every outcome.

    Example:
        >>> cache = BundleCache(store, registry)
        >>> bundle = cache.resolve(CanonicalPath(text="Foo"))
        >>> bundle.ordered_keys
        ('greeting', 'farewell')
    """

    __slots__ = (
        "_bundle_registry",
        "_config",
        "_content_store",
        "_entries",
        "_fill_locks",
        "_hits",
        "_lock",
        "_misses",
        "_stats_lock",
    )

    def __init__(
        self,
        content_store: ContentStore,
        bundle_registry: BundleRegistry,
        config: BundleConfig | None = None,
    ) -> None:
        """Initialize bundle cache.

        Args:
            content_store: Source of raw bundle page text
            bundle_registry: Decides which pages are bundle sources
            config: Resolution settings (default: BundleConfig())
        """
        self._content_store = content_store
        self._bundle_registry = bundle_registry
        self._config = config or BundleConfig()
        self._entries: dict[str, BundleCacheEntry] = {}
        self._fill_locks: dict[str, threading.Lock] = {}
        self._lock = RWLock()
        self._stats_lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def resolve(self, path: CanonicalPath) -> Bundle:
        """Return the bundle stored at path.

        Args:
            path: Canonical path of the bundle source page

        Returns:
            Decoded Bundle

        Raises:
            BundleError: The memoized error for this identifier. Repeated
                calls raise the same instance; each raise starts a fresh
                traceback and suppresses any exception being handled, so
                the shared instance never accumulates earlier callers'
                frames.
        """
        match self.entry_for(path):
            case ValidBundle(bundle=bundle):
                return bundle
            case InvalidBundle(error=error):
                raise error.with_traceback(None) from None

    def entry_for(self, path: CanonicalPath) -> BundleCacheEntry:
        """Return the cache slot for path, filling it on first request.

        Args:
            path: Canonical path of the bundle source page

        Returns:
            ValidBundle or InvalidBundle
        """
        key = path.full_text

        entry = self._lookup(key)
        if entry is not None:
            self._count(hit=True)
            logger.debug("Bundle cache hit: %s (%s)", key, entry.status)
            return entry

        with self._lock.write():
            entry = self._entries.get(key)
            if entry is None:
                fill_lock = self._fill_locks.setdefault(key, threading.Lock())
        if entry is not None:
            self._count(hit=True)
            return entry

        # Store and registry I/O runs outside the map lock; only fills of
        # the same key wait on each other
        with fill_lock:
            entry = self._lookup(key)
            if entry is not None:
                self._count(hit=True)
                return entry
            entry = self._load(path)
            with self._lock.write():
                self._entries[key] = entry
                self._fill_locks.pop(key, None)

        self._count(hit=False)
        return entry

    def _lookup(self, key: str) -> BundleCacheEntry | None:
        with self._lock.read():
            return self._entries.get(key)

    def _load(self, path: CanonicalPath) -> BundleCacheEntry:
        page = path.full_text

        if not self._config.bundle_integration_enabled:
            return self._reject(
                ErrorTemplate.integration_disabled(page), BundleRejection.DISABLED, page
            )

        if not self._bundle_registry.is_bundle_source(path):
            content_kind = self._bundle_registry.content_kind(path)
            return self._reject(
                ErrorTemplate.not_a_bundle(page, content_kind),
                BundleRejection.NOT_A_BUNDLE,
                page,
            )

        logger.debug("Fetching bundle content: %s", page)
        match decode_bundle_content(self._content_store.fetch(path)):
            case MalformedContent(reason=reason):
                return self._reject(
                    ErrorTemplate.invalid_bundle_data(page, reason),
                    BundleRejection.INVALID_DATA,
                    page,
                )
            case DecodedBundle(messages=messages, metadata=metadata):
                bundle = Bundle(identifier=path, messages=messages, metadata=metadata)
                logger.info("Loaded message bundle %s with %d keys", page, len(messages))
                return ValidBundle(bundle)

    @staticmethod
    def _reject(
        diagnostic: Diagnostic, rejection: BundleRejection, page: str
    ) -> InvalidBundle:
        # Decoder explanations travel in the hint; gate refusals are self-explanatory
        reason = diagnostic.hint if rejection is BundleRejection.INVALID_DATA else None
        reason = reason or diagnostic.message
        logger.warning("Rejected message bundle %s: %s (%s)", page, diagnostic.message, reason)
        return InvalidBundle(
            reason=reason,
            rejection=rejection,
            error=BundleError(diagnostic, page=page),
        )

    def _count(self, *, hit: bool) -> None:
        with self._stats_lock:
            if hit:
                self._hits += 1
            else:
                self._misses += 1

    def get_stats(self) -> dict[str, int]:
        """Get cache statistics.

        Thread-safe. Returns current metrics.

        Returns:
            Dict with keys:
            - size (int): Number of filled slots
            - valid (int): Slots holding a bundle
            - invalid (int): Slots holding an error
            - hits (int): Lookups answered from a filled slot
            - misses (int): Lookups that filled a slot
        """
        with self._lock.read():
            valid = sum(1 for e in self._entries.values() if isinstance(e, ValidBundle))
            size = len(self._entries)
        with self._stats_lock:
            return {
                "size": size,
                "valid": valid,
                "invalid": size - valid,
                "hits": self._hits,
                "misses": self._misses,
            }

    def __len__(self) -> int:
        """Number of filled slots."""
        with self._lock.read():
            return len(self._entries)

    def __contains__(self, path: object) -> bool:
        """Check whether a slot exists for path (a CanonicalPath)."""
        key = getattr(path, "full_text", None)
        if key is None:
            return False
        with self._lock.read():
            return key in self._entries

    @property
    def config(self) -> BundleConfig:
        """Resolution settings."""
        return self._config
