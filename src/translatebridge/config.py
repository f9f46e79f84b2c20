"""Configuration for bundle resolution.

Provides a single frozen dataclass that encapsulates the process settings
the resolution layer needs. Passed explicitly to BundleCache,
LazyMessageResolver, PathResolver and TranslateLibrary at construction;
nothing in the runtime reads global settings mid-call.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from translatebridge.constants import DEFAULT_LANGUAGE_CODE

__all__ = ["BundleConfig"]

# Interwiki prefixes are short lower-case identifiers.
_INTERWIKI_PREFIX = re.compile(r"^[a-z0-9][a-z0-9._-]*$")


@dataclass(frozen=True, slots=True)
class BundleConfig:
    """Immutable configuration for bundle resolution.

    All fields have sensible defaults; constructing ``BundleConfig()`` with
    no arguments produces a usable configuration.

    Attributes:
        bundle_integration_enabled: Serve message bundles at all (default: True).
            When False every bundle request fails with a cached BundleError.
        default_language_code: Language assumed for bundles that declare no
            source language (default: "en").
        interwiki_prefixes: Lower-case prefixes recognized as interwiki
            links when parsing path expressions (default: none).

    Example:
        >>> config = BundleConfig(default_language_code="de")
        >>> library = TranslateLibrary(store, registry, config=config)

    Example - Integration switched off:
        >>> config = BundleConfig(bundle_integration_enabled=False)
    """

    bundle_integration_enabled: bool = True
    default_language_code: str = DEFAULT_LANGUAGE_CODE
    interwiki_prefixes: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If default_language_code is empty or contains
                whitespace, or if an interwiki prefix is not a lower-case
                identifier.
        """
        code = self.default_language_code
        if not code or any(ch.isspace() for ch in code):
            msg = "default_language_code must be a non-empty code without whitespace"
            raise ValueError(msg)
        for prefix in self.interwiki_prefixes:
            if not _INTERWIKI_PREFIX.match(prefix):
                msg = f"Invalid interwiki prefix: {prefix!r}"
                raise ValueError(msg)
