"""Collaborator protocols and bundled content stores.

The resolution core talks to its environment through small structural
protocols: a content store that returns raw page text, a bundle registry
that knows which pages are bundle sources, a language registry that
accepts or rejects language codes, and a translation registry that
describes translatable pages. Hosts implement these against their own
storage; two content stores ship with the package.

Components:
    ContentStore - Protocol: fetch raw text for a path
    BundleRegistry - Protocol: bundle source recognition
    LanguageRegistry - Protocol: language code validation
    TranslationRegistry - Protocol: translatable page lookup
    TranslatablePage - Protocol: variants and completion figures
    TranslationVariant - One language variant of a translatable page
    MappingContentStore - In-memory store keyed by full text
    DirectoryContentStore - File-backed store with path-traversal prevention

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from translatebridge.paths import CanonicalPath

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocols
    "ContentStore",
    "BundleRegistry",
    "LanguageRegistry",
    "TranslationRegistry",
    "TranslatablePage",
    # Value types
    "TranslationVariant",
    # Concrete stores
    "MappingContentStore",
    "DirectoryContentStore",
]

logger = logging.getLogger(__name__)


class ContentStore(Protocol):
    """Protocol for fetching raw page text.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for hosts backing it with wiki pages, files or a
    database.

    Example:
        >>> class DictStore:
        ...     def __init__(self, pages: dict[str, str]) -> None:
        ...         self.pages = pages
        ...     def fetch(self, path: CanonicalPath) -> str | None:
        ...         return self.pages.get(path.full_text)
    """

    def fetch(self, path: CanonicalPath) -> str | None:
        """Return the raw text stored at path.

        Args:
            path: Canonical path of the resource

        Returns:
            Stored text, or None when the resource does not exist or is empty
        """


class BundleRegistry(Protocol):
    """Protocol for recognizing bundle source pages."""

    def is_bundle_source(self, path: CanonicalPath) -> bool:
        """Return True if path is a registered message bundle source."""

    def content_kind(self, path: CanonicalPath) -> str:
        """Return the content model name of path (e.g., ``"wikitext"``)."""


class LanguageRegistry(Protocol):
    """Protocol for validating language codes."""

    def is_valid_language_code(self, code: str) -> bool:
        """Return True if code names a known language."""


@dataclass(frozen=True, slots=True)
class TranslationVariant:
    """One language variant of a translatable page.

    Attributes:
        language_code: Language of the variant
        path: Path of the variant page
    """

    language_code: str
    path: CanonicalPath


class TranslatablePage(Protocol):
    """Protocol for a page marked for translation."""

    @property
    def path(self) -> CanonicalPath:
        """Path of the source page."""

    def variants(self) -> Sequence[TranslationVariant]:
        """Existing language variants, in registry order."""

    def completion_percentages(self) -> Mapping[str, str]:
        """Completion figure per language code, as text (e.g., ``"0.75"``)."""


class TranslationRegistry(Protocol):
    """Protocol for resolving translatable pages."""

    def resolve_translatable_page(self, path: CanonicalPath) -> TranslatablePage | None:
        """Resolve path (a source page or one of its variants).

        Args:
            path: Page to resolve

        Returns:
            The translatable page, or None when path is not marked for
            translation

        Raises:
            RegistryLookupError: If page metadata required for the lookup
                is missing
        """


@dataclass(slots=True)
class MappingContentStore:
    """In-memory content store keyed by CanonicalPath.full_text.

    Empty strings are treated as absent content.

    Example:
        >>> store = MappingContentStore({"Foo": '{"greeting": "Hello"}'})
        >>> store.put(CanonicalPath(1198, "Foo/greeting/fr"), "Bonjour")
        >>> store.fetch(CanonicalPath(text="Foo"))
        '{"greeting": "Hello"}'
    """

    pages: dict[str, str] = field(default_factory=dict)

    def fetch(self, path: CanonicalPath) -> str | None:
        """Return stored text for path, or None."""
        return self.pages.get(path.full_text) or None

    def put(self, path: CanonicalPath, text: str) -> None:
        """Store text at path."""
        self.pages[path.full_text] = text

    def delete(self, path: CanonicalPath) -> None:
        """Remove path if present."""
        self.pages.pop(path.full_text, None)


@dataclass(frozen=True, slots=True)
class DirectoryContentStore:
    """File system content store.

    Each page is one UTF-8 file: ``<root>/<namespace id>/<text>.<suffix>``,
    with subpage segments becoming subdirectories. Fragments and interwiki
    paths are never stored locally; interwiki paths always read as absent.

    Security:
        All resolved file paths are validated against the root directory,
        so crafted titles cannot escape it.

    Example:
        >>> store = DirectoryContentStore("pages")
        >>> store.fetch(CanonicalPath(text="Foo"))
        # Reads: pages/0/Foo.json

    Attributes:
        root_dir: Directory holding one subdirectory per namespace
        suffix: File extension (without dot)
    """

    root_dir: str
    suffix: str = "json"
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Cache resolved root directory and validate the suffix.

        Raises:
            ValueError: If suffix is empty or contains a path separator
        """
        if not self.suffix or "/" in self.suffix or "\\" in self.suffix:
            msg = f"suffix must be a plain file extension, got: '{self.suffix}'"
            raise ValueError(msg)
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    def describe_path(self, path: CanonicalPath) -> str:
        """Return the file path a page maps to, for diagnostics."""
        return str(Path(self.root_dir) / str(path.namespace) / f"{path.text}.{self.suffix}")

    def fetch(self, path: CanonicalPath) -> str | None:
        """Read the page file.

        Args:
            path: Canonical path of the page

        Returns:
            File text, or None when the file does not exist, is empty,
            cannot be read as UTF-8 text, or the path would escape the root
            directory
        """
        if path.interwiki:
            return None
        full_path = self._file_for(path)
        if full_path is None:
            return None
        try:
            text = full_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            # Permission errors, directories in place of files, undecodable bytes
            logger.warning("Unreadable page file %s: %s", full_path, e)
            return None
        return text or None

    def store(self, path: CanonicalPath, text: str) -> None:
        """Write text to the page file, creating directories as needed.

        Raises:
            ValueError: If path is interwiki or escapes the root directory
        """
        full_path = self._file_for(path) if not path.interwiki else None
        if full_path is None:
            msg = f"Cannot store page outside the root directory: '{path.full_text}'"
            raise ValueError(msg)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(text, encoding="utf-8")

    def _file_for(self, path: CanonicalPath) -> Path | None:
        candidate = (self._resolved_root / str(path.namespace) / f"{path.text}.{self.suffix}")
        resolved = candidate.resolve()
        try:
            resolved.relative_to(self._resolved_root)
        except ValueError:
            return None
        return resolved
