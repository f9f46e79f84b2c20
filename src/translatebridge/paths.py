"""Canonical resource paths and identifier normalization.

Callers identify bundles with loosely shaped input: a path expression such
as ``"Project:Messages#intro"``, a record with named fields, or nothing at
all (meaning "the page currently being rendered"). PathResolver turns any
accepted shape into a CanonicalPath and rejects everything else with
MalformedIdentifierError. It never returns a partial result.

Path expression rules:
    - Underscores and runs of whitespace collapse to a single space
    - ``#`` separates the fragment
    - A leading ``:`` is dropped
    - ``prefix:`` selects an interwiki (when configured) or a namespace
    - The first letter of a local title is upper-cased

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from translatebridge.config import BundleConfig
from translatebridge.constants import (
    ILLEGAL_TITLE_CHARS,
    MAX_TITLE_BYTES,
    NAMESPACE_ALIASES,
    NAMESPACE_NAMES,
    NS_MAIN,
    NS_TRANSLATIONS,
)
from translatebridge.diagnostics import ErrorTemplate, MalformedIdentifierError

__all__ = ["CanonicalPath", "PathResolver", "translation_unit_path"]

_WHITESPACE = re.compile(r"[\s_]+")

# Control characters, percent-escapes and HTML entities never survive into titles.
_ILLEGAL_SEQUENCE = re.compile(r"[\x00-\x1f\x7f]|%[0-9A-Fa-f]{2}|&[A-Za-z0-9\x80-\uffff]+;")

_INTEGER = re.compile(r"^-?\d+$")


@dataclass(frozen=True, slots=True)
class CanonicalPath:
    """Normalized identifier of one stored resource.

    Two paths are equal iff all four fields are equal. Instances are
    hashable and safe to use as dictionary keys.

    Attributes:
        namespace: Numeric namespace id
        text: Title text without namespace prefix
        fragment: Section anchor (without ``#``), empty when absent
        interwiki: Lower-case interwiki prefix, empty for local pages
    """

    namespace: int = NS_MAIN
    text: str = ""
    fragment: str = ""
    interwiki: str = ""

    def __str__(self) -> str:
        """Return the full text form."""
        return self.full_text

    @property
    def namespace_name(self) -> str:
        """Canonical namespace prefix (empty for the main namespace)."""
        return NAMESPACE_NAMES.get(self.namespace, f"Namespace{self.namespace}")

    @property
    def prefixed_text(self) -> str:
        """Title with namespace (and interwiki) prefix, without fragment."""
        name = self.namespace_name
        local = f"{name}:{self.text}" if name else self.text
        return f"{self.interwiki}:{local}" if self.interwiki else local

    @property
    def full_text(self) -> str:
        """Prefixed title plus ``#fragment``; the cache key form."""
        if self.fragment:
            return f"{self.prefixed_text}#{self.fragment}"
        return self.prefixed_text

    @property
    def base_text(self) -> str:
        """Text up to the last ``/`` (the whole text for non-subpages)."""
        head, sep, _ = self.text.rpartition("/")
        return head if sep else self.text

    @property
    def subpage_name(self) -> str | None:
        """Text after the last ``/``, or None for non-subpages."""
        _, sep, tail = self.text.rpartition("/")
        return tail if sep else None

    def subpage(self, *segments: str) -> CanonicalPath:
        """Return the path of a subpage in the same namespace.

        Args:
            *segments: Path segments appended with ``/``

        Returns:
            New CanonicalPath without fragment
        """
        text = "/".join((self.text, *segments))
        return CanonicalPath(self.namespace, text, "", self.interwiki)

    def in_namespace(self, namespace: int) -> bool:
        """True for local paths in the given namespace."""
        return not self.interwiki and self.namespace == namespace

    def without_fragment(self) -> CanonicalPath:
        """Return this path with the fragment removed."""
        if not self.fragment:
            return self
        return CanonicalPath(self.namespace, self.text, "", self.interwiki)


def translation_unit_path(bundle: CanonicalPath, key: str, language: str) -> CanonicalPath:
    """Build the path holding one translated message.

    Translated values live in the translations namespace at
    ``<bundle>/<key>/<language>``.

    Args:
        bundle: Path of the bundle source page
        key: Message key
        language: Language code of the translation

    Returns:
        CanonicalPath of the translation unit
    """
    return CanonicalPath(NS_TRANSLATIONS, bundle.prefixed_text).subpage(key, language)


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text).strip()


class PathResolver:
    """Normalize raw identifiers into CanonicalPath values.

    Stateless apart from the namespace and interwiki tables built at
    construction, so one instance may be shared freely between threads.

    Example:
        >>> resolver = PathResolver()
        >>> resolver.normalize("project:release_notes#Intro")
        CanonicalPath(namespace=4, text='Release notes', fragment='Intro', interwiki='')
        >>> resolver.normalize({"namespace": 10, "text": "Banner"}).full_text
        'Template:Banner'
    """

    __slots__ = ("_interwiki_prefixes", "_namespace_lookup")

    def __init__(self, config: BundleConfig | None = None) -> None:
        """Initialize resolver.

        Args:
            config: Supplies recognized interwiki prefixes (optional)
        """
        config = config or BundleConfig()
        self._interwiki_prefixes: frozenset[str] = config.interwiki_prefixes
        lookup = {name.lower(): ns for ns, name in NAMESPACE_NAMES.items() if name}
        lookup.update(NAMESPACE_ALIASES)
        self._namespace_lookup: dict[str, int] = lookup

    def normalize(self, value: object, context: CanonicalPath | None = None) -> CanonicalPath:
        """Normalize any accepted identifier shape.

        Args:
            value: Path expression, named-field record, CanonicalPath, or an
                empty value meaning "the current context"
            context: Current context identifier used for empty input

        Returns:
            CanonicalPath

        Raises:
            MalformedIdentifierError: If the input cannot be normalized
        """
        if not value:
            if context is None:
                raise MalformedIdentifierError(
                    ErrorTemplate.malformed_identifier("No identifier and no current page")
                )
            return context

        match value:
            case CanonicalPath():
                return value
            case str():
                return self.parse(value)
            case list() | tuple():
                raise MalformedIdentifierError(ErrorTemplate.positional_identifier())
            case Mapping():
                return self._from_record(value)
            case _:
                raise MalformedIdentifierError(
                    ErrorTemplate.malformed_identifier(
                        f"Unsupported identifier type: {type(value).__name__}"
                    )
                )

    def parse(self, expression: str, default_namespace: int = NS_MAIN) -> CanonicalPath:
        """Parse a namespaced path expression.

        Args:
            expression: Path expression (e.g., ``"Help:Contents#Usage"``)
            default_namespace: Namespace used when no prefix is present

        Returns:
            CanonicalPath

        Raises:
            MalformedIdentifierError: On syntax failure
        """
        text, _, fragment = expression.partition("#")
        text = _collapse(text)
        namespace = default_namespace

        if text.startswith(":"):
            text = text[1:].lstrip()
            namespace = NS_MAIN

        interwiki = ""
        prefix, sep, rest = text.partition(":")
        if sep:
            key = _collapse(prefix).lower()
            if key in self._interwiki_prefixes:
                interwiki = key
                text = rest.strip()
            elif key in self._namespace_lookup:
                namespace = self._namespace_lookup[key]
                text = rest.strip()

        return self._build(namespace, text, fragment, interwiki)

    def make_path(
        self,
        namespace: int,
        text: str,
        fragment: str = "",
        interwiki: str = "",
    ) -> CanonicalPath:
        """Build a validated path from separate fields.

        Args:
            namespace: Known namespace id
            text: Title text (no namespace prefix)
            fragment: Section anchor
            interwiki: Configured interwiki prefix or empty

        Returns:
            CanonicalPath

        Raises:
            MalformedIdentifierError: If any field is invalid
        """
        if namespace not in NAMESPACE_NAMES:
            raise MalformedIdentifierError(
                ErrorTemplate.malformed_identifier(f"Unknown namespace: {namespace}")
            )
        interwiki = interwiki.strip().lower()
        if interwiki and interwiki not in self._interwiki_prefixes:
            raise MalformedIdentifierError(
                ErrorTemplate.malformed_identifier(f"Unknown interwiki prefix: {interwiki}")
            )
        return self._build(namespace, _collapse(text), fragment, interwiki)

    def _from_record(self, record: Mapping[object, object]) -> CanonicalPath:
        """Build a path from a named-field record."""
        # Host tables with only integer keys are sequences in disguise.
        if all(isinstance(key, int) for key in record):
            raise MalformedIdentifierError(ErrorTemplate.positional_identifier())

        namespace = _coerce_namespace(_field(record, "namespace", NS_MAIN))
        text = _field(record, "text", None)
        fragment = _field(record, "fragment", "")
        interwiki = _field(record, "interwiki", "")

        if (
            namespace is None
            or not isinstance(text, str)
            or not isinstance(fragment, str)
            or not isinstance(interwiki, str)
        ):
            raise MalformedIdentifierError(
                ErrorTemplate.malformed_identifier("Record fields have the wrong shape")
            )
        return self.make_path(namespace, text, fragment, interwiki)

    def _build(self, namespace: int, text: str, fragment: str, interwiki: str) -> CanonicalPath:
        """Validate normalized parts and assemble the path."""
        reason = _text_violation(text)
        if reason is not None:
            raise MalformedIdentifierError(ErrorTemplate.malformed_identifier(reason))

        # Foreign wikis apply their own capitalization rules.
        if not interwiki:
            text = text[0].upper() + text[1:]

        return CanonicalPath(namespace, text, _collapse(fragment), interwiki)


def _field(record: Mapping[object, object], name: str, default: object) -> object:
    value = record.get(name)
    return default if value is None else value


def _coerce_namespace(value: object) -> int | None:
    """Accept ints, integral floats and digit strings; reject everything else."""
    match value:
        case bool():
            return None
        case int():
            return value
        case float() if value.is_integer():
            return int(value)
        case str() if _INTEGER.match(value.strip()):
            return int(value.strip())
        case _:
            return None


def _text_violation(text: str) -> str | None:
    """Return why text cannot be a title, or None when it is acceptable."""
    if not text:
        return "Empty title"
    if text.startswith(":"):
        return "Title starts with a colon"
    if any(ch in ILLEGAL_TITLE_CHARS for ch in text):
        return "Title contains illegal characters"
    if _ILLEGAL_SEQUENCE.search(text):
        return "Title contains control characters, escapes or entities"
    if (
        text in (".", "..")
        or text.startswith(("./", "../"))
        or "/./" in text
        or "/../" in text
        or text.endswith(("/.", "/.."))
    ):
        return "Title contains relative path components"
    if "~~~" in text:
        return "Title contains signature markup"
    if len(text.encode("utf-8")) > MAX_TITLE_BYTES:
        return f"Title exceeds {MAX_TITLE_BYTES} bytes"
    return None
