"""Decoded bundle data model.

A Bundle exists only for content that decoded successfully; invalid
content never yields a partially populated Bundle (the cache records a
BundleError instead).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from translatebridge.paths import CanonicalPath

__all__ = ["Bundle", "BundleMetadata"]


@dataclass(frozen=True, slots=True)
class BundleMetadata:
    """Optional descriptive fields from a bundle's ``@metadata`` block.

    Attributes:
        source_language: Language the messages are authored in
        priority_languages: Languages translators should focus on, in
            declared order without duplicates
        only_priority_languages_allowed: Reject translations outside
            priority_languages
        description: Free-form description
        label: Short display label
    """

    source_language: str | None = None
    priority_languages: tuple[str, ...] = ()
    only_priority_languages_allowed: bool = False
    description: str | None = None
    label: str | None = None

    def as_record(self) -> dict[str, object]:
        """Return the host-facing record with camelCase field names.

        Priority languages keep their declared order.
        """
        return {
            "sourceLanguage": self.source_language,
            "priorityLanguages": list(self.priority_languages),
            "allowOnlyPriorityLanguages": self.only_priority_languages_allowed,
            "description": self.description,
            "label": self.label,
        }


@dataclass(frozen=True, slots=True)
class Bundle:
    """One decoded and validated message bundle.

    Attributes:
        identifier: Path of the bundle source page (owning key)
        messages: Read-only mapping of key to source-language value,
            in document order
        metadata: Decoded ``@metadata`` fields
    """

    identifier: CanonicalPath
    messages: Mapping[str, str]
    metadata: BundleMetadata = field(default_factory=BundleMetadata)

    def __post_init__(self) -> None:
        """Freeze the message mapping."""
        if not isinstance(self.messages, MappingProxyType):
            object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    @property
    def ordered_keys(self) -> tuple[str, ...]:
        """Message keys in document order."""
        return tuple(self.messages)

    @property
    def source_language(self) -> str | None:
        """Declared source language, if any."""
        return self.metadata.source_language

    @property
    def priority_languages(self) -> frozenset[str]:
        """Declared priority languages as a set."""
        return frozenset(self.metadata.priority_languages)

    @property
    def only_priority_languages_allowed(self) -> bool:
        """Whether only priority languages may be translated."""
        return self.metadata.only_priority_languages_allowed

    @property
    def description(self) -> str | None:
        """Declared description, if any."""
        return self.metadata.description

    @property
    def label(self) -> str | None:
        """Declared label, if any."""
        return self.metadata.label

    @property
    def cache_key(self) -> str:
        """String form of the identifier used as cache key."""
        return self.identifier.full_text
