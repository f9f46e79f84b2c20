"""Shared constants for translatebridge.

This module provides centralized constants used across the path, content
and runtime packages. Placing constants here avoids circular imports and
provides a single source of truth.

Constants are grouped by domain:
- Namespaces: Numeric namespace ids and their canonical names/aliases
- Title limits: Constraints on normalized path text
- Content: Bundle content model and metadata markers
- Languages: Defaults for language resolution

Python 3.13+. Zero external dependencies.
"""

from types import MappingProxyType

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Namespaces
    "NS_MAIN",
    "NS_TALK",
    "NS_USER",
    "NS_PROJECT",
    "NS_FILE",
    "NS_MEDIAWIKI",
    "NS_TEMPLATE",
    "NS_HELP",
    "NS_CATEGORY",
    "NS_MODULE",
    "NS_TRANSLATIONS",
    "NAMESPACE_NAMES",
    "NAMESPACE_ALIASES",
    # Title limits
    "MAX_TITLE_BYTES",
    "ILLEGAL_TITLE_CHARS",
    # Content
    "MESSAGE_BUNDLE_CONTENT_MODEL",
    "METADATA_KEY",
    "METADATA_FIELDS",
    "ILLEGAL_KEY_CHARS",
    # Languages
    "DEFAULT_LANGUAGE_CODE",
]

# ============================================================================
# NAMESPACES
# ============================================================================

NS_MAIN: int = 0
NS_TALK: int = 1
NS_USER: int = 2
NS_PROJECT: int = 4
NS_FILE: int = 6
NS_MEDIAWIKI: int = 8
NS_TEMPLATE: int = 10
NS_HELP: int = 12
NS_CATEGORY: int = 14
NS_MODULE: int = 828

# Per-key, per-language translation units are stored under this namespace.
NS_TRANSLATIONS: int = 1198

# Canonical display names. The main namespace has no prefix.
NAMESPACE_NAMES: MappingProxyType[int, str] = MappingProxyType({
    NS_MAIN: "",
    NS_TALK: "Talk",
    NS_USER: "User",
    NS_PROJECT: "Project",
    NS_FILE: "File",
    NS_MEDIAWIKI: "MediaWiki",
    NS_TEMPLATE: "Template",
    NS_HELP: "Help",
    NS_CATEGORY: "Category",
    NS_MODULE: "Module",
    NS_TRANSLATIONS: "Translations",
})

# Lower-cased alternative prefixes accepted when parsing.
NAMESPACE_ALIASES: MappingProxyType[str, int] = MappingProxyType({
    "image": NS_FILE,
    "translation": NS_TRANSLATIONS,
})

# ============================================================================
# TITLE LIMITS
# ============================================================================

# Maximum encoded length of a title's text portion.
MAX_TITLE_BYTES: int = 255

# Characters that can never appear in a title.
ILLEGAL_TITLE_CHARS: frozenset[str] = frozenset("[]{}|<>")

# ============================================================================
# CONTENT
# ============================================================================

MESSAGE_BUNDLE_CONTENT_MODEL: str = "translate-messagebundle"

METADATA_KEY: str = "@metadata"

METADATA_FIELDS: frozenset[str] = frozenset({
    "sourceLanguage",
    "priorityLanguages",
    "allowOnlyPriorityLanguages",
    "description",
    "label",
})

# Message keys become path segments; these characters would break them.
ILLEGAL_KEY_CHARS: frozenset[str] = frozenset("/#[]{}<>|")

# ============================================================================
# LANGUAGES
# ============================================================================

DEFAULT_LANGUAGE_CODE: str = "en"
