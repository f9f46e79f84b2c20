"""Decoding of stored bundle content.

Bundle source pages hold a JSON object: message keys mapped to
source-language strings, plus an optional ``@metadata`` object. The decoder
either returns the decoded fields or a MalformedContent describing the
first schema violation. It never raises for bad input; callers decide how
a malformed bundle is reported.

Example content::

    {
        "@metadata": {
            "sourceLanguage": "en",
            "priorityLanguages": ["fr", "de"],
            "allowOnlyPriorityLanguages": false,
            "description": "Navigation strings",
            "label": "Navigation"
        },
        "greeting": "Hello",
        "farewell": "Goodbye"
    }

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from translatebridge.bundle import BundleMetadata
from translatebridge.constants import ILLEGAL_KEY_CHARS, METADATA_FIELDS, METADATA_KEY

__all__ = [
    "DecodedBundle",
    "MalformedContent",
    "decode_bundle_content",
]


@dataclass(frozen=True, slots=True)
class DecodedBundle:
    """Fields of successfully decoded bundle content.

    Attributes:
        messages: Key to source value, in document order
        metadata: Decoded metadata block
    """

    messages: Mapping[str, str]
    metadata: BundleMetadata


@dataclass(frozen=True, slots=True)
class MalformedContent:
    """Decode failure.

    Attributes:
        reason: Human-readable description of the violation
    """

    reason: str


class _SchemaViolation(Exception):
    """Internal signal for the first schema violation found."""


def _reject_duplicates(pairs: list[tuple[str, object]]) -> dict[str, object]:
    """object_pairs_hook that refuses repeated keys."""
    result: dict[str, object] = {}
    for key, value in pairs:
        if key in result:
            msg = f"Duplicate key: {key!r}"
            raise _SchemaViolation(msg)
        result[key] = value
    return result


def decode_bundle_content(raw: str | None) -> DecodedBundle | MalformedContent:
    """Decode stored text into bundle fields.

    Args:
        raw: Stored page text, or None when the page has no content

    Returns:
        DecodedBundle on success, MalformedContent on any violation
    """
    if raw is None:
        return MalformedContent("Bundle page has no content")
    if not raw.strip():
        return MalformedContent("Bundle page is empty")

    try:
        data = json.loads(raw, object_pairs_hook=_reject_duplicates)
        if not isinstance(data, dict):
            msg = f"Expected a JSON object, got {type(data).__name__}"
            raise _SchemaViolation(msg)
        metadata = _decode_metadata(data.get(METADATA_KEY))
        messages = _decode_messages(data)
    except json.JSONDecodeError as e:
        return MalformedContent(f"Invalid JSON: {e.msg} at line {e.lineno}, column {e.colno}")
    except RecursionError:
        return MalformedContent("JSON nesting too deep")
    except _SchemaViolation as e:
        return MalformedContent(str(e))

    return DecodedBundle(messages=messages, metadata=metadata)


def _decode_messages(data: dict[str, object]) -> MappingProxyType[str, str]:
    messages: dict[str, str] = {}
    for key, value in data.items():
        if key == METADATA_KEY:
            continue
        _check_key(key)
        if not isinstance(value, str):
            msg = f"Value of message {key!r} must be a string, got {type(value).__name__}"
            raise _SchemaViolation(msg)
        messages[key] = value
    return MappingProxyType(messages)


def _check_key(key: str) -> None:
    if not key.strip():
        msg = "Message keys must not be empty"
        raise _SchemaViolation(msg)
    if key.startswith("@"):
        msg = f"Unknown reserved key: {key!r}"
        raise _SchemaViolation(msg)
    if any(ch in ILLEGAL_KEY_CHARS for ch in key):
        msg = f"Message key {key!r} contains an illegal character"
        raise _SchemaViolation(msg)


def _decode_metadata(block: object) -> BundleMetadata:
    if block is None:
        return BundleMetadata()
    if not isinstance(block, dict):
        msg = f"{METADATA_KEY} must be an object"
        raise _SchemaViolation(msg)

    unknown = sorted(set(block) - METADATA_FIELDS)
    if unknown:
        msg = f"Unknown {METADATA_KEY} fields: {', '.join(unknown)}"
        raise _SchemaViolation(msg)

    source_language = _optional_str(block, "sourceLanguage", allow_empty=False)

    priority = block.get("priorityLanguages", [])
    if not isinstance(priority, list) or not all(
        isinstance(code, str) and code for code in priority
    ):
        msg = "priorityLanguages must be a list of language codes"
        raise _SchemaViolation(msg)

    only_priority = block.get("allowOnlyPriorityLanguages", False)
    if not isinstance(only_priority, bool):
        msg = "allowOnlyPriorityLanguages must be a boolean"
        raise _SchemaViolation(msg)

    return BundleMetadata(
        source_language=source_language,
        priority_languages=tuple(dict.fromkeys(priority)),
        only_priority_languages_allowed=only_priority,
        description=_optional_str(block, "description"),
        label=_optional_str(block, "label"),
    )


def _optional_str(block: dict[str, object], name: str, *, allow_empty: bool = True) -> str | None:
    value = block.get(name)
    if value is None:
        return None
    if not isinstance(value, str) or (not allow_empty and not value.strip()):
        msg = f"{name} must be a {'string' if allow_empty else 'non-empty string'}"
        raise _SchemaViolation(msg)
    return value
