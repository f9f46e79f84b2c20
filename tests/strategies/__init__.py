"""Hypothesis strategies for translatebridge property-based testing.

Strategies are organized by domain:

- paths: Identifier inputs, path expressions and title text
- bundles: Message keys, bundle content and completion figures

Usage:
    from tests.strategies import identifier_inputs, bundle_messages
    from tests.strategies.bundles import completion_figures
"""

from .bundles import (
    bundle_json,
    bundle_messages,
    completion_figures,
    message_keys,
    message_values,
)
from .paths import (
    identifier_inputs,
    illegal_title_chars,
    known_namespaces,
    path_expressions,
    title_texts,
    words,
)

__all__ = [
    "bundle_json",
    "bundle_messages",
    "completion_figures",
    "identifier_inputs",
    "illegal_title_chars",
    "known_namespaces",
    "message_keys",
    "message_values",
    "path_expressions",
    "title_texts",
    "words",
]
