"""Enumerations for translatebridge type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class EntryStatus(StrEnum):
    """Outcome recorded in a bundle cache slot.

    StrEnum provides automatic string conversion: str(EntryStatus.VALID) == "valid"
    """

    VALID = "valid"
    """Content decoded into a Bundle."""

    INVALID = "invalid"
    """Resolution failed; the error is memoized."""


class BundleRejection(StrEnum):
    """Reason a page was refused before its content was decoded.

    StrEnum provides automatic string conversion:
    str(BundleRejection.DISABLED) == "disabled"
    """

    DISABLED = "disabled"
    """Bundle integration switched off in configuration."""

    NOT_A_BUNDLE = "not_a_bundle"
    """Page is not registered as a bundle source."""

    INVALID_DATA = "invalid_data"
    """Content missing or failed to decode."""


__all__ = [
    "BundleRejection",
    "EntryStatus",
]
