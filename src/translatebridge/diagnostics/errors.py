"""translatebridge exception hierarchy with structured diagnostics.

All exceptions optionally store Diagnostic objects for rich error information.
The exception text is always the plain diagnostic message so that it can be
surfaced to a scripting host unchanged.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic

__all__ = [
    "ArgumentTypeError",
    "BundleError",
    "InvalidLanguageCodeError",
    "MalformedIdentifierError",
    "RegistryLookupError",
    "TranslateError",
]


class TranslateError(Exception):
    """Base exception for all translatebridge errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | Diagnostic) -> None:
        """Initialize TranslateError.

        Args:
            message: Error message string OR Diagnostic object
        """
        if isinstance(message, Diagnostic):
            self.diagnostic: Diagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)

    @property
    def message(self) -> str:
        """Plain error text."""
        return str(self)


class MalformedIdentifierError(TranslateError):
    """Input cannot be normalized to a resource path.

    Raised for unparseable path expressions, positional records, and
    records whose fields have the wrong shape.
    """


class BundleError(TranslateError):
    """A bundle cannot be served.

    Covers disabled integration, pages that are not bundle sources, and
    missing or malformed content. Instances are memoized per bundle
    identifier: repeated requests re-raise the same object.

    Attributes:
        page: Full text of the bundle page
    """

    def __init__(self, message: str | Diagnostic, *, page: str = "") -> None:
        """Initialize BundleError.

        Args:
            message: Error message string OR Diagnostic object
            page: Full text of the bundle page
        """
        super().__init__(message)
        self.page = page


class InvalidLanguageCodeError(TranslateError):
    """Language argument not recognized by the language registry.

    Attributes:
        language_code: The rejected code
    """

    def __init__(self, message: str | Diagnostic, *, language_code: str = "") -> None:
        """Initialize InvalidLanguageCodeError.

        Args:
            message: Error message string OR Diagnostic object
            language_code: The rejected code
        """
        super().__init__(message)
        self.language_code = language_code


class ArgumentTypeError(TranslateError, TypeError):
    """Host-facing call received an argument of the wrong type."""


class RegistryLookupError(TranslateError):
    """A registry could not complete a lookup.

    Registries raise this when page metadata (such as a message group) is
    missing. Progress queries treat it as "no data" rather than a fault.
    """
