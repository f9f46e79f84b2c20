"""Diagnostic codes and data structures.

Defines error codes and structured diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Literal

__all__ = [
    "Diagnostic",
    "DiagnosticCode",
]


class DiagnosticCode(Enum):
    """Error codes with unique identifiers.

    Organized by category:
        1000-1999: Identifier errors (path normalization failures)
        2000-2999: Bundle errors (gate refusals, invalid content)
        3000-3999: Language errors (unrecognized codes)
        4000-4999: Call contract errors (argument types, registry lookups)
    """

    # Identifier errors (1000-1999)
    IDENTIFIER_MALFORMED = 1001
    IDENTIFIER_POSITIONAL = 1002

    # Bundle errors (2000-2999)
    BUNDLE_INTEGRATION_DISABLED = 2001
    BUNDLE_NOT_A_BUNDLE = 2002
    BUNDLE_MISSING_REVISION = 2003
    BUNDLE_INVALID_DATA = 2004

    # Language errors (3000-3999)
    LANGUAGE_CODE_INVALID = 3001

    # Call contract errors (4000-4999)
    ARGUMENT_TYPE_MISMATCH = 4001
    REGISTRY_LOOKUP_FAILED = 4002


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message.

    Inspired by Rust compiler diagnostics. Provides rich error information
    for both humans and tools.

    Attributes:
        code: Unique error code
        message: Human-readable error description
        hint: Suggestion for fixing the error
        page: Full text of the page the error concerns
        function_name: Host-facing function where the error occurred
        argument_position: 1-based argument position (argument errors)
        expected_type: Expected type for argument (argument errors)
        received_type: Actual type received (argument errors)
        severity: Error severity level
    """

    code: DiagnosticCode
    message: str
    hint: str | None = None
    page: str | None = None
    function_name: str | None = None
    argument_position: int | None = None
    expected_type: str | None = None
    received_type: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message

    def format_error(self) -> str:
        """Format diagnostic like Rust compiler.

        Delegates to DiagnosticFormatter for consistent output.

        Example output:
            error[BUNDLE_INVALID_DATA]: The MessageBundle "Foo" contains invalid JSON
              --> Foo
              = help: Check that the page holds a JSON object of string messages

        Returns:
            Formatted error message
        """
        from .formatter import DiagnosticFormatter  # noqa: PLC0415 - circular

        return DiagnosticFormatter().format(self)
