"""Diagnostic system for translatebridge errors.

Provides structured error diagnostics with codes and hints.
Inspired by Rust compiler diagnostics and Elm error messages.

Python 3.13+. Zero external dependencies.
"""

from .codes import Diagnostic, DiagnosticCode
from .errors import (
    ArgumentTypeError,
    BundleError,
    InvalidLanguageCodeError,
    MalformedIdentifierError,
    RegistryLookupError,
    TranslateError,
)
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "ArgumentTypeError",
    "BundleError",
    "Diagnostic",
    "DiagnosticCode",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "InvalidLanguageCodeError",
    "MalformedIdentifierError",
    "OutputFormat",
    "RegistryLookupError",
    "TranslateError",
]
