"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from translatebridge.constants import MESSAGE_BUNDLE_CONTENT_MODEL

from .codes import Diagnostic, DiagnosticCode

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    This provides:
        - Testable error messages
        - Consistent formatting
        - Documentation of all error cases
    """

    @staticmethod
    def malformed_identifier(detail: str | None = None) -> Diagnostic:
        """Identifier could not be parsed into a path.

        Args:
            detail: Optional reason shown as a hint

        Returns:
            Diagnostic for IDENTIFIER_MALFORMED
        """
        return Diagnostic(
            code=DiagnosticCode.IDENTIFIER_MALFORMED,
            message="Failed to parse title",
            hint=detail,
        )

    @staticmethod
    def positional_identifier() -> Diagnostic:
        """Structured identifier given as a positional list.

        Returns:
            Diagnostic for IDENTIFIER_POSITIONAL
        """
        return Diagnostic(
            code=DiagnosticCode.IDENTIFIER_POSITIONAL,
            message="Failed to parse title",
            hint="Use named fields: namespace, text, fragment, interwiki",
        )

    @staticmethod
    def integration_disabled(page: str) -> Diagnostic:
        """Bundle integration is switched off.

        Args:
            page: Full text of the requested page

        Returns:
            Diagnostic for BUNDLE_INTEGRATION_DISABLED
        """
        return Diagnostic(
            code=DiagnosticCode.BUNDLE_INTEGRATION_DISABLED,
            message=f'MessageBundleIntegration is disabled ("{page}")',
            hint="Enable bundle integration in BundleConfig",
            page=page,
        )

    @staticmethod
    def not_a_bundle(page: str, content_kind: str) -> Diagnostic:
        """Page is not a registered bundle source.

        A page that already carries the bundle content model but is not yet
        registered usually lacks a revision saved after enabling it.

        Args:
            page: Full text of the requested page
            content_kind: Content model reported by the registry

        Returns:
            Diagnostic for BUNDLE_MISSING_REVISION or BUNDLE_NOT_A_BUNDLE
        """
        if content_kind == MESSAGE_BUNDLE_CONTENT_MODEL:
            return Diagnostic(
                code=DiagnosticCode.BUNDLE_MISSING_REVISION,
                message=(
                    f'"{page}" is not a message bundle, '
                    "may be missing a revision after being enabled"
                ),
                hint="Save a new revision of the page",
                page=page,
            )
        return Diagnostic(
            code=DiagnosticCode.BUNDLE_NOT_A_BUNDLE,
            message=f'"{page}" is not a message bundle, invalid content model "{content_kind}"',
            hint=f'Change the content model to "{MESSAGE_BUNDLE_CONTENT_MODEL}"',
            page=page,
        )

    @staticmethod
    def invalid_bundle_data(page: str, reason: str | None = None) -> Diagnostic:
        """Bundle content is missing or failed to decode.

        Args:
            page: Full text of the bundle page
            reason: Decoder explanation, kept as a hint

        Returns:
            Diagnostic for BUNDLE_INVALID_DATA
        """
        return Diagnostic(
            code=DiagnosticCode.BUNDLE_INVALID_DATA,
            message=f'The MessageBundle "{page}" contains invalid JSON',
            hint=reason,
            page=page,
        )

    @staticmethod
    def invalid_language_code(language_code: str) -> Diagnostic:
        """Language code rejected by the language registry.

        Args:
            language_code: The rejected code

        Returns:
            Diagnostic for LANGUAGE_CODE_INVALID
        """
        return Diagnostic(
            code=DiagnosticCode.LANGUAGE_CODE_INVALID,
            message=f"Invalid language code: {language_code}",
            hint="Use a known BCP-47 language code such as 'fr' or 'pt-br'",
        )

    @staticmethod
    def argument_type_mismatch(
        function_name: str,
        position: int,
        expected: str,
        received: object,
    ) -> Diagnostic:
        """Host-facing function received a wrongly typed argument.

        Args:
            function_name: Host-facing function name
            position: 1-based argument position
            expected: Expected type name
            received: The offending value

        Returns:
            Diagnostic for ARGUMENT_TYPE_MISMATCH
        """
        received_type = "nil" if received is None else type(received).__name__
        return Diagnostic(
            code=DiagnosticCode.ARGUMENT_TYPE_MISMATCH,
            message=(
                f"bad argument #{position} to '{function_name}' "
                f"({expected} expected, got {received_type})"
            ),
            function_name=function_name,
            argument_position=position,
            expected_type=expected,
            received_type=received_type,
        )

    @staticmethod
    def registry_lookup_failed(page: str, reason: str) -> Diagnostic:
        """Registry could not resolve page metadata.

        Args:
            page: Full text of the page being looked up
            reason: Registry explanation

        Returns:
            Diagnostic for REGISTRY_LOOKUP_FAILED
        """
        return Diagnostic(
            code=DiagnosticCode.REGISTRY_LOOKUP_FAILED,
            message=f'Registry lookup failed for "{page}": {reason}',
            page=page,
            severity="warning",
        )
