"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from collections.abc import Sequence

from .codes import Diagnostic, DiagnosticCode, SourceSpan


class ErrorTemplate:
    """Centralized error message templates.

    All error messages are created here. NO f-strings in exception constructors!
    Keeps messages testable and documents every error case in one place.
    """

    @staticmethod
    def key_not_found(key: str, locale: str, searched: Sequence[str]) -> Diagnostic:
        """Message key not found on the locale chain.

        Args:
            key: The message key that was not found
            locale: The locale tag requested
            searched: Locale tags searched, in order

        Returns:
            Diagnostic for KEY_NOT_FOUND
        """
        chain = " -> ".join(searched)
        msg = f"Message key '{key}' not found for locale '{locale}' (searched: {chain})"
        return Diagnostic(
            code=DiagnosticCode.KEY_NOT_FOUND,
            message=msg,
            hint="Check that the key is defined in the root bundle",
            locale=locale,
            message_key=key,
        )

    @staticmethod
    def invalid_key(key: object) -> Diagnostic:
        """Message key is empty or not a string.

        Args:
            key: The offending key

        Returns:
            Diagnostic for INVALID_KEY
        """
        msg = f"Invalid message key: expected non-empty str, got {key!r}"
        return Diagnostic(code=DiagnosticCode.INVALID_KEY, message=msg)

    @staticmethod
    def placeholder_out_of_range(key: str, index: int, arg_count: int) -> Diagnostic:
        """Template references an argument index that was not supplied.

        Args:
            key: Message key of the template
            index: Placeholder index
            arg_count: Number of arguments supplied

        Returns:
            Diagnostic for PLACEHOLDER_INDEX_OUT_OF_RANGE
        """
        msg = (
            f"Placeholder {{{{[{index}]}}}} in message '{key}' is out of range: "
            f"{arg_count} argument(s) supplied"
        )
        return Diagnostic(
            code=DiagnosticCode.PLACEHOLDER_INDEX_OUT_OF_RANGE,
            message=msg,
            hint=f"Pass at least {index + 1} argument(s)",
            message_key=key,
        )

    @staticmethod
    def invalid_arguments(key: str, args: object) -> Diagnostic:
        """Substitution arguments are not a sequence.

        Args:
            key: Message key being resolved
            args: The offending argument object

        Returns:
            Diagnostic for INVALID_ARGUMENTS
        """
        msg = (
            f"Invalid arguments for message '{key}': expected a sequence, "
            f"got {type(args).__name__}"
        )
        return Diagnostic(
            code=DiagnosticCode.INVALID_ARGUMENTS,
            message=msg,
            hint="Pass positional arguments as a list or tuple",
            message_key=key,
        )

    @staticmethod
    def unexpected_eof(position: int, expected: str) -> Diagnostic:
        """Unexpected end of module source.

        Args:
            position: Character offset where EOF was encountered
            expected: Description of what was expected

        Returns:
            Diagnostic for UNEXPECTED_EOF
        """
        msg = f"Unexpected end of input at position {position}: expected {expected}"
        return Diagnostic(code=DiagnosticCode.UNEXPECTED_EOF, message=msg)

    @staticmethod
    def unexpected_character(found: str, expected: str, span: SourceSpan) -> Diagnostic:
        """Unexpected character in module source.

        Args:
            found: Character found
            expected: Description of what was expected
            span: Location of the character

        Returns:
            Diagnostic for UNEXPECTED_CHARACTER
        """
        msg = f"Expected {expected} but found {found!r}"
        return Diagnostic(
            code=DiagnosticCode.UNEXPECTED_CHARACTER,
            message=msg,
            span=span,
        )

    @staticmethod
    def unterminated_string(span: SourceSpan) -> Diagnostic:
        """String literal not closed before end of line or input.

        Args:
            span: Location of the opening quote

        Returns:
            Diagnostic for UNTERMINATED_STRING
        """
        return Diagnostic(
            code=DiagnosticCode.UNTERMINATED_STRING,
            message="Unterminated string literal",
            span=span,
            hint="Close the string with the same quote character that opened it",
        )

    @staticmethod
    def invalid_escape(sequence: str, span: SourceSpan) -> Diagnostic:
        """Malformed escape sequence inside a string literal.

        Args:
            sequence: The escape sequence text
            span: Location of the backslash

        Returns:
            Diagnostic for INVALID_ESCAPE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_ESCAPE,
            message=f"Invalid escape sequence {sequence!r}",
            span=span,
        )

    @staticmethod
    def nesting_depth_exceeded(max_depth: int, span: SourceSpan) -> Diagnostic:
        """Object literals nested too deeply.

        Args:
            max_depth: Configured maximum depth
            span: Location of the opening brace

        Returns:
            Diagnostic for NESTING_DEPTH_EXCEEDED
        """
        return Diagnostic(
            code=DiagnosticCode.NESTING_DEPTH_EXCEEDED,
            message=f"Object nesting depth exceeds maximum ({max_depth})",
            span=span,
        )

    @staticmethod
    def missing_define(span: SourceSpan) -> Diagnostic:
        """Module source does not start with define(...).

        Args:
            span: Location of the first significant character

        Returns:
            Diagnostic for MISSING_DEFINE
        """
        return Diagnostic(
            code=DiagnosticCode.MISSING_DEFINE,
            message="Module must start with define({...})",
            span=span,
            hint="Wrap the bundle object literal in define({ ... });",
        )

    @staticmethod
    def root_bundle_missing() -> Diagnostic:
        """Master definition has no root bundle.

        Returns:
            Diagnostic for ROOT_BUNDLE_MISSING
        """
        return Diagnostic(
            code=DiagnosticCode.ROOT_BUNDLE_MISSING,
            message="Bundle definition has no 'root' mapping",
            hint="Declare the default messages under the 'root' key",
        )

    @staticmethod
    def invalid_locale_tag(tag: object, reason: str) -> Diagnostic:
        """Locale tag is malformed or unknown to CLDR.

        Args:
            tag: The offending tag
            reason: Why it was rejected

        Returns:
            Diagnostic for INVALID_LOCALE_TAG
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_LOCALE_TAG,
            message=f"Invalid locale tag {tag!r}: {reason}",
        )

    @staticmethod
    def invalid_message_value(key: object, value: object, locale: str) -> Diagnostic:
        """Message key or value is not a string.

        Args:
            key: The message key
            value: The offending value
            locale: Locale tag of the bundle

        Returns:
            Diagnostic for INVALID_MESSAGE_VALUE
        """
        msg = (
            f"Invalid message {key!r} in locale '{locale}': keys must be non-empty "
            f"strings and values strings, got value of type {type(value).__name__}"
        )
        return Diagnostic(
            code=DiagnosticCode.INVALID_MESSAGE_VALUE,
            message=msg,
            locale=locale,
            message_key=key if isinstance(key, str) else None,
        )

    @staticmethod
    def invalid_locale_value(tag: str, value: object) -> Diagnostic:
        """Locale entry is neither a boolean flag nor a mapping.

        Args:
            tag: Locale tag
            value: The offending value

        Returns:
            Diagnostic for INVALID_LOCALE_VALUE
        """
        msg = (
            f"Invalid value for locale '{tag}': expected true, false or a mapping, "
            f"got {type(value).__name__}"
        )
        return Diagnostic(code=DiagnosticCode.INVALID_LOCALE_VALUE, message=msg, locale=tag)

    @staticmethod
    def unexpected_master_module(locale: str, source_path: str | None = None) -> Diagnostic:
        """Locale resource holds a master module (with a root member).

        Args:
            locale: Locale tag the resource was loaded for
            source_path: Resource path (if known)

        Returns:
            Diagnostic for INVALID_LOCALE_VALUE
        """
        return Diagnostic(
            code=DiagnosticCode.INVALID_LOCALE_VALUE,
            message=f"Resource for locale '{locale}' is a master module, not a locale module",
            hint="A locale module defines its messages directly: define({'key': 'text'})",
            locale=locale,
            source_path=source_path,
        )

    @staticmethod
    def source_too_large(size: int, max_size: int, source_path: str | None = None) -> Diagnostic:
        """Module source exceeds the configured size limit.

        Args:
            size: Actual source size in characters
            max_size: Configured maximum
            source_path: Resource path (if known)

        Returns:
            Diagnostic for SOURCE_TOO_LARGE
        """
        return Diagnostic(
            code=DiagnosticCode.SOURCE_TOO_LARGE,
            message=f"Source size {size} exceeds maximum {max_size}",
            source_path=source_path,
        )

    @staticmethod
    def orphan_keys_rejected(locale: str, keys: Sequence[str]) -> Diagnostic:
        """Locale bundle defines keys that the root bundle lacks.

        Args:
            locale: Locale tag of the bundle
            keys: Orphan keys

        Returns:
            Diagnostic for ORPHAN_KEYS_REJECTED
        """
        listed = ", ".join(sorted(keys))
        return Diagnostic(
            code=DiagnosticCode.ORPHAN_KEYS_REJECTED,
            message=f"Locale '{locale}' defines keys missing from root: {listed}",
            hint="Add the keys to the root bundle or remove them from the translation",
            locale=locale,
        )

    @staticmethod
    def duplicate_key(key: str, span: SourceSpan) -> Diagnostic:
        """Object literal repeats a key.

        Args:
            key: The repeated key
            span: Location of the second occurrence

        Returns:
            Diagnostic for DUPLICATE_KEY
        """
        return Diagnostic(
            code=DiagnosticCode.DUPLICATE_KEY,
            message=f"Duplicate key {key!r}",
            span=span,
            message_key=key,
        )

    @staticmethod
    def registry_frozen(tag: str) -> Diagnostic:
        """Registration attempted after freeze().

        Args:
            tag: Locale tag being registered

        Returns:
            Diagnostic for REGISTRY_FROZEN
        """
        return Diagnostic(
            code=DiagnosticCode.REGISTRY_FROZEN,
            message=f"Cannot register locale '{tag}': registry is frozen",
            hint="Register every locale at startup before calling freeze()",
            locale=tag,
        )
