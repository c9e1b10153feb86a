"""Tests for cross-locale bundle validation."""

from __future__ import annotations

import pytest

from nlsbundle import BundleRegistry, RegistryConfig
from nlsbundle.diagnostics import DiagnosticCode, ValidationResult
from nlsbundle.validation import validate_definition, validate_registry


def _codes(result: ValidationResult) -> list[tuple[DiagnosticCode, str | None, str | None]]:
    return [(w.code, w.locale, w.message_key) for w in result.warnings]


class TestValidateRegistry:
    """Checks over a built registry."""

    def test_clean_registry(self) -> None:
        registry = BundleRegistry.from_definition(
            {"root": {"a": "A {{[0]}}", "b": "B"}, "fr": {"a": "Ah {{[0]}}", "b": "Bé"}}
        )

        result = validate_registry(registry)

        assert result.is_valid
        assert result.warning_count == 0

    def test_cross_locale_warnings(self) -> None:
        registry = BundleRegistry.from_definition(
            {
                "root": {"a": "A {{[0]}}", "b": "B", "e": ""},
                "fr": {"a": "A {{[0]}} {{[1]}}", "e": "E", "orphan": "x"},
            }
        )

        result = validate_registry(registry)

        assert result.is_valid
        assert _codes(result) == [
            (DiagnosticCode.VALIDATION_EMPTY_MESSAGE, "root", "e"),
            (DiagnosticCode.VALIDATION_ORPHAN_KEY, "fr", "orphan"),
            (DiagnosticCode.VALIDATION_PLACEHOLDER_MISMATCH, "fr", "a"),
            (DiagnosticCode.VALIDATION_MISSING_TRANSLATION, "fr", "b"),
        ]

    def test_placeholder_mismatch_message(self) -> None:
        registry = BundleRegistry.from_definition(
            {"root": {"a": "A {{[0]}}"}, "fr": {"a": "{{[0]}} {{[2]}}"}}
        )

        (warning,) = validate_registry(registry).warnings_for(
            DiagnosticCode.VALIDATION_PLACEHOLDER_MISMATCH
        )
        assert "{{[2]}}" in warning.message
        assert "1 argument(s)" in warning.message

    def test_regional_bundle_covered_by_language(self) -> None:
        registry = BundleRegistry.from_definition(
            {
                "root": {"a": "A", "b": "B"},
                "fr": {"a": "Ah", "b": "Bé"},
                "fr-ca": {"a": "Ahh"},
            }
        )

        result = validate_registry(registry)

        assert result.warnings_for(DiagnosticCode.VALIDATION_MISSING_TRANSLATION) == ()

    def test_empty_translation(self) -> None:
        registry = BundleRegistry.from_definition({"root": {"a": "A"}, "fr": {"a": ""}})

        assert _codes(validate_registry(registry)) == [
            (DiagnosticCode.VALIDATION_EMPTY_MESSAGE, "fr", "a"),
        ]

    def test_unloaded_locale(self) -> None:
        registry = BundleRegistry.from_definition({"root": {"a": "A"}, "fr": True, "de": False})

        result = validate_registry(registry)

        assert _codes(result) == [(DiagnosticCode.VALIDATION_LOCALE_NOT_LOADED, "fr", None)]

    def test_load_errors_are_errors(self, make_loader: type) -> None:
        loader = make_loader({"fr": "define({\n  'a': 'A'\n  'b': 'B'\n});"})
        registry = BundleRegistry.from_definition({"root": {"a": "A"}, "fr": True}, loader)

        result = validate_registry(registry)

        assert not result.is_valid
        (error,) = result.errors
        assert error.code is DiagnosticCode.UNEXPECTED_CHARACTER
        assert error.locale == "fr"
        assert (error.line, error.column) == (3, 3)

    def test_loader_os_error(self) -> None:
        class BrokenLoader:
            def load(self, locale: str, resource_id: str) -> str:
                raise PermissionError(f"denied: {locale}")

            def describe_path(self, locale: str, resource_id: str) -> str:
                return f"{locale}/{resource_id}"

        registry = BundleRegistry.from_definition(
            {"root": {"a": "A"}, "fr": True}, BrokenLoader()
        )

        (error,) = validate_registry(registry).errors
        assert error.code is DiagnosticCode.VALIDATION_LOCALE_NOT_LOADED
        assert "denied" in error.message

    def test_missing_root(self) -> None:
        registry = BundleRegistry(config=RegistryConfig())
        registry.register_locale("fr", {"a": "Ah"})

        result = validate_registry(registry.freeze())

        assert [e.code for e in result.errors] == [DiagnosticCode.ROOT_BUNDLE_MISSING]


class TestValidateDefinition:
    """Validation straight from a definition."""

    def test_mapping(self) -> None:
        result = validate_definition({"root": {"a": "A"}, "fr": {"z": "Z"}})

        assert result.is_valid
        assert result.warnings_for(DiagnosticCode.VALIDATION_ORPHAN_KEY)

    def test_source_text(self, make_loader: type) -> None:
        loader = make_loader({"fr": "define({'a': 'Ah'});"})

        result = validate_definition("define({root: {'a': 'A'}, fr: true});", loader)

        assert result == ValidationResult.valid()

    def test_syntax_error(self) -> None:
        result = validate_definition(
            "define({\n\troot: {'a': 'A'\n});", source_path="nls/messages.js"
        )

        (error,) = result.errors
        assert error.code is DiagnosticCode.UNEXPECTED_CHARACTER
        assert error.line == 3
        assert result.warnings == ()

    @pytest.mark.parametrize(
        ("definition", "code"),
        [
            ({"fr": True}, DiagnosticCode.ROOT_BUNDLE_MISSING),
            ({"root": {"a": 1}}, DiagnosticCode.INVALID_MESSAGE_VALUE),
            ({"root": {}, "xx-yy": True}, DiagnosticCode.INVALID_LOCALE_TAG),
            ("define({'a': 'A'})", DiagnosticCode.ROOT_BUNDLE_MISSING),
        ],
    )
    def test_definition_errors(self, definition: object, code: DiagnosticCode) -> None:
        result = validate_definition(definition)  # type: ignore[arg-type]

        assert [e.code for e in result.errors] == [code]

    def test_unknown_locale_accepted_when_not_validated(self) -> None:
        result = validate_definition(
            {"root": {}, "xx-yy": {}}, config=RegistryConfig(validate_locales=False)
        )

        assert result.is_valid
