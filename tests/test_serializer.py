"""Tests for canonical define({...}) serialization."""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from nlsbundle.syntax import (
    LocaleDeclaration,
    MessageEntry,
    NlsModule,
    parse_nls_module,
    quote_string,
    serialize_nls_module,
)
from tests.strategies import message_keys, root_bundles


class TestQuoteString:
    """JavaScript string literal quoting."""

    def test_plain(self) -> None:
        assert quote_string("Login") == "'Login'"

    def test_quote_and_backslash(self) -> None:
        assert quote_string("it's a \\ path") == "'it\\'s a \\\\ path'"

    def test_control_characters(self) -> None:
        assert quote_string("a\nb\x01\x7f") == "'a\\nb\\u0001\\u007f'"

    def test_line_separators_escaped(self) -> None:
        assert quote_string("a\u2028b\u2029") == "'a\\u2028b\\u2029'"

    def test_non_ascii_kept(self) -> None:
        assert quote_string("Identité") == "'Identité'"

    def test_lone_surrogates_escaped(self) -> None:
        assert quote_string("a\ud800b\udc00") == "'a\\ud800b\\udc00'"

    @pytest.mark.parametrize("escape", ["\\ud800", "\\u{DC00}"])
    def test_lone_surrogate_survives_reparse(self, escape: str) -> None:
        module = parse_nls_module(f"define({{'a': 'x{escape}'}})")

        text = serialize_nls_module(module)

        text.encode("utf-8")
        assert parse_nls_module(text).messages() == module.messages()


class TestSerializeModule:
    """Module layout."""

    def test_master_module_layout(self) -> None:
        module = NlsModule(
            entries=(MessageEntry("login", "Login"), MessageEntry("mail", "Mail")),
            locales=(LocaleDeclaration("fr", available=True),),
            is_master=True,
        )

        assert serialize_nls_module(module) == (
            "define({\n"
            "\troot: {\n"
            "\t\t'login': 'Login',\n"
            "\t\t'mail': 'Mail'\n"
            "\t},\n"
            "\tfr: true\n"
            "});\n"
        )

    def test_master_without_locales(self) -> None:
        module = NlsModule(entries=(MessageEntry("a", "A"),), is_master=True)

        assert serialize_nls_module(module, indent="  ") == (
            "define({\n  root: {\n    'a': 'A'\n  }\n});\n"
        )

    def test_locale_module_layout(self) -> None:
        module = NlsModule(entries=(MessageEntry("login", "Identifiant"),))

        assert serialize_nls_module(module) == "define({\n\t'login': 'Identifiant'\n});\n"

    def test_inline_and_disabled_locales(self) -> None:
        module = NlsModule(
            entries=(MessageEntry("a", "A"),),
            locales=(
                LocaleDeclaration("de", available=False),
                LocaleDeclaration("fr-ca", available=True, entries=(MessageEntry("a", "Ah"),)),
            ),
            is_master=True,
        )

        text = serialize_nls_module(module)

        assert "\tde: false,\n" in text
        assert "\t'fr-ca': {\n\t\t'a': 'Ah'\n\t}\n" in text

    def test_shipped_style_is_stable(self) -> None:
        source = serialize_nls_module(
            parse_nls_module("define({root:{'a':'User {{[0]}}'},fr:true})")
        )

        assert serialize_nls_module(parse_nls_module(source)) == source


class TestParseSerializeAgreement:
    """Parsing the serializer output yields the same messages and flags."""

    @given(root_bundles(), st.dictionaries(st.sampled_from(["fr", "de", "it"]), st.booleans()))
    def test_master_module(self, root: dict[str, str], flags: dict[str, bool]) -> None:
        module = NlsModule(
            entries=tuple(MessageEntry(k, v) for k, v in root.items()),
            locales=tuple(LocaleDeclaration(tag, available=flag) for tag, flag in flags.items()),
            is_master=True,
        )

        parsed = parse_nls_module(serialize_nls_module(module))

        assert parsed.to_definition() == module.to_definition()

    @given(st.dictionaries(message_keys(), st.text(max_size=30), max_size=10))
    def test_locale_module_any_text(self, messages: dict[str, str]) -> None:
        module = NlsModule(entries=tuple(MessageEntry(k, v) for k, v in messages.items()))

        assert parse_nls_module(serialize_nls_module(module)).messages() == messages
