"""Tests for MessageBundle."""

from __future__ import annotations

import pytest

from nlsbundle import (
    BundleDefinitionError,
    KeyNotFoundError,
    MessageBundle,
    PlaceholderIndexOutOfRangeError,
    PlaceholderPolicy,
    parse_nls_module,
)
from nlsbundle.diagnostics import DiagnosticCode


class TestMessageBundleConstruction:
    """Construction validates tags and messages up front."""

    def test_locale_is_canonical(self) -> None:
        assert MessageBundle("fr_CA").locale == "fr-ca"
        assert MessageBundle("ROOT").locale == "root"

    def test_empty_bundle(self) -> None:
        bundle = MessageBundle("root")

        assert len(bundle) == 0
        assert bundle.keys() == frozenset()

    @pytest.mark.parametrize("tag", ["", "fr/../de", "fr ca", "été"])
    def test_bad_tag(self, tag: str) -> None:
        with pytest.raises(BundleDefinitionError) as exc_info:
            MessageBundle(tag, {})

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.INVALID_LOCALE_TAG

    @pytest.mark.parametrize(
        "messages",
        [{"login": 42}, {"login": None}, {"": "Empty key"}, {1: "Numeric key"}],
    )
    def test_bad_messages(self, messages: dict[object, object]) -> None:
        with pytest.raises(BundleDefinitionError) as exc_info:
            MessageBundle("root", messages)  # type: ignore[arg-type]

        assert exc_info.value.diagnostic is not None
        assert exc_info.value.diagnostic.code is DiagnosticCode.INVALID_MESSAGE_VALUE

    def test_messages_must_be_mapping(self) -> None:
        with pytest.raises(BundleDefinitionError):
            MessageBundle("root", ["login"])  # type: ignore[arg-type]

    def test_source_mapping_is_copied(self) -> None:
        messages = {"login": "Login"}
        bundle = MessageBundle.from_mapping("root", messages)
        messages["login"] = "Changed"

        assert bundle.format("login") == "Login"

    def test_from_module(self) -> None:
        module = parse_nls_module("define({'login': 'Identifiant'})")

        bundle = MessageBundle.from_module("fr", module)

        assert bundle.messages() == {"login": "Identifiant"}


class TestMessageBundleAccess:
    """Read access."""

    @pytest.fixture
    def bundle(self, identity_root: dict[str, str]) -> MessageBundle:
        return MessageBundle("root", identity_root)

    def test_container_protocol(self, bundle: MessageBundle) -> None:
        assert "login" in bundle
        assert "nope" not in bundle
        assert len(bundle) == 6
        assert set(bundle) == bundle.keys()

    def test_get_and_get_template(self, bundle: MessageBundle) -> None:
        assert bundle.get("nope") is None
        assert bundle.get_template("login").source == "Login"

    def test_get_template_missing(self, bundle: MessageBundle) -> None:
        with pytest.raises(KeyNotFoundError) as exc_info:
            bundle.get_template("nope")

        assert exc_info.value.searched == ("root",)

    def test_placeholder_arity(self, bundle: MessageBundle) -> None:
        assert bundle.placeholder_arity("service:id:added-member") == 2
        assert bundle.placeholder_arity("login") == 0

    def test_messages_round_trip(self, bundle: MessageBundle, identity_root: dict[str, str]) -> None:
        assert bundle.messages() == identity_root

    def test_repr(self, bundle: MessageBundle) -> None:
        assert repr(bundle) == "MessageBundle(locale='root', messages=6)"


class TestMessageBundleFormat:
    """Single-bundle formatting (no locale fallback)."""

    def test_format(self, identity_root: dict[str, str]) -> None:
        bundle = MessageBundle("root", identity_root)

        assert bundle.format("service:id:removed-member", ["bob", "admins"]) == (
            "User bob has been removed from group admins"
        )

    def test_format_missing_key(self) -> None:
        with pytest.raises(KeyNotFoundError):
            MessageBundle("fr", {"a": "A"}).format("b")

    def test_format_policy(self) -> None:
        bundle = MessageBundle("root", {"k": "{{[0]}}"})

        with pytest.raises(PlaceholderIndexOutOfRangeError):
            bundle.format("k", [], policy=PlaceholderPolicy.RAISE)


class TestMessageBundleSetOps:
    """Merging and key comparison."""

    def test_merged_layers_over(self) -> None:
        base = MessageBundle("fr", {"a": "A", "b": "B"})

        merged = base.merged({"b": "Bee", "c": "C"})

        assert merged.messages() == {"a": "A", "b": "Bee", "c": "C"}
        assert merged.locale == "fr"
        assert base.messages() == {"a": "A", "b": "B"}

    def test_merged_with_bundle(self) -> None:
        merged = MessageBundle("fr", {"a": "A"}).merged(MessageBundle("fr", {"a": "Ah"}))

        assert merged.messages() == {"a": "Ah"}

    def test_missing_keys(self) -> None:
        root = MessageBundle("root", {"a": "A", "b": "B"})

        assert root.missing_keys(["a", "z"]) == frozenset({"z"})
        assert root.missing_keys(MessageBundle("fr", {"b": "B"})) == frozenset()
