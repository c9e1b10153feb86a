"""Tests for the shipped identity catalog."""

from __future__ import annotations

import pytest

from nlsbundle import BundleRegistry, KeyNotFoundError, PlaceholderPolicy, RegistryConfig
from nlsbundle.catalogs import identity_loader, load_identity_registry
from nlsbundle.validation import validate_registry


@pytest.fixture(scope="module")
def registry() -> BundleRegistry:
    return load_identity_registry()


class TestIdentityCatalog:
    """Root messages and the French translation."""

    def test_frozen_with_french(self, registry: BundleRegistry) -> None:
        assert registry.is_frozen
        assert registry.locales == ("root", "fr")
        assert registry.get_load_summary().all_successful

    def test_root_messages(self, registry: BundleRegistry) -> None:
        assert len(registry.keys()) == 20
        assert registry.resolve("root", "login") == "Login"
        assert registry.resolve("root", "service:id:uid-pattern") == "Pattern UID"

    def test_member_messages(self, registry: BundleRegistry) -> None:
        assert registry.resolve("root", "service:id:added-member", ["alice", "admins"]) == (
            "User alice has been added to group admins"
        )
        assert registry.resolve("root", "service:id:removed-member", ["bob", "admins"]) == (
            "User bob has been removed from group admins"
        )

    def test_french(self, registry: BundleRegistry) -> None:
        assert registry.resolve("fr", "login") == "Identifiant"
        assert registry.resolve("fr-CA", "service:id:added-member", ["alice", "admins"]) == (
            "L'utilisateur alice a été ajouté au groupe admins"
        )

    def test_other_locales_use_root(self, registry: BundleRegistry) -> None:
        assert registry.resolve("de", "groups") == "Groups"

    def test_unknown_key(self, registry: BundleRegistry) -> None:
        with pytest.raises(KeyNotFoundError):
            registry.resolve("fr", "nonexistent-key", [])

    def test_translation_is_consistent(self, registry: BundleRegistry) -> None:
        result = validate_registry(registry)

        assert result.is_valid
        assert result.warning_count == 0

    def test_every_key_fills_its_placeholders(self, registry: BundleRegistry) -> None:
        root = registry.get_bundle("root")
        assert root is not None

        for locale in ("root", "fr"):
            for key in root:
                args = [f"arg{i}" for i in range(root.placeholder_arity(key))]
                assert "{{[" not in registry.resolve(locale, key, args)


class TestLoadIdentityRegistryOptions:
    """Factory options."""

    def test_without_translations(self) -> None:
        registry = load_identity_registry(include_translations=False)

        assert registry.resolve("fr", "login") == "Login"
        assert registry.get_load_summary().skipped == 1

    def test_config_is_used(self) -> None:
        config = RegistryConfig(placeholder_policy=PlaceholderPolicy.EMPTY)

        registry = load_identity_registry(config)

        assert registry.config is config
        assert registry.resolve("root", "service:id:added-member") == (
            "User  has been added to group "
        )

    def test_loader_reads_package_data(self) -> None:
        assert "define({" in identity_loader().load("fr", "messages.js")
