"""Tests for RegistryConfig and the enums it carries."""

from __future__ import annotations

import dataclasses

import pytest

from nlsbundle import PlaceholderPolicy, RegistryConfig
from nlsbundle.constants import MAX_SOURCE_SIZE
from nlsbundle.enums import LoadStatus


class TestRegistryConfig:
    """Defaults, coercion and validation."""

    def test_defaults(self) -> None:
        config = RegistryConfig()

        assert config.placeholder_policy is PlaceholderPolicy.KEEP
        assert config.validate_locales
        assert not config.reject_orphans
        assert config.max_source_size == MAX_SOURCE_SIZE

    def test_policy_coerced_from_string(self) -> None:
        config = RegistryConfig(placeholder_policy="raise")  # type: ignore[arg-type]

        assert config.placeholder_policy is PlaceholderPolicy.RAISE

    def test_unknown_policy(self) -> None:
        with pytest.raises(ValueError):
            RegistryConfig(placeholder_policy="ignore")  # type: ignore[arg-type]

    def test_negative_source_size(self) -> None:
        with pytest.raises(ValueError, match="max_source_size"):
            RegistryConfig(max_source_size=-1)

    def test_frozen(self) -> None:
        config = RegistryConfig()

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.reject_orphans = True  # type: ignore[misc]


class TestEnums:
    """StrEnum members are their string values."""

    def test_policy_values(self) -> None:
        assert [str(p) for p in PlaceholderPolicy] == ["keep", "raise", "empty"]

    def test_load_status_values(self) -> None:
        assert LoadStatus.NOT_FOUND == "not_found"
        assert {s.value for s in LoadStatus} == {"success", "not_found", "error", "skipped"}
