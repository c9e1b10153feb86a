"""Pytest configuration for the nlsbundle test suite.

Single Source of Truth for Hypothesis max_examples:
- dev: Local development with 500 examples (thorough property testing)
- ci: CI runs with 50 examples (fast feedback)
- verbose: Debug mode with progress output (100 examples)

Profile auto-detection:
- CI=true environment variable -> "ci" profile
- HYPOTHESIS_PROFILE env var -> explicit override
- Otherwise -> "dev" profile (local development)

Override manually: HYPOTHESIS_PROFILE=verbose pytest tests/

Fuzzing Test Separation:
Tests marked with @pytest.mark.fuzz are excluded from normal test runs.
Run them via: pytest -m fuzz
"""

import os
from collections.abc import Mapping

import pytest
from hypothesis import Phase, Verbosity, settings

from nlsbundle import BundleRegistry

# =============================================================================
# HYPOTHESIS PROFILES - SINGLE SOURCE OF TRUTH
# =============================================================================

# Development profile: thorough local testing (500 examples, silent)
settings.register_profile(
    "dev",
    max_examples=500,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
)

# CI profile: fast feedback (50 examples)
settings.register_profile(
    "ci",
    max_examples=50,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=True,
    print_blob=True,
)

# Verbose profile: debug mode with progress visibility (100 examples)
settings.register_profile(
    "verbose",
    max_examples=100,
    phases=[Phase.explicit, Phase.reuse, Phase.generate, Phase.shrink],
    derandomize=False,
    verbosity=Verbosity.verbose,
)


def _detect_profile() -> str:
    """Detect appropriate Hypothesis profile based on execution context.

    Priority:
    1. HYPOTHESIS_PROFILE env var (explicit override)
    2. CI=true env var
    3. Default to "dev" (local development)
    """
    explicit = os.environ.get("HYPOTHESIS_PROFILE")
    if explicit in ("dev", "ci", "verbose"):
        return explicit
    if os.environ.get("CI") == "true":
        return "ci"
    return "dev"


settings.load_profile(_detect_profile())


# =============================================================================
# FUZZING TEST SEPARATION
# =============================================================================


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Skip fuzz-marked tests unless explicitly requested with -m fuzz."""
    marker_expr = config.getoption("-m", default="")
    if "fuzz" in str(marker_expr):
        return

    skip_fuzz = pytest.mark.skip(reason="Fuzzing test - run with: pytest -m fuzz")
    for item in items:
        if "fuzz" in item.keywords:
            item.add_marker(skip_fuzz)


# =============================================================================
# SHARED FIXTURES
# =============================================================================

IDENTITY_ROOT: dict[str, str] = {
    "login": "Login",
    "mail": "Mail",
    "groups": "Groups",
    "service:id": "Identity",
    "service:id:added-member": "User {{[0]}} has been added to group {{[1]}}",
    "service:id:removed-member": "User {{[0]}} has been removed from group {{[1]}}",
}


class DictLoader:
    """In-memory ResourceLoader; missing locales raise FileNotFoundError."""

    def __init__(self, sources: Mapping[str, str]) -> None:
        self.sources = dict(sources)
        self.calls: list[tuple[str, str]] = []

    def load(self, locale: str, resource_id: str) -> str:
        self.calls.append((locale, resource_id))
        try:
            return self.sources[locale]
        except KeyError:
            raise FileNotFoundError(f"{locale}/{resource_id}") from None

    def describe_path(self, locale: str, resource_id: str) -> str:
        return f"mem:{locale}/{resource_id}"


@pytest.fixture
def identity_root() -> dict[str, str]:
    """Root messages of a small identity bundle."""
    return dict(IDENTITY_ROOT)


@pytest.fixture
def root_registry(identity_root: dict[str, str]) -> BundleRegistry:
    """Frozen registry holding only the root bundle."""
    registry = BundleRegistry()
    registry.register_locale("root", identity_root)
    return registry.freeze()


@pytest.fixture
def make_loader() -> type[DictLoader]:
    """In-memory loader class: make_loader({"fr": "define({...});"})."""
    return DictLoader
