"""Tests for placeholder substitution and the out-of-range policies."""

from __future__ import annotations

import logging

import pytest

from nlsbundle import PlaceholderIndexOutOfRangeError, PlaceholderPolicy
from nlsbundle.runtime import TemplateResolver, coerce_args, stringify_argument
from nlsbundle.syntax import parse_template

ADDED = parse_template("User {{[0]}} has been added to group {{[1]}}")


class TestStringifyArgument:
    """Rendering of individual arguments."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("alice", "alice"),
            (42, "42"),
            (1.5, "1.5"),
            (None, ""),
            (True, "true"),
            (False, "false"),
            (["a", "b"], "['a', 'b']"),
        ],
    )
    def test_rendering(self, value: object, expected: str) -> None:
        assert stringify_argument(value) == expected


class TestCoerceArgs:
    """Normalization of lookup arguments."""

    def test_none_is_empty(self) -> None:
        assert coerce_args("k", None) == ()

    def test_sequence_passes_through(self) -> None:
        args = ["a", "b"]

        assert coerce_args("k", args) is args

    def test_generator_is_materialized(self) -> None:
        assert coerce_args("k", (str(i) for i in range(2))) == ("0", "1")

    @pytest.mark.parametrize("args", ["alice", b"alice", 42])
    def test_rejected(self, args: object) -> None:
        with pytest.raises(TypeError, match="expected a sequence"):
            coerce_args("k", args)  # type: ignore[arg-type]


class TestTemplateResolver:
    """Substitution under each policy."""

    def test_triple_brace_renders_like_double(self) -> None:
        resolver = TemplateResolver()
        args = ["<b>alice</b>"]

        double = resolver.resolve("k", parse_template("Hi {{[0]}}"), args)
        triple = resolver.resolve("k", parse_template("Hi {{{[0]}}}"), args)

        assert double == triple == "Hi <b>alice</b>"

    def test_full_substitution(self) -> None:
        resolver = TemplateResolver()

        assert resolver.resolve("k", ADDED, ["alice", "admins"]) == (
            "User alice has been added to group admins"
        )

    def test_static_template_returns_source(self) -> None:
        template = parse_template("Login")

        assert TemplateResolver().resolve("login", template, ["unused"]) == "Login"

    def test_extra_arguments_ignored(self) -> None:
        assert TemplateResolver().resolve("k", ADDED, ["a", "b", "c"]) == (
            "User a has been added to group b"
        )

    def test_default_policy_is_keep(self) -> None:
        assert TemplateResolver().policy is PlaceholderPolicy.KEEP

    def test_keep_leaves_token_and_warns(self, caplog: pytest.LogCaptureFixture) -> None:
        resolver = TemplateResolver(PlaceholderPolicy.KEEP)

        with caplog.at_level(logging.WARNING, logger="nlsbundle.runtime.resolver"):
            result = resolver.resolve("k", ADDED, ["alice"])

        assert result == "User alice has been added to group {{[1]}}"
        assert "out of range" in caplog.text

    def test_keep_preserves_original_spelling(self) -> None:
        template = parse_template("x {{ [0] }} {{{[1]}}}")

        assert TemplateResolver().resolve("k", template, []) == "x {{ [0] }} {{{[1]}}}"

    def test_empty_substitutes_nothing(self, caplog: pytest.LogCaptureFixture) -> None:
        resolver = TemplateResolver(PlaceholderPolicy.EMPTY)

        with caplog.at_level(logging.WARNING):
            result = resolver.resolve("k", ADDED, ["alice"])

        assert result == "User alice has been added to group "
        assert "empty string" in caplog.text

    def test_raise_reports_index(self) -> None:
        resolver = TemplateResolver(PlaceholderPolicy.RAISE)

        with pytest.raises(PlaceholderIndexOutOfRangeError) as exc_info:
            resolver.resolve("service:id:added-member", ADDED, ["alice"])

        error = exc_info.value
        assert (error.key, error.index, error.arg_count) == ("service:id:added-member", 1, 1)
        assert isinstance(error, IndexError)

    def test_policy_from_string(self) -> None:
        assert TemplateResolver("raise").policy is PlaceholderPolicy.RAISE  # type: ignore[arg-type]
