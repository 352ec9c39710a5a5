"""Tests for canopy.routing.pattern — pattern parsing and path joining."""

import pytest

from canopy.errors import ConfigurationError
from canopy.routing.pattern import (
    PathSegment,
    concat_paths,
    join_paths,
    param_names,
    parse_pattern,
    split_path,
)


class TestParsePattern:
    def test_root(self) -> None:
        assert parse_pattern("/") == ()
        assert parse_pattern("") == ()

    def test_literal(self) -> None:
        segments = parse_pattern("/users")
        assert len(segments) == 1
        assert segments[0].value == "users"
        assert segments[0].is_param is False
        assert segments[0].is_wildcard is False

    def test_relative_multi_segment(self) -> None:
        segments = parse_pattern("users/:id/edit")
        assert [s.value for s in segments] == ["users", ":id", "edit"]

    def test_param(self) -> None:
        segments = parse_pattern("/users/:id")
        assert segments[1].is_param is True
        assert segments[1].param_name == "id"

    def test_wildcard(self) -> None:
        segments = parse_pattern("/files/*")
        assert segments[1].is_wildcard is True
        assert segments[1].param_name is None

    def test_rejects_empty_param_name(self) -> None:
        with pytest.raises(ConfigurationError, match="Invalid path parameter"):
            parse_pattern("/users/:")

    def test_rejects_brace_params(self) -> None:
        """Canopy expects :param, not {param}."""
        with pytest.raises(ConfigurationError) as exc_info:
            parse_pattern("/users/{id}")
        assert ":param" in str(exc_info.value)
        assert "/users/{id}" in str(exc_info.value)

    def test_param_names_in_order(self) -> None:
        assert param_names("/orgs/:org/repos/:repo") == ["org", "repo"]


class TestPathSegmentAccepts:
    def test_literal_is_case_insensitive(self) -> None:
        seg = PathSegment(value="Users")
        assert seg.accepts("users")
        assert seg.accepts("USERS")
        assert not seg.accepts("posts")

    def test_param_accepts_anything(self) -> None:
        seg = PathSegment(value=":id", is_param=True, param_name="id")
        assert seg.accepts("42")

    def test_wildcard_accepts_anything(self) -> None:
        seg = PathSegment(value="*", is_wildcard=True)
        assert seg.accepts("whatever")


class TestJoining:
    def test_split_path_drops_empty_segments(self) -> None:
        assert split_path("//users///42/") == ["users", "42"]

    def test_concat_ignores_leading_slash(self) -> None:
        assert concat_paths("/users", "/42") == "/users/42"
        assert concat_paths("/users", ":id") == "/users/:id"

    def test_concat_root(self) -> None:
        assert concat_paths("", "") == "/"
        assert concat_paths("", "/") == "/"
        assert concat_paths("/", "users") == "/users"

    def test_join_relative_child(self) -> None:
        assert join_paths("/users", ":id") == "/users/:id"

    def test_join_absolute_child_overrides_prefix(self) -> None:
        assert join_paths("/users", "/settings") == "/settings"
