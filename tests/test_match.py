"""Tests for canopy.routing.match — RouteMatch, RouteMatchList, RouterState, QueryParams."""

import pytest

from canopy.errors import MissingPathParameter, NoMatch, RedirectLoop
from canopy.routing.match import QueryParams, RouteMatch, RouteMatchList, RouterState
from canopy.routing.tree import Route


def _match(route: Route, params: dict[str, str], location: str, pattern: str) -> RouteMatch:
    return RouteMatch(
        route=route,
        node_id=0,
        matched_path=location,
        path_parameters=params,
        matched_location=location,
        full_path=pattern,
    )


class TestQueryParams:
    def test_parse(self) -> None:
        query = QueryParams.parse("tab=posts&page=2")
        assert query == {"tab": "posts", "page": "2"}

    def test_first_value_wins(self) -> None:
        query = QueryParams.parse("tag=a&tag=b")
        assert query["tag"] == "a"
        assert query.get_list("tag") == ["a", "b"]

    def test_percent_and_plus_decoding(self) -> None:
        query = QueryParams.parse("q=hello+world&name=J%C3%BCrgen")
        assert query["q"] == "hello world"
        assert query["name"] == "Jürgen"

    def test_undecodable_pair_is_dropped(self) -> None:
        query = QueryParams.parse("bad=%FF%FE&good=1")
        assert "bad" not in query
        assert query["good"] == "1"

    def test_blank_value_kept(self) -> None:
        assert QueryParams.parse("flag=")["flag"] == ""

    def test_empty(self) -> None:
        query = QueryParams.parse("")
        assert len(query) == 0
        assert query.get("missing") is None

    def test_from_mapping(self) -> None:
        assert QueryParams({"a": "1"}) == {"a": "1"}

    def test_repr(self) -> None:
        assert repr(QueryParams({"a": "1"})) == "QueryParams({'a': '1'})"

    def test_slotted(self) -> None:
        query = QueryParams.parse("a=1&a=2")
        assert not hasattr(query, "__dict__")
        assert query.get_list("a") == ["1", "2"]


class TestRouteMatchList:
    def test_requires_error_when_empty(self) -> None:
        with pytest.raises(ValueError, match="must carry an error"):
            RouteMatchList(matches=(), uri="/x")

    def test_rejects_matches_with_error(self) -> None:
        route = Route("/a")
        with pytest.raises(ValueError, match="both matches and an error"):
            RouteMatchList(
                matches=(_match(route, {}, "/a", "/a"),),
                uri="/a",
                error=NoMatch("/a"),
            )

    def test_leaf_and_merged_params_deeper_wins(self) -> None:
        parent, child = Route("/orgs/:id"), Route("teams/:id")
        matches = (
            _match(parent, {"id": "acme"}, "/orgs/acme", "/orgs/:id"),
            _match(child, {"id": "core"}, "/orgs/acme/teams/core", "/orgs/:id/teams/:id"),
        )
        result = RouteMatchList(matches=matches, uri="/orgs/acme/teams/core")
        assert result.leaf is matches[1]
        assert result.path_parameters == {"id": "core"}
        assert result.is_error is False

    def test_with_error_clears_chain(self) -> None:
        route = Route("/a")
        result = RouteMatchList(matches=(_match(route, {}, "/a", "/a"),), uri="/a")
        failed = result.with_error(RedirectLoop("/a", {"/a"}))
        assert failed.matches == ()
        assert failed.leaf is None
        assert isinstance(failed.error, RedirectLoop)
        assert failed.uri == "/a"

    def test_to_state(self) -> None:
        route = Route(":id", name="user")
        result = RouteMatchList(
            matches=(_match(route, {"id": "42"}, "/users/42", "/users/:id"),),
            uri="/users/42?tab=posts",
            query_parameters=QueryParams.parse("tab=posts"),
            extra={"from": "list"},
        )
        state = result.to_state()
        assert state.uri == "/users/42?tab=posts"
        assert state.path == ":id"
        assert state.name == "user"
        assert state.matched_location == "/users/42"
        assert state.full_path == "/users/:id"
        assert state.path_parameters == {"id": "42"}
        assert state.query_param("tab") == "posts"
        assert state.extra == {"from": "list"}
        assert state.error is None

    def test_error_to_state(self) -> None:
        result = RouteMatchList(matches=(), uri="/nope", error=NoMatch("/nope"))
        state = result.to_state()
        assert state.uri == "/nope"
        assert state.name is None
        assert isinstance(state.error, NoMatch)


class TestRouterState:
    def test_path_param(self) -> None:
        state = RouterState(path_parameters={"id": "42"}, name="user")
        assert state.path_param("id") == "42"

    def test_missing_path_param_raises(self) -> None:
        state = RouterState(name="user")
        with pytest.raises(MissingPathParameter) as exc_info:
            state.path_param("id")
        assert exc_info.value.missing == ("id",)

    def test_missing_query_param_is_none(self) -> None:
        assert RouterState().query_param("tab") is None
