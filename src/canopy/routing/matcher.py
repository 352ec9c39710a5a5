"""Route matcher — depth-first matching of a location against the route tree.

Matching is a pure function of (tree, location). The chain built so far
is an immutable tuple passed down the recursion, so backtracking is just
returning ``None`` and letting the caller try the next sibling.
"""

import logging
from collections.abc import Sequence
from typing import Any
from urllib.parse import unquote, urlsplit

from canopy.errors import NoMatch
from canopy.routing.match import QueryParams, RouteMatch, RouteMatchList
from canopy.routing.pattern import concat_paths, split_path
from canopy.routing.tree import Route, RouteNode, RouteTree, ShellRoute

logger = logging.getLogger("canopy.routing")

_Chain = tuple[RouteMatch, ...]


class RouteMatcher:
    """Matches locations against a route tree.

    Usage::

        matcher = RouteMatcher([Route("/users", routes=[Route(":id")])])
        result = matcher.match("/users/42?tab=posts")
        result.path_parameters   # {"id": "42"}
        result.query_parameters  # QueryParams({'tab': 'posts'})
    """

    __slots__ = ("tree",)

    def __init__(self, routes: Sequence[RouteNode] | RouteTree) -> None:
        self.tree = routes if isinstance(routes, RouteTree) else RouteTree(routes)

    def match(
        self,
        location: str,
        extra: Any = None,
        transition_enabled: bool = True,
    ) -> RouteMatchList:
        """Match *location* and return the chain from root to leaf.

        Never raises for an unmatched location: the returned list has an
        empty chain and a ``NoMatch`` error instead.
        """
        parts = urlsplit(location)
        segments = split_path(parts.path)
        query = QueryParams.parse(parts.query)

        chain = self._match_nodes(self.tree.routes, segments, 0, "", "", ())
        if chain is None:
            logger.debug("No route matches %r", location)
            return RouteMatchList(
                matches=(),
                uri=location,
                query_parameters=query,
                extra=extra,
                error=NoMatch(location),
                transition_enabled=transition_enabled,
            )
        return RouteMatchList(
            matches=chain,
            uri=location,
            query_parameters=query,
            extra=extra,
            transition_enabled=transition_enabled,
        )

    def _match_nodes(
        self,
        nodes: Sequence[RouteNode],
        segments: list[str],
        index: int,
        parent_location: str,
        parent_pattern: str,
        chain: _Chain,
    ) -> _Chain | None:
        """Try *nodes* in order; the first complete chain wins."""
        for node in nodes:
            if isinstance(node, Route):
                found = self._match_route(
                    node, segments, index, parent_location, parent_pattern, chain
                )
            elif isinstance(node, ShellRoute):
                # Shells consume nothing and add nothing to the chain
                found = self._match_nodes(
                    node.routes, segments, index, parent_location, parent_pattern, chain
                )
            else:
                found = None
                for branch in node.branches:
                    found = self._match_nodes(
                        branch.routes, segments, index, parent_location, parent_pattern, chain
                    )
                    if found is not None:
                        break
            if found is not None:
                return found
        return None

    def _match_route(
        self,
        route: Route,
        segments: list[str],
        index: int,
        parent_location: str,
        parent_pattern: str,
        chain: _Chain,
    ) -> _Chain | None:
        match = self._match_segments(route, segments, index, parent_location, parent_pattern)
        if match is None:
            return None

        extended = (*chain, match)
        next_index = index + len(route.segments)
        if next_index >= len(segments):
            return extended

        if route.routes:
            return self._match_nodes(
                route.routes,
                segments,
                next_index,
                match.matched_location,
                match.full_path,
                extended,
            )
        return None

    def _match_segments(
        self,
        route: Route,
        segments: list[str],
        index: int,
        parent_location: str,
        parent_pattern: str,
    ) -> RouteMatch | None:
        """Match a single route's own pattern starting at *index*."""
        node_id = self.tree.node_id(route)

        # The root pattern consumes nothing and only anchors at index 0
        if route.is_root_pattern:
            if index != 0:
                return None
            return RouteMatch(
                route=route,
                node_id=node_id,
                matched_path="/",
                path_parameters={},
                matched_location=concat_paths(parent_location, ""),
                full_path=concat_paths(parent_pattern, ""),
            )

        end = index + len(route.segments)
        if end > len(segments):
            return None

        params: dict[str, str] = {}
        parts = segments[index:end]
        for pattern_segment, part in zip(route.segments, parts, strict=True):
            if not pattern_segment.accepts(part):
                return None
            if pattern_segment.param_name:
                params[pattern_segment.param_name] = unquote(part)

        matched_path = "/" + "/".join(parts)
        own_pattern = "/".join(seg.value for seg in route.segments)
        return RouteMatch(
            route=route,
            node_id=node_id,
            matched_path=matched_path,
            path_parameters=params,
            matched_location=concat_paths(parent_location, matched_path),
            full_path=concat_paths(parent_pattern, own_pattern),
        )
