"""Named route resolution.

Lets callers navigate by name instead of by literal path::

    resolver = NamedRouteResolver(routes)
    resolver.resolve("user-profile", {"id": "42"}, {"tab": "posts"})
    # "/users/42?tab=posts"
"""

from collections.abc import Iterator, Mapping, Sequence
from urllib.parse import quote

from canopy.errors import DuplicateRouteName, MissingNamedRoute, MissingPathParameter
from canopy.routing.pattern import join_paths, parse_pattern
from canopy.routing.tree import Route, RouteNode, RouteTree


class NamedRouteResolver:
    """Index of route name -> absolute pattern, built once from the tree.

    Raises ``DuplicateRouteName`` at construction if two routes share a name.
    """

    __slots__ = ("_patterns",)

    def __init__(self, routes: Sequence[RouteNode] | RouteTree) -> None:
        top = routes.routes if isinstance(routes, RouteTree) else routes
        self._patterns: dict[str, str] = {}
        self._collect(top, "")

    def _collect(self, routes: Sequence[RouteNode], parent_path: str) -> None:
        for node in routes:
            if isinstance(node, Route):
                full_path = join_paths(parent_path, node.path)
                if node.name:
                    if node.name in self._patterns:
                        raise DuplicateRouteName(node.name)
                    self._patterns[node.name] = full_path
                self._collect(node.routes, full_path)
            else:
                # Shells and branches inherit the parent prefix
                self._collect(node.routes, parent_path)

    def __iter__(self) -> Iterator[str]:
        return iter(self._patterns)

    def __len__(self) -> int:
        return len(self._patterns)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._patterns)

    def has_route(self, name: str) -> bool:
        return name in self._patterns

    def pattern_for(self, name: str) -> str:
        """Return the absolute pattern registered under *name*."""
        try:
            return self._patterns[name]
        except KeyError:
            raise MissingNamedRoute(name) from None

    def resolve(
        self,
        name: str,
        path_parameters: Mapping[str, str] | None = None,
        query_parameters: Mapping[str, str] | None = None,
    ) -> str:
        """Build a location for the route registered under *name*.

        Raises ``MissingNamedRoute`` for an unknown name and
        ``MissingPathParameter`` (listing every missing token) when the
        pattern has ``:tokens`` not present in *path_parameters*.
        """
        pattern = self.pattern_for(name)
        path_parameters = path_parameters or {}

        segments = parse_pattern(pattern)
        missing = {
            seg.param_name
            for seg in segments
            if seg.param_name and seg.param_name not in path_parameters
        }
        if missing:
            raise MissingPathParameter(name, missing)

        parts = [
            quote(str(path_parameters[seg.param_name]), safe="") if seg.param_name else seg.value
            for seg in segments
        ]
        location = "/" + "/".join(parts)

        if query_parameters:
            query = "&".join(
                f"{quote(str(key), safe='')}={quote(str(value), safe='')}"
                for key, value in query_parameters.items()
            )
            location = f"{location}?{query}"
        return location
