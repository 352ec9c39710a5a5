"""Canopy exception hierarchy.

Shared across the matcher, resolver, redirect pipeline, and navigator so
every module raises and catches the same types.

Two families live here. Errors the caller must handle right away
(bad configuration, unknown route names, missing parameters) are raised.
Errors produced while resolving a location (``NavigationError`` and its
subclasses) are *carried* inside a ``RouteMatchList`` so the navigator can
turn them into an error destination or hand them to an error hook.
"""

from collections.abc import Iterable


class CanopyError(Exception):
    """Base for all canopy-specific errors."""


class ConfigurationError(CanopyError):
    """Raised when the route tree or router configuration is invalid.

    Typically raised while the navigator is being constructed.
    """


class DuplicateRouteName(ConfigurationError):  # noqa: N818
    """Two routes in one tree declare the same ``name``."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Duplicate route name: {name!r}")


class MissingNamedRoute(CanopyError):  # noqa: N818
    """No route in the tree is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown route name: {name!r}")


class MissingPathParameter(CanopyError):  # noqa: N818
    """Required ``:token`` values were not supplied.

    ``missing`` lists every unresolved token, not just the first one.
    """

    def __init__(self, route: str, missing: Iterable[str]) -> None:
        self.route = route
        self.missing = tuple(sorted(missing))
        joined = ", ".join(self.missing)
        super().__init__(f"Missing path parameters for route {route!r}: {joined}")


class NavigationError(CanopyError):
    """Base for failures produced while resolving a location.

    These are stored on ``RouteMatchList.error`` rather than raised.
    """


class NoMatch(NavigationError):  # noqa: N818
    """No path through the route tree consumes every segment."""

    def __init__(self, location: str) -> None:
        self.location = location
        super().__init__(f"No match found for: {location}")


class RedirectLoop(NavigationError):  # noqa: N818
    """A redirect target repeated within a single resolution."""

    def __init__(self, target: str, visited: Iterable[str]) -> None:
        self.target = target
        self.visited = frozenset(visited)
        trail = ", ".join(sorted(self.visited))
        super().__init__(
            f"Redirect loop detected: {target} has already been visited. Visited: {{{trail}}}"
        )


class TooManyRedirects(NavigationError):  # noqa: N818
    """The redirect hop counter exceeded the configured maximum."""

    def __init__(self, max_redirects: int, location: str) -> None:
        self.max_redirects = max_redirects
        self.location = location
        super().__init__(f"Too many redirects (max={max_redirects}). Last location: {location}")
