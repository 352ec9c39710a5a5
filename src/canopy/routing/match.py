"""RouteMatch, RouteMatchList, RouterState, and QueryParams.

Everything here is immutable and created fresh per resolution attempt.
A match list only becomes navigation state when the navigator commits it.
"""

import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field, replace
from typing import Any
from urllib.parse import unquote_plus

from canopy.errors import MissingPathParameter, NavigationError
from canopy.routing.tree import Route

logger = logging.getLogger("canopy.routing")


class QueryParams(Mapping[str, str]):
    """Immutable query string parameters.

    ``__getitem__`` returns the first value for a key.
    ``get_list`` returns all values for a key.
    """

    _data: dict[str, list[str]]

    __slots__ = ("_data",)

    def __init__(self, pairs: Mapping[str, str] | Iterable[tuple[str, str]] = ()) -> None:
        data: dict[str, list[str]] = {}
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        for key, value in items:
            data.setdefault(key, []).append(value)
        self._data = data

    @classmethod
    def parse(cls, query: str) -> "QueryParams":
        """Decode a raw query string.

        Pairs whose percent-encoding cannot be decoded are dropped; one
        bad pair never fails the whole location.
        """
        pairs: list[tuple[str, str]] = []
        for chunk in query.split("&"):
            if not chunk:
                continue
            raw_key, _, raw_value = chunk.partition("=")
            try:
                key = unquote_plus(raw_key, errors="strict")
                value = unquote_plus(raw_value, errors="strict")
            except UnicodeDecodeError:
                logger.debug("Dropping undecodable query pair %r", chunk)
                continue
            if key:
                pairs.append((key, value))
        return cls(pairs)

    def __getitem__(self, key: str) -> str:
        return self._data[key][0]

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {self[k]!r}" for k in self)
        return f"QueryParams({{{items}}})"

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key*."""
        return list(self._data.get(key, []))


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """One matched route along a resolution chain.

    ``matched_path`` is what this node consumed (``"/42"``),
    ``matched_location`` the concrete path up to and including it
    (``"/users/42"``), and ``full_path`` the same prefix as a pattern
    (``"/users/:id"``).
    """

    route: Route
    node_id: int
    matched_path: str
    path_parameters: dict[str, str]
    matched_location: str
    full_path: str


@dataclass(frozen=True, slots=True)
class RouterState:
    """Snapshot of a match list handed to redirect hooks, guards, and renderers."""

    uri: str = ""
    path: str = ""
    matched_location: str = ""
    name: str | None = None
    path_parameters: Mapping[str, str] = field(default_factory=dict)
    query_parameters: Mapping[str, str] = field(default_factory=QueryParams)
    extra: Any = None
    error: NavigationError | None = None
    full_path: str = ""

    def path_param(self, name: str) -> str:
        """Return a required path parameter.

        Raises ``MissingPathParameter`` if it was not captured.
        """
        try:
            return self.path_parameters[name]
        except KeyError:
            raise MissingPathParameter(self.name or self.path, [name]) from None

    def query_param(self, name: str) -> str | None:
        return self.query_parameters.get(name)


@dataclass(frozen=True, slots=True)
class RouteMatchList:
    """The result of matching one location against the route tree.

    Either a non-empty chain with no error, or an empty chain carrying
    the error. The last match is the leaf, the only one that renders.
    """

    matches: tuple[RouteMatch, ...]
    uri: str
    query_parameters: QueryParams = field(default_factory=QueryParams)
    extra: Any = None
    error: NavigationError | None = None
    transition_enabled: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "matches", tuple(self.matches))
        if self.matches and self.error is not None:
            msg = "A match list cannot carry both matches and an error"
            raise ValueError(msg)
        if not self.matches and self.error is None:
            msg = "An empty match list must carry an error"
            raise ValueError(msg)

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def leaf(self) -> RouteMatch | None:
        """The last (leaf) match, or ``None`` for an error list."""
        return self.matches[-1] if self.matches else None

    @property
    def path_parameters(self) -> dict[str, str]:
        """Path parameters merged from the whole chain; deeper wins."""
        merged: dict[str, str] = {}
        for match in self.matches:
            merged.update(match.path_parameters)
        return merged

    def with_error(self, error: NavigationError) -> "RouteMatchList":
        """Copy of this list turned into an error result."""
        return replace(self, matches=(), error=error)

    def to_state(self) -> RouterState:
        leaf = self.leaf
        if leaf is None:
            return RouterState(
                uri=self.uri,
                query_parameters=self.query_parameters,
                extra=self.extra,
                error=self.error,
            )
        return RouterState(
            uri=self.uri,
            path=leaf.route.path,
            matched_location=leaf.matched_location,
            name=leaf.route.name,
            path_parameters=self.path_parameters,
            query_parameters=self.query_parameters,
            extra=self.extra,
            error=self.error,
            full_path=leaf.full_path,
        )
