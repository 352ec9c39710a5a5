"""Route tree — declarative node types and the id-indexed tree.

Nodes are frozen dataclasses compared by identity, never by value: two
routes declared with identical fields are still different destinations.
``RouteTree`` walks the declaration once, hands every node a stable
integer id (preorder), and answers the ancestry questions the navigator
and display layer ask (owner shell, tab root, shell chain) through those
ids.
"""

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, TypeAlias

from canopy._internal.types import Builder, ExitHook, RedirectHook
from canopy.errors import ConfigurationError
from canopy.routing.pattern import PathSegment, parse_pattern


@dataclass(frozen=True, slots=True)
class Transition:
    """Opaque per-route transition configuration.

    Canopy never interprets these values; they are handed verbatim to
    whatever renders the stack.
    """

    enter: Any = None
    pop_exit: Any = None
    predictive_pop: Any = None


@dataclass(frozen=True, slots=True, eq=False)
class Route:
    """A navigable destination that consumes path segments.

    Usage::

        Route(
            "/users",
            name="users",
            routes=[Route(":id", name="user-profile")],
        )
    """

    path: str
    name: str | None = None
    builder: Builder | None = None
    redirect: RedirectHook | None = None
    on_exit: ExitHook | None = None
    transition: Transition | None = None
    routes: Sequence["RouteNode"] = ()
    segments: tuple[PathSegment, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "routes", tuple(self.routes))
        object.__setattr__(self, "segments", parse_pattern(self.path))

    @property
    def is_root_pattern(self) -> bool:
        return not self.segments


@dataclass(frozen=True, slots=True, eq=False)
class ShellRoute:
    """Persistent chrome around its children. Consumes no segments."""

    routes: Sequence["RouteNode"] = ()
    builder: Builder | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "routes", tuple(self.routes))


@dataclass(frozen=True, slots=True, eq=False)
class ShellBranch:
    """One branch of a ``StatefulShellRoute``."""

    routes: Sequence["RouteNode"] = ()
    initial_path: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "routes", tuple(self.routes))


@dataclass(frozen=True, slots=True, eq=False)
class StatefulShellRoute:
    """A shell whose children are grouped into ordered branches.

    Matching tries the branches in order. Branches do not get their own
    back-stacks; the navigator treats the whole shell as one stack.
    """

    branches: Sequence[ShellBranch] = ()
    builder: Builder | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "branches", tuple(self.branches))

    @property
    def routes(self) -> tuple["RouteNode", ...]:
        """All branch children, flattened in branch order."""
        return tuple(node for branch in self.branches for node in branch.routes)


RouteNode: TypeAlias = Route | ShellRoute | StatefulShellRoute


class RouteTree:
    """Immutable index over a route declaration.

    Every node gets an integer id in preorder. The same node object may
    appear only once; reusing it would make ancestry ambiguous.
    """

    __slots__ = ("_ids", "_nodes", "_parents", "routes")

    def __init__(self, routes: Sequence[RouteNode]) -> None:
        self.routes: tuple[RouteNode, ...] = tuple(routes)
        self._nodes: list[RouteNode] = []
        self._parents: list[int | None] = []
        # id(node) -> node id
        self._ids: dict[int, int] = {}
        for node in self.routes:
            self._index(node, None)

    def _index(self, node: RouteNode, parent: int | None) -> None:
        if not isinstance(node, (Route, ShellRoute, StatefulShellRoute)):
            msg = f"Unsupported route node: {type(node).__name__}"
            raise ConfigurationError(msg)
        if id(node) in self._ids:
            msg = f"Route node {node!r} appears more than once in the route tree"
            raise ConfigurationError(msg)

        node_id = len(self._nodes)
        self._ids[id(node)] = node_id
        self._nodes.append(node)
        self._parents.append(parent)
        for child in node.routes:
            self._index(child, node_id)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: object) -> bool:
        return id(node) in self._ids

    def node_id(self, node: RouteNode) -> int:
        """Return the id assigned to *node*.

        Raises ``KeyError`` if the node is not part of this tree.
        """
        try:
            return self._ids[id(node)]
        except KeyError:
            msg = f"{node!r} is not part of this route tree"
            raise KeyError(msg) from None

    def node(self, node_id: int) -> RouteNode:
        return self._nodes[node_id]

    def parent_id(self, node_id: int) -> int | None:
        return self._parents[node_id]

    def ancestors(self, node_id: int) -> Iterator[int]:
        """Yield ancestor ids, nearest first."""
        parent = self._parents[node_id]
        while parent is not None:
            yield parent
            parent = self._parents[parent]

    def walk(self) -> Iterator[tuple[int, RouteNode, int]]:
        """Yield ``(node_id, node, depth)`` in preorder."""
        for node_id, node in enumerate(self._nodes):
            yield node_id, node, sum(1 for _ in self.ancestors(node_id))

    # -- Shell lookups ----------------------------------------------------

    def owner_shell(self, node_id: int) -> int | None:
        """Id of the nearest enclosing ``ShellRoute``, if any."""
        for ancestor in self.ancestors(node_id):
            if isinstance(self._nodes[ancestor], ShellRoute):
                return ancestor
        return None

    def tab_root(self, shell_id: int, node_id: int) -> int | None:
        """Id of the direct child of *shell_id* that *node_id* descends from.

        The node itself counts when it is a direct child. Returns ``None``
        when the node is not under the shell or the direct child is not a
        ``Route``.
        """
        current = node_id
        parent = self._parents[current]
        while parent is not None and parent != shell_id:
            current = parent
            parent = self._parents[current]
        if parent is None or not isinstance(self._nodes[current], Route):
            return None
        return current

    def is_tab_root(self, shell_id: int, node_id: int) -> bool:
        """Whether *node_id* is a direct ``Route`` child of *shell_id*."""
        return self._parents[node_id] == shell_id and isinstance(self._nodes[node_id], Route)

    def ancestor_shells(self, node_id: int) -> tuple[ShellRoute, ...]:
        """All enclosing ``ShellRoute`` nodes, outermost first."""
        shells = [
            node
            for ancestor in self.ancestors(node_id)
            if isinstance(node := self._nodes[ancestor], ShellRoute)
        ]
        shells.reverse()
        return tuple(shells)
