"""Read-only projection of the navigation stack for a renderer.

Canopy never renders anything. A renderer asks the navigator for its
display entries and gets, per stack index, a hashable key, the match
list, and the shells to nest the leaf inside (outermost first).
"""

from collections.abc import Sequence
from dataclasses import dataclass

from canopy.routing.match import RouteMatchList
from canopy.routing.tree import RouteTree, ShellRoute


@dataclass(frozen=True, slots=True)
class RouteDisplayKey:
    """Stable identity of one stack entry across recompositions."""

    index: int
    uri: str
    full_path: str


@dataclass(frozen=True, slots=True)
class DisplayEntry:
    key: RouteDisplayKey
    match_list: RouteMatchList
    shells: tuple[ShellRoute, ...] = ()


def project_stack(tree: RouteTree, matches: Sequence[RouteMatchList]) -> tuple[DisplayEntry, ...]:
    entries: list[DisplayEntry] = []
    for index, match_list in enumerate(matches):
        leaf = match_list.leaf
        key = RouteDisplayKey(
            index=index,
            uri=match_list.uri,
            full_path=leaf.full_path if leaf is not None else "",
        )
        shells = tree.ancestor_shells(leaf.node_id) if leaf is not None else ()
        entries.append(DisplayEntry(key=key, match_list=match_list, shells=shells))
    return tuple(entries)
