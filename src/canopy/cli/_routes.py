"""``canopy routes`` — list the route tree.

Resolves an import string to a Navigator and prints every node with its
kind, absolute pattern, and name, indented by depth.
"""

import argparse
import sys

from canopy.cli._resolve import resolve_navigator
from canopy.routing.pattern import join_paths
from canopy.routing.tree import Route, RouteTree, ShellRoute


def _rows(tree: RouteTree) -> list[tuple[str, str, str]]:
    """Build rows of (kind, pattern, name) in preorder."""
    patterns: dict[int, str] = {}
    rows: list[tuple[str, str, str]] = []
    for node_id, node, depth in tree.walk():
        parent = tree.parent_id(node_id)
        inherited = patterns.get(parent, "") if parent is not None else ""
        indent = "  " * depth
        if isinstance(node, Route):
            patterns[node_id] = join_paths(inherited, node.path)
            rows.append((f"{indent}route", patterns[node_id], node.name or ""))
        else:
            patterns[node_id] = inherited
            kind = "shell" if isinstance(node, ShellRoute) else "stateful-shell"
            rows.append((f"{indent}{kind}", "", ""))
    return rows


def run_routes(args: argparse.Namespace) -> None:
    """Print the route tree of ``args.app`` as a table."""
    try:
        navigator = resolve_navigator(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    rows = _rows(navigator.tree)
    if not rows:
        print("No routes declared.")
        return

    max_kind = max(max(len(r[0]) for r in rows), 4)  # "KIND" header
    max_path = max(max(len(r[1]) for r in rows), 7)  # "PATTERN" header

    fmt = f"{{:<{max_kind}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("KIND", "PATTERN", "NAME"))
    sep_len = max_kind + max_path + 4 + max((len(r[2]) for r in rows), default=0)
    print("-" * min(sep_len, 80))
    for kind, pattern, name in rows:
        print(fmt.format(kind, pattern, name))
