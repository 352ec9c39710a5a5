"""Canopy CLI — inspect route trees from the terminal.

Entry point registered as ``canopy`` in ``pyproject.toml``::

    [project.scripts]
    canopy = "canopy.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``canopy`` command."""
    parser = argparse.ArgumentParser(
        prog="canopy",
        description="Canopy — declarative, tree-based navigation for Python apps.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- canopy routes ----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List the route tree")
    routes_parser.add_argument("app", help="Import string (e.g. myapp.nav:navigator)")

    # -- canopy match -----------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show how a location resolves")
    match_parser.add_argument("app", help="Import string (e.g. myapp.nav:navigator)")
    match_parser.add_argument("location", help="Location to match (e.g. /users/42?tab=posts)")

    # -- canopy resolve ---------------------------------------------------
    resolve_parser = subparsers.add_parser("resolve", help="Build a location from a route name")
    resolve_parser.add_argument("app", help="Import string (e.g. myapp.nav:navigator)")
    resolve_parser.add_argument("name", help="Route name")
    resolve_parser.add_argument(
        "-p",
        "--param",
        action="append",
        metavar="KEY=VALUE",
        help="Path parameter (repeatable)",
    )
    resolve_parser.add_argument(
        "-q",
        "--query",
        action="append",
        metavar="KEY=VALUE",
        help="Query parameter (repeatable)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from canopy.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from canopy.cli._match import run_match

        run_match(args)
    elif args.command == "resolve":
        from canopy.cli._resolve_name import run_resolve

        run_resolve(args)
