"""``canopy resolve`` — build a location from a route name."""

import argparse
import sys

from canopy.cli._resolve import resolve_navigator
from canopy.errors import MissingNamedRoute, MissingPathParameter


def _parse_pairs(pairs: list[str] | None, flag: str) -> dict[str, str]:
    parsed: dict[str, str] = {}
    for pair in pairs or []:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            print(f"Error: {flag} expects key=value, got {pair!r}", file=sys.stderr)
            raise SystemExit(2)
        parsed[key] = value
    return parsed


def run_resolve(args: argparse.Namespace) -> None:
    try:
        navigator = resolve_navigator(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    path_parameters = _parse_pairs(args.param, "--param")
    query_parameters = _parse_pairs(args.query, "--query")
    try:
        location = navigator.resolver.resolve(args.name, path_parameters, query_parameters)
    except (MissingNamedRoute, MissingPathParameter) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    print(location)
