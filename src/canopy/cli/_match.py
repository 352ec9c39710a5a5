"""``canopy match`` — show how a location resolves.

Runs the matcher and the redirect pipeline (including the navigator's
redirect hooks) and prints the resulting chain, root to leaf.
"""

import argparse
import sys

import anyio

from canopy.cli._resolve import resolve_navigator


def run_match(args: argparse.Namespace) -> None:
    try:
        navigator = resolve_navigator(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    result = anyio.run(navigator.resolve, args.location)
    if result.error is not None:
        print(f"Error: {result.error}", file=sys.stderr)
        raise SystemExit(1)

    if result.uri != args.location:
        print(f"Redirected: {args.location} -> {result.uri}")
    for depth, match in enumerate(result.matches):
        label = f" ({match.route.name})" if match.route.name else ""
        print(f"{'  ' * depth}{match.full_path}{label}  ->  {match.matched_location}")
    if result.path_parameters:
        params = ", ".join(f"{k}={v}" for k, v in result.path_parameters.items())
        print(f"path parameters: {params}")
    if result.query_parameters:
        query = ", ".join(f"{k}={v}" for k, v in result.query_parameters.items())
        print(f"query parameters: {query}")
