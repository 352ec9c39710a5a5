"""Navigator import resolution — resolves ``"module:attribute"`` strings.

Shared by every ``canopy`` subcommand to locate the route tree a user
wants to inspect.
"""

import importlib

from canopy.navigation.navigator import Navigator
from canopy.routing.tree import Route, RouteTree, ShellRoute, StatefulShellRoute

_NODE_TYPES = (Route, ShellRoute, StatefulShellRoute)


def resolve_navigator(import_string: str) -> Navigator:
    """Resolve an import string to a canopy Navigator.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"navigator"``. The attribute may be a
    ``Navigator``, a ``RouteTree``, a list of route nodes, or a factory
    returning any of those.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is none of the accepted kinds.

    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "navigator"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    # Support factory functions
    if callable(obj) and not isinstance(obj, Navigator):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if isinstance(obj, Navigator):
        return obj
    if isinstance(obj, RouteTree):
        return Navigator(obj)
    if isinstance(obj, (list, tuple)) and all(isinstance(node, _NODE_TYPES) for node in obj):
        return Navigator(list(obj))

    msg = f"{import_string!r} resolved to {type(obj).__name__}, not a canopy Navigator or route list"
    raise TypeError(msg)
