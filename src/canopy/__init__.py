"""Canopy — declarative, tree-based navigation with go_router semantics.

Matches locations against a route tree, resolves redirects and named
routes, and keeps a shell-aware back stack. Rendering is left to the
host application.

Basic usage::

    from canopy import Navigator, Route, ShellRoute

    navigator = Navigator([
        ShellRoute(routes=[
            Route("/", name="home"),
            Route("/users", name="users", routes=[Route(":id", name="user")]),
            Route("/settings", name="settings"),
        ]),
    ])

    await navigator.start()
    await navigator.push_named("user", {"id": "42"})
    navigator.current_state.path_param("id")  # "42"
"""

import importlib

__version__ = "0.1.0"

# Public name -> defining module
_LAZY_IMPORTS: dict[str, str] = {
    "Navigator": "canopy.navigation.navigator",
    "RouterConfig": "canopy.config",
    "LocationEntry": "canopy.navigation.stack",
    # Route tree
    "Route": "canopy.routing.tree",
    "RouteTree": "canopy.routing.tree",
    "ShellBranch": "canopy.routing.tree",
    "ShellRoute": "canopy.routing.tree",
    "StatefulShellRoute": "canopy.routing.tree",
    "Transition": "canopy.routing.tree",
    # Matching
    "RouteMatch": "canopy.routing.match",
    "RouteMatchList": "canopy.routing.match",
    "RouterState": "canopy.routing.match",
    "RouteMatcher": "canopy.routing.matcher",
    "NamedRouteResolver": "canopy.routing.named",
    # Events
    "CompositeNavigationObserver": "canopy.navigation.events",
    "LoggingNavigationObserver": "canopy.navigation.events",
    "NavigationEvent": "canopy.navigation.events",
    "NavigationType": "canopy.navigation.events",
    # Errors
    "CanopyError": "canopy.errors",
    "ConfigurationError": "canopy.errors",
    "DuplicateRouteName": "canopy.errors",
    "MissingNamedRoute": "canopy.errors",
    "MissingPathParameter": "canopy.errors",
    "NavigationError": "canopy.errors",
    "NoMatch": "canopy.errors",
    "RedirectLoop": "canopy.errors",
    "TooManyRedirects": "canopy.errors",
}

__all__ = sorted(_LAZY_IMPORTS)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import canopy`` fast while providing a clean top-level API.
    """
    module_name = _LAZY_IMPORTS.get(name)
    if module_name is None:
        msg = f"module {__name__!r} has no attribute {name!r}"
        raise AttributeError(msg)
    return getattr(importlib.import_module(module_name), name)
