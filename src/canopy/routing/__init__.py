"""Routing — route tree, matching, named routes, and redirects.

The route tree is declared once and indexed into an immutable
``RouteTree``; every resolution after that is a pure read.
"""
