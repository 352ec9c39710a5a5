"""Redirect pipeline — resolve global and per-route redirects to a fixed point.

Each hop evaluates the global redirect hook first and the leaf route's
own hook second, then re-matches the target. The pipeline stops when no
hook asks for a redirect, when a target repeats (``RedirectLoop``), or
when the hop count exceeds the limit (``TooManyRedirects``). Failures
are returned as error match lists, never raised.
"""

import logging
from typing import Any

from canopy._internal.hooks import call_hook
from canopy._internal.types import RedirectHook
from canopy.errors import RedirectLoop, TooManyRedirects
from canopy.routing.match import RouteMatchList
from canopy.routing.matcher import RouteMatcher

logger = logging.getLogger("canopy.routing")


async def run_redirect_pipeline(
    redirect: RedirectHook | None,
    matcher: RouteMatcher,
    initial: RouteMatchList,
    *,
    max_redirects: int = 10,
    context: Any = None,
) -> RouteMatchList:
    """Apply redirects to *initial* until nothing redirects any more.

    Hooks are called as ``hook(state, context)`` and may be sync or async.
    The global hook also sees error lists, so it can send an unmatched
    location somewhere useful; per-route hooks only run for a matched leaf.
    """
    current = initial
    visited: set[str] = set()
    hops = 0

    while True:
        state = current.to_state()
        target: str | None = None

        if redirect is not None:
            target = await call_hook(redirect, state, context)

        leaf = current.leaf
        if target is None and leaf is not None and leaf.route.redirect is not None:
            target = await call_hook(leaf.route.redirect, state, context)

        if target is None:
            return current

        if target in visited:
            logger.debug("Redirect loop at %r (visited %s)", target, sorted(visited))
            return current.with_error(RedirectLoop(target, visited))

        visited.add(target)
        hops += 1
        if hops > max_redirects:
            logger.debug("Redirect limit %d exceeded at %r", max_redirects, target)
            return current.with_error(TooManyRedirects(max_redirects, target))

        logger.debug("Redirect %r -> %r", current.uri, target)
        current = matcher.match(
            target,
            extra=current.extra,
            transition_enabled=current.transition_enabled,
        )
        if current.is_error:
            return current
