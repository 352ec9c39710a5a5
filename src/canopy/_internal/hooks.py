"""Hook helpers — call sync or async user hooks uniformly.

Redirect hooks, exit guards, and error hooks can be ``def`` or
``async def``. Every place that calls one goes through ``call_hook`` so
the awaitable check lives in exactly one place.

Usage::

    from canopy._internal.hooks import call_hook

    target = await call_hook(route.redirect, state, context)
"""

import inspect
from typing import Any


async def call_hook(hook: Any, *args: Any) -> Any:
    """Call *hook* and await its result when it returns an awaitable.

    Works with both kinds of hooks::

        def require_login(state, ctx):
            return None if ctx.user else "/login"

        async def require_login(state, ctx):
            user = await ctx.session.user()
            return None if user else "/login"
    """
    result = hook(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
