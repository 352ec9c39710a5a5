"""Shared type aliases used across canopy modules."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeAlias

# Redirect hook: receives (state, context), returns a target location or None
RedirectHook: TypeAlias = Callable[[Any, Any], str | None | Awaitable[str | None]]

# Exit guard: receives (state, context), returns False to veto leaving the route
ExitHook: TypeAlias = Callable[[Any, Any], bool | Awaitable[bool]]

# Error hook: receives (state, navigator) for a failed resolution
ErrorHook: TypeAlias = Callable[[Any, Any], Any]

# Render reference: opaque to canopy, consumed by an external renderer
Builder: TypeAlias = Callable[..., Any]
