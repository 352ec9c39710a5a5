"""Navigator — the stateful core of canopy.

Owns the navigation stack and implements ``go``, ``push``,
``push_replacement``, ``pop``, named navigation, and ``restore``.
Resolution (matching plus redirects) is read-only; the stack changes
only in the final commit step of each operation.
"""

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, TypeAlias

import anyio

from canopy._internal.hooks import call_hook
from canopy._internal.types import ErrorHook, RedirectHook
from canopy.config import RouterConfig
from canopy.navigation.display import DisplayEntry, project_stack
from canopy.navigation.events import NavigationEvent, NavigationObserver, NavigationType
from canopy.navigation.stack import LocationEntry, NavigationStack
from canopy.routing.match import RouteMatchList, RouterState
from canopy.routing.matcher import RouteMatcher
from canopy.routing.named import NamedRouteResolver
from canopy.routing.redirect import run_redirect_pipeline
from canopy.routing.tree import RouteNode, RouteTree

logger = logging.getLogger("canopy.navigation")

_Commit: TypeAlias = Callable[[RouteMatchList, LocationEntry], None]


class Navigator:
    """Declarative, tree-based navigator with go_router semantics.

    Usage::

        navigator = Navigator(
            [
                Route("/login", name="login"),
                ShellRoute(routes=[
                    Route("/", name="home"),
                    Route("/users", name="users", routes=[Route(":id", name="user")]),
                ]),
            ],
            redirect=lambda state, ctx: None if ctx.signed_in else "/login",
            context=session,
        )
        await navigator.start()
        await navigator.push_named("user", {"id": "42"})
        navigator.pop()

    Concurrency:
        Navigation coroutines are serialized with an ``anyio.Lock``, so
        only one resolution commits at a time. ``pop`` and ``can_pop``
        are synchronous and never await. The error hook runs outside the
        lock and may navigate again.
    """

    __slots__ = (
        "_lock",
        "_matcher",
        "_named",
        "_on_error",
        "_redirect",
        "_stack",
        "config",
        "context",
        "observer",
        "tree",
    )

    def __init__(
        self,
        routes: Sequence[RouteNode] | RouteTree,
        config: RouterConfig | None = None,
        *,
        redirect: RedirectHook | None = None,
        on_error: ErrorHook | None = None,
        observer: NavigationObserver | None = None,
        context: Any = None,
    ) -> None:
        self.config: RouterConfig = config or RouterConfig()
        self.tree = routes if isinstance(routes, RouteTree) else RouteTree(routes)
        self.context = context
        self.observer = observer
        self._matcher = RouteMatcher(self.tree)
        self._named = NamedRouteResolver(self.tree)
        self._redirect = redirect
        self._on_error = on_error
        self._stack = NavigationStack()
        self._lock: anyio.Lock | None = None

    # -- Read-only view ---------------------------------------------------

    @property
    def matcher(self) -> RouteMatcher:
        return self._matcher

    @property
    def resolver(self) -> NamedRouteResolver:
        return self._named

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def matches(self) -> tuple[RouteMatchList, ...]:
        return self._stack.matches

    @property
    def locations(self) -> tuple[LocationEntry, ...]:
        return self._stack.locations

    @property
    def current_match(self) -> RouteMatchList | None:
        return self._stack.top_match

    @property
    def current_state(self) -> RouterState:
        current = self._stack.top_match
        return current.to_state() if current is not None else RouterState()

    @property
    def current_location(self) -> str | None:
        entry = self._stack.top_location
        return entry.location if entry is not None else None

    def location_strings(self) -> list[str]:
        """The stack as plain locations, suitable for persisting."""
        return self._stack.location_strings()

    def display_entries(self) -> tuple[DisplayEntry, ...]:
        return project_stack(self.tree, self._stack.matches)

    def has_route(self, name: str) -> bool:
        return self._named.has_route(name)

    def can_pop(self) -> bool:
        return len(self._stack) > 1

    # -- Lifecycle --------------------------------------------------------

    async def initialize(self, location: str | None = None) -> None:
        """Navigate to *location* (or the configured initial location).

        Does nothing once the stack holds anything.
        """
        if len(self._stack):
            return
        await self.go(location or self.config.initial_location)

    async def start(self, saved_locations: Sequence[str] | None = None) -> None:
        """Bring an empty navigator to life.

        Restores *saved_locations* when there are any, falling back to the
        initial location when nothing was saved or nothing survived.
        """
        if len(self._stack):
            return
        if saved_locations:
            await self.restore(saved_locations)
        await self.initialize()

    # -- Navigation -------------------------------------------------------

    async def go(self, location: str, extra: Any = None) -> None:
        """Navigate declaratively.

        Within one shell, entries deeper than the current tab's root are
        discarded before the new entry is added. Across shells (or
        outside any shell) the whole stack is replaced.
        """
        await self._navigate(NavigationType.GO, location, extra, False, self._commit_go)

    async def push(self, location: str, extra: Any = None) -> None:
        """Push a new entry on top of the stack. Never prunes."""
        await self._navigate(NavigationType.PUSH, location, extra, True, self._stack.push)

    async def push_replacement(self, location: str, extra: Any = None) -> None:
        """Replace the top entry (or push onto an empty stack)."""
        await self._navigate(
            NavigationType.PUSH_REPLACEMENT, location, extra, False, self._stack.replace_top
        )

    def pop(self) -> bool:
        """Remove the top entry. The first entry is never popped."""
        if len(self._stack) <= 1:
            return False
        popped = self.current_location
        self._stack.pop()
        self._emit(NavigationType.POP, self.current_location or "/", popped)
        return True

    async def maybe_pop(self) -> bool:
        """Pop unless the leaf route's ``on_exit`` guard vetoes it."""
        current = self._stack.top_match
        if current is None or not self.can_pop():
            return False

        leaf = current.leaf
        if leaf is not None and leaf.route.on_exit is not None:
            allowed = await call_hook(leaf.route.on_exit, current.to_state(), self.context)
            if not allowed:
                logger.debug("Exit from %r vetoed by on_exit", current.uri)
                return False
            # The stack may have moved while the guard was awaited
            if self._stack.top_match is not current:
                return False
        return self.pop()

    async def go_named(
        self,
        name: str,
        path_parameters: Mapping[str, str] | None = None,
        query_parameters: Mapping[str, str] | None = None,
        extra: Any = None,
    ) -> None:
        location = self._named.resolve(name, path_parameters, query_parameters)
        await self.go(location, extra)

    async def push_named(
        self,
        name: str,
        path_parameters: Mapping[str, str] | None = None,
        query_parameters: Mapping[str, str] | None = None,
        extra: Any = None,
    ) -> None:
        location = self._named.resolve(name, path_parameters, query_parameters)
        await self.push(location, extra)

    async def restore(self, locations: Iterable[str]) -> None:
        """Rebuild the stack from saved locations.

        Each location is matched and redirected again; the ones that fail
        are skipped and the rest keep their relative order.
        """
        async with self._navigation_lock():
            restored: list[tuple[RouteMatchList, LocationEntry]] = []
            for location in locations:
                resolved = await self.resolve(location, transition_enabled=False)
                if resolved.is_error:
                    logger.debug("Skipping unrestorable location %r: %s", location, resolved.error)
                    continue
                restored.append((resolved, LocationEntry(location)))

            self._stack.replace_all(restored)
            self._emit(
                NavigationType.RESTORE,
                self.current_location or self.config.initial_location,
                None,
            )

    # -- Internals --------------------------------------------------------

    def _navigation_lock(self) -> anyio.Lock:
        if self._lock is None:
            self._lock = anyio.Lock()
        return self._lock

    async def _navigate(
        self,
        kind: NavigationType,
        location: str,
        extra: Any,
        transition_enabled: bool,
        commit: _Commit,
    ) -> None:
        async with self._navigation_lock():
            previous = self.current_location
            match_list = await self._resolve(location, extra, transition_enabled)

            if not match_list.is_error:
                # The location stack holds the requested location, not the redirect target
                entry = LocationEntry(location, extra)
                commit(match_list, entry)
                self._emit(kind, entry.location, previous, extra)
                return

            entry = LocationEntry(match_list.uri, extra)
            if self._on_error is None:
                # Failures become a normal destination the renderer can show
                self._stack.push(match_list, entry)
                self._emit(NavigationType.ERROR, entry.location, previous, extra)
                return

        await call_hook(self._on_error, match_list.to_state(), self)
        self._emit(NavigationType.ERROR, entry.location, previous, extra)

    async def resolve(
        self,
        location: str,
        extra: Any = None,
        transition_enabled: bool = True,
    ) -> RouteMatchList:
        """Match and redirect *location* without touching the stack."""
        initial = self._matcher.match(location, extra, transition_enabled=transition_enabled)
        return await run_redirect_pipeline(
            self._redirect,
            self._matcher,
            initial,
            max_redirects=self.config.max_redirects,
            context=self.context,
        )

    async def _resolve(
        self,
        location: str,
        extra: Any,
        transition_enabled: bool,
    ) -> RouteMatchList:
        resolved = await self.resolve(location, extra, transition_enabled)
        if not resolved.is_error and resolved.uri != location:
            self._emit(NavigationType.REDIRECT, resolved.uri, location, extra)
        return resolved

    def _commit_go(self, match_list: RouteMatchList, entry: LocationEntry) -> None:
        target = match_list.leaf
        current = self._stack.top_match
        current_leaf = current.leaf if current is not None else None
        if target is None or current_leaf is None:
            self._stack.reset(match_list, entry)
            return

        target_shell = self.tree.owner_shell(target.node_id)
        current_shell = self.tree.owner_shell(current_leaf.node_id)
        if target_shell is None or target_shell != current_shell:
            self._stack.reset(match_list, entry)
            return

        self._prune_tab(target_shell, current_leaf.node_id)
        self._stack.push(match_list, entry)

    def _prune_tab(self, shell_id: int, current_leaf_id: int) -> None:
        """Drop entries above the current tab's root entry.

        Walks down from the top and stops at the first entry that belongs
        to another tab or is the tab root itself. The bottom entry always
        stays.
        """
        tab_root = self.tree.tab_root(shell_id, current_leaf_id)
        if tab_root is None:
            return

        keep = len(self._stack)
        for match_list in reversed(self._stack.matches):
            if keep <= 1:
                break
            leaf = match_list.leaf
            if leaf is None or self.tree.tab_root(shell_id, leaf.node_id) != tab_root:
                break
            if self.tree.is_tab_root(shell_id, leaf.node_id):
                break
            keep -= 1
        self._stack.truncate(keep)

    def _emit(
        self,
        kind: NavigationType,
        location: str,
        previous: str | None,
        extra: Any = None,
    ) -> None:
        event = NavigationEvent(
            type=kind,
            location=location,
            previous_location=previous,
            stack_depth=len(self._stack),
            extra=extra,
        )
        if self.config.debug_log_diagnostics:
            logger.info("%s | stack: %s", event, self._stack.location_strings())
        else:
            logger.debug("%s", event)
        if self.observer is not None:
            self.observer(event)
