"""Navigation events and observers.

Every mutating navigator operation emits a ``NavigationEvent``. An
observer is any callable matching::

    def observe(event: NavigationEvent) -> None: ...

No base class required. Observers are a side channel: their return
value is ignored and they never influence navigation.
"""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol


class NavigationType(Enum):
    """Kind of navigation that produced an event."""

    GO = "go"
    PUSH = "push"
    PUSH_REPLACEMENT = "push_replacement"
    POP = "pop"
    RESTORE = "restore"
    REDIRECT = "redirect"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class NavigationEvent:
    """A navigation that happened, with the resulting stack depth."""

    type: NavigationType
    location: str
    previous_location: str | None = None
    stack_depth: int = 0
    extra: Any = None
    timestamp: float = field(default_factory=time.time)

    def __str__(self) -> str:
        text = f"[{self.type.name}] {self.location}"
        if self.previous_location is not None:
            text += f" (from: {self.previous_location})"
        return f"{text} [depth={self.stack_depth}]"


class NavigationObserver(Protocol):
    """Protocol for navigation observers.

    Accepts both functions and callable objects::

        # Function observer
        def track_screen(event: NavigationEvent) -> None:
            analytics.screen(event.location)

        # Class observer
        class Recorder:
            def __call__(self, event: NavigationEvent) -> None:
                self.events.append(event)
    """

    def __call__(self, event: NavigationEvent) -> None: ...


class LoggingNavigationObserver:
    """Forward every event to a standard library logger."""

    __slots__ = ("level", "logger")

    def __init__(self, name: str = "canopy.navigation", level: int = logging.INFO) -> None:
        self.logger = logging.getLogger(name)
        self.level = level

    def __call__(self, event: NavigationEvent) -> None:
        self.logger.log(self.level, "%s", event)


class CompositeNavigationObserver:
    """Fan one event out to several observers, in order."""

    __slots__ = ("observers",)

    def __init__(self, observers: Iterable[NavigationObserver]) -> None:
        self.observers: tuple[NavigationObserver, ...] = tuple(observers)

    def __call__(self, event: NavigationEvent) -> None:
        for observer in self.observers:
            observer(event)
