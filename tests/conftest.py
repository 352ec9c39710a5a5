"""Shared pytest configuration for canopy tests.

Provides a fresh copy of the reference route tree (a login page outside a
bottom-nav shell with home, users, and settings tabs) and an observer
that records navigation events.
"""

import pytest

from canopy.navigation.events import NavigationEvent
from canopy.routing.tree import Route, RouteNode, ShellRoute


def build_routes() -> list[RouteNode]:
    return [
        Route("/login", name="login"),
        ShellRoute(
            routes=[
                Route("/", name="home"),
                Route(
                    "/users",
                    name="users",
                    routes=[
                        Route(
                            ":id",
                            name="user-profile",
                            routes=[Route("edit", name="user-edit")],
                        ),
                    ],
                ),
                Route(
                    "/settings",
                    name="settings",
                    routes=[Route("notifications", name="notifications")],
                ),
            ],
        ),
    ]


class RecordingObserver:
    def __init__(self) -> None:
        self.events: list[NavigationEvent] = []

    def __call__(self, event: NavigationEvent) -> None:
        self.events.append(event)

    @property
    def kinds(self) -> list[str]:
        return [event.type.name for event in self.events]


@pytest.fixture
def routes() -> list[RouteNode]:
    return build_routes()


@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()
