"""Tests for canopy.navigation.events — events and observers."""

import logging

import pytest

from canopy.navigation.events import (
    CompositeNavigationObserver,
    LoggingNavigationObserver,
    NavigationEvent,
    NavigationType,
)

from conftest import RecordingObserver


class TestNavigationEvent:
    def test_str_with_previous(self) -> None:
        event = NavigationEvent(NavigationType.PUSH, "/users", "/", stack_depth=2)
        assert str(event) == "[PUSH] /users (from: /) [depth=2]"

    def test_str_without_previous(self) -> None:
        event = NavigationEvent(NavigationType.GO, "/", stack_depth=1)
        assert str(event) == "[GO] / [depth=1]"

    def test_timestamp_defaults_to_now(self) -> None:
        event = NavigationEvent(NavigationType.POP, "/")
        assert event.timestamp > 0

    def test_frozen(self) -> None:
        event = NavigationEvent(NavigationType.GO, "/")
        with pytest.raises(AttributeError):
            event.location = "/x"  # type: ignore[misc]

    def test_type_values(self) -> None:
        assert NavigationType.PUSH_REPLACEMENT.value == "push_replacement"
        assert len(NavigationType) == 7


class TestObservers:
    def test_logging_observer(self, caplog: pytest.LogCaptureFixture) -> None:
        observer = LoggingNavigationObserver(name="canopy.test", level=logging.WARNING)
        with caplog.at_level(logging.WARNING, logger="canopy.test"):
            observer(NavigationEvent(NavigationType.RESTORE, "/a", stack_depth=3))
        assert caplog.records[0].getMessage() == "[RESTORE] /a [depth=3]"
        assert caplog.records[0].levelno == logging.WARNING

    def test_composite_calls_in_order(self) -> None:
        calls: list[str] = []
        first, second = RecordingObserver(), RecordingObserver()
        composite = CompositeNavigationObserver(
            [first, lambda event: calls.append(event.location), second]
        )
        event = NavigationEvent(NavigationType.GO, "/home")
        composite(event)
        assert first.events == [event]
        assert second.events == [event]
        assert calls == ["/home"]

    def test_empty_composite(self) -> None:
        CompositeNavigationObserver([])(NavigationEvent(NavigationType.GO, "/"))
