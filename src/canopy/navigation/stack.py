"""Navigation stack — the match stack and the location stack, kept aligned.

Both sequences only change through the methods below, each of which
updates both sides before returning. Nothing here awaits, so a commit is
never observable half-done from another task.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from canopy.routing.match import RouteMatchList


@dataclass(frozen=True, slots=True)
class LocationEntry:
    """A raw location as the caller asked for it, plus its payload."""

    location: str
    extra: Any = None


class NavigationStack:
    """Index-aligned match and location stacks."""

    __slots__ = ("_locations", "_matches")

    def __init__(self) -> None:
        self._matches: list[RouteMatchList] = []
        self._locations: list[LocationEntry] = []

    def __len__(self) -> int:
        return len(self._matches)

    def __repr__(self) -> str:
        return f"NavigationStack({[entry.location for entry in self._locations]!r})"

    @property
    def matches(self) -> tuple[RouteMatchList, ...]:
        return tuple(self._matches)

    @property
    def locations(self) -> tuple[LocationEntry, ...]:
        return tuple(self._locations)

    @property
    def top_match(self) -> RouteMatchList | None:
        return self._matches[-1] if self._matches else None

    @property
    def top_location(self) -> LocationEntry | None:
        return self._locations[-1] if self._locations else None

    def push(self, match_list: RouteMatchList, entry: LocationEntry) -> None:
        self._matches.append(match_list)
        self._locations.append(entry)

    def pop(self) -> tuple[RouteMatchList, LocationEntry]:
        """Remove and return the top entry. Raises ``IndexError`` when empty."""
        if not self._matches:
            msg = "pop from an empty navigation stack"
            raise IndexError(msg)
        return self._matches.pop(), self._locations.pop()

    def replace_top(self, match_list: RouteMatchList, entry: LocationEntry) -> None:
        """Replace the top entry, or push when the stack is empty."""
        if self._matches:
            self._matches[-1] = match_list
            self._locations[-1] = entry
        else:
            self.push(match_list, entry)

    def reset(self, match_list: RouteMatchList, entry: LocationEntry) -> None:
        """Drop everything and leave exactly one entry."""
        self._matches[:] = [match_list]
        self._locations[:] = [entry]

    def replace_all(self, entries: Iterable[tuple[RouteMatchList, LocationEntry]]) -> None:
        """Swap in a whole new stack in one step."""
        pairs = list(entries)
        self._matches[:] = [match_list for match_list, _ in pairs]
        self._locations[:] = [entry for _, entry in pairs]

    def truncate(self, depth: int) -> None:
        """Keep only the bottom *depth* entries."""
        del self._matches[depth:]
        del self._locations[depth:]

    def location_strings(self) -> list[str]:
        return [entry.location for entry in self._locations]
