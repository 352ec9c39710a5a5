"""Path pattern parsing.

A pattern is a ``/``-separated list of segments. Each segment is one of:

- a literal (``users``), compared case-insensitively
- a capture (``:id``), binding one segment to ``id``
- a wildcard (``*``), matching one segment without binding

The empty pattern (``/`` or ``""``) is the root pattern.
"""

import re
from dataclasses import dataclass

from canopy.errors import ConfigurationError

_PARAM_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")


@dataclass(frozen=True, slots=True)
class PathSegment:
    """A parsed segment of a route pattern.

    Literal:   ``users``  (is_param=False, is_wildcard=False)
    Capture:   ``:id``    (is_param=True, param_name="id")
    Wildcard:  ``*``      (is_wildcard=True)
    """

    value: str
    is_param: bool = False
    is_wildcard: bool = False
    param_name: str | None = None

    def accepts(self, part: str) -> bool:
        """Whether a raw input segment satisfies this pattern segment."""
        if self.is_param or self.is_wildcard:
            return True
        return self.value.casefold() == part.casefold()


def split_path(path: str) -> list[str]:
    """Split a path into its non-empty segments."""
    return [part for part in path.split("/") if part]


def parse_pattern(path: str) -> tuple[PathSegment, ...]:
    """Parse a route pattern string into segments.

    Examples::

        "/"            -> ()
        "/users"       -> (PathSegment("users"),)
        "users/:id"    -> (PathSegment("users"), PathSegment(":id", is_param=True, param_name="id"))
        "files/*"      -> (PathSegment("files"), PathSegment("*", is_wildcard=True))

    Raises ``ConfigurationError`` for malformed segments.
    """
    segments: list[PathSegment] = []
    for part in split_path(path):
        if part == "*":
            segments.append(PathSegment(value=part, is_wildcard=True))
        elif part.startswith(":"):
            name = part[1:]
            if not _PARAM_NAME.match(name):
                msg = f"Invalid path parameter {part!r} in pattern {path!r}"
                raise ConfigurationError(msg)
            segments.append(PathSegment(value=part, is_param=True, param_name=name))
        elif part.startswith("{") and part.endswith("}"):
            msg = (
                f"Route pattern {path!r} uses {{param}} syntax. "
                f"Canopy expects :param (e.g. /users/:id)."
            )
            raise ConfigurationError(msg)
        else:
            segments.append(PathSegment(value=part))
    return tuple(segments)


def param_names(path: str) -> list[str]:
    """Return the capture names of *path* in declaration order."""
    return [seg.param_name for seg in parse_pattern(path) if seg.param_name]


def concat_paths(parent: str, child: str) -> str:
    """Append *child* below *parent*, ignoring a leading ``/`` on the child."""
    joined = parent.rstrip("/") + "/" + child.lstrip("/")
    if len(joined) > 1:
        return joined.rstrip("/")
    return joined


def join_paths(parent: str, child: str) -> str:
    """Resolve *child* against *parent* the way named routes are built.

    A child starting with ``/`` is absolute and replaces the inherited
    prefix; anything else is appended.
    """
    if child.startswith("/"):
        return concat_paths("", child)
    return concat_paths(parent, child)
