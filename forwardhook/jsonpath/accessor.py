# forwardhook/jsonpath/accessor.py
"""Read-only traversal of a JSON document."""

from typing import Any

from .path import Index, JsonPath, Key


class _Missing:
    """Sentinel for a path with no value; distinct from JSON null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def read(document: Any, path: JsonPath) -> Any:
    """
    Look up the value at `path` in `document`.

    An absent member, an out of range index and a container of the wrong
    kind all give MISSING. Past a null every lookup is a miss. The empty
    path returns the document itself.

    Args:
        document: Parsed JSON value (dict, list, str, int, float, bool or None)
        path: Location to read

    Returns:
        The value found, or MISSING
    """
    current = document
    for segment in path:
        if isinstance(segment, Key):
            if not isinstance(current, dict) or segment.name not in current:
                return MISSING
            current = current[segment.name]
        elif isinstance(segment, Index):
            if not isinstance(current, list) or segment.position >= len(current):
                return MISSING
            current = current[segment.position]
        else:
            raise TypeError(f"Unknown path segment: {segment!r}")
    return current
