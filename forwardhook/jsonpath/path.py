# forwardhook/jsonpath/path.py
"""
JSON paths.

In configuration a path is a JSON array whose elements are object member
names (strings) or array indexes (non-negative integers):

    ["todos", 0, "description"]   ->   todos[0].description
"""

import re
from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Tuple, Union

_BARE_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class Key:
    """Object member segment."""
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Index:
    """Array element segment."""
    position: int

    def __post_init__(self):
        if self.position < 0:
            raise ValueError(f"array index must be non-negative, got {self.position}")

    def __str__(self) -> str:
        return f"[{self.position}]"


Segment = Union[Key, Index]


class JsonPath:
    """
    Immutable sequence of segments locating a value in a JSON document.

    The empty path refers to the document root.
    """

    __slots__ = ("_segments",)

    def __init__(self, segments: Iterable[Segment] = ()):
        self._segments: Tuple[Segment, ...] = tuple(segments)

    @property
    def segments(self) -> Tuple[Segment, ...]:
        return self._segments

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __len__(self) -> int:
        return len(self._segments)

    def __getitem__(self, item):
        if isinstance(item, slice):
            return JsonPath(self._segments[item])
        return self._segments[item]

    def __eq__(self, other) -> bool:
        if isinstance(other, JsonPath):
            return self._segments == other._segments
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._segments)

    def is_root(self) -> bool:
        return not self._segments

    def to_list(self) -> List[Union[str, int]]:
        """Raw configuration form of the path."""
        return [s.name if isinstance(s, Key) else s.position for s in self._segments]

    def __str__(self) -> str:
        if not self._segments:
            return "$"
        parts = []
        for segment in self._segments:
            if isinstance(segment, Index):
                parts.append(str(segment))
            elif _BARE_KEY.match(segment.name):
                parts.append(("." if parts else "") + segment.name)
            else:
                parts.append(f"[{segment.name!r}]")
        return "".join(parts)

    def __repr__(self) -> str:
        return f"JsonPath({self.to_list()!r})"


def parse_path(raw: Any) -> JsonPath:
    """
    Build a JsonPath from its raw configuration form.

    Args:
        raw: A list of strings and non-negative integers, or an existing JsonPath

    Returns:
        The parsed path

    Raises:
        ValueError: If `raw` is not a list or holds any other element type
    """
    if isinstance(raw, JsonPath):
        return raw
    if not isinstance(raw, (list, tuple)):
        raise ValueError(f"path must be an array of keys and indexes, got {type(raw).__name__}")

    segments: List[Segment] = []
    for position, element in enumerate(raw):
        # bool is an int subclass; true/false are not indexes
        if isinstance(element, bool):
            raise ValueError(f"path element {position} must be a string or index, got boolean")
        if isinstance(element, str):
            segments.append(Key(element))
        elif isinstance(element, int):
            if element < 0:
                raise ValueError(f"path element {position} must be a non-negative index, got {element}")
            segments.append(Index(element))
        else:
            raise ValueError(
                f"path element {position} must be a string or index, got {type(element).__name__}"
            )
    return JsonPath(segments)
