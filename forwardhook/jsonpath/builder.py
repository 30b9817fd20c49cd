# forwardhook/jsonpath/builder.py
"""
Incremental construction of an output document.

Writes from several field mappings land in the same accumulator and merge:
`["a", "b"]` and `["a", "c"]` share one object at `a`, `["a", 0]` and
`["a", 1]` share one array. A prefix holding a value of the wrong kind is a
StructuralConflict; nothing already written is coerced.
"""

import copy
from typing import Any, Dict, List, Union

from ..errors import StructuralConflict
from .path import Index, JsonPath, Key, Segment

Container = Union[Dict[str, Any], List[Any]]


class _Array(list):
    """Output array that remembers which of its null slots are padding."""

    def __init__(self, *args):
        super().__init__(*args)
        self.padding = set()


def _empty_for(segment: Segment) -> Container:
    return {} if isinstance(segment, Key) else _Array()


def _kind(value: Any) -> str:
    if isinstance(value, dict):
        return "object"
    if isinstance(value, list):
        return "array"
    if value is None:
        return "null"
    return type(value).__name__


def _pad(array: List[Any], position: int) -> None:
    start = len(array)
    if start <= position:
        array.extend([None] * (position + 1 - start))
        if isinstance(array, _Array):
            array.padding.update(range(start, position + 1))


def _fill(array: List[Any], position: int, value: Any) -> None:
    array[position] = value
    if isinstance(array, _Array):
        array.padding.discard(position)


def _is_padding(array: List[Any], position: int) -> bool:
    return isinstance(array, _Array) and position in array.padding


def _check_container(container: Any, segment: Segment, path: JsonPath, depth: int) -> None:
    wanted = dict if isinstance(segment, Key) else list
    if not isinstance(container, wanted):
        expected = "object" if wanted is dict else "array"
        raise StructuralConflict(
            path,
            at=path[:depth],
            reason=f"expected {expected}, found {_kind(container)}",
        )


def _descend(container: Container, segment: Segment, following: Segment) -> Any:
    """Return the child at `segment`, creating it for `following` if vacant."""
    if isinstance(segment, Key):
        if segment.name not in container:
            container[segment.name] = _empty_for(following)
        return container[segment.name]

    _pad(container, segment.position)
    # Only nulls the builder padded in are vacant; a written null is a value
    if _is_padding(container, segment.position):
        _fill(container, segment.position, _empty_for(following))
    return container[segment.position]


def write(accumulator: Dict[str, Any], path: JsonPath, value: Any) -> Dict[str, Any]:
    """
    Place `value` at `path` inside `accumulator`.

    Intermediate objects and arrays are created on demand; arrays are
    padded with null up to the written index. The leaf is overwritten
    (last write wins). `value` is deep-copied so the output never shares
    structure with the input document.

    Args:
        accumulator: Output document being built, mutated in place
        path: Destination; must not be empty
        value: JSON value to place

    Returns:
        The accumulator

    Raises:
        StructuralConflict: If `path` is empty or crosses a value of the wrong kind
    """
    if path.is_root():
        raise StructuralConflict(path, reason="cannot replace the document root")

    segments = path.segments
    current: Any = accumulator
    for depth, segment in enumerate(segments[:-1]):
        _check_container(current, segment, path, depth)
        current = _descend(current, segment, segments[depth + 1])

    leaf = segments[-1]
    _check_container(current, leaf, path, len(segments) - 1)
    if isinstance(leaf, Key):
        current[leaf.name] = copy.deepcopy(value)
    else:
        _pad(current, leaf.position)
        _fill(current, leaf.position, copy.deepcopy(value))
    return accumulator
