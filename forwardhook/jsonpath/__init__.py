"""
Path-addressed access into JSON documents.

A JsonPath is a sequence of Key / Index segments. `read` looks a value up,
`write` places one into an output document, building containers on the way.
"""

from .path import JsonPath, Key, Index, Segment, parse_path
from .accessor import MISSING, read
from .builder import write

__all__ = [
    "JsonPath",
    "Key",
    "Index",
    "Segment",
    "parse_path",
    "MISSING",
    "read",
    "write",
]
