"""
Path resolution for parameter locations.

A location is a dot-separated string where a segment may carry a bracketed
index, e.g. ``"body.items[2].id"``. Resolution walks the source object one
component at a time and stops as soon as a step comes back empty.
"""

import re
from collections.abc import Mapping
from typing import Any, List

_INDEXED_SEGMENT = re.compile(r".*\[[0-9]*\]")
_DIGITS = re.compile(r"[0-9]+")


def split_path(path: str) -> List[str]:
    """
    Split a location string into the keys to walk.

    Example:
        >>> split_path("a.b[1].c")
        ['a', 'b', '1', 'c']
    """
    components: List[str] = []
    for segment in path.split("."):
        if _INDEXED_SEGMENT.fullmatch(segment):
            components.extend(
                part[:-1] if "]" in part else part for part in segment.split("[")
            )
        else:
            components.append(segment)
    return components


def resolve_path(source: Any, path: str) -> Any:
    """
    Get the value found at ``path`` inside ``source``.

    Returns None when any intermediate step is missing or None.

    Example:
        >>> resolve_path({"a": {"b": [{"c": 1}, {"c": 2}]}}, "a.b[1].c")
        2
    """
    current = source
    for key in split_path(path):
        if current is None:
            return None
        current = _step(current, key)
    return current


def _step(container: Any, key: str) -> Any:
    if isinstance(container, Mapping):
        if key in container:
            return container[key]
        if _DIGITS.fullmatch(key):
            return container.get(int(key))
        return None

    if isinstance(container, (list, tuple)):
        if _DIGITS.fullmatch(key):
            index = int(key)
            if index < len(container):
                return container[index]
        return None

    # Scalars are leaves
    if isinstance(container, (str, bytes, int, float, bool)):
        return None

    # Request-like objects expose their parts as attributes
    if not key or key.startswith("_"):
        return None
    return getattr(container, key, None)
