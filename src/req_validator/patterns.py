"""
Regex constraints for parameter values.

Supports two notations in a schema's ``regex`` key:
- a bare pattern: ``"^[0-9]{4}$"``
- a slash-delimited pattern with trailing flags: ``"/^[a-z]+$/i"``

Values are stringified before matching, so numbers, booleans and JSON-like
structures can all be constrained with the same syntax.
"""

import json
import math
import re
from typing import Any, Tuple

from .errors import SchemaError

_SLASH_FORM = re.compile(r"/.+/.*")

# Flag letters accepted after the closing slash
REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
    "g": 0,
    "y": 0,
}


def split_regex(regex: str) -> Tuple[str, str]:
    """
    Split a regex string into (pattern, flags).

    The last slash-separated piece is taken as the flags and the rest is
    rejoined, so ``"/a/b/i"`` gives pattern ``"a/b"`` with flags ``"i"``.

    Example:
        >>> split_regex("/^[a-z]+$/i")
        ('^[a-z]+$', 'i')
        >>> split_regex("^[a-z]+$")
        ('^[a-z]+$', '')
    """
    if _SLASH_FORM.fullmatch(regex):
        parts = regex.split("/")[1:]
        flags = parts.pop()
        return "/".join(parts), flags
    return regex, ""


class RegexConstraint:
    """
    A compiled regex constraint.

    Attributes:
        source: The regex string as written in the schema
        pattern: Compiled pattern
        sticky: Whether the match is anchored at the start (``y`` flag)
    """

    def __init__(self, source: str):
        self.source = source
        pattern, flags = split_regex(source)

        compile_flags = 0
        for letter in flags:
            if letter not in REGEX_FLAGS:
                raise SchemaError(f"Invalid regex flag '{letter}' in {source!r}")
            if flags.count(letter) > 1:
                raise SchemaError(f"Duplicated regex flag '{letter}' in {source!r}")
            compile_flags |= REGEX_FLAGS[letter]
        self.sticky = "y" in flags

        try:
            self.pattern = re.compile(pattern, compile_flags)
        except re.error as e:
            raise SchemaError(f"Invalid regex pattern {source!r}: {e}") from e

    def test(self, value: Any) -> bool:
        """Return True if the stringified value matches."""
        text = stringify(value)
        if self.sticky:
            return self.pattern.match(text) is not None
        return self.pattern.search(text) is not None

    def __repr__(self) -> str:
        return f"RegexConstraint({self.source!r})"


def stringify(value: Any) -> str:
    """
    Convert a value to the text a regex is tested against.

    Structures and None become compact JSON, numbers their decimal form.

    Example:
        >>> stringify({"a": 1})
        '{"a":1}'
        >>> stringify(42.0)
        '42'
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return _number_to_string(value)
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def _number_to_string(value: Any) -> str:
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)
