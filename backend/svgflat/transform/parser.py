"""Transform attribute parser.

``transform="translate(10 5) rotate(45, 12, 12)"`` →
``[TransformFunction("translate", "10 5"), TransformFunction("rotate", "45, 12, 12")]``

Function names are only split off here; they are checked against the supported set
when the list is interpreted (see ``svgflat.transform.affine``).
"""

from __future__ import annotations

import re
from typing import NamedTuple

from svgflat.errors import ParseError
from svgflat.utils.math_helpers import NUMBER

# One "<name>(<args>)" unit plus the separator that may follow it.
_FUNCTION_RE = re.compile(r"\s*([A-Za-z]+)\s*\(([^)]*)\)\s*,?")

_SEP = r"(?:\s*,\s*|\s+|(?=[+-]))"

# Per-function argument grammars: required values first, optional group last.
_ARG_PATTERNS: dict[str, re.Pattern[str]] = {
    "translate": re.compile(rf"^\s*({NUMBER})(?:{_SEP}({NUMBER}))?\s*$"),
    "rotate": re.compile(rf"^\s*({NUMBER})(?:{_SEP}({NUMBER}){_SEP}({NUMBER}))?\s*$"),
    "scale": re.compile(rf"^\s*({NUMBER})(?:{_SEP}({NUMBER}))?\s*$"),
}

SUPPORTED_FUNCTIONS = frozenset(_ARG_PATTERNS)


class TransformFunction(NamedTuple):
    name: str
    raw_args: str


def parse_transform_list(value: str) -> list[TransformFunction]:
    """Split a transform attribute into its functions, in document order."""
    functions: list[TransformFunction] = []
    pos = 0
    while pos < len(value):
        m = _FUNCTION_RE.match(value, pos)
        if m is None:
            if value[pos:].strip():
                raise ParseError(f"Invalid transform list: {value!r}", value)
            break
        functions.append(TransformFunction(m.group(1), m.group(2)))
        pos = m.end()
    return functions


def parse_arguments(function: TransformFunction) -> tuple[float | None, ...]:
    """Parse the numeric arguments of a supported function.

    Optional arguments that are absent come back as ``None``; defaults are applied
    by the caller. Unknown names return an empty tuple.
    """
    pattern = _ARG_PATTERNS.get(function.name)
    if pattern is None:
        return ()
    m = pattern.match(function.raw_args)
    if m is None:
        raise ParseError(
            f"Invalid {function.name} arguments: {function.raw_args}", function.raw_args
        )
    return tuple(float(g) if g is not None else None for g in m.groups())
