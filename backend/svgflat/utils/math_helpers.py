"""Number parsing and formatting shared by the transform and path code."""

from __future__ import annotations

import math
import re

from svgflat.errors import ParseError

# SVG number: optional sign, digits with optional fraction (or fraction only), optional exponent.
NUMBER = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"

_LENGTH_RE = re.compile(rf"^\s*({NUMBER})\s*(px)?\s*$")


def format_number(value: float, precision: int | None = None) -> str:
    """Render a coordinate: integers without a fraction, otherwise shortest repr."""
    if precision is not None:
        value = round(value, precision)
    if not math.isfinite(value):
        raise ValueError(f"Non-finite coordinate: {value}")
    if value == int(value) and abs(value) < 1e15:
        return str(int(value))
    return repr(float(value))


def parse_length(raw: str | None, name: str, default: float | None = 0.0) -> float | None:
    """Parse a user-unit length attribute (``10``, ``10px``). Missing → default."""
    if raw is None:
        return default
    m = _LENGTH_RE.match(raw)
    if not m:
        raise ParseError(f"Invalid {name} value: {raw!r}", raw)
    return float(m.group(1))

