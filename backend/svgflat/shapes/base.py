"""Helpers shared by the shape adapters: attribute reading and writing."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Callable, TypeVar

from svgflat.errors import ParseError
from svgflat.svg.query import local_name
from svgflat.transform.affine import Operation, parse_operations
from svgflat.utils.math_helpers import format_number, parse_length

if TYPE_CHECKING:
    from svgflat.engine.context import FlattenContext

T = TypeVar("T")

GROUP_TAGS = frozenset({"g", "mask"})


def read_operations(el: ET.Element) -> list[Operation]:
    return parse_operations(el.get("transform", ""))


def read_radius(el: ET.Element, name: str) -> float | None:
    """A corner / ellipse radius; ``auto``, negative or missing come back as None."""
    raw = el.get(name)
    if raw is None or raw.strip() == "auto":
        return None
    value = parse_length(raw, name)
    return value if value >= 0 else None


def resolve_radii(el: ET.Element) -> tuple[float, float]:
    """rx/ry pair: a missing one copies the other, both missing → 0."""
    rx = read_radius(el, "rx")
    ry = read_radius(el, "ry")
    if rx is None and ry is None:
        return 0.0, 0.0
    if rx is None:
        rx = ry
    if ry is None:
        ry = rx
    return rx, ry


def write_coordinate(el: ET.Element, name: str, value: float, precision: int | None) -> None:
    """Write ``value``; an exact 0 removes the attribute (its SVG default)."""
    text = format_number(value, precision)
    if text == "0":
        el.attrib.pop(name, None)
    else:
        el.set(name, text)


def drop_attributes(el: ET.Element, names: tuple[str, ...]) -> None:
    for name in names:
        el.attrib.pop(name, None)


def read_geometry(
    ctx: FlattenContext, el: ET.Element, reader: Callable[[ET.Element], T]
) -> T | None:
    """Read shape geometry for conversion.

    Lengths outside user units (``100%``, ``2em``) cannot be converted. An element
    without a transform renders fine as it is, so it is reported and left alone; one
    that needs flattening raises.
    """
    try:
        return reader(el)
    except ParseError as e:
        if "transform" in el.attrib:
            raise
        ctx.warn(el, f"{local_name(el)}-units", f"Left unconverted: {e}")
        return None
