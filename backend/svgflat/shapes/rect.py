"""Rect → path conversion.

Straight edges become ``h``/``v`` runs; rounded corners become quarter ``a`` arcs.
Corner radii follow SVG: a missing ``rx``/``ry`` copies the other one, and each is
clamped to half the width / height.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from svgflat.engine.context import FlattenContext
from svgflat.engine.registry import Phase, adapter
from svgflat.path.commands import PathCommand
from svgflat.shapes.base import read_geometry, read_operations, resolve_radii
from svgflat.shapes.ellipse import replace_with_path
from svgflat.utils.math_helpers import parse_length

RECT_ATTRS = ("x", "y", "width", "height", "rx", "ry")


@dataclass
class RectGeometry:
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    rx: float = 0.0
    ry: float = 0.0

    @classmethod
    def from_element(cls, el: ET.Element) -> RectGeometry:
        width = parse_length(el.get("width"), "width")
        height = parse_length(el.get("height"), "height")
        rx, ry = resolve_radii(el)
        return cls(
            x=parse_length(el.get("x"), "x"),
            y=parse_length(el.get("y"), "y"),
            width=width,
            height=height,
            rx=min(rx, width / 2),
            ry=min(ry, height / 2),
        )

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def to_commands(self) -> list[PathCommand]:
        x, y, w, h = self.x, self.y, self.width, self.height
        rx, ry = self.rx, self.ry
        if rx == 0 or ry == 0:
            return [
                PathCommand("M", [x, y]),
                PathCommand("h", [w]),
                PathCommand("v", [h]),
                PathCommand("h", [-w]),
                PathCommand("z"),
            ]
        inner_w = w - 2 * rx
        inner_h = h - 2 * ry
        return [
            PathCommand("M", [x + rx, y]),
            PathCommand("h", [inner_w]),
            PathCommand("a", [rx, ry, 0, 0, 1, rx, ry]),
            PathCommand("v", [inner_h]),
            PathCommand("a", [rx, ry, 0, 0, 1, -rx, ry]),
            PathCommand("h", [-inner_w]),
            PathCommand("a", [rx, ry, 0, 0, 1, -rx, -ry]),
            PathCommand("v", [-inner_h]),
            PathCommand("a", [rx, ry, 0, 0, 1, rx, -ry]),
            PathCommand("z"),
        ]


@adapter(tags={"rect"}, phase=Phase.CONVERT, requires=None, description="Convert rect to path")
def rect_to_path(ctx: FlattenContext, el: ET.Element) -> None:
    # Validate the transform before the element is rewritten.
    read_operations(el)
    geom = read_geometry(ctx, el, RectGeometry.from_element)
    if geom is None:
        return
    if geom.is_empty:
        ctx.warn(el, "rect-empty", "Rect with zero width or height does not render")
        el.attrib.pop("transform", None)
        return
    replace_with_path(el, geom.to_commands(), RECT_ATTRS, ctx.config.precision)
    ctx.report.converted += 1
