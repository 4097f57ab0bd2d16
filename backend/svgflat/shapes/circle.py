"""Circle adapter — bakes the transform into ``cx``/``cy`` (and ``r`` under scale).

Coordinates that end up exactly 0 are written by omission, 0 being the SVG default.
A non-uniform scale cannot keep a circle circular, so such circles are redrawn as an
arc path first and flattened as a path.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from svgflat.engine.context import FlattenContext
from svgflat.engine.registry import Phase, adapter
from svgflat.shapes.base import read_operations, write_coordinate
from svgflat.shapes.ellipse import EllipseGeometry, replace_with_path
from svgflat.shapes.path import flatten_path_data
from svgflat.transform.affine import Rotator, apply_operations, has_uniform_scale
from svgflat.utils.math_helpers import format_number, parse_length


@dataclass
class CircleGeometry:
    cx: float = 0.0
    cy: float = 0.0
    r: float | None = None

    @classmethod
    def from_element(cls, el: ET.Element) -> CircleGeometry:
        return cls(
            cx=parse_length(el.get("cx"), "cx"),
            cy=parse_length(el.get("cy"), "cy"),
            r=parse_length(el.get("r"), "r", default=None),
        )

    def translate(self, dx: float, dy: float) -> None:
        self.cx += dx
        self.cy += dy

    def rotate(self, rotator: Rotator, angle_degrees: float) -> None:
        self.cx, self.cy = rotator(self.cx, self.cy)

    def scale(self, sx: float, sy: float) -> None:
        self.cx *= sx
        self.cy *= sy
        if self.r is not None:
            self.r *= abs(sx)

    def write(self, el: ET.Element, precision: int | None) -> None:
        write_coordinate(el, "cx", self.cx, precision)
        write_coordinate(el, "cy", self.cy, precision)
        if self.r is not None:
            el.set("r", format_number(self.r, precision))


@adapter(tags={"circle"}, phase=Phase.FLATTEN, description="Bake transform into cx/cy")
def flatten_circle(ctx: FlattenContext, el: ET.Element) -> None:
    operations = read_operations(el)
    geom = CircleGeometry.from_element(el)
    if not has_uniform_scale(operations):
        r = geom.r or 0.0
        ellipse = EllipseGeometry(cx=geom.cx, cy=geom.cy, rx=r, ry=r)
        replace_with_path(el, ellipse.to_commands(), ("cx", "cy", "r"), ctx.config.precision)
        ctx.report.converted += 1
        flatten_path_data(ctx, el, operations)
        return
    apply_operations(geom, operations)
    geom.write(el, ctx.config.precision)
    el.attrib.pop("transform", None)
    ctx.report.flattened += 1
