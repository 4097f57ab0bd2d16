"""Ellipse → path conversion: two half-ellipse arcs forming a closed loop."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from svgflat.engine.context import FlattenContext
from svgflat.engine.registry import Phase, adapter
from svgflat.path.commands import PathCommand, serialize
from svgflat.shapes.base import drop_attributes, read_geometry, read_operations, resolve_radii
from svgflat.svg.query import rename
from svgflat.utils.math_helpers import parse_length

ELLIPSE_ATTRS = ("cx", "cy", "rx", "ry")


@dataclass
class EllipseGeometry:
    cx: float = 0.0
    cy: float = 0.0
    rx: float = 0.0
    ry: float = 0.0

    @classmethod
    def from_element(cls, el: ET.Element) -> EllipseGeometry:
        rx, ry = resolve_radii(el)
        return cls(
            cx=parse_length(el.get("cx"), "cx"),
            cy=parse_length(el.get("cy"), "cy"),
            rx=rx,
            ry=ry,
        )

    @property
    def is_empty(self) -> bool:
        return self.rx <= 0 or self.ry <= 0

    def to_commands(self) -> list[PathCommand]:
        rx, ry = self.rx, self.ry
        return [
            PathCommand("M", [self.cx - rx, self.cy]),
            PathCommand("a", [rx, ry, 0, 1, 1, 2 * rx, 0]),
            PathCommand("a", [rx, ry, 0, 1, 1, -2 * rx, 0]),
            PathCommand("z"),
        ]


def replace_with_path(
    el: ET.Element, commands: list[PathCommand], attrs: tuple[str, ...], precision: int | None
) -> None:
    """Turn ``el`` into a ``<path>`` drawing ``commands``; other attributes are kept."""
    drop_attributes(el, attrs)
    el.set("d", serialize(commands, precision))
    rename(el, "path")


@adapter(
    tags={"ellipse"},
    phase=Phase.CONVERT,
    requires=None,
    description="Convert ellipse to arc path",
)
def ellipse_to_path(ctx: FlattenContext, el: ET.Element) -> None:
    read_operations(el)
    geom = read_geometry(ctx, el, EllipseGeometry.from_element)
    if geom is None:
        return
    if geom.is_empty:
        ctx.warn(el, "ellipse-empty", "Ellipse with a zero radius does not render")
        el.attrib.pop("transform", None)
        return
    replace_with_path(el, geom.to_commands(), ELLIPSE_ATTRS, ctx.config.precision)
    ctx.report.converted += 1
