"""Group (``g`` / ``mask``) transform propagation.

A group's transform is pushed down onto every child, in front of the child's own
transform, so only leaf shapes are ever flattened.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET

from svgflat.engine.context import FlattenContext
from svgflat.engine.registry import Phase, adapter
from svgflat.shapes.base import GROUP_TAGS, read_operations
from svgflat.svg.query import local_name


def _push_down(ctx: FlattenContext, group: ET.Element, value: str) -> None:
    for child in group:
        name = local_name(child)
        if not name or name in ctx.config.skip_propagation_tags:
            continue
        own = child.get("transform", "")
        child.set("transform", f"{value} {own}".strip())
        if name in GROUP_TAGS:
            _push_down(ctx, child, child.attrib.pop("transform"))
    ctx.report.propagated += 1


@adapter(
    tags=set(GROUP_TAGS),
    phase=Phase.PROPAGATE,
    description="Push group transform down to children",
)
def propagate_group(ctx: FlattenContext, el: ET.Element) -> None:
    # Validate before touching any child.
    if not read_operations(el):
        el.attrib.pop("transform", None)
        return
    value = el.attrib.pop("transform").strip()
    _push_down(ctx, el, value)
