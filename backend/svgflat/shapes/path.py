"""Path adapter — bakes the transform into the ``d`` attribute."""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from svgflat.engine.context import FlattenContext
from svgflat.engine.registry import Phase, adapter
from svgflat.engine.verify import verify_path
from svgflat.path.engine import PathData
from svgflat.shapes.base import read_operations
from svgflat.transform.affine import Operation, apply_operations

logger = logging.getLogger(__name__)


def flatten_path_data(
    ctx: FlattenContext, el: ET.Element, operations: list[Operation]
) -> None:
    """Apply ``operations`` to ``el``'s path data and drop its transform."""
    d = el.get("d")
    if d is not None and operations:
        path = PathData.parse(d)
        apply_operations(path, operations)
        new_d = path.serialize(ctx.config.precision)
        if ctx.config.verify_paths:
            verify_path(ctx, el, d, operations, new_d)
        el.set("d", new_d)
        logger.debug("path %s: %d commands rewritten", el.get("id", "?"), len(path.commands))
    el.attrib.pop("transform", None)
    ctx.report.flattened += 1


@adapter(tags={"path"}, phase=Phase.FLATTEN, description="Bake transform into path data")
def flatten_path(ctx: FlattenContext, el: ET.Element) -> None:
    flatten_path_data(ctx, el, read_operations(el))
