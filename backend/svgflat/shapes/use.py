"""<use> dereferencing.

A ``use`` pointing at ``#id`` becomes a copy of the referenced element: its tag,
attributes and children. Transforms chain as SVG composes them (the use's transform,
then its x/y offset, then the referenced element's own transform), so the result can be
flattened like any other shape.

Only ``transform`` and ``class`` values are joined when both elements carry them. Any
other attribute present on both takes the referenced element's value rather than a
concatenation, since joined values such as ``fill="red blue"`` would be invalid SVG.
"""

from __future__ import annotations

import copy
import logging
import xml.etree.ElementTree as ET

from svgflat.engine.context import FlattenContext
from svgflat.engine.registry import Phase, adapter
from svgflat.svg.query import HREF_ATTRS, get_href, local_name, rename, select_all, select_by_id
from svgflat.utils.math_helpers import format_number, parse_length

logger = logging.getLogger(__name__)

# Same-named values are joined with a space instead of overridden
_CONCAT_ATTRS = ("class",)
_NEVER_COPIED = frozenset({"id", "transform", *HREF_ATTRS})


def _resolve(ctx: FlattenContext, el: ET.Element, chain: tuple[int, ...]) -> None:
    href = get_href(el)
    if href is None:
        return
    x = parse_length(el.get("x"), "x")
    y = parse_length(el.get("y"), "y")
    for attr in HREF_ATTRS:
        el.attrib.pop(attr, None)

    ref = select_by_id(ctx.root, href[1:]) if href.startswith("#") else None
    if ref is None:
        ctx.warn(el, "use-unresolved", f"No element matches {href!r}")
        return
    if id(ref) in chain or any(node is el for node in ref.iter()):
        ctx.warn(el, "use-cycle", f"Circular reference through {href!r}")
        return
    if local_name(ref) == "use":
        _resolve(ctx, ref, chain + (id(el),))
        if local_name(ref) == "use":
            ctx.warn(el, "use-unresolved", f"{href!r} is itself an unresolved <use>")
            return

    el.attrib.pop("x", None)
    el.attrib.pop("y", None)
    transforms = [el.get("transform", "")]
    if x or y:
        transforms.append(f"translate({format_number(x)}, {format_number(y)})")
    transforms.append(ref.get("transform", ""))
    combined = " ".join(t.strip() for t in transforms if t.strip())

    for name, value in ref.attrib.items():
        if name in _NEVER_COPIED:
            continue
        if name in _CONCAT_ATTRS and name in el.attrib:
            el.set(name, f"{el.get(name)} {value}")
        else:
            el.set(name, value)
    if combined:
        el.set("transform", combined)
    else:
        el.attrib.pop("transform", None)

    tag = local_name(ref)
    if tag == "symbol":
        if ref.get("viewBox"):
            ctx.warn(el, "use-symbol-viewbox", "Symbol viewBox scaling is not applied")
        el.attrib.pop("viewBox", None)
        tag = "g"
    rename(el, tag)
    for child in ref:
        el.append(copy.deepcopy(child))
    ctx.used_sources.append(ref)
    ctx.report.resolved += 1
    logger.debug("Resolved <use> %s → <%s>", href, tag)

    # Copied children may hold <use> elements the snapshot never saw.
    for nested in select_all(el, "use"):
        if nested is not el:
            _resolve(ctx, nested, chain + (id(el),))


@adapter(
    tags={"use"},
    phase=Phase.RESOLVE,
    requires=None,
    description="Replace <use> with a copy of the referenced element",
)
def resolve_use(ctx: FlattenContext, el: ET.Element) -> None:
    _resolve(ctx, el, ())
