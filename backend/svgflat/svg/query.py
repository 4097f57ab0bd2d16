"""Tag / attribute / id selection over an ElementTree SVG tree.

Tags are matched by local name so that namespaced (``{http://www.w3.org/2000/svg}rect``)
and bare (``rect``) documents behave the same.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Collection

from svgflat.svg.parser import XLINK_NS

HREF_ATTRS = ("href", f"{{{XLINK_NS}}}href")


def local_name(el: ET.Element) -> str:
    tag = el.tag
    if not isinstance(tag, str):
        # Comments and processing instructions.
        return ""
    return tag.split("}")[-1] if "}" in tag else tag


def rename(el: ET.Element, name: str) -> None:
    """Change an element's local name, keeping its namespace."""
    tag = el.tag
    if "}" in tag:
        el.tag = tag[: tag.index("}") + 1] + name
    else:
        el.tag = name


def select_all(
    root: ET.Element,
    tags: str | Collection[str] | None = None,
    attribute: str | None = None,
) -> list[ET.Element]:
    """Elements in document order matching any of ``tags`` and carrying ``attribute``.

    Equivalent of a ``circle[transform]`` style selector. The result is a snapshot
    list, safe to iterate while mutating the tree.
    """
    if isinstance(tags, str):
        tags = {tags}
    found = []
    for el in root.iter():
        name = local_name(el)
        if not name:
            continue
        if tags is not None and name not in tags:
            continue
        if attribute is not None and attribute not in el.attrib:
            continue
        found.append(el)
    return found


def select(
    root: ET.Element,
    tags: str | Collection[str] | None = None,
    attribute: str | None = None,
) -> ET.Element | None:
    matches = select_all(root, tags, attribute)
    return matches[0] if matches else None


def select_by_id(root: ET.Element, element_id: str) -> ET.Element | None:
    for el in root.iter():
        if el.get("id") == element_id:
            return el
    return None


def get_href(el: ET.Element) -> str | None:
    for attr in HREF_ATTRS:
        value = el.get(attr)
        if value is not None:
            return value
    return None


def parent_map(root: ET.Element) -> dict[ET.Element, ET.Element]:
    return {child: parent for parent in root.iter() for child in parent}
