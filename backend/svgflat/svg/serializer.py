"""Write the (mutated) element tree back to SVG text."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from svgflat.svg.parser import register_namespaces


def serialize_svg(root: ET.Element, xml_declaration: bool = False) -> str:
    """Serialize the tree rooted at ``root`` to a string."""
    register_namespaces()
    text = ET.tostring(root, encoding="unicode")
    if xml_declaration:
        return '<?xml version="1.0" encoding="UTF-8"?>\n' + text
    return text
