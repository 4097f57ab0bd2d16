"""SVG parser — facade over xml.etree.ElementTree.

Converts raw SVG text into an element tree the engine mutates in place.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET

from svgflat.errors import ParseError

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"


def register_namespaces() -> None:
    """Serialize SVG as the default namespace and keep the ``xlink`` prefix.

    The prefix table is process-global and svgpathtools registers its own ``svg``
    prefix when imported, so serializers call this again right before writing.
    """
    ET.register_namespace("", SVG_NS)
    ET.register_namespace("xlink", XLINK_NS)


register_namespaces()


def parse_svg(svg_text: str) -> ET.Element:
    """Parse raw SVG text into its root element."""
    try:
        root = ET.fromstring(svg_text)
    except ET.ParseError as e:
        raise ParseError(f"Malformed SVG: {e}", svg_text) from e
    logger.debug("Parsed SVG root <%s> with %d elements", root.tag, sum(1 for _ in root.iter()))
    return root
