"""svgflat — bake SVG translate / rotate / scale transforms into shape coordinates."""

from __future__ import annotations

import xml.etree.ElementTree as ET

from svgflat.engine import FlattenConfig, Flattener
from svgflat.errors import (
    FlattenError,
    ParseError,
    PathSyntaxError,
    UnsupportedElementWarning,
    UnsupportedTransformError,
)
from svgflat.models.diagnostics import Diagnostic, FlattenReport
from svgflat.svg.parser import parse_svg
from svgflat.svg.serializer import serialize_svg

__version__ = "0.1.0"


def flatten(root: ET.Element, config: FlattenConfig | None = None) -> FlattenReport:
    """Flatten transforms under ``root`` in place and return the run report."""
    return Flattener(config).run(root).report


def flatten_svg(svg_text: str, config: FlattenConfig | None = None) -> tuple[str, FlattenReport]:
    """Parse SVG text, flatten it and serialize it back."""
    root = parse_svg(svg_text)
    report = flatten(root, config)
    return serialize_svg(root), report


__all__ = [
    "Diagnostic",
    "FlattenConfig",
    "FlattenError",
    "FlattenReport",
    "Flattener",
    "ParseError",
    "PathSyntaxError",
    "UnsupportedElementWarning",
    "UnsupportedTransformError",
    "flatten",
    "flatten_svg",
]
