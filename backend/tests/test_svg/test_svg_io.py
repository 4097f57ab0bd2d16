"""Tests for SVG parsing, element selection and serialization."""

import xml.etree.ElementTree as ET

import pytest

from svgflat.errors import ParseError
from svgflat.svg.parser import SVG_NS, XLINK_NS, parse_svg
from svgflat.svg.query import (
    get_href,
    local_name,
    parent_map,
    rename,
    select,
    select_all,
    select_by_id,
)
from svgflat.svg.serializer import serialize_svg
from tests.conftest import COMPOSITE_SVG, SMILEY_SVG, svg_with


class TestParse:
    def test_root_is_svg(self):
        root = parse_svg(SMILEY_SVG)
        assert root.tag == f"{{{SVG_NS}}}svg"
        assert local_name(root) == "svg"

    def test_malformed_raises(self):
        with pytest.raises(ParseError):
            parse_svg("<svg><circle></svg>")

    def test_bare_document(self):
        root = parse_svg('<svg><rect width="1" height="1"/></svg>')
        assert local_name(select(root, "rect")) == "rect"


class TestQuery:
    def test_select_all_with_attribute(self):
        root = parse_svg(SMILEY_SVG)
        assert len(select_all(root, "circle")) == 3
        assert len(select_all(root, "circle", "transform")) == 2
        assert len(select_all(root, {"circle", "path"}, "transform")) == 3

    def test_select_all_skips_comments(self):
        root = parse_svg(svg_with("<!-- note --><circle r=\"1\"/>"))
        assert [local_name(el) for el in select_all(root)] == ["svg", "circle"]

    def test_select_missing(self):
        root = parse_svg(SMILEY_SVG)
        assert select(root, "ellipse") is None

    def test_select_by_id(self):
        root = parse_svg(COMPOSITE_SVG)
        assert local_name(select_by_id(root, "tick")) == "path"
        assert select_by_id(root, "nope") is None

    def test_href_forms(self):
        root = parse_svg(svg_with('<use href="#a"/><use xlink:href="#b"/><use/>'))
        assert [get_href(el) for el in select_all(root, "use")] == ["#a", "#b", None]

    def test_rename_keeps_namespace(self):
        root = parse_svg(svg_with('<rect width="1" height="1"/>'))
        el = select(root, "rect")
        rename(el, "path")
        assert el.tag == f"{{{SVG_NS}}}path"

    def test_parent_map(self):
        root = parse_svg(COMPOSITE_SVG)
        parents = parent_map(root)
        tick = select_by_id(root, "tick")
        assert local_name(parents[tick]) == "defs"


class TestSerialize:
    def test_default_namespace_without_prefix(self):
        out = serialize_svg(parse_svg(SMILEY_SVG))
        assert out.startswith("<svg ")
        assert "ns0:" not in out
        assert "<circle " in out

    def test_default_namespace_survives_other_registrations(self):
        # svgpathtools registers an "svg" prefix for the same namespace on import.
        import svgpathtools  # noqa: F401

        ET.register_namespace("svg", SVG_NS)
        out = serialize_svg(parse_svg(svg_with('<circle r="1"/>')))
        assert out.startswith("<svg ")
        assert "svg:" not in out

    def test_xlink_prefix_kept(self):
        out = serialize_svg(parse_svg(svg_with('<use xlink:href="#a"/>')))
        assert f'xmlns:xlink="{XLINK_NS}"' in out
        assert 'xlink:href="#a"' in out

    def test_xml_declaration(self):
        out = serialize_svg(parse_svg(SMILEY_SVG), xml_declaration=True)
        assert out.startswith("<?xml")

    def test_reparse(self):
        root = parse_svg(COMPOSITE_SVG)
        again = parse_svg(serialize_svg(root))
        assert len(list(again.iter())) == len(list(root.iter()))
