"""Tests for the path command engine (translate / rotate / scale passes)."""

from __future__ import annotations

import math

import pytest

from svgflat.engine.verify import path_deviation
from svgflat.path.engine import PathData, _scale_ellipse
from svgflat.transform.affine import apply_operations, make_rotator, parse_operations
from tests.conftest import HOME_D, SETTINGS_D


SQUARES_D = "m5 5h10v10h-10z m2 2 h1 v1 h-1 z"
# Arcs whose ellipse axes are tilted against the page axes
TILTED_ARCS_D = "M 0,0 A 10,5,30,0,1,10,10 a 4,2,-20,1,0,5,-3 z"


def _rotate(d: str, angle: float) -> PathData:
    path = PathData.parse(d)
    path.rotate(make_rotator(angle), angle)
    return path


class TestParse:
    def test_absolute_index_set(self):
        assert PathData.parse("M 0,0 h 5 V 3 z").absolute == {0, 2}

    def test_initial_relative_move_is_absolute(self):
        path = PathData.parse("m 10,10 20,0")
        assert path.serialize() == "M 10,10 l 20,0"
        assert path.absolute == {0}

    def test_relative_move_after_close_rebases_on_subpath_start(self):
        path = PathData.parse("M 10,10 l 5,0 z m 2,2 l 1,0")
        assert path.serialize() == "M 10,10 l 5,0 z M 12,12 l 1,0"
        assert path.absolute == {0, 3}

    def test_relative_line_after_close(self):
        path = PathData.parse("M 10,10 l 5,0 z l 1,1")
        assert path.serialize() == "M 10,10 l 5,0 z L 11,11"


class TestTranslate:
    def test_only_absolute_commands_move(self):
        path = PathData.parse("M 10,10 L 20,20 l 5,5 H 30 V 40 Z")
        path.translate(1, 2)
        assert path.serialize() == "M 11,12 L 21,22 l 5,5 H 31 V 42 Z"

    def test_arc_moves_endpoint_only(self):
        path = PathData.parse("M 0,0 A 5,5,0,0,1,10,0")
        path.translate(1, 1)
        assert path.serialize() == "M 1,1 A 5,5,0,0,1,11,1"

    def test_curves_move_every_pair(self):
        path = PathData.parse("M0 0C1 1 2 2 3 3S4 4 5 5Q6 6 7 7T8 8")
        path.translate(10, 0)
        assert path.serialize() == "M 10,0 C 11,1,12,2,13,3 S 14,4,15,5 Q 16,6,17,7 T 18,8"


class TestRotate:
    def test_absolute_horizontal_becomes_relative_line(self):
        path = _rotate("M 10,0 H 20", 90)
        move, line = path.commands
        assert move.args == pytest.approx([0, 10], abs=1e-12)
        assert line.letter == "l"
        assert line.args == pytest.approx([0, 10], abs=1e-12)
        assert path.absolute == {0}

    def test_relative_horizontal_runs(self):
        line = _rotate("M 0,0 h 5 5", 90).commands[1]
        assert line.letter == "l"
        assert line.args == pytest.approx([0, 5, 0, 5], abs=1e-12)

    def test_absolute_horizontal_runs_chain_deltas(self):
        line = _rotate("M 1,0 H 3 6", 90).commands[1]
        assert line.args == pytest.approx([0, 2, 0, 3], abs=1e-12)

    def test_vertical(self):
        move, line = _rotate("M 0,1 V 4", 90).commands
        assert move.args == pytest.approx([-1, 0], abs=1e-12)
        assert line.letter == "l"
        assert line.args == pytest.approx([-3, 0], abs=1e-12)

    def test_cursor_follows_relative_commands(self):
        line = _rotate("M 0,0 l 3,4 H 10", 90).commands[2]
        assert line.args == pytest.approx([0, 7], abs=1e-12)

    def test_cursor_resets_on_close(self):
        line = _rotate("M 5,0 h 5 z H 20", 90).commands[3]
        assert line.args == pytest.approx([0, 15], abs=1e-12)

    def test_no_horizontal_or_vertical_left(self):
        path = _rotate(SETTINGS_D, 33)
        assert all(c.kind not in ("H", "V") for c in path.commands)

    def test_arc_rotation_accumulates_angle(self):
        path = _rotate("M 10,0 A 5,3,10,0,1,0,10", 90)
        arc = path.commands[1]
        assert arc.args[:5] == [5, 3, 100, 0, 1]
        assert arc.args[5:] == pytest.approx([-10, 0], abs=1e-12)

    def test_zero_rotation_keeps_geometry(self):
        path = _rotate("M 1,2 H 5 V 6", 0)
        assert path.serialize() == "M 1,2 l 4,0 l 0,4"


class TestScale:
    def test_absolute_and_relative(self):
        path = PathData.parse("M 1,2 h 3 v 4 l 1,1 z")
        path.scale(2, 3)
        assert path.serialize() == "M 2,6 h 6 v 12 l 2,3 z"

    def test_arc_axis_aligned(self):
        path = PathData.parse("M 0,0 a 5,3,0,0,1,10,0")
        path.scale(2, 1)
        assert path.serialize() == "M 0,0 a 10,3,0,0,1,20,0"

    def test_mirror_flips_sweep(self):
        path = PathData.parse("M 0,0 a 5,3,0,0,1,10,0")
        path.scale(-1, 1)
        assert path.serialize() == "M 0,0 a 5,3,0,0,0,-10,0"

    def test_mirror_reflects_axis_angle(self):
        d = "M 0,0 A 10,5,30,0,1,10,10"
        ops = parse_operations("scale(1 -1)")
        path = PathData.parse(d)
        apply_operations(path, ops)
        assert path.serialize() == "M 0,0 A 10,5,-30,0,0,10,-10"
        assert path_deviation(d, ops, path.serialize()) < 1e-9

    def test_rotated_ellipse_under_non_uniform_scale(self):
        rx, ry, phi, sx, sy = 5.0, 3.0, 30.0, 2.0, 0.5
        nrx, nry, nphi = _scale_ellipse(rx, ry, phi, sx, sy)
        t = math.radians(phi)
        nt = math.radians(nphi)
        for a in [i * math.pi / 8 for i in range(16)]:
            # Point on the original ellipse, mapped by the scale.
            ex = rx * math.cos(a)
            ey = ry * math.sin(a)
            px = sx * (ex * math.cos(t) - ey * math.sin(t))
            py = sy * (ex * math.sin(t) + ey * math.cos(t))
            # Back into the new ellipse's own frame.
            qx = px * math.cos(nt) + py * math.sin(nt)
            qy = -px * math.sin(nt) + py * math.cos(nt)
            assert (qx / nrx) ** 2 + (qy / nry) ** 2 == pytest.approx(1.0)

    def test_circle_radius_under_non_uniform_scale(self):
        rx, ry, phi = _scale_ellipse(1.0, 1.0, 45.0, 2.0, 1.0)
        assert sorted([rx, ry]) == pytest.approx([1.0, 2.0])
        assert math.sin(math.radians(phi)) == pytest.approx(0.0, abs=1e-9)


class TestGeometricEquivalence:
    @pytest.mark.parametrize(
        "transform",
        [
            "translate(3 4)",
            "rotate(90)",
            "rotate(33 12 12)",
            "scale(1.5)",
            "scale(-1 1)",
            "scale(1 -1)",
            "scale(-2 2) rotate(15)",
            "translate(50 50) rotate(33 12 12) scale(1.25)",
            "scale(2 0.5) rotate(20)",
            "rotate(-45) scale(1 3) translate(-7 2)",
        ],
    )
    @pytest.mark.parametrize("d", [HOME_D, SETTINGS_D, SQUARES_D, TILTED_ARCS_D])
    def test_flattened_path_matches_transformed_original(self, d, transform):
        ops = parse_operations(transform)
        path = PathData.parse(d)
        apply_operations(path, ops)
        assert path_deviation(d, ops, path.serialize()) < 1e-9
