"""Affine operator — turns parsed transform functions into coordinate operations.

Shape adapters implement three primitives (``translate``, ``rotate``, ``scale``);
``apply_operations`` drives them in transform-list order. The list is applied
right-to-left: the last function written is the first one applied to the shape's
local coordinates.
"""

from __future__ import annotations

import math
from typing import Callable, NamedTuple, Protocol, Sequence, Union

import numpy as np
from numpy.typing import NDArray

from svgflat.errors import UnsupportedTransformError
from svgflat.transform.parser import TransformFunction, parse_arguments, parse_transform_list

Rotator = Callable[[float, float], tuple[float, float]]


class Translation(NamedTuple):
    dx: float
    dy: float = 0.0


class Rotation(NamedTuple):
    angle_degrees: float
    pivot: tuple[float, float] | None = None


class Scale(NamedTuple):
    sx: float
    sy: float


Operation = Union[Translation, Rotation, Scale]


class TransformTarget(Protocol):
    def translate(self, dx: float, dy: float) -> None: ...

    def rotate(self, rotator: Rotator, angle_degrees: float) -> None: ...

    def scale(self, sx: float, sy: float) -> None: ...


def make_rotator(angle_degrees: float) -> Rotator:
    """Linear rotation about the origin (SVG's y-down frame: positive = clockwise on screen)."""
    theta = math.radians(angle_degrees)
    c = math.cos(theta)
    s = math.sin(theta)

    def rotator(x: float, y: float) -> tuple[float, float]:
        return (x * c - y * s, x * s + y * c)

    return rotator


def interpret(functions: Sequence[TransformFunction]) -> list[Operation]:
    """Map parsed functions to operations, validating names and arguments."""
    ops: list[Operation] = []
    for fn in functions:
        if fn.name == "translate":
            dx, dy = parse_arguments(fn)
            ops.append(Translation(dx, dy if dy is not None else 0.0))
        elif fn.name == "rotate":
            angle, px, py = parse_arguments(fn)
            ops.append(Rotation(angle, (px, py) if px is not None else None))
        elif fn.name == "scale":
            sx, sy = parse_arguments(fn)
            ops.append(Scale(sx, sy if sy is not None else sx))
        else:
            raise UnsupportedTransformError(fn.name)
    return ops


def parse_operations(value: str) -> list[Operation]:
    """Parse a transform attribute value straight into operations."""
    return interpret(parse_transform_list(value))


def apply_operations(target: TransformTarget, operations: Sequence[Operation]) -> None:
    for op in reversed(operations):
        if isinstance(op, Translation):
            target.translate(op.dx, op.dy)
        elif isinstance(op, Rotation):
            rotator = make_rotator(op.angle_degrees)
            if op.pivot is None:
                target.rotate(rotator, op.angle_degrees)
            else:
                px, py = op.pivot
                target.translate(-px, -py)
                target.rotate(rotator, op.angle_degrees)
                target.translate(px, py)
        else:
            target.scale(op.sx, op.sy)


def has_uniform_scale(operations: Sequence[Operation]) -> bool:
    """True when every scale keeps circles circular (|sx| == |sy|)."""
    return all(abs(op.sx) == abs(op.sy) for op in operations if isinstance(op, Scale))


def to_matrix(operations: Sequence[Operation]) -> NDArray[np.float64]:
    """Compose operations into a 3×3 homogeneous matrix (SVG transform-list semantics)."""
    m = np.identity(3)
    for op in operations:
        if isinstance(op, Translation):
            step = np.array([[1.0, 0.0, op.dx], [0.0, 1.0, op.dy], [0.0, 0.0, 1.0]])
        elif isinstance(op, Rotation):
            theta = math.radians(op.angle_degrees)
            c, s = math.cos(theta), math.sin(theta)
            step = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
            if op.pivot is not None:
                px, py = op.pivot
                to_pivot = np.array([[1.0, 0.0, px], [0.0, 1.0, py], [0.0, 0.0, 1.0]])
                from_pivot = np.array([[1.0, 0.0, -px], [0.0, 1.0, -py], [0.0, 0.0, 1.0]])
                step = to_pivot @ step @ from_pivot
        else:
            step = np.diag([op.sx, op.sy, 1.0])
        m = m @ step
    return m
