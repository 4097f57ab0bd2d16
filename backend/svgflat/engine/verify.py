"""Geometric equivalence check for flattened paths.

Samples the original path data mapped through the transform matrix and the flattened
path data at the same segment parameters, and reports the largest distance between
them. Sampling goes through svgpathtools, independent of the flattening code.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, Sequence

import numpy as np
from numpy.typing import NDArray
from svgpathtools import Line, parse_path

from svgflat.transform.affine import Operation, to_matrix

if TYPE_CHECKING:
    from svgflat.engine.context import FlattenContext

logger = logging.getLogger(__name__)

# Closing segments shorter than this are float noise, not geometry.
_DEGENERATE_LINE = 1e-9


def sample_path(d: str, samples: int = 16) -> NDArray[np.float64]:
    """Nx2 points: ``samples`` evenly spaced parameters per non-degenerate segment."""
    points: list[tuple[float, float]] = []
    for seg in parse_path(d):
        if isinstance(seg, Line) and abs(seg.end - seg.start) < _DEGENERATE_LINE:
            continue
        for t in np.linspace(0.0, 1.0, samples):
            pt = seg.point(t)
            points.append((pt.real, pt.imag))
    return np.array(points, dtype=np.float64).reshape(-1, 2)


def apply_matrix(points: NDArray[np.float64], matrix: NDArray[np.float64]) -> NDArray[np.float64]:
    if len(points) == 0:
        return points
    homogeneous = np.column_stack([points, np.ones(len(points))])
    return (matrix @ homogeneous.T).T[:, :2]


def path_deviation(
    original_d: str,
    operations: Sequence[Operation],
    flattened_d: str,
    samples: int = 16,
) -> float:
    """Max distance between transformed original samples and flattened samples."""
    expected = apply_matrix(sample_path(original_d, samples), to_matrix(operations))
    actual = sample_path(flattened_d, samples)
    if expected.shape != actual.shape:
        return float("inf")
    if len(expected) == 0:
        return 0.0
    return float(np.max(np.hypot(*(expected - actual).T)))


def verify_path(
    ctx: FlattenContext,
    el: ET.Element,
    original_d: str,
    operations: Sequence[Operation],
    flattened_d: str,
) -> None:
    try:
        deviation = path_deviation(original_d, operations, flattened_d, ctx.config.verify_samples)
    except (ValueError, ZeroDivisionError) as e:
        ctx.warn(el, "verify-skipped", f"Could not sample path for verification: {e}")
        return
    logger.debug("Verified path %s: max deviation %.3g", el.get("id", "?"), deviation)
    if deviation > ctx.config.verify_tolerance:
        ctx.warn(
            el,
            "verify-mismatch",
            f"Flattened path deviates from the transformed original by {deviation:.3g}",
        )
