"""Flatten configuration — controls rounding, error policy and verification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from svgflat.config import Settings


@dataclass
class FlattenConfig:
    """Knobs for one flatten run."""

    # Round written coordinates to this many decimals (None = shortest exact repr)
    precision: int | None = None

    # Raise the first parse / unsupported-transform error instead of recording it
    fail_fast: bool = True

    # Sample every flattened path before/after and report deviations
    verify_paths: bool = False
    verify_tolerance: float = 1e-6
    verify_samples: int = 16

    # Delete elements referenced by <use> once every reference is resolved
    remove_used_sources: bool = False

    # Propagation never writes a transform onto these (non-rendering) group children
    skip_propagation_tags: frozenset[str] = frozenset(
        {"title", "desc", "metadata", "style", "script"}
    )

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> FlattenConfig:
        if settings is None:
            from svgflat.config import settings
        return cls(
            precision=settings.svgflat_precision,
            fail_fast=settings.svgflat_fail_fast,
            verify_paths=settings.svgflat_verify_paths,
            verify_tolerance=settings.svgflat_verify_tolerance,
            remove_used_sources=settings.svgflat_remove_used_sources,
        )
