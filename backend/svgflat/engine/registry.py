"""Adapter registry — every shape adapter is a function registered via decorator.

Usage:
    @adapter(tags={"circle"}, phase=Phase.FLATTEN, description="Bake transform into cx/cy")
    def flatten_circle(ctx: FlattenContext, el: ET.Element) -> None:
        ...

Adding support for a new element kind = one module with the decorator.
"""

from __future__ import annotations

import enum
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from svgflat.engine.context import FlattenContext

logger = logging.getLogger(__name__)

AdapterFn = Callable[["FlattenContext", ET.Element], None]


class Phase(enum.IntEnum):
    RESOLVE = 0
    CONVERT = 1
    PROPAGATE = 2
    FLATTEN = 3


@dataclass
class AdapterSpec:
    tags: frozenset[str]
    phase: Phase
    fn: AdapterFn
    # Only elements carrying this attribute are selected (None = all of the tag)
    requires: str | None = "transform"
    description: str = ""
    name: str = field(default="")


class AdapterRegistry:
    """Registry of shape adapters keyed by (phase, tag)."""

    def __init__(self) -> None:
        self._adapters: dict[tuple[Phase, str], AdapterSpec] = {}

    def register(self, spec: AdapterSpec) -> None:
        for tag in spec.tags:
            key = (spec.phase, tag)
            if key in self._adapters:
                raise ValueError(f"Duplicate adapter for <{tag}> in phase {spec.phase.name}")
            self._adapters[key] = spec
        logger.debug("Registered adapter %s for %s (%s)", spec.name, sorted(spec.tags), spec.phase.name)

    def get(self, phase: Phase, tag: str) -> AdapterSpec | None:
        return self._adapters.get((phase, tag))

    def get_phase(self, phase: Phase) -> list[AdapterSpec]:
        seen: list[AdapterSpec] = []
        for (p, _), spec in sorted(self._adapters.items(), key=lambda kv: kv[0][1]):
            if p == phase and spec not in seen:
                seen.append(spec)
        return seen

    def handled_tags(self) -> set[str]:
        """Every tag some adapter knows how to deal with."""
        return {tag for (_, tag) in self._adapters}

    @property
    def count(self) -> int:
        return len({id(s) for s in self._adapters.values()})


# Module-level singleton
_registry = AdapterRegistry()


def get_registry() -> AdapterRegistry:
    return _registry


def adapter(
    *,
    tags: set[str],
    phase: Phase,
    requires: str | None = "transform",
    description: str = "",
):
    """Decorator to register a shape adapter function."""

    def decorator(fn: AdapterFn):
        spec = AdapterSpec(
            tags=frozenset(tags),
            phase=phase,
            fn=fn,
            requires=requires,
            description=description,
            name=fn.__name__,
        )
        _registry.register(spec)
        return fn

    return decorator
