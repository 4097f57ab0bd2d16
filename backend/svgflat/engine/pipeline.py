"""Flattener orchestrator — runs the adapter phases over one SVG tree.

Phases run in order: RESOLVE (``use``), CONVERT (rect / ellipse → path), PROPAGATE
(group transforms), FLATTEN (circle / path), then a final report of every element still
carrying a transform. Each phase snapshots its elements before mutating anything.
"""

from __future__ import annotations

import logging
import time
import warnings
import xml.etree.ElementTree as ET

# Import adapter modules so their @adapter decorators register.
import svgflat.shapes.circle  # noqa: F401
import svgflat.shapes.ellipse  # noqa: F401
import svgflat.shapes.group  # noqa: F401
import svgflat.shapes.path  # noqa: F401
import svgflat.shapes.rect  # noqa: F401
import svgflat.shapes.use  # noqa: F401
from svgflat.engine.config import FlattenConfig
from svgflat.engine.context import FlattenContext
from svgflat.engine.registry import AdapterRegistry, AdapterSpec, Phase, get_registry
from svgflat.errors import FlattenError, UnsupportedElementWarning
from svgflat.svg.query import local_name, parent_map, select_all

logger = logging.getLogger(__name__)


class Flattener:
    """Orchestrates transform flattening over an element tree."""

    def __init__(
        self,
        config: FlattenConfig | None = None,
        registry: AdapterRegistry | None = None,
    ) -> None:
        self.config = config or FlattenConfig()
        self.registry = registry or get_registry()

    def run(self, root: ET.Element) -> FlattenContext:
        """Flatten every supported transform under ``root`` in place."""
        start = time.perf_counter()
        ctx = FlattenContext(root=root, config=self.config)

        for phase in Phase:
            t0 = time.perf_counter()
            for spec in self.registry.get_phase(phase):
                self._run_spec(ctx, spec)
            if phase == Phase.RESOLVE and self.config.remove_used_sources:
                self._remove_used_sources(ctx)
            ctx.completed_phases.append(phase.name)
            logger.debug("  %s completed in %.1fms", phase.name, (time.perf_counter() - t0) * 1000)

        self._report_leftovers(ctx)

        report = ctx.report
        logger.info(
            "Flatten complete: %d flattened, %d converted, %d uses resolved, "
            "%d groups propagated, %d diagnostics in %.0fms",
            report.flattened,
            report.converted,
            report.resolved,
            report.propagated,
            len(report.diagnostics),
            (time.perf_counter() - start) * 1000,
        )
        return ctx

    def _run_spec(self, ctx: FlattenContext, spec: AdapterSpec) -> None:
        snapshot = select_all(ctx.root, spec.tags, spec.requires)
        for el in snapshot:
            # Earlier elements may have renamed this one or consumed its attribute.
            if local_name(el) not in spec.tags:
                continue
            if spec.requires is not None and spec.requires not in el.attrib:
                continue
            try:
                spec.fn(ctx, el)
            except FlattenError as e:
                if self.config.fail_fast:
                    raise
                ctx.fail(el, e)

    def _remove_used_sources(self, ctx: FlattenContext) -> None:
        parents = parent_map(ctx.root)
        removed = 0
        seen: set[int] = set()
        for ref in ctx.used_sources:
            if id(ref) in seen:
                continue
            seen.add(id(ref))
            parent = parents.get(ref)
            if parent is not None:
                parent.remove(ref)
                removed += 1
        logger.debug("Removed %d referenced source elements", removed)

    def _report_leftovers(self, ctx: FlattenContext) -> None:
        handled = self.registry.handled_tags()
        for el in select_all(ctx.root, attribute="transform"):
            name = local_name(el)
            if name in handled:
                ctx.warn(el, "transform-kept", f"Transform on <{name}> could not be flattened")
            else:
                message = f"Unsupported element <{name}> with transform left unmodified"
                ctx.warn(el, "unsupported-element", message)
                warnings.warn(message, UnsupportedElementWarning, stacklevel=3)


def flatten_tree(root: ET.Element, config: FlattenConfig | None = None) -> FlattenContext:
    return Flattener(config).run(root)
