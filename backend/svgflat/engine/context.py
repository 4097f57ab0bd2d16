"""FlattenContext — the mutable state shared by every phase of a flatten run.

Per-element work mutates the element tree directly; everything the caller may want to
assert on afterwards (diagnostics, errors, counters) is collected here instead of being
printed.
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from svgflat.engine.config import FlattenConfig
from svgflat.models.diagnostics import Diagnostic, FlattenReport
from svgflat.svg.query import local_name

logger = logging.getLogger(__name__)


def element_label(el: ET.Element) -> str:
    """Short human label: ``circle#dot`` or ``circle``."""
    el_id = el.get("id")
    return f"{local_name(el)}#{el_id}" if el_id else local_name(el)


@dataclass
class FlattenContext:
    """Shared state flowing through the flatten phases."""

    root: ET.Element
    config: FlattenConfig = field(default_factory=FlattenConfig)
    report: FlattenReport = field(default_factory=FlattenReport)
    # Elements referenced by a resolved <use>, candidates for removal
    used_sources: list[ET.Element] = field(default_factory=list)
    completed_phases: list[str] = field(default_factory=list)

    def warn(self, el: ET.Element, code: str, message: str) -> None:
        """Record a non-fatal diagnostic for ``el``."""
        diag = Diagnostic(
            level="warning",
            code=code,
            tag=local_name(el),
            element_id=el.get("id"),
            message=message,
        )
        self.report.diagnostics.append(diag)
        logger.warning("%s: %s", element_label(el), message)

    def fail(self, el: ET.Element, error: Exception) -> None:
        """Record a fatal-for-this-element error (used when fail_fast is off)."""
        label = element_label(el)
        key = label
        n = 2
        while key in self.report.errors:
            key = f"{label}@{n}"
            n += 1
        self.report.errors[key] = str(error)
        self.report.diagnostics.append(
            Diagnostic(
                level="error",
                code=type(error).__name__,
                tag=local_name(el),
                element_id=el.get("id"),
                message=str(error),
            )
        )
        logger.warning("%s FAILED: %s", label, error)
