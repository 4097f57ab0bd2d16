"""svgflat transform flattening engine."""

from svgflat.engine.registry import adapter, Phase, get_registry
from svgflat.engine.config import FlattenConfig
from svgflat.engine.context import FlattenContext
from svgflat.engine.pipeline import Flattener, flatten_tree

__all__ = [
    "adapter",
    "Phase",
    "get_registry",
    "FlattenConfig",
    "FlattenContext",
    "Flattener",
    "flatten_tree",
]
