"""Error types raised while flattening transforms."""

from __future__ import annotations


class FlattenError(Exception):
    """Base class for fatal flattening errors."""


class ParseError(FlattenError, ValueError):
    """Malformed transform argument string, path data or geometry attribute."""

    def __init__(self, message: str, raw: str = "") -> None:
        super().__init__(message)
        self.raw = raw


class PathSyntaxError(ParseError):
    """Malformed path data (``d`` attribute)."""


class UnsupportedTransformError(FlattenError):
    """Transform function outside translate / rotate / scale."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unsupported transform function: {name}")
        self.name = name


class UnsupportedElementWarning(UserWarning):
    """Element carries a transform the engine does not know how to flatten."""
