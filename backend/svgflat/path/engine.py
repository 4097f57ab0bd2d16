"""Path command engine — flattens translate / rotate / scale into path data.

``PathData`` owns a parsed command list plus the set of command positions that hold
absolute coordinates. The three passes mutate the commands in place:

* translate touches absolute commands only (relative deltas are offset-free);
* rotate walks the commands with a cursor, because ``H``/``V`` carry a single
  coordinate and stop being expressible once the axes are mixed: they are rewritten
  as relative ``l`` commands;
* scale touches every command, relative deltas included.

A command that opens a subpath (the first command, or the one right after ``Z``) is
absolute by position. When such a command is written lowercase it is rebased onto the
current point at parse time, so absolute-by-position and absolute-by-letter coincide.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from svgflat.path.commands import ARITY, PathCommand, serialize, tokenize
from svgflat.transform.affine import Rotator

logger = logging.getLogger(__name__)


class _Cursor:
    """Current pen position and subpath start while walking commands."""

    def __init__(self) -> None:
        self.x = 0.0
        self.y = 0.0
        self.start = (0.0, 0.0)

    def advance(self, cmd: PathCommand) -> None:
        kind = cmd.kind
        rel = cmd.is_relative
        args = cmd.args
        if kind == "Z":
            self.x, self.y = self.start
            return
        if kind == "H":
            self.x = self.x + sum(args) if rel else args[-1]
            return
        if kind == "V":
            self.y = self.y + sum(args) if rel else args[-1]
            return
        n = ARITY[kind]
        for g in range(0, len(args), n):
            ex, ey = args[g + n - 2], args[g + n - 1]
            if rel:
                self.x += ex
                self.y += ey
            else:
                self.x, self.y = ex, ey
            if kind == "M" and g == 0:
                self.start = (self.x, self.y)


def _offset_args(kind: str, args: list[float], dx: float, dy: float) -> list[float]:
    """Add (dx, dy) to the coordinates of one command's arguments."""
    out = list(args)
    if kind == "H":
        return [a + dx for a in out]
    if kind == "V":
        return [a + dy for a in out]
    if kind == "A":
        for g in range(0, len(out), 7):
            out[g + 5] += dx
            out[g + 6] += dy
        return out
    for i in range(0, len(out), 2):
        out[i] += dx
        out[i + 1] += dy
    return out


def _scale_ellipse(
    rx: float, ry: float, phi: float, sx: float, sy: float
) -> tuple[float, float, float]:
    """Radii and x-axis rotation of an arc's ellipse after scaling by (sx, sy)."""
    if abs(sx) == abs(sy):
        # A mirror reflects the axis angle.
        return abs(rx * sx), abs(ry * sx), -phi if sx * sy < 0 else phi
    if phi % 180 == 0:
        return abs(rx * sx), abs(ry * sy), phi
    if phi % 180 == 90:
        return abs(rx * sy), abs(ry * sx), phi
    theta = math.radians(phi)
    rot = np.array([[math.cos(theta), -math.sin(theta)], [math.sin(theta), math.cos(theta)]])
    mapped = np.diag([sx, sy]) @ rot @ np.diag([rx, ry])
    u, s, _ = np.linalg.svd(mapped)
    return float(s[0]), float(s[1]), math.degrees(math.atan2(u[1, 0], u[0, 0]))


def _normalize(commands: list[PathCommand]) -> list[PathCommand]:
    """Rebase lowercase subpath-opening commands onto the current point."""
    out: list[PathCommand] = []
    cursor = _Cursor()
    at_start = True
    for cmd in commands:
        if at_start and cmd.is_relative and cmd.kind != "Z":
            n = ARITY[cmd.kind]
            anchor = PathCommand(
                cmd.kind, _offset_args(cmd.kind, cmd.args[:n], cursor.x, cursor.y)
            )
            out.append(anchor)
            cursor.advance(anchor)
            if len(cmd.args) > n:
                # Extra pairs after "m" are implicit relative linetos.
                rest = PathCommand("l" if cmd.kind == "M" else cmd.letter, cmd.args[n:])
                out.append(rest)
                cursor.advance(rest)
        else:
            out.append(cmd)
            cursor.advance(cmd)
        at_start = cmd.kind == "Z"
    return out


class PathData:
    """A parsed ``d`` attribute that can be translated, rotated and scaled."""

    def __init__(self, commands: list[PathCommand]) -> None:
        self.commands = commands
        self.absolute: set[int] = {
            i for i, cmd in enumerate(commands) if not cmd.is_relative and cmd.kind != "Z"
        }

    @classmethod
    def parse(cls, d: str) -> PathData:
        return cls(_normalize(tokenize(d)))

    def translate(self, dx: float, dy: float) -> None:
        for i in sorted(self.absolute):
            cmd = self.commands[i]
            cmd.args = _offset_args(cmd.kind, cmd.args, dx, dy)

    def rotate(self, rotator: Rotator, angle_degrees: float) -> None:
        cursor = _Cursor()
        rewritten = 0
        for i, cmd in enumerate(self.commands):
            kind = cmd.kind
            if kind in ("H", "V"):
                origin = cursor.x if kind == "H" else cursor.y
                cursor.advance(cmd)
                if cmd.is_relative:
                    deltas = list(cmd.args)
                else:
                    deltas = []
                    prev = origin
                    for target in cmd.args:
                        deltas.append(target - prev)
                        prev = target
                new_args: list[float] = []
                for delta in deltas:
                    vec = (delta, 0.0) if kind == "H" else (0.0, delta)
                    new_args.extend(rotator(*vec))
                cmd.letter = "l"
                cmd.args = new_args
                self.absolute.discard(i)
                rewritten += 1
                continue

            # Cursor follows the unrotated coordinates, the frame H/V targets live in.
            cursor.advance(cmd)
            if kind == "Z":
                continue
            args = cmd.args
            if kind == "A":
                for g in range(0, len(args), 7):
                    args[g + 5], args[g + 6] = rotator(args[g + 5], args[g + 6])
                    args[g + 2] += angle_degrees
            else:
                for j in range(0, len(args), 2):
                    args[j], args[j + 1] = rotator(args[j], args[j + 1])
        if rewritten:
            logger.debug("Rewrote %d H/V commands as relative lines", rewritten)

    def scale(self, sx: float, sy: float) -> None:
        flip_sweep = sx * sy < 0
        for cmd in self.commands:
            kind = cmd.kind
            args = cmd.args
            if kind == "Z":
                continue
            if kind == "H":
                cmd.args = [a * sx for a in args]
            elif kind == "V":
                cmd.args = [a * sy for a in args]
            elif kind == "A":
                for g in range(0, len(args), 7):
                    args[g], args[g + 1], args[g + 2] = _scale_ellipse(
                        args[g], args[g + 1], args[g + 2], sx, sy
                    )
                    if flip_sweep:
                        args[g + 4] = 1.0 - args[g + 4]
                    args[g + 5] *= sx
                    args[g + 6] *= sy
            else:
                for j in range(0, len(args), 2):
                    args[j] *= sx
                    args[j + 1] *= sy

    def serialize(self, precision: int | None = None) -> str:
        return serialize(self.commands, precision)
