"""Path data tokenizer and serializer.

Turns ``d="M10 10h5a2 2 0 0 1 2 2z"`` into ``PathCommand`` records and back. Arguments
of a command keep every implicit repetition (``L 1 2 3 4`` is one command with two
coordinate pairs); ``ARITY`` gives the size of one argument group per letter.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from svgflat.errors import PathSyntaxError
from svgflat.utils.math_helpers import NUMBER, format_number

ARITY: dict[str, int] = {
    "M": 2,
    "L": 2,
    "T": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "A": 7,
    "Z": 0,
}

_COMMAND_RE = re.compile(r"([MmZzLlHhVvCcSsQqTtAa])([^MmZzLlHhVvCcSsQqTtAa]*)")
_NUMBER_RE = re.compile(rf"[\s,]*({NUMBER})")
# Arc flags are a single 0/1 and may be glued to the next field ("a5 5 0 015 5").
_FLAG_RE = re.compile(r"[\s,]*([01])")
_ARC_FIELDS = (_NUMBER_RE, _NUMBER_RE, _NUMBER_RE, _FLAG_RE, _FLAG_RE, _NUMBER_RE, _NUMBER_RE)
_TRAILING_RE = re.compile(r"[\s,]*")


@dataclass
class PathCommand:
    letter: str
    args: list[float] = field(default_factory=list)

    @property
    def kind(self) -> str:
        """Uppercase command letter."""
        return self.letter.upper()

    @property
    def is_relative(self) -> bool:
        return self.letter.islower()

    def groups(self) -> list[list[float]]:
        """Split the arguments into per-repetition groups."""
        n = ARITY[self.kind]
        if n == 0:
            return []
        return [self.args[i:i + n] for i in range(0, len(self.args), n)]


def _scan_numbers(letter: str, text: str) -> list[float]:
    values: list[float] = []
    pos = 0
    fields = _ARC_FIELDS if letter in "Aa" else (_NUMBER_RE,)
    while True:
        pattern = fields[len(values) % len(fields)]
        m = pattern.match(text, pos)
        if m is None:
            break
        values.append(float(m.group(1)))
        pos = m.end()
    tail = _TRAILING_RE.match(text, pos)
    if tail.end() != len(text):
        raise PathSyntaxError(f"Invalid arguments for {letter!r}: {text.strip()!r}", text)
    return values


def tokenize(d: str) -> list[PathCommand]:
    """Parse path data into commands. Raises PathSyntaxError on malformed input."""
    commands: list[PathCommand] = []
    first = _COMMAND_RE.search(d)
    if first is None:
        if d.strip():
            raise PathSyntaxError(f"Path data has no commands: {d!r}", d)
        return commands
    if d[:first.start()].strip():
        raise PathSyntaxError(f"Path data must start with a command: {d!r}", d)

    for m in _COMMAND_RE.finditer(d, first.start()):
        letter, raw = m.group(1), m.group(2)
        args = _scan_numbers(letter, raw)
        arity = ARITY[letter.upper()]
        if arity == 0:
            if args:
                raise PathSyntaxError(f"Close-path takes no arguments: {raw.strip()!r}", raw)
        elif not args or len(args) % arity:
            raise PathSyntaxError(
                f"{letter!r} expects a multiple of {arity} arguments, got {len(args)}", raw
            )
        commands.append(PathCommand(letter, args))
    return commands


def serialize(commands: list[PathCommand], precision: int | None = None) -> str:
    """Render commands as ``<letter> <comma-joined args>``, joined by single spaces."""
    parts = []
    for cmd in commands:
        if not cmd.args:
            parts.append(cmd.letter)
        else:
            parts.append(f"{cmd.letter} " + ",".join(format_number(a, precision) for a in cmd.args))
    return " ".join(parts)
